"""
Review data model.

Represents a rating-and-comment record linked to a listing.
"""

from dataclasses import dataclass
from typing import Optional

# Payment denominations a review may declare (whole units)
ALLOWED_PAYMENT_AMOUNTS = frozenset({86, 420})


@dataclass(frozen=True)
class Review:
    """
    Review of a listing, backed by a declared payment amount.
    `is_validated` is computed by the payment validator, never parsed.
    """
    review_id: str  # Record id
    author_key: str  # Reviewer identity
    content: str  # Review text
    rating: int  # 1-5 star rating
    payment_amount: int  # One of ALLOWED_PAYMENT_AMOUNTS
    listing_ref: str  # "<kind>:<owner_key>:<listing_id>"
    created_at: int  # Unix seconds
    supersedes_id: Optional[str] = None  # Informational only
    is_validated: bool = False
    
    def __post_init__(self):
        # Validate rating
        if isinstance(self.rating, bool) or not (1 <= self.rating <= 5):
            raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")
        
        # Validate payment amount
        if isinstance(self.payment_amount, bool) or self.payment_amount not in ALLOWED_PAYMENT_AMOUNTS:
            raise ValueError(
                f"Invalid payment amount: {self.payment_amount}. "
                f"Must be one of {sorted(ALLOWED_PAYMENT_AMOUNTS)}"
            )
    
    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "review_id": self.review_id,
            "author_key": self.author_key,
            "content": self.content,
            "rating": self.rating,
            "payment_amount": self.payment_amount,
            "listing_ref": self.listing_ref,
            "supersedes_id": self.supersedes_id,
            "created_at": self.created_at,
            "is_validated": self.is_validated
        }
