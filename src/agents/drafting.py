"""
Record drafting helpers.

Build the tag lists for new listing and review records. Signing and
publishing happen outside this package.
"""

import re
import time
from dataclasses import dataclass
from typing import List, Optional

from src.models.record import LISTING_KIND
from src.models.review import ALLOWED_PAYMENT_AMOUNTS

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


@dataclass
class ListingDraft:
    """User input for a new listing."""
    name: str
    lat: float
    lng: float
    about: Optional[str] = None
    content: str = ""
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None


@dataclass
class ReviewDraft:
    """User input for a new review."""
    owner_key: str
    listing_id: str
    rating: int
    content: str
    payment_amount: int
    supersedes_id: Optional[str] = None
    
    def __post_init__(self):
        # Validate rating
        if not (1 <= self.rating <= 5):
            raise ValueError(f"Invalid rating: {self.rating}. Must be 1-5")
        
        # Validate payment amount
        if self.payment_amount not in ALLOWED_PAYMENT_AMOUNTS:
            raise ValueError(
                f"Invalid payment amount: {self.payment_amount}. "
                f"Must be one of {sorted(ALLOWED_PAYMENT_AMOUNTS)}"
            )
    
    @property
    def listing_ref(self) -> str:
        return f"{LISTING_KIND}:{self.owner_key}:{self.listing_id}"


def build_listing_tags(
    draft: ListingDraft,
    listing_id: str,
    claimed: bool = False
) -> List[List[str]]:
    """Tags for a new listing record; new listings always start open."""
    tags = [
        ["d", listing_id],
        ["name", draft.name],
        ["lat", str(draft.lat)],
        ["lng", str(draft.lng)],
        ["status", "open"],
        ["claimed", "true" if claimed else "false"],
        ["alt", f"Restaurant profile: {draft.name}"],
    ]
    
    for name in ("about", "phone", "website", "address"):
        value = getattr(draft, name)
        if value:
            tags.append([name, value])
    
    return tags


def build_review_tags(draft: ReviewDraft, platform_key: str) -> List[List[str]]:
    """Tags for a new review record addressed to the platform identity."""
    tags = [
        ["a", draft.listing_ref],
        ["rating", str(draft.rating)],
        ["zap_amount", str(draft.payment_amount)],
        ["platform", platform_key],
        ["alt", f"Restaurant review ({draft.rating}/5 stars)"],
    ]
    
    if draft.supersedes_id:
        tags.append(["supersedes", draft.supersedes_id])
    
    return tags


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_listing_id(name: str, now_ms: Optional[int] = None) -> str:
    """
    Slug for a new listing: up to 30 slug characters plus a base-36
    millisecond timestamp.
    
    Args:
        name: Listing name
        now_ms: Timestamp in milliseconds (default: current time)
    """
    slug = re.sub(r"[^a-z0-9\s-]", "", name.lower())
    slug = re.sub(r"\s+", "-", slug)[:30]
    
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    
    return f"{slug}-{_to_base36(now_ms)}"
