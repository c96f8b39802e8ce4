"""
Review summary data model.

Aggregated, read-only view of the reviews of one listing.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from src.models.listing import Listing
from src.models.review import Review


@dataclass(frozen=True)
class ReviewSummary:
    """
    Output of the aggregator for a single listing reference.
    
    `reviews` holds every payment-validated review; `latest_reviews` holds one
    review per author, newest first. Statistics are computed over
    `latest_reviews` only.
    """
    listing_ref: str
    reviews: List[Review] = field(default_factory=list)
    latest_reviews: List[Review] = field(default_factory=list)
    featured_review: Optional[Review] = None
    average_rating: float = 0.0
    total_review_count: int = 0
    
    @classmethod
    def empty(cls, listing_ref: str) -> "ReviewSummary":
        """Summary for a listing with no validated reviews."""
        return cls(listing_ref=listing_ref)
    
    @property
    def regular_reviews(self) -> List[Review]:
        """Latest reviews without the featured one, for listing below it."""
        if self.featured_review is None:
            return list(self.latest_reviews)
        return [
            r for r in self.latest_reviews
            if r.review_id != self.featured_review.review_id
        ]
    
    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "listing_ref": self.listing_ref,
            "average_rating": self.average_rating,
            "total_review_count": self.total_review_count,
            "featured_review": self.featured_review.to_dict() if self.featured_review else None,
            "latest_reviews": [r.to_dict() for r in self.latest_reviews]
        }


@dataclass(frozen=True)
class ListingView:
    """A listing with its review summary, as shown to the reader."""
    listing: Listing
    summary: ReviewSummary
    distance_km: Optional[float] = None  # Set when filtered by proximity
