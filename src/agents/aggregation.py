"""
Review Aggregator and Listing Table Builder.

Computes per-listing review statistics and exports the listings view.
"""

import json
import logging
import os
import random
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from src.agents.supersession import SupersessionResolver
from src.models.review import Review
from src.models.summary import ListingView, ReviewSummary

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "Listing", "Owner", "Status", "Lat", "Lng", "Distance (km)",
    "Average Rating", "Reviews", "Featured Excerpt"
]


def average_rating(reviews: Sequence[Review]) -> float:
    """
    Mean rating rounded to one decimal place, half away from zero.
    
    Computed in Decimal so that e.g. a mean of exactly 4.05 rounds to 4.1.
    Returns 0 for an empty input.
    """
    if not reviews:
        return 0.0
    
    mean = Decimal(sum(r.rating for r in reviews)) / Decimal(len(reviews))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReviewAggregator:
    """
    Summarizes the validated reviews of one listing.
    """
    
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        resolver: Optional[SupersessionResolver] = None
    ):
        """
        Initialize review aggregator.
        
        Args:
            rng: Random source for the featured pick (anything with randrange).
                 Pass a seeded random.Random for reproducible output.
            resolver: Supersession resolver (default: SupersessionResolver())
        """
        self.rng = rng if rng is not None else random.Random()
        self.resolver = resolver or SupersessionResolver()
    
    def pick_featured(self, reviews: Sequence[Review]) -> Optional[Review]:
        """
        Pick a five-star review uniformly at random.
        
        Returns:
            One of the rating == 5 reviews, or None if there are none
        """
        five_star = [r for r in reviews if r.rating == 5]
        if not five_star:
            return None
        
        return five_star[self.rng.randrange(len(five_star))]
    
    def summarize(self, listing_ref: str, validated_reviews: Iterable[Review]) -> ReviewSummary:
        """
        Build the review summary for a listing.
        
        Args:
            listing_ref: Listing reference the reviews belong to
            validated_reviews: Reviews that passed payment validation
        
        Returns:
            ReviewSummary with statistics over the latest review per author
        """
        validated_reviews = list(validated_reviews)
        if not validated_reviews:
            return ReviewSummary.empty(listing_ref)
        
        latest = self.resolver.latest_per_author(validated_reviews)
        
        summary = ReviewSummary(
            listing_ref=listing_ref,
            reviews=validated_reviews,
            latest_reviews=latest,
            featured_review=self.pick_featured(latest),
            average_rating=average_rating(latest),
            total_review_count=len(latest)
        )
        
        logger.info(
            f"Summarized {listing_ref}: {summary.total_review_count} authors, "
            f"average {summary.average_rating} "
            f"({len(validated_reviews) - len(latest)} superseded)"
        )
        return summary


class ListingTableBuilder:
    """
    Exports the listings view as a CSV table with a metadata side file.
    """
    
    def __init__(self, excerpt_chars: int = 140):
        """
        Initialize table builder.
        
        Args:
            excerpt_chars: Maximum length of the featured review excerpt
        """
        self.excerpt_chars = excerpt_chars
    
    def build_table(self, views: List[ListingView]) -> pd.DataFrame:
        """
        Build one row per listing, best rated first.
        """
        rows = []
        for view in views:
            listing = view.listing
            summary = view.summary
            featured = summary.featured_review
            
            rows.append({
                "Listing": listing.name,
                "Owner": listing.owner_key,
                "Status": listing.status,
                "Lat": listing.lat,
                "Lng": listing.lng,
                "Distance (km)": round(view.distance_km, 2) if view.distance_km is not None else None,
                "Average Rating": summary.average_rating,
                "Reviews": summary.total_review_count,
                "Featured Excerpt": self._excerpt(featured.content) if featured else ""
            })
        
        df = pd.DataFrame(rows, columns=TABLE_COLUMNS)
        
        if df.empty:
            logger.warning("No listings found, creating empty table")
            return df
        
        # Best rated first, then most reviewed
        return df.sort_values(
            ["Average Rating", "Reviews"], ascending=False, kind="mergesort"
        ).reset_index(drop=True)
    
    def export(
        self,
        views: List[ListingView],
        output_dir: str = "output",
        name: str = "listings"
    ) -> str:
        """
        Save the listings table and its metadata.
        
        Args:
            views: Listing views to export
            output_dir: Directory to save CSV output
            name: Base file name (without extension)
        
        Returns:
            Path to generated CSV file
        """
        df = self.build_table(views)
        
        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"{name}.csv")
        df.to_csv(output_path, index=False)
        
        logger.info(f"Listings table saved to {output_path} ({len(df)} listings)")
        
        metadata_path = os.path.join(output_dir, f"{name}_metadata.json")
        metadata = {
            "total_listings": len(df),
            "reviewed_listings": sum(1 for v in views if v.summary.total_review_count),
            "total_counted_reviews": sum(v.summary.total_review_count for v in views),
            "generated_at": datetime.now(timezone.utc).isoformat()
        }
        
        with open(metadata_path, "w") as f:
            json.dump(metadata, f, indent=2)
        
        logger.info(f"Metadata saved to {metadata_path}")
        
        return output_path
    
    def _excerpt(self, text: str) -> str:
        """Shorten review text to excerpt_chars, on a word boundary when possible."""
        text = " ".join(text.split())
        if len(text) <= self.excerpt_chars:
            return text
        
        cut = text[:self.excerpt_chars].rsplit(" ", 1)[0]
        return cut.rstrip(",.;:") + "..."
