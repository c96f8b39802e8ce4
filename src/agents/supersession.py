"""
Supersession Resolver.

Collapses multiple reviews by the same author into one representative.
"""

import logging
from typing import Dict, Iterable, List, Optional

from src.models.review import Review

logger = logging.getLogger(__name__)


def _newest_first(review: Review):
    """
    Sort key: newest created_at first, ties broken by smallest review_id.
    
    This is a total order over distinct records, so the result never depends
    on input order.
    """
    return (-review.created_at, review.review_id)


class SupersessionResolver:
    """
    Keeps the latest review per author.
    
    The `supersedes_id` tag is carried on each review but not consulted:
    the chronologically latest review always wins, even when an author's
    explicit supersession chain points elsewhere.
    """
    
    def latest_per_author(self, reviews: Iterable[Review]) -> List[Review]:
        """
        Reduce reviews to one per author.
        
        Args:
            reviews: Validated reviews (any order)
        
        Returns:
            One review per distinct author_key, newest first
        """
        latest_by_author: Dict[str, Review] = {}
        
        for review in sorted(reviews, key=_newest_first):
            if review.author_key not in latest_by_author:
                latest_by_author[review.author_key] = review
        
        logger.debug(f"Resolved {len(latest_by_author)} authors")
        return list(latest_by_author.values())
    
    def latest_for_author(
        self,
        reviews: Iterable[Review],
        author_key: str
    ) -> Optional[Review]:
        """Return one author's current review, or None if they have none."""
        if not author_key:
            return None
        
        own_reviews = [r for r in reviews if r.author_key == author_key]
        if not own_reviews:
            return None
        
        return min(own_reviews, key=_newest_first)
