"""
Structured data.

schema.org JSON-LD documents for listings and reviews.
"""

from datetime import datetime, timezone
from typing import Dict, Optional

from src.models.listing import Listing
from src.models.review import Review
from src.models.summary import ReviewSummary

SCHEMA_CONTEXT = "https://schema.org"


def _drop_empty(data: Dict) -> Dict:
    return {key: value for key, value in data.items() if value is not None}


def restaurant_schema(listing: Listing, summary: Optional[ReviewSummary] = None) -> Dict:
    """
    Restaurant document; aggregateRating only when the listing has a rating.
    """
    schema = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Restaurant",
        "name": listing.name,
        "description": listing.about,
        "address": {
            "@type": "PostalAddress",
            "streetAddress": listing.address
        } if listing.address else None,
        "telephone": listing.phone,
        "url": listing.website,
        "geo": {
            "@type": "GeoCoordinates",
            "latitude": listing.lat,
            "longitude": listing.lng
        },
        "aggregateRating": None,
    }
    
    if summary is not None and summary.average_rating:
        schema["aggregateRating"] = {
            "@type": "AggregateRating",
            "ratingValue": summary.average_rating,
            "reviewCount": summary.total_review_count,
            "bestRating": 5,
            "worstRating": 1
        }
    
    return _drop_empty(schema)


def review_schema(
    review: Review,
    listing_name: str,
    author_name: Optional[str] = None
) -> Dict:
    """Review document; the author falls back to the reviewer key."""
    published = datetime.fromtimestamp(review.created_at, tz=timezone.utc)
    
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Review",
        "itemReviewed": {
            "@type": "Restaurant",
            "name": listing_name
        },
        "author": {
            "@type": "Person",
            "name": author_name or review.author_key
        },
        "reviewRating": {
            "@type": "Rating",
            "ratingValue": review.rating,
            "bestRating": 5,
            "worstRating": 1
        },
        "reviewBody": review.content,
        "datePublished": published.date().isoformat()
    }
