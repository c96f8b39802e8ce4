"""
Agent implementations for PlateProof.

Contains the pipeline stages that turn record snapshots into the read model:
- Record Parsers
- Payment Validator
- Supersession Resolver
- Aggregation (Review Aggregator + Listing Table Builder)
- Listing filters and record drafting helpers
"""

from src.agents.aggregation import ReviewAggregator, ListingTableBuilder, average_rating
from src.agents.drafting import (
    ListingDraft, ReviewDraft, build_listing_tags, build_review_tags, generate_listing_id
)
from src.agents.listing_filters import (
    find_listing, latest_versions, open_listings, search_listings
)
from src.agents.parsing import RecordParser
from src.agents.payment_validation import PaymentValidator
from src.agents.supersession import SupersessionResolver

__all__ = [
    "RecordParser",
    "PaymentValidator",
    "SupersessionResolver",
    "ReviewAggregator",
    "ListingTableBuilder",
    "average_rating",
    "ListingDraft",
    "ReviewDraft",
    "build_listing_tags",
    "build_review_tags",
    "generate_listing_id",
    "find_listing",
    "latest_versions",
    "open_listings",
    "search_listings",
]
