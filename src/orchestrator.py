"""
Read-Model Builder.

Coordinates the pipeline that turns raw record snapshots into the listings
view with payment-validated review summaries.
"""

import logging
import os
import random
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from src.agents.aggregation import ReviewAggregator, ListingTableBuilder
from src.agents.listing_filters import (
    find_listing, latest_versions, open_listings, search_listings
)
from src.agents.parsing import RecordParser
from src.agents.payment_validation import PaymentValidator
from src.agents.supersession import SupersessionResolver
from src.models.listing import Listing
from src.models.record import SignedRecord
from src.models.review import Review
from src.models.summary import ListingView, ReviewSummary
from src.utils.geo import distance_km, filter_nearby
from src.utils.storage import SnapshotStore
from src.utils.structured_data import restaurant_schema, review_schema
import config.settings as settings

logger = logging.getLogger(__name__)


class ReadModelBuilder:
    """
    Builds the read model from a full snapshot on every call.
    
    Coordinates:
    1. Parsing → 2. Payment Validation → 3. Supersession → 4. Aggregation
    
    Holds no state between calls; caching belongs to the query layer.
    """
    
    def __init__(self, platform_key: str, rng: Optional[random.Random] = None):
        """
        Initialize read-model builder.
        
        Args:
            platform_key: Identity that must receive review payments
            rng: Random source for featured review picks
        """
        self.parser = RecordParser()
        self.payment_validator = PaymentValidator(platform_key)
        self.resolver = SupersessionResolver()
        self.aggregator = ReviewAggregator(rng=rng, resolver=self.resolver)
    
    def build_listings(
        self,
        records: Iterable[SignedRecord],
        open_only: bool = True
    ) -> List[Listing]:
        """
        Parse listing records into the newest version per listing.
        
        Returns:
            Listings, newest first
        """
        listings = latest_versions(self.parser.parse_listings(records))
        if open_only:
            listings = open_listings(listings)
        
        logger.info(f"Built {len(listings)} listings")
        return listings
    
    def summarize_reviews(
        self,
        listing_ref: str,
        review_records: Iterable[SignedRecord],
        receipt_records: Iterable[SignedRecord]
    ) -> ReviewSummary:
        """
        Summarize the reviews of a single listing.
        
        Args:
            listing_ref: Listing reference ("<kind>:<owner_key>:<listing_id>")
            review_records: Candidate review records
            receipt_records: Candidate payment receipts
        
        Returns:
            ReviewSummary over the validated, latest-per-author reviews
        """
        # STAGE 1: Parsing
        reviews = [
            review for review in self.parser.parse_reviews(review_records)
            if review.listing_ref == listing_ref
        ]
        
        if not reviews:
            logger.info(f"No reviews found for {listing_ref}")
            return ReviewSummary.empty(listing_ref)
        
        # STAGE 2: Payment validation
        validated = self.payment_validator.mark_validated(reviews, receipt_records)
        
        # STAGE 3 + 4: Supersession and aggregation
        return self.aggregator.summarize(listing_ref, validated)
    
    def build_view(
        self,
        listing_records: Iterable[SignedRecord],
        review_records: Iterable[SignedRecord],
        receipt_records: Iterable[SignedRecord],
        near: Optional[Tuple[float, float]] = None,
        radius_km: float = settings.DEFAULT_RADIUS_KM,
        query: Optional[str] = None,
        open_only: bool = True
    ) -> List[ListingView]:
        """
        Build the listings view with one review summary per listing.
        
        Args:
            listing_records: Candidate listing records
            review_records: Candidate review records (any listing)
            receipt_records: Candidate payment receipts
            near: Optional (lat, lng) reference point for proximity filtering
            radius_km: Radius used with `near`
            query: Optional text search over name, address and about
            open_only: Hide closed and inactive listings
        
        Returns:
            List of ListingView, in listing order (newest first)
        """
        listings = search_listings(self.build_listings(listing_records, open_only), query)
        
        if near is not None:
            listings = filter_nearby(listings, near[0], near[1], radius_km)
            logger.info(f"{len(listings)} listings within {radius_km} km of {near}")
        
        reviews_by_ref: Dict[str, List[Review]] = defaultdict(list)
        for review in self.parser.parse_reviews(review_records):
            reviews_by_ref[review.listing_ref].append(review)
        
        receipts = list(receipt_records)
        
        views = []
        for listing in listings:
            candidates = reviews_by_ref.get(listing.ref, [])
            if candidates:
                validated = self.payment_validator.mark_validated(candidates, receipts)
                summary = self.aggregator.summarize(listing.ref, validated)
            else:
                summary = ReviewSummary.empty(listing.ref)
            
            distance = None
            if near is not None:
                distance = distance_km(near[0], near[1], listing.lat, listing.lng)
            
            views.append(ListingView(listing=listing, summary=summary, distance_km=distance))
        
        return views
    
    def listing_view(
        self,
        listing_records: Iterable[SignedRecord],
        review_records: Iterable[SignedRecord],
        receipt_records: Iterable[SignedRecord],
        owner_key: str,
        listing_id: str
    ) -> Optional[ListingView]:
        """
        View of a single listing, whatever its status.
        
        Returns:
            ListingView, or None if the owner never published listing_id
        """
        listing = find_listing(self.parser.parse_listings(listing_records), owner_key, listing_id)
        if listing is None:
            logger.info(f"Listing {listing_id} by {owner_key} not found")
            return None
        
        summary = self.summarize_reviews(listing.ref, review_records, receipt_records)
        return ListingView(listing=listing, summary=summary)
    
    def author_review(
        self,
        listing_ref: str,
        review_records: Iterable[SignedRecord],
        receipt_records: Iterable[SignedRecord],
        author_key: str
    ) -> Optional[Review]:
        """
        An author's current validated review of a listing, if any.
        """
        reviews = [
            review for review in self.parser.parse_reviews(review_records)
            if review.listing_ref == listing_ref and review.author_key == author_key
        ]
        validated = self.payment_validator.mark_validated(reviews, receipt_records)
        return self.resolver.latest_for_author(validated, author_key)
    
    def structured_data(self, views: Iterable[ListingView]) -> List[Dict]:
        """
        schema.org documents: one Restaurant per view, with its latest reviews.
        """
        documents = []
        for view in views:
            document = restaurant_schema(view.listing, view.summary)
            if view.summary.latest_reviews:
                document["review"] = [
                    review_schema(review, view.listing.name)
                    for review in view.summary.latest_reviews
                ]
            documents.append(document)
        return documents
    
    def run(
        self,
        data_root: str,
        output_dir: str,
        near: Optional[Tuple[float, float]] = None,
        radius_km: float = settings.DEFAULT_RADIUS_KM,
        query: Optional[str] = None,
        open_only: bool = settings.OPEN_ONLY,
        structured_data: bool = False
    ) -> str:
        """
        Load a snapshot from disk, build the view and export it.
        
        Returns:
            Path to generated listings CSV
        """
        store = SnapshotStore(data_root)
        snapshot = store.load_snapshot(
            settings.LISTINGS_FILE,
            settings.REVIEWS_FILE,
            settings.RECEIPTS_FILE
        )
        
        logger.info(
            f"Loaded snapshot: {len(snapshot['listings'])} listing records, "
            f"{len(snapshot['reviews'])} review records, "
            f"{len(snapshot['receipts'])} receipts"
        )
        
        views = self.build_view(
            snapshot["listings"],
            snapshot["reviews"],
            snapshot["receipts"],
            near=near,
            radius_km=radius_km,
            query=query,
            open_only=open_only
        )
        
        table_builder = ListingTableBuilder(excerpt_chars=settings.FEATURED_EXCERPT_CHARS)
        output_path = table_builder.export(views, output_dir=output_dir)
        
        if structured_data:
            store.save_json(
                self.structured_data(views),
                os.path.join(output_dir, "listings_structured_data.json")
            )
        
        logger.info(f"Read model complete! Listings table: {output_path}")
        return output_path
