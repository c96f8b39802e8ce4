"""
Record Parsers.

Turn generic signed records into typed listings and reviews.
Malformed records yield None so one bad record never aborts a batch.
"""

import logging
import math
import re
from typing import Iterable, List, Optional

from src.models.listing import Listing, LISTING_STATUSES
from src.models.record import SignedRecord, LISTING_KIND, REVIEW_KIND
from src.models.review import Review, ALLOWED_PAYMENT_AMOUNTS

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

# Tag carrying the declared payment amount on review records
PAYMENT_AMOUNT_TAG = "zap_amount"


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse a base-10 integer string, or return None."""
    if value is None or not _INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse a finite float string, or return None."""
    if value is None or not _DECIMAL_PATTERN.fullmatch(value):
        return None
    parsed = float(value)
    return parsed if math.isfinite(parsed) else None


class RecordParser:
    """
    Parses listing and review records.
    
    Pure and stateless: the same record always yields the same result.
    """
    
    def parse_listing(self, record: SignedRecord) -> Optional[Listing]:
        """
        Parse a listing record.
        
        Args:
            record: Candidate listing record
        
        Returns:
            Listing, or None if the record is not a well-formed listing
        """
        if record.kind != LISTING_KIND:
            return None
        
        listing_id = record.get_tag("d")
        name = record.get_tag("name")
        lat = parse_float(record.get_tag("lat"))
        lng = parse_float(record.get_tag("lng"))
        
        # Required fields
        if not listing_id or not name or lat is None or lng is None:
            logger.debug(f"Rejected listing {record.record_id}: missing or invalid required tag")
            return None
        
        status = record.get_tag("status") or "open"
        if status not in LISTING_STATUSES:
            logger.debug(f"Rejected listing {record.record_id}: unknown status {status!r}")
            return None
        
        return Listing(
            listing_id=listing_id,
            owner_key=record.author_key,
            name=name,
            content=record.content,
            lat=lat,
            lng=lng,
            created_at=record.created_at,
            status=status,
            claimed=record.get_tag("claimed") == "true",
            about=record.get_tag("about"),
            phone=record.get_tag("phone"),
            website=record.get_tag("website"),
            address=record.get_tag("address")
        )
    
    def parse_review(self, record: SignedRecord) -> Optional[Review]:
        """
        Parse a review record.
        
        Args:
            record: Candidate review record
        
        Returns:
            Review with is_validated=False, or None if the record is malformed
        """
        if record.kind != REVIEW_KIND:
            return None
        
        listing_ref = record.get_tag("a")
        rating = parse_int(record.get_tag("rating"))
        payment_amount = parse_int(record.get_tag(PAYMENT_AMOUNT_TAG))
        
        # Required fields
        if not listing_ref or rating is None or payment_amount is None:
            logger.debug(f"Rejected review {record.record_id}: missing or invalid required tag")
            return None
        
        # Validate rating range
        if not (1 <= rating <= 5):
            logger.debug(f"Rejected review {record.record_id}: rating {rating} out of range")
            return None
        
        # Validate payment amount
        if payment_amount not in ALLOWED_PAYMENT_AMOUNTS:
            logger.debug(f"Rejected review {record.record_id}: amount {payment_amount} not allowed")
            return None
        
        return Review(
            review_id=record.record_id,
            author_key=record.author_key,
            content=record.content,
            rating=rating,
            payment_amount=payment_amount,
            listing_ref=listing_ref,
            created_at=record.created_at,
            supersedes_id=record.get_tag("supersedes")
        )
    
    def parse_listings(self, records: Iterable[SignedRecord]) -> List[Listing]:
        """Parse a batch of records, keeping input order and dropping invalid ones."""
        records = list(records)
        listings = [
            listing for listing in (self.parse_listing(r) for r in records)
            if listing is not None
        ]
        logger.debug(f"Parsed {len(listings)} listings ({len(records) - len(listings)} dropped)")
        return listings
    
    def parse_reviews(self, records: Iterable[SignedRecord]) -> List[Review]:
        """Parse a batch of records, keeping input order and dropping invalid ones."""
        records = list(records)
        reviews = [
            review for review in (self.parse_review(r) for r in records)
            if review is not None
        ]
        logger.debug(f"Parsed {len(reviews)} reviews ({len(records) - len(reviews)} dropped)")
        return reviews
