"""
Payment Validator.

Decides whether a review is backed by a qualifying payment receipt.
"""

import json
import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from src.agents.parsing import parse_int
from src.models.record import SignedRecord, PAYMENT_RECEIPT_KIND
from src.models.review import Review, ALLOWED_PAYMENT_AMOUNTS

logger = logging.getLogger(__name__)

MILLI_UNITS = 1000


class PaymentValidator:
    """
    Matches reviews against payment receipts.
    
    A review is validated when at least one receipt:
    1. Is addressed to the platform identity (`p` tag)
    2. References the review (`e` tag) or its listing (`a` tag)
    3. Carries an amount in ALLOWED_PAYMENT_AMOUNTS
    
    Any single qualifying receipt is sufficient; receipts are not ranked by
    recency or amount.
    """
    
    def __init__(self, platform_key: str):
        """
        Initialize payment validator.
        
        Args:
            platform_key: Identity that must receive the payment
        """
        if not platform_key:
            raise ValueError("platform_key is required")
        self.platform_key = platform_key
    
    def validate(self, review: Review, receipts: Iterable[SignedRecord]) -> bool:
        """
        Check whether a review has a qualifying payment receipt.
        
        Args:
            review: Parsed review
            receipts: Candidate payment receipts
        
        Returns:
            True if any matching receipt carries an allowed amount
        """
        relevant = [r for r in receipts if self._references(r, review)]
        
        if not relevant:
            logger.debug(f"Review {review.review_id}: no matching receipt")
            return False
        
        for receipt in relevant:
            amount = self.extract_amount(receipt)
            if amount is not None and amount in ALLOWED_PAYMENT_AMOUNTS:
                return True
        
        logger.debug(
            f"Review {review.review_id}: {len(relevant)} matching receipts, none with an allowed amount"
        )
        return False
    
    def mark_validated(
        self,
        reviews: Iterable[Review],
        receipts: Iterable[SignedRecord]
    ) -> List[Review]:
        """
        Keep only reviews backed by a payment, flagged as validated.
        
        Returns:
            Validated copies of the passing reviews, in input order
        """
        reviews = list(reviews)
        receipts = list(receipts)
        validated = [
            replace(review, is_validated=True)
            for review in reviews
            if self.validate(review, receipts)
        ]
        logger.info(f"Validated {len(validated)}/{len(reviews)} reviews against {len(receipts)} receipts")
        return validated
    
    def _references(self, receipt: SignedRecord, review: Review) -> bool:
        """Whether a receipt pays the platform for this review or its listing."""
        if receipt.kind != PAYMENT_RECEIPT_KIND:
            return False
        
        # Payment must go to the platform
        if receipt.get_tag("p") != self.platform_key:
            return False
        
        # Receipt references the review directly
        if receipt.get_tag("e") == review.review_id:
            return True
        
        # Receipt references the listing
        return receipt.get_tag("a") == review.listing_ref
    
    @staticmethod
    def extract_amount(receipt: SignedRecord) -> Optional[int]:
        """
        Extract the paid amount (whole units) from a receipt.
        
        Tries the receipt's own `amount` tag first, then the `amount` tag of
        the JSON-encoded request in `description`. Both are milli-units.
        
        Returns:
            Amount floor-divided by 1000, or None if no amount can be read
        """
        millis = parse_int(receipt.get_tag("amount"))
        if millis is not None:
            return millis // MILLI_UNITS
        
        description = receipt.get_tag("description")
        if not description:
            return None
        
        try:
            request = json.loads(description)
        except json.JSONDecodeError:
            logger.debug(f"Receipt {receipt.record_id}: description is not valid JSON")
            return None
        
        if not isinstance(request, dict) or not isinstance(request.get("tags"), list):
            return None
        
        for tag in request["tags"]:
            if isinstance(tag, list) and len(tag) > 1 and tag[0] == "amount":
                value = tag[1]
                if isinstance(value, int) and not isinstance(value, bool):
                    return value // MILLI_UNITS
                millis = parse_int(value) if isinstance(value, str) else None
                return millis // MILLI_UNITS if millis is not None else None
        
        return None
