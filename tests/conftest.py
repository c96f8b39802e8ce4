"""
Shared fixtures: record factories for listings, reviews and payment receipts.
"""

import json

import pytest

from src.models.record import (
    SignedRecord, LISTING_KIND, REVIEW_KIND, PAYMENT_RECEIPT_KIND
)
from src.models.review import Review

OWNER_KEY = "a" * 64
PLATFORM_KEY = "f" * 64


@pytest.fixture
def platform_key():
    return PLATFORM_KEY


@pytest.fixture
def owner_key():
    return OWNER_KEY


@pytest.fixture
def listing_ref():
    return f"{LISTING_KIND}:{OWNER_KEY}:joes-pizza"


@pytest.fixture
def make_listing_record():
    """Factory for listing records; pass tag=None to drop a tag."""
    def _make(record_id="listing-1", created_at=1700000000, author_key=OWNER_KEY,
              kind=LISTING_KIND, content="Wood-fired pizza", **tag_overrides):
        tags = {
            "d": "joes-pizza",
            "name": "Joe's Pizza",
            "lat": "40.7128",
            "lng": "-74.0060",
            "about": "Neighbourhood pizzeria",
            "address": "1 Main St, New York",
        }
        tags.update(tag_overrides)
        return SignedRecord(
            kind=kind,
            author_key=author_key,
            content=content,
            tags=tuple((name, value) for name, value in tags.items() if value is not None),
            created_at=created_at,
            record_id=record_id
        )
    return _make


@pytest.fixture
def make_review_record(listing_ref):
    """Factory for review records; pass tag=None to drop a tag."""
    def _make(record_id="review-1", author_key="b" * 64, created_at=1700000100,
              kind=REVIEW_KIND, content="Great crust", **tag_overrides):
        tags = {
            "a": listing_ref,
            "rating": "5",
            "zap_amount": "86",
            "platform": PLATFORM_KEY,
        }
        tags.update(tag_overrides)
        return SignedRecord(
            kind=kind,
            author_key=author_key,
            content=content,
            tags=tuple((name, value) for name, value in tags.items() if value is not None),
            created_at=created_at,
            record_id=record_id
        )
    return _make


@pytest.fixture
def make_receipt():
    """Factory for payment receipts addressed to the platform by default."""
    def _make(record_id="receipt-1", p=PLATFORM_KEY, e=None, a=None,
              amount=None, description=None, kind=PAYMENT_RECEIPT_KIND):
        tags = []
        for name, value in (("p", p), ("e", e), ("a", a),
                            ("amount", amount), ("description", description)):
            if value is not None:
                tags.append((name, value))
        return SignedRecord(
            kind=kind,
            author_key="c" * 64,
            content="",
            tags=tuple(tags),
            created_at=1700000200,
            record_id=record_id
        )
    return _make


@pytest.fixture
def payment_request_json():
    """Factory for the JSON-encoded payment request carried in `description`."""
    def _make(amount_millis):
        return json.dumps({
            "kind": 9734,
            "content": "",
            "tags": [["p", PLATFORM_KEY], ["amount", amount_millis]]
        })
    return _make


@pytest.fixture
def make_review(listing_ref):
    """Factory for already-parsed reviews."""
    def _make(review_id="review-1", author_key="b" * 64, created_at=1700000100,
              rating=5, payment_amount=86, **kwargs):
        return Review(
            review_id=review_id,
            author_key=author_key,
            content=kwargs.pop("content", f"Review {review_id}"),
            rating=rating,
            payment_amount=payment_amount,
            listing_ref=kwargs.pop("listing_ref", listing_ref),
            created_at=created_at,
            **kwargs
        )
    return _make
