"""
Unit tests for the record, listing, review and summary models.
"""

import pytest

from src.models.listing import Listing
from src.models.record import SignedRecord, LISTING_KIND
from src.models.review import Review
from src.models.summary import ReviewSummary


def test_get_tag_returns_first_match():
    """Test that the first tag with a name wins."""
    record = SignedRecord(
        kind=1, author_key="x", content="",
        tags=(("a", "first"), ("a", "second"), ("empty",)),
        created_at=1, record_id="id"
    )
    
    assert record.get_tag("a") == "first"
    assert record.get_tag("empty") is None
    assert record.get_tag("missing") is None


def test_record_from_dict():
    """Test building a record from its wire dict."""
    data = {
        "id": "abc",
        "pubkey": "def",
        "kind": 30024,
        "content": "Nice",
        "tags": [["rating", "4"], ["zap_amount", "86"]],
        "created_at": 1700000000,
        "sig": "ignored"
    }
    
    record = SignedRecord.from_dict(data)
    
    assert record.record_id == "abc"
    assert record.author_key == "def"
    assert record.tags == (("rating", "4"), ("zap_amount", "86"))
    assert record.to_dict()["tags"] == [["rating", "4"], ["zap_amount", "86"]]


@pytest.mark.parametrize("data", [
    {"pubkey": "p", "kind": 1, "tags": [], "created_at": 1},  # no id
    {"id": "i", "pubkey": "p", "kind": "1", "tags": [], "created_at": 1},
    {"id": "i", "pubkey": "p", "kind": True, "tags": [], "created_at": 1},
    {"id": "i", "pubkey": "p", "kind": 1, "tags": "oops", "created_at": 1},
    {"id": "i", "pubkey": "p", "kind": 1, "tags": [["n", 5]], "created_at": 1},
    {"id": "i", "pubkey": "p", "kind": 1, "tags": [], "created_at": 1.5},
])
def test_record_from_dict_rejects_malformed(data):
    """Test that structurally broken records raise ValueError."""
    with pytest.raises(ValueError):
        SignedRecord.from_dict(data)


def test_listing_validation():
    """Test Listing invariants."""
    listing = Listing(
        listing_id="joes", owner_key="owner", name="Joe's", content="",
        lat=1.0, lng=2.0, created_at=1
    )
    assert listing.status == "open"
    assert listing.claimed is False
    assert listing.ref == f"{LISTING_KIND}:owner:joes"
    
    with pytest.raises(ValueError):
        Listing(listing_id="joes", owner_key="o", name="Joe's", content="",
                lat=float("nan"), lng=2.0, created_at=1)
    
    with pytest.raises(ValueError):
        Listing(listing_id="joes", owner_key="o", name="Joe's", content="",
                lat=1.0, lng=2.0, created_at=1, status="demolished")


@pytest.mark.parametrize("rating,amount", [(0, 86), (6, 86), (5, 100), (5, 85)])
def test_review_rejects_invalid_values(rating, amount):
    """Test that an invalid Review cannot be constructed."""
    with pytest.raises(ValueError):
        Review(
            review_id="r", author_key="a", content="", rating=rating,
            payment_amount=amount, listing_ref="ref", created_at=1
        )


def test_summary_regular_reviews_excludes_featured(make_review):
    """Test that the featured review is not repeated in regular reviews."""
    first = make_review("r1", author_key="a1")
    second = make_review("r2", author_key="a2", rating=4)
    
    summary = ReviewSummary(
        listing_ref="ref",
        reviews=[first, second],
        latest_reviews=[first, second],
        featured_review=first,
        average_rating=4.5,
        total_review_count=2
    )
    
    assert summary.regular_reviews == [second]
    assert ReviewSummary.empty("ref").regular_reviews == []
    assert summary.to_dict()["featured_review"]["review_id"] == "r1"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
