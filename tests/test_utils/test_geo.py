"""
Unit tests for the geo utility.
"""

import math

import pytest

from src.models.listing import Listing
from src.utils.geo import distance_km, filter_nearby

NYC = (40.7128, -74.0060)
LA = (34.0522, -118.2437)


def test_distance_zero_for_same_point():
    """Test that a point is 0 km from itself."""
    assert distance_km(NYC[0], NYC[1], NYC[0], NYC[1]) == 0


def test_distance_is_symmetric():
    """Test distance_km(a, b) == distance_km(b, a)."""
    assert distance_km(*NYC, *LA) == pytest.approx(distance_km(*LA, *NYC))


def test_known_distance():
    """Test a known city-to-city distance."""
    assert distance_km(*NYC, *LA) == pytest.approx(3936, abs=5)


def test_antipodal_points():
    """Test that antipodal pairs give half the circumference instead of raising."""
    half_circumference = math.pi * 6371
    
    assert distance_km(3.309661790284011, -89.77779913133884,
                       -3.309661790284011, 90.22220086866116) == pytest.approx(half_circumference)
    assert distance_km(0, 0, 0, 180) == pytest.approx(half_circumference)
    assert distance_km(90, 0, -90, 0) == pytest.approx(half_circumference)


def test_filter_nearby_with_antipodal_listing():
    """Test that a listing on the far side of the globe is filtered, not fatal."""
    far = Listing(listing_id="far", owner_key="o", name="far", content="",
                  lat=-3.309661790284011, lng=90.22220086866116, created_at=1)
    
    assert filter_nearby([far], 3.309661790284011, -89.77779913133884, radius_km=10) == []


def test_filter_nearby():
    """Test radius filtering, inclusive and order preserving."""
    def listing(listing_id, lat, lng):
        return Listing(listing_id=listing_id, owner_key="o", name=listing_id,
                       content="", lat=lat, lng=lng, created_at=1)
    
    listings = [
        listing("far", *LA),
        listing("here", *NYC),
        listing("near", 40.7306, -73.9352),  # ~6.3 km away
    ]
    
    assert [l.listing_id for l in filter_nearby(listings, *NYC, radius_km=10)] == ["here", "near"]
    assert [l.listing_id for l in filter_nearby(listings, *NYC, radius_km=0)] == ["here"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
