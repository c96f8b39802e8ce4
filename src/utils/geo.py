"""
Geo utility.

Great-circle distance and proximity filtering for listings.
"""

import math
from typing import Iterable, List

from src.models.listing import Listing

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Haversine distance between two points given in decimal degrees.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a just outside [0, 1] for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def filter_nearby(
    listings: Iterable[Listing],
    lat: float,
    lng: float,
    radius_km: float
) -> List[Listing]:
    """Keep listings within radius_km (inclusive) of a point, order preserved."""
    return [
        listing for listing in listings
        if distance_km(lat, lng, listing.lat, listing.lng) <= radius_km
    ]
