"""
Listing filters.

Selection helpers applied to parsed listings before they are shown.
"""

from typing import Iterable, List, Optional

from src.models.listing import Listing


def _newest_first(listing: Listing):
    return (-listing.created_at, listing.owner_key, listing.listing_id)


def open_listings(listings: Iterable[Listing]) -> List[Listing]:
    """Open listings only, newest first."""
    return sorted(
        (listing for listing in listings if listing.status == "open"),
        key=_newest_first
    )


def search_listings(listings: Iterable[Listing], query: Optional[str]) -> List[Listing]:
    """
    Case-insensitive substring search over name, address and about.
    An empty query matches everything.
    """
    listings = list(listings)
    needle = (query or "").strip().lower()
    if not needle:
        return listings
    
    return [
        listing for listing in listings
        if needle in listing.name.lower()
        or needle in (listing.address or "").lower()
        or needle in (listing.about or "").lower()
    ]


def find_listing(
    listings: Iterable[Listing],
    owner_key: str,
    listing_id: str
) -> Optional[Listing]:
    """
    Newest listing published by owner_key under listing_id, if any.
    """
    matches = [
        listing for listing in listings
        if listing.owner_key == owner_key and listing.listing_id == listing_id
    ]
    if not matches:
        return None
    return min(matches, key=_newest_first)


def latest_versions(listings: Iterable[Listing]) -> List[Listing]:
    """
    Collapse republished listings to the newest version per reference.
    Order follows the newest-first sort.
    """
    latest = {}
    for listing in sorted(listings, key=_newest_first):
        latest.setdefault(listing.ref, listing)
    return list(latest.values())
