"""
Listing data model.

Represents a restaurant profile derived from a listing record.
"""

import math
from dataclasses import dataclass
from typing import Optional

from src.models.record import LISTING_KIND

LISTING_STATUSES = ("open", "closed", "inactive")


@dataclass(frozen=True)
class Listing:
    """
    A restaurant profile.
    `listing_id` is the creator-chosen slug, stable across republished versions.
    """
    listing_id: str
    owner_key: str
    name: str
    content: str
    lat: float
    lng: float
    created_at: int
    status: str = "open"
    claimed: bool = False
    about: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    
    def __post_init__(self):
        if not self.listing_id or not self.name:
            raise ValueError("Listing requires a non-empty id and name")
        
        # Validate coordinates
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            raise ValueError(f"Invalid coordinates: ({self.lat}, {self.lng})")
        
        # Validate status
        if self.status not in LISTING_STATUSES:
            raise ValueError(
                f"Invalid status: {self.status}. Must be one of {', '.join(LISTING_STATUSES)}"
            )
    
    @property
    def ref(self) -> str:
        """Reference key used by reviews and receipts to point at this listing."""
        return f"{LISTING_KIND}:{self.owner_key}:{self.listing_id}"
    
    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "listing_id": self.listing_id,
            "owner_key": self.owner_key,
            "name": self.name,
            "about": self.about,
            "content": self.content,
            "phone": self.phone,
            "website": self.website,
            "address": self.address,
            "lat": self.lat,
            "lng": self.lng,
            "status": self.status,
            "claimed": self.claimed,
            "created_at": self.created_at
        }
