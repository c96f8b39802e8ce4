"""
Signed record data model.

Represents an externally authored, append-only record as handed over by the
query layer. Signatures are verified upstream; this model only carries data.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

# Record kinds consumed by the core
LISTING_KIND = 30023
REVIEW_KIND = 30024
PAYMENT_RECEIPT_KIND = 9735

# Reserved by the wider protocol, never read here
COMMUNITY_SIGNAL_KIND = 30025
OWNERSHIP_TRANSFER_KIND = 30026
PLATFORM_POLICY_KIND = 30078


@dataclass(frozen=True)
class SignedRecord:
    """
    Immutable snapshot of one signed record.
    
    Tags are kept as a tuple of tuples: each tag starts with its name,
    followed by positional values.
    """
    kind: int
    author_key: str
    content: str
    tags: Tuple[Tuple[str, ...], ...]
    created_at: int
    record_id: str
    
    def get_tag(self, name: str) -> Optional[str]:
        """Return the first value of the first tag called `name`, if any."""
        for tag in self.tags:
            if tag and tag[0] == name:
                return tag[1] if len(tag) > 1 else None
        return None
    
    @classmethod
    def from_dict(cls, data: dict) -> "SignedRecord":
        """
        Create SignedRecord from its wire dict.
        
        Raises:
            ValueError: If the dict is not shaped like a signed record
        """
        try:
            kind = data["kind"]
            created_at = data["created_at"]
            raw_tags = data["tags"]
            if not isinstance(raw_tags, (list, tuple)) or not all(
                isinstance(tag, (list, tuple)) for tag in raw_tags
            ):
                raise ValueError(f"Invalid tags: {raw_tags!r}")
            record = cls(
                kind=kind,
                author_key=str(data["pubkey"]),
                content=str(data.get("content", "")),
                tags=tuple(tuple(tag) for tag in raw_tags),
                created_at=created_at,
                record_id=str(data["id"])
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed record: {e}") from e
        
        # bool is an int subclass; reject it explicitly
        if not isinstance(kind, int) or isinstance(kind, bool):
            raise ValueError(f"Invalid kind: {kind!r}")
        if not isinstance(created_at, int) or isinstance(created_at, bool):
            raise ValueError(f"Invalid created_at: {created_at!r}")
        for tag in record.tags:
            if not all(isinstance(part, str) for part in tag):
                raise ValueError(f"Invalid tag: {tag!r}")
        
        return record
    
    def to_dict(self) -> dict:
        """Convert to the wire dict."""
        return {
            "id": self.record_id,
            "pubkey": self.author_key,
            "kind": self.kind,
            "content": self.content,
            "tags": [list(tag) for tag in self.tags],
            "created_at": self.created_at
        }
