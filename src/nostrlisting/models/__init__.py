"""Canonical schema (Pydantic) - NostrEvent, ParsedListing."""

from nostrlisting.models.event import NostrEvent
from nostrlisting.models.listing import ParsedListing

__all__ = [
    "NostrEvent",
    "ParsedListing",
]
