"""nostrlisting - NIP-99 listing events to marketplace product records."""

from nostrlisting.models import NostrEvent, ParsedListing
from nostrlisting.parsing import MalformedTagError, parse_tags

__all__ = ["MalformedTagError", "NostrEvent", "ParsedListing", "parse_tags"]
