"""Tag parsing - NostrEvent -> ParsedListing."""

from nostrlisting.parsing.numbers import MalformedTagError
from nostrlisting.parsing.tags import TAG_HANDLERS, parse_tags, resolve_summary

__all__ = [
    "MalformedTagError",
    "TAG_HANDLERS",
    "parse_tags",
    "resolve_summary",
]
