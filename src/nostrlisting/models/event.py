"""NostrEvent - the signed input record carrying a listing's tags."""

from __future__ import annotations

from pydantic import BaseModel, Field


class NostrEvent(BaseModel):
    """Event as received from a relay. Only id/pubkey/created_at/content/tags are consumed."""

    id: str
    pubkey: str
    created_at: int  # unix seconds
    kind: int = 30402  # NIP-99 classified listing
    content: str = ""
    # None = event predates tagging; [] = tagged but empty
    tags: list[list[str]] | None = Field(default=None, description="Ordered tag tuples")
    sig: str = ""
