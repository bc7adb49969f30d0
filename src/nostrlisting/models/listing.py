"""ParsedListing - product record built from an event's tags."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ParsedListing(BaseModel):
    """Marketplace listing. Tag-derived fields stay unset unless a matching tag was seen."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    id: str
    pubkey: str
    created_at: int
    summary: str = ""

    title: str | None = None
    location: str | None = None
    d: str | None = None
    published_at: str | None = None
    status: str | None = None
    condition: str | None = None
    restrictions: str | None = None
    quantity: int | None = None
    expiration: int | None = None

    images: list[str] | None = None
    categories: list[str] | None = None
    pickup_locations: list[str] | None = None
    sizes: list[str] | None = None
    size_quantities: dict[str, int] | None = None
    volumes: list[str] | None = None
    volume_prices: dict[str, float] | None = None

    # set in pairs from a single tag
    price: float | None = None
    currency: str | None = None
    shipping_type: str | None = None
    shipping_cost: float | None = None

    content_warning: bool | None = None
    total_cost: float | None = None

    def to_wire(self) -> dict[str, Any]:
        """camelCase dict with unset fields left out."""
        return self.model_dump(by_alias=True, exclude_unset=True)
