"""Total cost calculator - the pricing collaborator invoked once per parse."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from nostrlisting.models.listing import ParsedListing


class CostCalculator(Protocol):
    """Computes a listing's total from its assembled fields. Must not mutate the listing."""

    def __call__(self, listing: ParsedListing) -> float: ...


def calculate_total_cost(listing: ParsedListing) -> float:
    """Item price plus shipping; missing amounts count as 0."""
    total = listing.price or 0.0
    total += listing.shipping_cost or 0.0
    return total
