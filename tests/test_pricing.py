"""Default total cost calculator."""

from nostrlisting.models import ParsedListing
from nostrlisting.pricing import calculate_total_cost


def _listing(**kw) -> ParsedListing:
    return ParsedListing(id="i", pubkey="p", created_at=0, **kw)


def test_price_plus_shipping():
    assert calculate_total_cost(_listing(price=20.0, currency="USD", shipping_type="x", shipping_cost=5.0)) == 25.0


def test_missing_amounts_count_as_zero():
    assert calculate_total_cost(_listing()) == 0.0
    assert calculate_total_cost(_listing(price=12.0, currency="USD")) == 12.0
    assert calculate_total_cost(_listing(shipping_type="Added Cost", shipping_cost=3.0)) == 3.0


def test_does_not_mutate_listing():
    listing = _listing(price=1.0, currency="USD")
    before = listing.model_dump()
    calculate_total_cost(listing)
    assert listing.model_dump() == before
