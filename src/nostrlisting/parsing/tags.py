"""Event tags -> ParsedListing via a name-keyed dispatch table.

Each tag is ``[name, *args]``. The table maps a tag name to a handler that owns
that name's arity rules and its repeat policy: scalar fields are last-write-wins,
list/map fields accumulate every occurrence in tag order. Names missing from the
table are dropped, as are recognized tags whose shape a handler does not accept.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog

from nostrlisting.models import NostrEvent, ParsedListing
from nostrlisting.parsing.numbers import parse_int, parse_number
from nostrlisting.pricing import CostCalculator, calculate_total_cost

log = structlog.get_logger(__name__)

CONTENT_WARNING = "content-warning"
LEGACY_SHIPPING_TYPE = "Added Cost"


class _Accumulator:
    """Mutable state for one scan; discarded once the listing is built."""

    def __init__(self, strict: bool) -> None:
        self.strict = strict
        self.fields: dict[str, Any] = {}
        self.summary_tag: str | None = None

    def append(self, field: str, value: Any) -> None:
        self.fields.setdefault(field, []).append(value)

    def put(self, field: str, key: str, value: Any) -> None:
        self.fields.setdefault(field, {})[key] = value

    def skip(self, tag: list[str]) -> None:
        log.debug("tag_shape_unrecognized", tag=tag[0], arity=len(tag) - 1)


Handler = Callable[[_Accumulator, list[str]], None]


# --- simple tags ---
def _scalar(field: str) -> Handler:
    def handle(acc: _Accumulator, tag: list[str]) -> None:
        if len(tag) < 2:
            acc.skip(tag)
            return
        acc.fields[field] = tag[1]

    return handle


def _int_scalar(field: str) -> Handler:
    def handle(acc: _Accumulator, tag: list[str]) -> None:
        if len(tag) < 2:
            acc.skip(tag)
            return
        value = parse_int(tag[1], tag, strict=acc.strict)
        if value is not None:
            acc.fields[field] = value

    return handle


def _collect(field: str) -> Handler:
    def handle(acc: _Accumulator, tag: list[str]) -> None:
        if len(tag) < 2:
            acc.skip(tag)
            return
        acc.append(field, tag[1])

    return handle


def _on_summary(acc: _Accumulator, tag: list[str]) -> None:
    if len(tag) < 2:
        acc.skip(tag)
        return
    acc.summary_tag = tag[1]


# --- labelled amounts (size -> quantity, volume -> price) ---
def _on_size(acc: _Accumulator, tag: list[str]) -> None:
    if len(tag) < 2:
        acc.skip(tag)
        return
    label = tag[1]
    acc.append("sizes", label)
    if len(tag) > 2:
        qty = parse_int(tag[2], tag, strict=acc.strict)
        if qty is not None:
            acc.put("size_quantities", label, qty)


def _on_volume(acc: _Accumulator, tag: list[str]) -> None:
    if len(tag) < 2:
        acc.skip(tag)
        return
    label = tag[1]
    acc.append("volumes", label)
    if len(tag) > 2:
        acc.put("volume_prices", label, parse_number(tag[2], tag, strict=acc.strict))


# --- price / shipping ---
def _on_price(acc: _Accumulator, tag: list[str]) -> None:
    # ["price", amount, currency, (frequency)] - both or neither
    if len(tag) < 3:
        acc.skip(tag)
        return
    acc.fields["price"] = parse_number(tag[1], tag, strict=acc.strict)
    acc.fields["currency"] = tag[2]


def _shipping_flat(tag: list[str], strict: bool) -> tuple[str, float]:
    return tag[1], 0.0


def _shipping_legacy(tag: list[str], strict: bool) -> tuple[str, float]:
    return LEGACY_SHIPPING_TYPE, parse_number(tag[1], tag, strict=strict)


def _shipping_labelled(tag: list[str], strict: bool) -> tuple[str, float]:
    return tag[1], parse_number(tag[2], tag, strict=strict)


# argument count -> shape
SHIPPING_SHAPES: dict[int, Callable[[list[str], bool], tuple[str, float]]] = {
    1: _shipping_flat,  # ["shipping", "Free"]
    2: _shipping_legacy,  # ["shipping", "5", "USD"]
    3: _shipping_labelled,  # ["shipping", "Added Cost", "10", "USD"]
}


def _on_shipping(acc: _Accumulator, tag: list[str]) -> None:
    shape = SHIPPING_SHAPES.get(len(tag) - 1)
    if shape is None:
        acc.skip(tag)
        return
    shipping_type, shipping_cost = shape(tag, acc.strict)
    acc.fields["shipping_type"] = shipping_type
    acc.fields["shipping_cost"] = shipping_cost


# --- content warning (NIP-36 and NIP-32 label forms) ---
def _on_content_warning(acc: _Accumulator, tag: list[str]) -> None:
    acc.fields["content_warning"] = True


def _on_label_namespace(acc: _Accumulator, tag: list[str]) -> None:
    if len(tag) >= 2 and tag[1] == CONTENT_WARNING:
        acc.fields["content_warning"] = True


def _on_label(acc: _Accumulator, tag: list[str]) -> None:
    if len(tag) >= 2 and tag[-1] == CONTENT_WARNING:
        acc.fields["content_warning"] = True


TAG_HANDLERS: dict[str, Handler] = {
    "title": _scalar("title"),
    "location": _scalar("location"),
    "d": _scalar("d"),
    "published_at": _scalar("published_at"),
    "status": _scalar("status"),
    "condition": _scalar("condition"),
    "restrictions": _scalar("restrictions"),
    "quantity": _int_scalar("quantity"),
    "expiration": _int_scalar("expiration"),
    "summary": _on_summary,
    "image": _collect("images"),
    "t": _collect("categories"),
    "pickup_location": _collect("pickup_locations"),
    "size": _on_size,
    "volume": _on_volume,
    "price": _on_price,
    "shipping": _on_shipping,
    CONTENT_WARNING: _on_content_warning,
    "L": _on_label_namespace,
    "l": _on_label,
}


# ECMAScript whitespace + line terminators, the set other Nostr clients trim.
# Unlike str.strip(): includes U+FEFF, excludes \x1c-\x1f and U+0085.
_BLANK = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def resolve_summary(content: str, summary_tag: str | None) -> str:
    """Non-blank content wins over the summary tag; neither -> ""."""
    if content.strip(_BLANK):
        return content
    return summary_tag or ""


def parse_tags(
    event: NostrEvent | dict[str, Any],
    cost_calculator: CostCalculator = calculate_total_cost,
    *,
    strict: bool = False,
) -> ParsedListing | None:
    """Build a ParsedListing from an event's tags, or None if the event has no tag list.

    ``cost_calculator`` runs exactly once, after the scan, on the assembled listing;
    its result becomes ``total_cost``. Errors it raises are not caught here.
    With ``strict=True`` a malformed numeric argument raises MalformedTagError
    instead of yielding NaN / skipping the value.
    """
    if not isinstance(event, NostrEvent):
        event = NostrEvent.model_validate(event)
    if event.tags is None:
        log.debug("event_without_tags", event_id=event.id)
        return None

    acc = _Accumulator(strict)
    for tag in event.tags:
        if not tag:
            continue
        handler = TAG_HANDLERS.get(tag[0])
        if handler is None:
            log.debug("tag_ignored", tag=tag[0])
            continue
        handler(acc, tag)

    listing = ParsedListing(
        id=event.id,
        pubkey=event.pubkey,
        created_at=event.created_at,
        summary=resolve_summary(event.content, acc.summary_tag),
        **acc.fields,
    )
    listing.total_cost = cost_calculator(listing)
    log.debug("listing_parsed", event_id=event.id, tags=len(event.tags), fields=len(acc.fields))
    return listing
