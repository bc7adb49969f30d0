"""Numeric tag arguments - lenient (NaN / skip) or strict (raise) parsing."""

from __future__ import annotations

import math
import re

import structlog

log = structlog.get_logger(__name__)

_INT_PREFIX = re.compile(r"^[+-]?\d+")


class MalformedTagError(ValueError):
    """A recognized tag carried an argument that could not be interpreted."""

    def __init__(self, tag: list[str], reason: str) -> None:
        self.tag = list(tag)
        self.reason = reason
        super().__init__(f"{reason}: {self.tag!r}")


def parse_number(text: str, tag: list[str], *, strict: bool = False) -> float:
    """Decimal argument -> float. Malformed -> NaN, or MalformedTagError when strict."""
    try:
        value = float(text.strip())
    except ValueError:
        value = math.nan
    if math.isnan(value):
        if strict:
            raise MalformedTagError(tag, f"not a number {text!r}")
        log.warning("malformed_number", tag=tag[0], value=text)
    return value


def parse_int(text: str, tag: list[str], *, strict: bool = False) -> int | None:
    """Integer prefix of the argument ("7.5" -> 7). Malformed -> None, or raise when strict."""
    m = _INT_PREFIX.match(text.strip())
    if m is None:
        if strict:
            raise MalformedTagError(tag, f"not an integer {text!r}")
        log.warning("malformed_number", tag=tag[0], value=text)
        return None
    return int(m.group(0))
