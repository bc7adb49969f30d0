"""Parse command: read event JSON (object, array, or JSON Lines), print parsed listings."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from nostrlisting.parsing import MalformedTagError, parse_tags


def load_events(text: str) -> list[dict[str, Any]]:
    """One JSON object, a JSON array of objects, or one object per line."""
    text = text.strip()
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return [json.loads(line) for line in text.splitlines() if line.strip()]
    if isinstance(data, list):
        return data
    return [data]


def parse(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Event file, or - for stdin"),
    strict: bool | None = typer.Option(
        None, "--strict/--lenient", help="Raise on malformed numbers (default: from config)"
    ),
    compact: bool = typer.Option(False, "--compact", help="One JSON document per line"),
) -> None:
    """Parse events and print each listing as camelCase JSON (null for untagged events)."""
    settings = ctx.obj["settings"]
    if strict is None:
        strict = settings.strict_numbers
    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    try:
        events = load_events(text)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON: {e}", err=True)
        raise typer.Exit(code=1)

    indent = None if compact else 2
    for raw in events:
        try:
            listing = parse_tags(raw, strict=strict)
        except (MalformedTagError, ValidationError) as e:
            typer.echo(f"Event {raw.get('id') if isinstance(raw, dict) else raw!r}: {e}", err=True)
            raise typer.Exit(code=1)
        if listing is None:
            typer.echo("null")
            continue
        # model_dump_json renders NaN amounts as null
        typer.echo(listing.model_dump_json(by_alias=True, exclude_unset=True, indent=indent))
