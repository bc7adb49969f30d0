"""Pydantic schemas for API request/response consistency and OpenAPI docs."""

from __future__ import annotations

from pydantic import BaseModel, Field

from nostrlisting.models import ParsedListing


# --- Health ---
class HealthResponse(BaseModel):
    status: str = "ok"


# --- Error (consistent shape for 4xx/5xx) ---
class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable message")
    code: str | None = Field(None, description="Machine-readable code, e.g. malformed_tag")


# --- Listings ---
class ParseBatchResponse(BaseModel):
    listings: list[ParsedListing | None] = Field(
        ..., description="One entry per input event, in order; null when the event has no tags"
    )
    total: int
