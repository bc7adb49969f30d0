"""FastAPI app - parse listing events over HTTP."""

from __future__ import annotations

from pathlib import Path

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from nostrlisting.api.schemas import ErrorResponse, HealthResponse, ParseBatchResponse
from nostrlisting.config import get_settings
from nostrlisting.models import NostrEvent
from nostrlisting.parsing import MalformedTagError, parse_tags

log = structlog.get_logger(__name__)

# Set by run_api() so request handlers read the same config as the CLI.
_config_profile: str | None = None
_config_dir: Path | None = None

app = FastAPI(title="nostrlisting API", version="0.1.0")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


def _error_json(code: str, message: str, status_code: int = 422) -> JSONResponse:
    """Return consistent error JSON: { detail, code }."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code},
    )


def _strict() -> bool:
    return get_settings(_config_profile, _config_dir).strict_numbers


@app.exception_handler(MalformedTagError)
async def malformed_tag_handler(request: Request, exc: MalformedTagError) -> JSONResponse:
    log.warning("malformed_tag_rejected", path=request.url.path, tag=exc.tag, reason=exc.reason)
    return _error_json("malformed_tag", str(exc))


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok")


@app.post(
    "/listings/parse",
    responses={200: {"description": "Parsed listing (camelCase), or null"}, 422: {"model": ErrorResponse}},
)
def parse_listing(event: NostrEvent) -> Response:
    """Parse one event. Unset fields are omitted; an event without tags yields null."""
    listing = parse_tags(event, strict=_strict())
    if listing is None:
        return Response(content="null", media_type="application/json")
    # model_dump_json renders NaN amounts as null
    body = listing.model_dump_json(by_alias=True, exclude_unset=True)
    return Response(content=body, media_type="application/json")


@app.post(
    "/listings/parse/batch",
    response_model=ParseBatchResponse,
    responses={422: {"model": ErrorResponse}},
)
def parse_listings(events: list[NostrEvent]) -> Response:
    """Parse events in order; all-or-nothing in strict mode."""
    strict = _strict()
    listings = [parse_tags(e, strict=strict) for e in events]
    batch = ParseBatchResponse(listings=listings, total=len(listings))
    return Response(
        content=batch.model_dump_json(by_alias=True, exclude_unset=True),
        media_type="application/json",
    )


def run_api(
    host: str = "127.0.0.1",
    port: int = 8000,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> None:
    global _config_profile, _config_dir
    _config_profile = profile
    _config_dir = config_dir
    import uvicorn
    uvicorn.run("nostrlisting.api.main:app", host=host, port=port, reload=False)
