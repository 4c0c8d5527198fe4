"""Minimal FastAPI service for address decomposition and geocoding."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from ru_address_geocoder import __version__
from ru_address_geocoder.models import NOT_FOUND_MESSAGE, GeocodeResult
from ru_address_geocoder.service import GeocodingService

app = FastAPI(title="RU Address Geocoder API", version=__version__)
service = GeocodingService()


class BatchRequest(BaseModel):
    addresses: list[str] = Field(..., description="Addresses to resolve, in order.")


def _raise_for_failure(result: GeocodeResult) -> None:
    if result.success:
        return
    status = 404 if result.error == NOT_FOUND_MESSAGE else 502
    raise HTTPException(status_code=status, detail=result.error)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/decompose")
def decompose(address: str = Query(..., min_length=1)) -> dict[str, Any]:
    """Split an address into region, settlement, street and house."""
    return service.decompose(address).to_dict()


@app.get("/candidates")
def candidates(address: str = Query(..., min_length=1)) -> dict[str, Any]:
    return {"address": address, "candidates": service.candidates(address)}


@app.get("/analyze")
def analyze(address: str = Query(..., min_length=1)) -> dict[str, Any]:
    result = service.analyze(address)
    if result.error:
        raise HTTPException(status_code=400, detail=str(result.error))
    return result.to_dict()


@app.get("/geocode")
async def geocode(
    address: str = Query(..., min_length=3),
    fallback: bool = False,
) -> dict[str, Any]:
    """Resolve one address; with ``fallback`` tries generated candidates in order."""
    if fallback:
        result = await service.geocode_with_fallback(address)
    else:
        result = await service.geocode(address)
    _raise_for_failure(result)
    return result.model_dump(mode="json")


@app.post("/geocode_batch")
async def geocode_batch(request: BatchRequest) -> StreamingResponse:
    """Resolve a batch, streaming progress and the final outcome as NDJSON.

    Each line is ``{"type": "progress" | "results" | "error", "data": ...}``;
    the last line is always ``results`` or ``error``.
    """
    resolver = service.resolver()

    async def stream() -> AsyncIterator[str]:
        async for event in resolver.events(request.addresses):
            yield json.dumps(event.to_message(), ensure_ascii=False) + "\n"

    return StreamingResponse(stream(), media_type="application/x-ndjson")


# To run: uvicorn ru_address_geocoder.api:app --host 0.0.0.0 --port 8000
