from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from ru_address_geocoder.models import (
    BatchOutcome,
    BatchProgress,
    BatchStructuralError,
    GeocodeResult,
)
from ru_address_geocoder.remote import GeocoderConfig, GeocoderFactory
from ru_address_geocoder.service import GeocodingService

app = typer.Typer(help="Decompose and geocode Russian addresses.")


@app.callback()
def main(
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _read_addresses(addresses: list[str], file: Optional[Path]) -> list[str]:
    collected = list(addresses)
    if file is not None:
        lines = file.read_text(encoding="utf-8").splitlines()
        collected.extend(line.strip() for line in lines if line.strip())
    return collected


def _format_result(result: GeocodeResult) -> str:
    if result.success and result.coords is not None:
        line = f"{result.address}\t{result.coords.lat:.6f}, {result.coords.lng:.6f}"
        if result.query and result.query != result.address:
            line += f"\t(via: {result.query})"
        if result.coords.approximate:
            line += "\t(approximate)"
        return line
    return f"{result.address}\tERROR: {result.error}"


@app.command()
def decompose(
    address: str = typer.Argument(..., help="Raw address string."),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print JSON."),  # noqa: B008
) -> None:
    """Split an address into region, settlement, street and house."""
    fragments = GeocodingService().decompose(address)
    if as_json:
        _echo_json(fragments.to_dict())
        return
    for name, value in fragments.to_dict().items():
        typer.echo(f"{name}: {value if value is not None else '-'}")


@app.command()
def candidates(
    address: str = typer.Argument(..., help="Raw address string."),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print JSON."),  # noqa: B008
) -> None:
    """List the geocoder queries tried for an address, most specific first."""
    queries = GeocodingService().candidates(address)
    if as_json:
        _echo_json(queries)
        return
    if not queries:
        typer.echo("No candidates.")
        return
    for index, query in enumerate(queries, start=1):
        typer.echo(f"{index}. {query}")


@app.command()
def analyze(
    address: str = typer.Argument(..., help="Raw address string."),  # noqa: B008
) -> None:
    """Print fragments, candidates, normalised text and quality as JSON."""
    _echo_json(GeocodingService().analyze(address).to_dict())


async def _geocode(
    addresses: list[str],
    *,
    backend: str,
    config: GeocoderConfig,
    fallback: bool,
) -> BatchOutcome:
    geocoder = GeocoderFactory.create(backend, config=config)

    def report(progress: BatchProgress) -> None:
        typer.echo(f"[{progress.processed}/{progress.total}]", err=True)

    try:
        service = GeocodingService(geocoder=geocoder, config=config)
        if fallback:
            return await service.resolve_with_fallback(addresses, on_progress=report)
        return await service.resolve_batch(addresses, on_progress=report)
    finally:
        aclose = getattr(geocoder, "aclose", None)
        if aclose is not None:
            await aclose()


@app.command()
def geocode(
    addresses: Optional[list[str]] = typer.Argument(  # noqa: B008
        None, help="Addresses to resolve, in order."
    ),
    file: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--file",
        "-f",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Read additional addresses from a file, one per line.",
    ),
    fallback: bool = typer.Option(  # noqa: B008
        False,
        "--fallback",
        help="Try generated candidate queries until one resolves.",
    ),
    delay: Optional[float] = typer.Option(  # noqa: B008
        None,
        "--delay",
        min=0.0,
        help="Seconds between requests (default: RU_GEOCODER_DELAY or 1.0).",
    ),
    backend: str = typer.Option(  # noqa: B008
        "nominatim",
        "--backend",
        help="Geocoder backend: nominatim, regional or chained.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON."),  # noqa: B008
) -> None:
    """Resolve addresses sequentially, one request at a time."""
    collected = _read_addresses(addresses or [], file)
    if not collected:
        typer.echo("No addresses given.", err=True)
        raise typer.Exit(code=2)

    config = GeocoderConfig() if delay is None else GeocoderConfig(request_delay=delay)
    try:
        outcome = asyncio.run(
            _geocode(collected, backend=backend, config=config, fallback=fallback)
        )
    except (BatchStructuralError, ValueError) as exc:
        typer.echo(f"Batch failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if as_json:
        _echo_json(outcome.to_records())
    else:
        for result in outcome.results:
            typer.echo(_format_result(result))
    typer.echo(
        f"Resolved {len(outcome.succeeded)} of {len(outcome)} addresses.", err=True
    )


if __name__ == "__main__":
    app()
