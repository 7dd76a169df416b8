"""Command line interface for the Anicat Catalog API."""
from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import typer

from .client import create_client


DEFAULT_API_BASE = "http://localhost:3333"

app = typer.Typer(help="Interact with the Anicat catalog service.")


def _api_base_option() -> typer.Option:
    return typer.Option(
        DEFAULT_API_BASE,
        "--api-base",
        help="Base URL for the Catalog API service.",
        show_default=True,
        envvar="ANICAT_API_BASE",
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _fail(response: httpx.Response) -> None:
    """Print the API error detail and exit with a non-zero status."""

    detail: Any
    try:
        detail = response.json().get("detail", response.text)
    except (ValueError, AttributeError):
        detail = response.text
    typer.echo(f"Error {response.status_code}: {detail}", err=True)
    raise typer.Exit(code=1)


def _print_entries(entries: list[dict[str, Any]]) -> None:
    if not entries:
        typer.echo("No titles found.")
        return
    for entry in entries:
        alternatives = ", ".join(entry.get("alternative_titles") or [])
        line = f"{entry['id']}\t{entry['title']}"
        if alternatives:
            line += f"\t({alternatives})"
        typer.echo(line)


@app.command()
def ping(api_base: str = _api_base_option()) -> None:
    """Call the /ping endpoint."""

    with create_client(api_base) as client:
        response = client.get("/ping")
        if response.is_error:
            _fail(response)
        typer.echo(response.text.strip('"'))


@app.command()
def refresh(
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
    api_base: str = _api_base_option(),
) -> None:
    """Refresh the catalog snapshot from the upstream site."""

    with create_client(api_base) as client:
        response = client.get("/animes")
        if response.is_error:
            _fail(response)
        entries = response.json()

    if as_json:
        _echo_json(entries)
    else:
        typer.echo(f"Catalog refreshed: {len(entries)} titles.")


@app.command()
def search(
    phrase: str = typer.Argument("", help="Search phrase."),
    limit: Optional[int] = typer.Option(
        None, min=0, help="Maximum number of results (server default when omitted)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
    api_base: str = _api_base_option(),
) -> None:
    """Search the last published catalog snapshot."""

    params: dict[str, object] = {"phrase": phrase}
    if limit is not None:
        params["limit"] = limit

    with create_client(api_base) as client:
        response = client.get("/search", params=params)
        if response.is_error:
            _fail(response)
        entries = response.json()

    if as_json:
        _echo_json(entries)
    else:
        _print_entries(entries)


@app.command()
def show(
    anime_id: str = typer.Argument(..., help="Title id as listed in the catalog."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
    api_base: str = _api_base_option(),
) -> None:
    """Display a title with its aggregated episode list."""

    with create_client(api_base) as client:
        response = client.get(f"/anime/{anime_id}")
        if response.is_error:
            _fail(response)
        detail = response.json()

    if as_json:
        _echo_json(detail)
        return

    typer.echo(detail["title"])
    if detail.get("summary"):
        typer.echo(detail["summary"])
    for episode in detail.get("episodes", []):
        label = episode["title"]
        if episode.get("secondary_title") and episode["secondary_title"] != label:
            label += f" / {episode['secondary_title']}"
        typer.echo(f"S{episode['season']:02d}E{episode['episode']:02d}\t{label}")


@app.command()
def play(
    link_path: str = typer.Argument(..., help="Upstream path of the episode page."),
    api_base: str = _api_base_option(),
) -> None:
    """Resolve an episode page through the external resolver."""

    with create_client(api_base) as client:
        response = client.get("/play", params={"link_path": link_path})
        if response.is_error:
            _fail(response)
        _echo_json(response.json())
