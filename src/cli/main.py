"""Typesense Search CLI - run multi-searches from the terminal.

This module provides a command-line interface for the multi-search client,
allowing users to:
- Bundle several searches into one request and print the results
- Inspect the effective connection configuration
"""

import json
import os
from pathlib import Path
from typing import Any

import typer
from dotenv import dotenv_values
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.api.models import (
    MultiSearchCollectionParameters,
    MultiSearchParams,
    MultiSearchResult,
    MultiSearchSearchesParameter,
)
from src.client import Client, HTTPStatusError, TransportError
from src.client.logging import configure_logging
from src.client.settings import Settings

__version__ = "0.1.0"

app = typer.Typer(
    name="typesense-search",
    help="Typesense Search CLI - run multi-searches against a Typesense server",
    no_args_is_help=True,
)
console = Console()


def _only_api_key_missing(error: ValidationError) -> bool:
    """Whether the only settings problem is an unset API key."""
    return all(err["type"] == "missing" and err["loc"] == ("api_key",) for err in error.errors())


def _setting_source(name: str) -> str:
    """Report where a setting comes from: env, .env or default."""
    key = f"{Settings.model_config['env_prefix']}{name}".lower()
    if key in {k.lower() for k in os.environ}:
        return "env"
    env_file = Settings.model_config.get("env_file")
    if env_file and key in {k.lower() for k in dotenv_values(env_file)}:
        return ".env"
    return "default"


def parse_search(value: str) -> MultiSearchCollectionParameters:
    """Parse a ``collection:query:query_by`` search option.

    The query itself may contain colons; collection and query_by may not.

    Raises:
        typer.BadParameter: If the value is not in the expected format
    """
    collection, sep, rest = value.partition(":")
    q, sep2, query_by = rest.rpartition(":")
    if not sep or not sep2 or not collection or not query_by:
        raise typer.BadParameter(
            f"Invalid search '{value}'. Expected collection:query:query_by"
        )
    return MultiSearchCollectionParameters(collection=collection, q=q, query_by=query_by)


def load_searches_file(path: Path) -> list[MultiSearchCollectionParameters]:
    """Load searches from a JSON file.

    Accepts either a full request body (``{"searches": [...]}``) or a bare
    list of searches.

    Raises:
        typer.BadParameter: If the file cannot be read or validated
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise typer.BadParameter(f"Could not read searches from {path}: {e}") from e

    if isinstance(data, list):
        data = {"searches": data}

    try:
        return MultiSearchSearchesParameter.model_validate(data).searches
    except ValidationError as e:
        raise typer.BadParameter(f"Invalid searches in {path}: {e}") from e


def format_snippet(snippet: str) -> str:
    """Turn ``<mark>`` highlight tags into rich markup."""
    return (
        escape(snippet)
        .replace("<mark>", "[bold yellow]")
        .replace("</mark>", "[/bold yellow]")
    )


def _document_summary(document: dict[str, Any] | None, limit: int = 80) -> str:
    if not document:
        return ""
    text = json.dumps(document, ensure_ascii=False)
    return text if len(text) <= limit else text[:limit] + "..."


def print_results(
    searches: list[MultiSearchCollectionParameters],
    result: MultiSearchResult,
) -> None:
    """Print one table per search result."""
    if len(result.results) != len(searches):
        console.print(
            f"[yellow]Warning: sent {len(searches)} searches but got "
            f"{len(result.results)} results[/yellow]"
        )

    for i, (search, search_result) in enumerate(zip(searches, result.results), 1):
        found = search_result.found or 0
        console.print()
        console.print(
            f"[bold][{i}] {escape(search.collection)}[/bold] "
            f"q={escape(search.q or '*')}: found {found} "
            f"[dim]({search_result.search_time_ms or 0} ms)[/dim]"
        )

        if search_result.error:
            console.print(f"[red]{escape(search_result.error)}[/red]")
            continue

        hits = search_result.hits or []
        if not hits:
            console.print("[dim]No results found.[/dim]")
            continue

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Document")
        table.add_column("Highlight")

        for n, hit in enumerate(hits, 1):
            highlight = ""
            if hit.highlights and hit.highlights[0].snippet:
                highlight = format_snippet(hit.highlights[0].snippet)
            table.add_row(str(n), escape(_document_summary(hit.document)), highlight)

        console.print(table)


@app.command("multi-search")
def multi_search(
    search: list[str] = typer.Option(
        None,
        "--search",
        "-s",
        help="Search as collection:query:query_by (repeatable)",
    ),
    file: Path = typer.Option(
        None,
        "--file",
        "-f",
        help="JSON file with searches ({\"searches\": [...]} or a list)",
    ),
    query_by: str = typer.Option(None, "--query-by", help="Default fields to search by"),
    filter_by: str = typer.Option(None, "--filter-by", help="Filter expression"),
    sort_by: str = typer.Option(None, "--sort-by", help="Sort expression"),
    facet_by: str = typer.Option(None, "--facet-by", help="Fields to facet by"),
    page: int = typer.Option(None, "--page", help="Results page"),
    per_page: int = typer.Option(None, "--per-page", help="Hits per page"),
    url: str = typer.Option(
        None,
        "--url",
        "-u",
        help="Typesense server URL (overrides TYPESENSE_URL env var)",
    ),
    api_key: str = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key (overrides TYPESENSE_API_KEY env var)",
    ),
    output_json: bool = typer.Option(False, "--json", help="Print the raw JSON response"),
    log_level: str = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Run several searches in a single request.

    Examples:
        typesense-search multi-search -s "companies:stark:company_name"
        typesense-search multi-search -f searches.json --per-page 5
    """
    searches = [parse_search(s) for s in search or []]
    if file:
        searches.extend(load_searches_file(file))
    if not searches:
        console.print("[red]No searches given. Use --search or --file.[/red]")
        raise typer.Exit(1)

    overrides = {k: v for k, v in {"url": url, "api_key": api_key}.items() if v}
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        if _only_api_key_missing(e):
            console.print("[red]No API key configured. Set TYPESENSE_API_KEY or pass --api-key.[/red]")
        else:
            console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    params = MultiSearchParams(
        query_by=query_by,
        filter_by=filter_by,
        sort_by=sort_by,
        facet_by=facet_by,
        page=page,
        per_page=per_page,
    )
    body = MultiSearchSearchesParameter(searches=searches)

    with Client.from_settings(settings) as client:
        try:
            result = client.multi_search.perform(params, body)
        except HTTPStatusError as e:
            console.print(f"[red]Multi-search failed: {e.status_code}[/red]")
            if e.body:
                console.print(f"[dim]{escape(e.body.decode('utf-8', errors='replace'))}[/dim]")
            raise typer.Exit(1)
        except TransportError as e:
            console.print(f"[red]Could not reach Typesense at {settings.url}: {escape(str(e.cause))}[/red]")
            raise typer.Exit(1)

    if output_json:
        console.print_json(result.to_json())
        return

    print_results(searches, result)


@app.command()
def version() -> None:
    """Show version information."""
    console.print("[bold]Typesense Search CLI[/bold]")
    console.print(f"Version: {__version__}")


@app.command()
def config() -> None:
    """Show the configuration multi-search will use."""
    try:
        settings = Settings()
        api_key_set = True
    except ValidationError as e:
        if not _only_api_key_missing(e):
            console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        settings = Settings(api_key="")
        api_key_set = False

    console.print("[bold]Current Configuration[/bold]")
    console.print()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_column("Source")

    table.add_row("Server URL", settings.url, _setting_source("url"))

    if api_key_set:
        masked = settings.api_key[:4] + "*" * max(len(settings.api_key) - 4, 0)
        table.add_row("API Key", masked, _setting_source("api_key"))
    else:
        table.add_row("API Key", "[yellow]Not set[/yellow]", "-")

    table.add_row(
        "Connection Timeout",
        f"{settings.connection_timeout}s",
        _setting_source("connection_timeout"),
    )
    table.add_row("Log Level", settings.log_level, _setting_source("log_level"))

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
