"""Command line interface for browsing and managing journey history."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from journeylog import HistoryService, get_backend
from journeylog.config import load_config
from journeylog.errors import (
    AlreadyInProgress,
    DeletionFailed,
    EntryNotFound,
    MissingModules,
    SaveFailed,
)
from journeylog.formatting import format_details, format_summary
from journeylog.store import HistorySnapshot

app = typer.Typer(help="CLI for journeylog history")

history_app = typer.Typer(help="Commands for managing saved journeys")

app.add_typer(history_app, name="history")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """journeylog CLI entry point."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


async def _load_service() -> tuple[HistoryService, HistorySnapshot]:
    service = HistoryService(backend=get_backend())
    snapshot = await service.load_history()
    return service, snapshot


@history_app.command("list")
def history_list() -> None:
    """
    List saved journeys with their overall progress.

    Returns:
        Tab-separated id, creation date, progress and query per journey

    Example:
        journeylog history list
        # Output: 5f0c...    Mar 04, 2025    50%    Learn Rust
    """
    config = load_config()
    _, snapshot = asyncio.run(_load_service())
    if snapshot.error is not None:
        _fail(str(snapshot.error))
    if not snapshot.entries:
        typer.echo("You haven't started any journeys yet.")
        return
    for entry in snapshot.entries:
        typer.echo(format_summary(entry, config.display))


@history_app.command("show")
def history_show(journey_id: str) -> None:
    """Show one journey with its per-module progress."""
    config = load_config()
    service, snapshot = asyncio.run(_load_service())
    if snapshot.error is not None:
        _fail(str(snapshot.error))
    try:
        entry = service.store.get(journey_id)
    except EntryNotFound:
        _fail("Journey not found")
    for line in format_details(entry, config.display):
        typer.echo(line)


@history_app.command("continue")
def history_continue(journey_id: str) -> None:
    """
    Print the module list needed to resume a journey.

    Modules without a usable topic list are given an empty one. Journeys
    with no module data cannot be resumed.

    Example:
        journeylog history continue 5f0c...
    """
    service, snapshot = asyncio.run(_load_service())
    if snapshot.error is not None:
        _fail(str(snapshot.error))
    try:
        journey = service.continue_journey(journey_id)
    except EntryNotFound:
        _fail("Journey not found")
    except MissingModules as exc:
        _fail(str(exc))
    typer.echo(journey.model_dump_json(indent=2))


@history_app.command("delete")
def history_delete(
    journey_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """
    Permanently delete a journey.

    Example:
        journeylog history delete 5f0c... --yes
    """
    if not yes:
        typer.confirm(
            "Are you sure? This will permanently delete your journey.", abort=True
        )

    async def _delete() -> None:
        service, _ = await _load_service()
        await service.delete_journey(journey_id)

    try:
        asyncio.run(_delete())
    except (DeletionFailed, AlreadyInProgress) as exc:
        _fail(str(exc))
    typer.echo("Journey deleted successfully")


@history_app.command("add")
def history_add(
    query: str,
    modules_file: Optional[Path] = typer.Option(
        None, help="JSON file holding the journey's module list"
    ),
) -> None:
    """Save a new journey and print its id."""
    modules = None
    if modules_file is not None:
        try:
            modules = json.loads(modules_file.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            _fail(f"Could not read modules from {modules_file}: {exc}")
        if not isinstance(modules, list):
            _fail("Modules file must contain a JSON list")

    async def _add() -> str:
        service = HistoryService(backend=get_backend())
        entry = await service.start_journey(query, modules=modules)
        return entry.id

    try:
        journey_id = asyncio.run(_add())
    except SaveFailed as exc:
        _fail(str(exc))
    typer.echo(journey_id)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
