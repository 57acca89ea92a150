"""
groupbot CLI main module.

    groupbot run       start the callback server
    groupbot inspect   print the stored ledger and catalog
"""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from groupbot.core.config.settings import settings
from groupbot.core.types import validate_store_type
from groupbot.domain.services import PictureCatalog, PointsLedger
from groupbot.persistence import create_store

app = typer.Typer(help="groupbot GroupMe bot CLI")
console = Console()


def _store_type_or_exit(store: str | None):
    try:
        return validate_store_type(store or settings.store_type)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e


@app.command()
def run(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(None, "--port", "-p", help="Port to bind to (default: PORT)"),
    store: str = typer.Option(
        None, "--store", "-s", help="Store backend: memory, json or redis"
    ),
):
    """
    Run the bot server.

    Examples:
        groupbot run
        groupbot run --store json --port 8080
    """
    from groupbot.core.bot_app import GroupBot

    store_type = _store_type_or_exit(store)
    typer.echo(f"🚀 Starting groupbot on {host}:{port or settings.port} ({store_type.value})")
    GroupBot(store=store_type).run(host=host, port=port)


async def _load(store_type):
    store = create_store(store_type)
    try:
        ledger = PointsLedger(store)
        catalog = PictureCatalog(store)
        await ledger.load()
        await catalog.load()
        return ledger.standings(), catalog.snapshot()
    finally:
        await store.close()


@app.command()
def inspect(
    store: str = typer.Option(
        None, "--store", "-s", help="Store backend: memory, json or redis"
    ),
):
    """
    Print the points ledger and the picture catalog as tables.

    Examples:
        groupbot inspect --store json
    """
    store_type = _store_type_or_exit(store)
    try:
        standings, pictures = asyncio.run(_load(store_type))
    except Exception as e:
        typer.echo(f"❌ Could not load the {store_type.value} store: {e}", err=True)
        raise typer.Exit(1) from e

    points_table = Table(title=f"Points ({len(standings)})")
    points_table.add_column("#", justify="right")
    points_table.add_column("User")
    points_table.add_column("Points", justify="right")
    for rank, record in enumerate(standings, start=1):
        points_table.add_row(str(rank), record.user_id, str(record.points))

    pictures_table = Table(title=f"Pictures ({len(pictures)})")
    pictures_table.add_column("Caption")
    pictures_table.add_column("Appearances", justify="right")
    pictures_table.add_column("Kind")
    pictures_table.add_column("Id", style="dim")
    for entry in sorted(pictures, key=lambda e: (e.caption.casefold(), e.caption)):
        pictures_table.add_row(
            entry.caption,
            str(entry.appearances),
            "video" if entry.is_video else "image",
            entry.id,
        )

    console.print(points_table)
    console.print(pictures_table)


if __name__ == "__main__":
    app()
