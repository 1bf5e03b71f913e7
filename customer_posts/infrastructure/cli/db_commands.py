"""Database maintenance commands."""

import asyncio

from rich.console import Console
import typer

from customer_posts.config import get_logger, settings
from customer_posts.infrastructure.cli.ui import command_error_handler
from customer_posts.infrastructure.persistence.database import dispose_engine, init_db

console = Console()
logger = get_logger(__name__)

app = typer.Typer(help="Manage the database", no_args_is_help=True)


async def _init_schema() -> None:
    try:
        await init_db()
    finally:
        await dispose_engine()


@app.command(name="init")
@command_error_handler
def initialize_database() -> None:
    """Create any missing tables."""
    logger.info("Initializing database schema")
    asyncio.run(_init_schema())
    console.print(
        f"[bold green]✓ Database initialized[/bold green] [dim]{settings.database.url}[/dim]"
    )
