"""customer-posts CLI - Main application entry point and app structure."""

from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

from rich.console import Console
import typer

from customer_posts.config import (
    configure_sqlalchemy_logging,
    get_logger,
    log_startup_info,
    setup_loguru_logger,
)
from customer_posts.infrastructure.cli import (
    customers_commands,
    db_commands,
    posts_commands,
)

try:
    VERSION = version("customer-posts")
except PackageNotFoundError:
    VERSION = "0.0.0"

console = Console(width=80)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"Customer/post data store v{VERSION}",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

app.add_typer(db_commands.app, name="db", rich_help_panel="⚙️ System")
app.add_typer(customers_commands.app, name="customers", rich_help_panel="📇 Data")
app.add_typer(posts_commands.app, name="posts", rich_help_panel="📇 Data")


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(f"[bold bright_blue]customer-posts[/bold bright_blue] [dim]v{VERSION}[/dim]")


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize the CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_loguru_logger(verbose)
    configure_sqlalchemy_logging()
    log_startup_info()


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
