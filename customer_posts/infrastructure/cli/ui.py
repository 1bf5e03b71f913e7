"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable, Sequence
import functools

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import typer

from customer_posts.config import get_logger
from customer_posts.domain.entities import Customer, Post
from customer_posts.domain.exceptions import DomainError

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

# Exit code for rejected input, as opposed to unexpected failures
DOMAIN_ERROR_EXIT_CODE = 2


def command_error_handler[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    Domain errors are reported as a one-line message with exit code 2; any
    other exception is logged with its traceback and exits with code 1.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except (typer.Exit, typer.Abort):
                raise

            except DomainError as e:
                logger.warning(f"Rejected {operation}: {type(e).__name__}")
                console.print(f"[bold red]✗ {escape(str(e))}[/bold red]")
                raise typer.Exit(code=DOMAIN_ERROR_EXIT_CODE) from e

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(
                    f"\n[bold red]✗ Error during {operation}:[/bold red] {escape(str(e))}"
                )
                raise typer.Exit(code=1) from e

    return wrapper


def display_customers(customers: Sequence[Customer]) -> None:
    """Render customers as a table."""
    if not customers:
        console.print("[yellow]No customers found.[/yellow]")
        return

    table = Table(title="Customers")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Email")
    table.add_column("Phone")
    for customer in customers:
        table.add_row(
            str(customer.id),
            escape(customer.name),
            escape(customer.email or ""),
            escape(customer.phone or ""),
        )
    console.print(table)


def display_posts(posts: Sequence[Post]) -> None:
    """Render posts as a table."""
    if not posts:
        console.print("[yellow]No posts found.[/yellow]")
        return

    table = Table(title="Posts")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Customer", justify="right")
    table.add_column("Type", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Body")
    for post in posts:
        table.add_row(
            str(post.id),
            str(post.customer_id),
            str(post.type),
            escape(post.category or ""),
            escape(post.body or ""),
        )
    console.print(table)
