"""Customer commands."""

from typing import Annotated

from rich.console import Console
import typer

from customer_posts.domain.entities import Customer
from customer_posts.infrastructure.cli.async_helpers import run_in_unit_of_work
from customer_posts.infrastructure.cli.ui import command_error_handler, display_customers

console = Console()

app = typer.Typer(help="Manage customers", no_args_is_help=True)


@app.command(name="list")
@command_error_handler
def list_customers() -> None:
    """List every customer."""
    customers = run_in_unit_of_work(
        lambda uow: uow.get_customer_service().list_customers()
    )
    display_customers(customers)


@app.command(name="add")
@command_error_handler
def add_customer(
    name: Annotated[str, typer.Argument(help="Unique customer name")],
    email: Annotated[
        str | None, typer.Option("--email", "-e", help="Contact email")
    ] = None,
    phone: Annotated[
        str | None, typer.Option("--phone", "-p", help="Contact phone")
    ] = None,
) -> None:
    """Create a customer."""
    customer = run_in_unit_of_work(
        lambda uow: uow.get_customer_service().create_customer(
            Customer(name=name, email=email, phone=phone)
        )
    )
    console.print(f"[bold green]✓ Created customer {customer.id}[/bold green]")


@app.command(name="delete")
@command_error_handler
def delete_customer(
    customer_id: Annotated[int, typer.Argument(help="Customer ID")],
    non_atomic: Annotated[
        bool,
        typer.Option(
            "--non-atomic",
            help="Commit the post deletion before deleting the customer",
        ),
    ] = False,
) -> None:
    """Delete a customer together with all of its posts."""
    customer = run_in_unit_of_work(
        lambda uow: uow.get_customer_service().delete_customer_with_posts(
            customer_id, atomic=not non_atomic
        )
    )
    console.print(
        f"[bold green]✓ Deleted customer {customer.id} and its posts[/bold green]"
    )
