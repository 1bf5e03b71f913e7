"""Post commands."""

from typing import Annotated

from rich.console import Console
import typer

from customer_posts.domain.entities import Post
from customer_posts.infrastructure.cli.async_helpers import run_in_unit_of_work
from customer_posts.infrastructure.cli.ui import command_error_handler, display_posts

console = Console()

app = typer.Typer(help="Manage posts", no_args_is_help=True)


@app.command(name="list")
@command_error_handler
def list_posts(
    customer_id: Annotated[
        int | None,
        typer.Option("--customer", "-c", help="Only posts of this customer"),
    ] = None,
) -> None:
    """List posts, optionally for a single customer."""

    def _list(uow):
        service = uow.get_post_service()
        if customer_id is None:
            return service.list_posts()
        return service.list_posts_for_customer(customer_id)

    display_posts(run_in_unit_of_work(_list))


@app.command(name="add")
@command_error_handler
def add_post(
    customer_id: Annotated[int, typer.Argument(help="Owning customer ID")],
    body: Annotated[str, typer.Argument(help="Post text")],
    post_type: Annotated[
        int,
        typer.Option(
            "--type", "-t", help="Type code (1 Entertainment, 2 Politics, 3 Sports)"
        ),
    ] = 0,
    category: Annotated[
        str | None, typer.Option("--category", help="Category for other types")
    ] = None,
) -> None:
    """Create a post for an existing customer."""
    post = run_in_unit_of_work(
        lambda uow: uow.get_post_service().add_post(
            Post(customer_id=customer_id, body=body, type=post_type, category=category)
        )
    )
    console.print(
        f"[bold green]✓ Created post {post.id}[/bold green] [dim]{post.category or ''}[/dim]"
    )


@app.command(name="delete")
@command_error_handler
def delete_post(
    post_id: Annotated[int, typer.Argument(help="Post ID")],
) -> None:
    """Delete a post."""
    post = run_in_unit_of_work(lambda uow: uow.get_post_service().delete_post(post_id))
    console.print(f"[bold green]✓ Deleted post {post.id}[/bold green]")
