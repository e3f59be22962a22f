"""Command-line interface for the community board."""

from typing import Callable, Optional

import typer
from typing_extensions import Annotated

from community_board.api import CommunityBoardClient
from community_board.config import get_settings
from community_board.controller import BoardController
from community_board.notifications import NotificationCenter
from community_board.state import SortMode
from community_board.utils.logging import setup_logging
from community_board.view import to_text


app = typer.Typer(help="Community Board - list, share, support and comment on posts")


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Annotated[Optional[str], typer.Option("--base-url", help="Board API base URL")] = None,
    log_level: Annotated[str, typer.Option("--log-level", help="Logging level")] = "WARNING",
) -> None:
    """Configure logging and remember the API location for the subcommand."""
    setup_logging(log_level)
    ctx.obj = {"base_url": base_url}


def build_controller(ctx: typer.Context, sort: SortMode = SortMode.NEW) -> BoardController:
    settings = get_settings()
    notifier = NotificationCenter(duration_seconds=settings.toast_duration_seconds)
    client = CommunityBoardClient(
        base_url=(ctx.obj or {}).get("base_url"),
        timeout=settings.board_api_timeout,
        notifier=notifier,
    )
    return BoardController(client, notifier=notifier, sort=sort)


def _finish(controller: BoardController, ok: bool, show_board: bool = True) -> None:
    notification = controller.notifier.current()
    if notification is not None:
        color = typer.colors.RED if notification.kind == "error" else typer.colors.GREEN
        typer.secho(notification.text, fg=color, err=notification.kind == "error")
    if show_board and controller.view is not None:
        typer.echo(to_text(controller.view))
    if not ok:
        raise typer.Exit(code=1)


def _run_after_refresh(ctx: typer.Context, action: Callable[[BoardController], bool]) -> None:
    controller = build_controller(ctx)
    # Load first so the updated post can be swapped into the list.
    loaded = controller.refresh()
    if not loaded:
        _finish(controller, False, show_board=False)
    _finish(controller, action(controller))


@app.command("list")
def list_posts(
    ctx: typer.Context,
    sort: Annotated[SortMode, typer.Option("--sort", help="Sort order")] = SortMode.NEW,
) -> None:
    """Show every post on the board."""
    controller = build_controller(ctx, sort=sort)
    _finish(controller, controller.refresh())


@app.command("post")
def create_post(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Post title")],
    description: Annotated[str, typer.Argument(help="Post description")],
) -> None:
    """Share a new post."""
    _run_after_refresh(ctx, lambda c: c.submit_post(title, description))


@app.command("vote")
def vote(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="Identifier of the post to support")],
) -> None:
    """Support a post with one vote."""
    _run_after_refresh(ctx, lambda c: c.vote(post_id))


@app.command("comment")
def comment(
    ctx: typer.Context,
    post_id: Annotated[str, typer.Argument(help="Identifier of the post")],
    text: Annotated[str, typer.Argument(help="Comment text")],
) -> None:
    """Add a comment to a post."""
    _run_after_refresh(ctx, lambda c: c.add_comment(post_id, text))


if __name__ == "__main__":
    app()
