"""
View construction for the community board.

``render`` builds a fresh tree of ``ViewNode`` objects from a ``BoardState``
on every call; nothing from a previous render is reused. Surfaces turn the
tree into HTML (``to_html``) or plain text (``to_text``).
"""

import html
import time
from datetime import datetime
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel, Field

from .api.client import Comment, Post
from .state import BoardState, sort_posts


MINUTE_MS = 60_000
HOUR_MS = 3_600_000
DAY_MS = 86_400_000
WEEK_MS = 604_800_000

LOADING_TEXT = "Loading community posts..."
EMPTY_TITLE = "No posts yet"
EMPTY_TEXT = "Be the first to share something with your community!"
UNKNOWN_DATE = "Unknown date"


class ViewNode(BaseModel):
    """One element of the rendered view."""
    tag: str = "div"
    cls: Optional[str] = None
    text: Optional[str] = None
    attrs: Dict[str, str] = Field(default_factory=dict)
    children: List["ViewNode"] = Field(default_factory=list)


def _now_ms() -> int:
    return int(time.time() * 1000)


def format_date(timestamp: int, now: Optional[int] = None) -> str:
    """
    Describe an epoch-millisecond timestamp relative to ``now``.

    Args:
        timestamp: Creation time in epoch milliseconds
        now: Reference time in epoch milliseconds, defaults to the wall clock

    Returns:
        str: "Just now", "N minutes ago", "N hours ago", "N days ago", or a
        calendar date such as "Jan 5, 2024" for anything a week or older;
        "Unknown date" when the timestamp is outside the platform's range
    """
    now = _now_ms() if now is None else now
    diff = now - timestamp

    if diff < MINUTE_MS:
        return "Just now"
    if diff < HOUR_MS:
        return f"{diff // MINUTE_MS} minutes ago"
    if diff < DAY_MS:
        return f"{diff // HOUR_MS} hours ago"
    if diff < WEEK_MS:
        return f"{diff // DAY_MS} days ago"

    try:
        date = datetime.fromtimestamp(timestamp / 1000)
    except (OverflowError, ValueError, OSError):
        return UNKNOWN_DATE
    return f"{date:%b} {date.day}, {date.year}"


def supporters_label(votes: int) -> str:
    return f"{votes} supporter{'' if votes == 1 else 's'}"


def _comment_node(comment: Comment, now: int) -> ViewNode:
    return ViewNode(tag="li", cls="comment", children=[
        ViewNode(cls="date", text=format_date(comment.created_at, now)),
        ViewNode(cls="text", text=comment.text),
    ])


def _post_node(post: Post, now: int) -> ViewNode:
    return ViewNode(tag="li", cls="issue", attrs={"data-id": post.id}, children=[
        ViewNode(tag="span", cls="votes", text=str(post.votes)),
        ViewNode(tag="h3", cls="title", text=post.title),
        ViewNode(tag="p", cls="desc", text=post.description),
        ViewNode(tag="span", cls="date", text=format_date(post.created_at, now)),
        ViewNode(tag="span", cls="supporters", text=supporters_label(post.votes)),
        ViewNode(tag="span", cls="count", text=str(len(post.comments))),
        ViewNode(
            tag="ul",
            cls="comment-list",
            children=[_comment_node(c, now) for c in post.comments],
        ),
    ])


def render(state: BoardState, now: Optional[int] = None) -> ViewNode:
    """
    Build the whole board view for ``state``.

    While loading, only the loading indicator is produced. An empty board
    gets a placeholder; otherwise each post is rendered in sort order.
    """
    if state.loading:
        return ViewNode(cls="board", children=[
            ViewNode(cls="loading", text=LOADING_TEXT),
        ])

    now = _now_ms() if now is None else now
    posts = sort_posts(state.posts, state.sort)

    if not posts:
        items = [ViewNode(cls="empty-message", children=[
            ViewNode(tag="h3", text=EMPTY_TITLE),
            ViewNode(tag="p", text=EMPTY_TEXT),
        ])]
    else:
        items = [_post_node(post, now) for post in posts]

    return ViewNode(cls="board", children=[
        ViewNode(tag="ul", cls="issues", attrs={"data-sort": state.sort.value}, children=items),
    ])


def iter_nodes(node: ViewNode) -> Iterator[ViewNode]:
    """Walk the tree depth-first, parents before children."""
    yield node
    for child in node.children:
        yield from iter_nodes(child)


def find_all(node: ViewNode, cls: str) -> List[ViewNode]:
    return [n for n in iter_nodes(node) if n.cls == cls]


def find_first(node: ViewNode, cls: str) -> Optional[ViewNode]:
    return next((n for n in iter_nodes(node) if n.cls == cls), None)


def text_content(node: ViewNode) -> str:
    """All visible text in document order, one line per text node."""
    return "\n".join(n.text for n in iter_nodes(node) if n.text)


def to_html(node: ViewNode) -> str:
    """Serialise the tree to HTML. Every text and attribute value is escaped."""
    attrs = dict(node.attrs)
    if node.cls:
        attrs = {"class": node.cls, **attrs}
    rendered_attrs = "".join(
        f' {name}="{html.escape(value, quote=True)}"' for name, value in attrs.items()
    )
    inner = html.escape(node.text) if node.text else ""
    inner += "".join(to_html(child) for child in node.children)
    return f"<{node.tag}{rendered_attrs}>{inner}</{node.tag}>"


def to_text(node: ViewNode, depth: int = 0) -> str:
    """Indented plain-text rendering for terminals."""
    lines = []
    if node.text:
        lines.append("  " * depth + node.text)
    child_depth = depth + 1 if node.text or node.tag == "li" else depth
    for child in node.children:
        child_text = to_text(child, child_depth)
        if child_text:
            lines.append(child_text)
    return "\n".join(lines)
