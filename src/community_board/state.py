"""
Application state for the community board.

``BoardState`` is an immutable snapshot; the functions below return a new
snapshot instead of mutating the old one. The post sequence always mirrors
the server: entries are appended on create and replaced by id on vote or
comment, never recomputed locally.
"""

from typing import Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from .api.client import Post
from .constants import SortMode


class BoardState(BaseModel):
    """Snapshot of everything the view needs."""
    model_config = ConfigDict(frozen=True)

    posts: Tuple[Post, ...] = ()
    sort: SortMode = SortMode.NEW
    loading: bool = True


def sort_posts(posts: Iterable[Post], mode: Union[SortMode, str] = SortMode.NEW) -> List[Post]:
    """
    Order posts for display without touching the input.

    ``top`` sorts by votes descending, newer first on ties; ``new`` sorts by
    creation time descending. Both sorts are stable.
    """
    if SortMode(mode) is SortMode.TOP:
        return sorted(posts, key=lambda p: (p.votes, p.created_at), reverse=True)
    return sorted(posts, key=lambda p: p.created_at, reverse=True)


def with_posts(state: BoardState, posts: Iterable[Post]) -> BoardState:
    return state.model_copy(update={"posts": tuple(posts)})


def with_loading(state: BoardState, loading: bool) -> BoardState:
    return state.model_copy(update={"loading": loading})


def with_sort(state: BoardState, mode: Union[SortMode, str]) -> BoardState:
    return state.model_copy(update={"sort": SortMode(mode)})


def append_post(state: BoardState, post: Post) -> BoardState:
    return with_posts(state, state.posts + (post,))


def find_post(state: BoardState, post_id: object) -> Optional[Post]:
    key = str(post_id)
    for post in state.posts:
        if post.id == key:
            return post
    return None


def replace_post(state: BoardState, post: Post) -> BoardState:
    """Swap in the server's copy of a post; unknown ids leave the state as is."""
    if find_post(state, post.id) is None:
        return state
    return with_posts(state, (post if p.id == post.id else p for p in state.posts))
