"""
Event handling for the community board.

``BoardController`` is the single owner of the board state. Each user
action validates its input, marks its control busy, calls the board API,
swaps in the server's answer and re-renders. Failures are reported through
the notifier and logged; they never escape an action and never leave a
control busy.
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Set, Union

from loguru import logger

from .api.client import CommunityBoardClient, RequestFailed
from .notifications import NotificationCenter
from .state import (
    BoardState,
    SortMode,
    append_post,
    replace_post,
    with_loading,
    with_posts,
    with_sort,
)
from .view import ViewNode, render


MISSING_POST_FIELDS = "Please fill in both title and description."
MISSING_COMMENT_TEXT = "Please enter a comment."

CREATE_CONTROL = "create"


def vote_control(post_id: str) -> str:
    return f"vote:{post_id}"


def comment_control(post_id: str) -> str:
    return f"comment:{post_id}"


class BoardController:
    """
    Binds user actions to API calls and keeps the view in sync.

    Concurrent actions on the same post are applied in completion order: the
    last response to arrive wins, without any version check.
    """

    def __init__(
        self,
        client: CommunityBoardClient,
        notifier: Optional[NotificationCenter] = None,
        sort: Union[SortMode, str] = SortMode.NEW,
        clock: Optional[Callable[[], int]] = None
    ):
        """
        Args:
            client: Board API client
            notifier: Where user-facing messages go; also attached to the client
            sort: Initial sort mode
            clock: Returns "now" in epoch milliseconds for date formatting
        """
        self.client = client
        self.notifier = notifier or NotificationCenter()
        self.client.notifier = self.notifier
        self.clock = clock
        self.state = BoardState(sort=SortMode(sort))
        self.view: Optional[ViewNode] = None
        self.renders = 0
        self._busy_controls: Set[str] = set()

    def is_busy(self, control: str) -> bool:
        return control in self._busy_controls

    @contextmanager
    def _disabled(self, control: str) -> Iterator[None]:
        self._busy_controls.add(control)
        try:
            yield
        finally:
            self._busy_controls.discard(control)

    def render(self) -> ViewNode:
        now = self.clock() if self.clock is not None else None
        self.view = render(self.state, now=now)
        self.renders += 1
        return self.view

    def refresh(self) -> bool:
        """Reload every post from the server."""
        self.state = with_loading(self.state, True)
        self.render()
        try:
            posts = self.client.list_posts()
        except RequestFailed as e:
            logger.error(f"Failed to refresh: {e}")
            self.state = with_loading(self.state, False)
            self.render()
            return False

        self.state = with_loading(with_posts(self.state, posts), False)
        self.render()
        logger.info(f"Loaded {len(posts)} posts")
        return True

    def submit_post(self, title: str, description: str) -> bool:
        """Create a post from the form fields."""
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description:
            self.notifier.error(MISSING_POST_FIELDS)
            return False
        if self.is_busy(CREATE_CONTROL):
            return False

        with self._disabled(CREATE_CONTROL):
            try:
                created = self.client.create_post(title, description)
            except RequestFailed as e:
                logger.error(f"Failed to create issue: {e}")
                return False

            self.state = append_post(self.state, created)
            self.render()
            return True

    def change_sort(self, mode: Union[SortMode, str]) -> bool:
        """Switch presentation order. No network call."""
        try:
            self.state = with_sort(self.state, mode)
        except ValueError:
            logger.warning(f"Ignoring unknown sort mode: {mode!r}")
            return False
        self.render()
        return True

    def vote(self, post_id: Optional[object]) -> bool:
        """Add one vote to the post with ``post_id``."""
        if post_id is None or not str(post_id).strip():
            return False
        post_id = str(post_id).strip()
        control = vote_control(post_id)
        if self.is_busy(control):
            return False

        with self._disabled(control):
            try:
                updated = self.client.vote_on_post(post_id)
            except RequestFailed as e:
                logger.error(f"Failed to vote: {e}")
                return False

            self.state = replace_post(self.state, updated)
            self.render()
            return True

    def add_comment(self, post_id: Optional[object], text: str) -> bool:
        """Append a comment to the post with ``post_id``."""
        if post_id is None or not str(post_id).strip():
            return False
        post_id = str(post_id).strip()
        text = (text or "").strip()
        if not text:
            self.notifier.error(MISSING_COMMENT_TEXT)
            return False
        control = comment_control(post_id)
        if self.is_busy(control):
            return False

        with self._disabled(control):
            try:
                updated = self.client.add_comment(post_id, text)
            except RequestFailed as e:
                logger.error(f"Failed to add comment: {e}")
                return False

            self.state = replace_post(self.state, updated)
            self.render()
            return True
