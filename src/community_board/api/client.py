"""
HTTP client for the community board API.

This module provides a client for the board's four endpoints (list, create,
vote, comment), translating non-success responses into ``RequestFailed`` and
decoding JSON bodies into pydantic models.
"""

from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import quote, urljoin

import requests
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import get_settings


LIST_FAILED = "Unable to load community posts. Please try again."
CREATE_SUCCEEDED = "Your post has been shared with the community!"
CREATE_FAILED = "Unable to share your post. Please try again."
VOTE_SUCCEEDED = "Thank you for supporting this idea!"
VOTE_FAILED = "Unable to support this post. Please try again."
COMMENT_SUCCEEDED = "Your comment has been added!"
COMMENT_FAILED = "Unable to add comment. Please try again."

# 9999-12-31T23:59:59.999Z, the last instant datetime can represent.
MAX_TIMESTAMP_MS = 253_402_300_799_999


class Comment(BaseModel):
    """A timestamped comment attached to a post."""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    created_at: int = Field(alias="createdAt", ge=0, le=MAX_TIMESTAMP_MS)


class Post(BaseModel):
    """A community post ("issue") as returned by the board API."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    votes: int = Field(default=0, ge=0)
    created_at: int = Field(alias="createdAt", ge=0, le=MAX_TIMESTAMP_MS)
    comments: List[Comment] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> str:
        # The server sends numeric ids; the UI keys posts by string.
        return str(value)

    @field_validator("comments", mode="before")
    @classmethod
    def default_comments(cls, value: Any) -> Any:
        return [] if value is None else value


class Notifier(Protocol):
    """Anything able to show a user-facing success or error message."""

    def success(self, text: str) -> Any: ...

    def error(self, text: str) -> Any: ...


class RequestFailed(Exception):
    """Raised when a board API call fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class CommunityBoardClient:
    """
    HTTP client for the community board API.

    Every call either returns decoded models or raises ``RequestFailed``.
    When a notifier is attached, each call reports its outcome to it before
    returning or re-raising. No retries are attempted.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        notifier: Optional[Notifier] = None
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL for the community board API
            timeout: Request timeout in seconds
            notifier: Optional sink for user-facing messages
        """
        settings = get_settings()
        self.base_url = base_url or settings.board_api_base_url
        self.timeout = timeout or settings.board_api_timeout
        self.notifier = notifier

        if not self.base_url.endswith('/'):
            self.base_url += '/'

        logger.info(f"Initialized CommunityBoardClient with base_url: {self.base_url}")

    def _make_request(
        self,
        method: str,
        endpoint: str,
        failure: str,
        data: Optional[Dict[str, str]] = None
    ) -> requests.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint path, relative to the base URL
            failure: Operation-specific failure message
            data: Form fields, sent url-encoded

        Returns:
            requests.Response: HTTP response with a 2xx status

        Raises:
            RequestFailed: On transport error or non-2xx status
        """
        url = urljoin(self.base_url, endpoint)
        logger.debug(f"Making {method} request to {url}")

        try:
            response = requests.request(
                method=method,
                url=url,
                data=data,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise RequestFailed(f"{failure}: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"{method} {url} returned HTTP {response.status_code}")
            raise RequestFailed(f"{failure} ({response.status_code})", response.status_code)

        logger.debug(f"Request successful: {method} {url}")
        return response

    def _decode_post(self, response: requests.Response, failure: str) -> Post:
        try:
            return Post.model_validate(response.json())
        except ValueError as e:
            raise RequestFailed(f"{failure}: invalid response body ({e})", response.status_code) from e

    def _notify(self, kind: str, text: str) -> None:
        if self.notifier is not None:
            getattr(self.notifier, kind)(text)

    @staticmethod
    def _post_path(post_id: Any, suffix: str) -> str:
        return f"api/issues/{quote(str(post_id), safe='')}/{suffix}"

    def list_posts(self) -> List[Post]:
        """
        Retrieve every post on the board, in server order.

        Returns:
            List[Post]: Posts as returned by the server

        Raises:
            RequestFailed: If the request fails
        """
        failure = "Failed to load posts"
        try:
            response = self._make_request("GET", "api/issues", failure)
            try:
                data = response.json()
                return [Post.model_validate(item) for item in data]
            except (ValueError, TypeError) as e:
                raise RequestFailed(f"{failure}: invalid response body ({e})", response.status_code) from e
        except RequestFailed:
            self._notify("error", LIST_FAILED)
            raise

    def create_post(self, title: str, description: str) -> Post:
        """
        Create a new post.

        Args:
            title: Post title
            description: Post body

        Returns:
            Post: The created post, with its server-assigned id

        Raises:
            RequestFailed: If the request fails
        """
        failure = "Failed to create post"
        try:
            response = self._make_request(
                "POST", "api/issues", failure,
                data={"title": title, "description": description}
            )
            post = self._decode_post(response, failure)
        except RequestFailed:
            self._notify("error", CREATE_FAILED)
            raise
        self._notify("success", CREATE_SUCCEEDED)
        return post

    def vote_on_post(self, post_id: Any) -> Post:
        """
        Add one vote to a post. Each call adds a vote.

        Args:
            post_id: Identifier of the post

        Returns:
            Post: The post with its updated vote count

        Raises:
            RequestFailed: If the request fails
        """
        failure = "Failed to support post"
        try:
            response = self._make_request("POST", self._post_path(post_id, "vote"), failure)
            post = self._decode_post(response, failure)
        except RequestFailed:
            self._notify("error", VOTE_FAILED)
            raise
        self._notify("success", VOTE_SUCCEEDED)
        return post

    def add_comment(self, post_id: Any, text: str) -> Post:
        """
        Append a comment to a post.

        Args:
            post_id: Identifier of the post
            text: Comment text

        Returns:
            Post: The post including the new comment

        Raises:
            RequestFailed: If the request fails
        """
        failure = "Failed to add comment"
        try:
            response = self._make_request(
                "POST", self._post_path(post_id, "comments"), failure,
                data={"text": text}
            )
            post = self._decode_post(response, failure)
        except RequestFailed:
            self._notify("error", COMMENT_FAILED)
            raise
        self._notify("success", COMMENT_SUCCEEDED)
        return post
