"""Project-level pytest configuration and shared fixtures."""

from typing import Any, Callable, Dict
from unittest.mock import Mock

import pytest

from community_board.api.client import CommunityBoardClient, Post
from community_board.notifications import NotificationCenter


def post_payload(**overrides: Any) -> Dict[str, Any]:
    """JSON body of a post as the board API sends it."""
    payload = {
        "id": 1,
        "title": "Fix the park benches",
        "description": "Several benches near the pond are broken.",
        "votes": 0,
        "createdAt": 1_700_000_000_000,
        "comments": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_post() -> Callable[..., Post]:
    """Factory building ``Post`` models from API-shaped keyword overrides."""
    def _make(**overrides: Any) -> Post:
        return Post.model_validate(post_payload(**overrides))
    return _make


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Factory for fake ``requests.Response`` objects."""
    def _make(status_code: int = 200, json_data: Any = None) -> Mock:
        response = Mock()
        response.status_code = status_code
        response.json.return_value = json_data
        response.text = str(json_data)
        return response
    return _make


@pytest.fixture
def notifier() -> NotificationCenter:
    return NotificationCenter(duration_seconds=5)


@pytest.fixture
def fake_client() -> Mock:
    """A stand-in board client whose calls tests configure per case."""
    client = Mock(spec=CommunityBoardClient)
    client.notifier = None
    return client
