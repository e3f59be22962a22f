"""
Unit tests for the Streamlit page wiring.

Streamlit itself is replaced by a MagicMock; ``session_state`` is a small
dict that also allows attribute access, like the real one.
"""

import pytest
from unittest.mock import MagicMock, patch

from community_board import main
from community_board.api.client import RequestFailed
from community_board.controller import BoardController
from community_board.view import LOADING_TEXT


NOW = 1_705_320_000_000


class SessionState(dict):
    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def st():
    fake = MagicMock()
    fake.session_state = SessionState()
    with patch.object(main, "st", fake):
        yield fake


@pytest.fixture
def controller(st, fake_client, notifier):
    controller = BoardController(fake_client, notifier=notifier, clock=lambda: NOW)
    st.session_state.controller = controller
    return controller


class TestCallbacks:
    """Test cases for widget callbacks."""

    def test_submit_clears_fields_on_success(self, st, controller, fake_client, make_post):
        fake_client.create_post.return_value = make_post(id=1, title="T", description="D")
        st.session_state.title = "T"
        st.session_state.description = "D"

        main.on_submit_post()

        fake_client.create_post.assert_called_once_with("T", "D")
        assert st.session_state.title == ""
        assert st.session_state.description == ""

    def test_submit_keeps_fields_on_validation_error(self, st, controller, fake_client):
        st.session_state.title = "T"
        st.session_state.description = ""

        main.on_submit_post()

        fake_client.create_post.assert_not_called()
        assert st.session_state.title == "T"

    def test_submit_keeps_fields_when_request_fails(self, st, controller, fake_client):
        fake_client.create_post.side_effect = RequestFailed("Failed to create post (500)", 500)
        st.session_state.title = "T"
        st.session_state.description = "D"

        main.on_submit_post()

        assert st.session_state.title == "T"
        assert st.session_state.description == "D"

    def test_comment_input_kept_when_request_fails(self, st, controller, fake_client, make_post):
        fake_client.list_posts.return_value = [make_post(id=7)]
        controller.refresh()
        fake_client.add_comment.side_effect = RequestFailed("Failed to add comment (500)", 500)
        st.session_state["comment-7"] = "nice"

        main.on_add_comment("7")

        assert st.session_state["comment-7"] == "nice"
        assert controller.state.posts[0].comments == []

    def test_sort_change(self, st, controller):
        st.session_state.sort = "top"

        main.on_change_sort()

        assert controller.state.sort.value == "top"

    def test_add_comment_clears_input(self, st, controller, fake_client, make_post):
        fake_client.list_posts.return_value = [make_post(id=7)]
        controller.refresh()
        fake_client.add_comment.return_value = make_post(
            id=7, comments=[{"text": "nice", "createdAt": NOW}]
        )
        st.session_state["comment-7"] = "nice"

        main.on_add_comment("7")

        assert st.session_state["comment-7"] == ""
        assert controller.state.posts[0].comments[0].text == "nice"

    def test_vote(self, st, controller, fake_client, make_post):
        fake_client.list_posts.return_value = [make_post(id=7, votes=0)]
        controller.refresh()
        fake_client.vote_on_post.return_value = make_post(id=7, votes=1)

        main.on_vote("7")

        assert controller.state.posts[0].votes == 1


class TestPageRendering:
    """Test cases for drawing the page."""

    def test_loading_indicator(self, st, controller):
        main.render_posts()

        st.info.assert_called_once_with(LOADING_TEXT)
        st.button.assert_not_called()

    def test_one_vote_button_per_post(self, st, controller, fake_client, make_post):
        fake_client.list_posts.return_value = [make_post(id=1), make_post(id=2, createdAt=1)]
        controller.refresh()

        main.render_posts()

        keys = [c.kwargs.get("key") for c in st.button.call_args_list]
        assert keys == ["vote-1", "add-comment-1", "vote-2", "add-comment-2"]

    def test_error_notification_shown(self, st, controller, notifier):
        notifier.error("Unable to share your post. Please try again.")

        main.render_notification()

        st.error.assert_called_once()
        assert st.error.call_args.args[0] == "Unable to share your post. Please try again."

    def test_session_created_once(self, st, fake_client, make_post):
        fake_client.list_posts.return_value = [make_post(id=1)]
        with patch.object(main, "CommunityBoardClient", return_value=fake_client):
            main.initialize_session_state()
            first = st.session_state.controller
            main.initialize_session_state()

        assert st.session_state.controller is first
        assert fake_client.list_posts.call_count == 1
        assert st.session_state.sort == "new"
