"""
Streamlit page for the community board.

Run with ``streamlit run src/community_board/main.py``. The page keeps one
``BoardController`` per browser session; every widget callback goes through
it, and the post list is drawn from the controller's rendered view tree.
"""

import streamlit as st
from loguru import logger

from community_board.api import CommunityBoardClient
from community_board.config import get_settings
from community_board.controller import (
    CREATE_CONTROL,
    BoardController,
    comment_control,
    vote_control,
)
from community_board.notifications import NotificationCenter
from community_board.state import SortMode
from community_board.utils.logging import setup_logging
from community_board.view import LOADING_TEXT, find_all, find_first, to_html


SORT_LABELS = {
    SortMode.NEW.value: "🕒 Newest",
    SortMode.TOP.value: "🔥 Most supported",
}


def setup_page_config() -> None:
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title="Community Board",
        page_icon="📝",
        layout="centered",
    )


@st.cache_resource
def _configure_logging() -> bool:
    setup_logging()
    return True


def initialize_session_state() -> None:
    """Create this session's controller and load the board once."""
    if "controller" in st.session_state:
        return

    settings = get_settings()
    notifier = NotificationCenter(duration_seconds=settings.toast_duration_seconds)
    client = CommunityBoardClient(
        base_url=settings.board_api_base_url,
        timeout=settings.board_api_timeout,
        notifier=notifier,
    )
    controller = BoardController(client, notifier=notifier, sort=settings.default_sort)
    st.session_state.controller = controller
    st.session_state.sort = controller.state.sort.value
    logger.info("Starting new board session")
    controller.refresh()


def _controller() -> BoardController:
    return st.session_state.controller


def on_submit_post() -> None:
    if _controller().submit_post(st.session_state.title, st.session_state.description):
        st.session_state.title = ""
        st.session_state.description = ""


def on_change_sort() -> None:
    _controller().change_sort(st.session_state.sort)


def on_vote(post_id: str) -> None:
    _controller().vote(post_id)


def on_add_comment(post_id: str) -> None:
    key = f"comment-{post_id}"
    if _controller().add_comment(post_id, st.session_state.get(key, "")):
        st.session_state[key] = ""


def render_notification() -> None:
    notification = _controller().notifier.current()
    if notification is None:
        return
    if notification.kind == "success":
        st.success(notification.text, icon="✅")
    elif notification.kind == "error":
        st.error(notification.text, icon="❌")
    else:
        st.info(notification.text)


def render_post_form() -> None:
    """New-post form: title, description, share button."""
    st.markdown("### ✏️ Share something with your community")
    st.text_input("Title", key="title")
    st.text_area("Description", key="description")
    busy = _controller().is_busy(CREATE_CONTROL)
    st.button(
        "📝 Sharing..." if busy else "📝 Share post",
        on_click=on_submit_post,
        disabled=busy,
        type="primary",
    )


def render_sort_toggle() -> None:
    st.radio(
        "Sort posts",
        options=list(SORT_LABELS),
        format_func=SORT_LABELS.get,
        key="sort",
        on_change=on_change_sort,
        horizontal=True,
    )


def render_posts() -> None:
    """Draw the post list from a fresh view tree."""
    controller = _controller()
    view = controller.render()

    if find_first(view, "loading") is not None:
        st.info(LOADING_TEXT)
        return

    empty = find_first(view, "empty-message")
    if empty is not None:
        st.markdown(to_html(empty), unsafe_allow_html=True)
        return

    for node in find_all(view, "issue"):
        post_id = node.attrs["data-id"]
        with st.container(border=True):
            st.markdown(to_html(node), unsafe_allow_html=True)

            voting = controller.is_busy(vote_control(post_id))
            st.button(
                "👍 Support",
                key=f"vote-{post_id}",
                on_click=on_vote,
                args=(post_id,),
                disabled=voting,
            )

            commenting = controller.is_busy(comment_control(post_id))
            st.text_input("Add a comment", key=f"comment-{post_id}")
            st.button(
                "💬 Adding..." if commenting else "💬 Add comment",
                key=f"add-comment-{post_id}",
                on_click=on_add_comment,
                args=(post_id,),
                disabled=commenting,
            )


def main() -> None:
    """Community board page."""
    setup_page_config()
    _configure_logging()
    initialize_session_state()

    st.title("📝 Community Board")
    st.markdown("**Share ideas, support the ones you like, and join the conversation**")

    render_notification()
    render_post_form()

    st.markdown("---")
    col1, col2 = st.columns([3, 1])
    with col1:
        render_sort_toggle()
    with col2:
        st.button("🔄 Refresh", on_click=lambda: _controller().refresh())

    render_posts()


if __name__ == "__main__":
    main()
