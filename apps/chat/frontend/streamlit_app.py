"""
Chat Relay Streamlit UI
=======================

Browser chat that sends each message to the relay service and shows the
reply (or the error) inline in the transcript.

Usage:
    RELAY_BACKEND_URL=http://localhost:5000 streamlit run apps/chat/frontend/streamlit_app.py
"""

import streamlit as st
import streamlit.components.v1 as components

from chat_client.config import get_frontend_settings
from chat_client.models import ChatMessage, Sender
from chat_client.relay_client import RelayClient
from chat_client.session import ChatSession

SENDER_LABELS = {
    Sender.USER: "👤 You",
    Sender.AI: "🤖 AI",
    Sender.ERROR: "⚠️ Error",
}
SENDER_ROLES = {
    Sender.USER: "user",
    Sender.AI: "assistant",
    Sender.ERROR: "assistant",
}
TRANSCRIPT_END_ID = "transcript-end"

settings = get_frontend_settings()

st.set_page_config(page_title="AI Chat", page_icon="🤖")


@st.cache_resource
def get_relay_client(base_url: str) -> RelayClient:
    """Shared relay client (cached across reruns)."""
    return RelayClient(base_url)


def get_session() -> ChatSession:
    if "chat_session" not in st.session_state:
        st.session_state.chat_session = ChatSession()
    return st.session_state.chat_session


def render_message(message: ChatMessage) -> None:
    avatar = "⚠️" if message.sender is Sender.ERROR else None
    with st.chat_message(SENDER_ROLES[message.sender], avatar=avatar):
        st.caption(f"{SENDER_LABELS[message.sender]} · {message.local_time()}")
        if message.sender is Sender.ERROR:
            st.error(message.text)
        else:
            st.markdown(message.text)


def scroll_to_newest(session: ChatSession) -> None:
    """Scroll the page to the transcript end whenever the transcript changed."""
    st.markdown(f'<div id="{TRANSCRIPT_END_ID}"></div>', unsafe_allow_html=True)
    if st.session_state.get("rendered_revision") == session.revision:
        return
    st.session_state.rendered_revision = session.revision
    components.html(
        "<script>"
        f"window.parent.document.getElementById('{TRANSCRIPT_END_ID}')"
        "?.scrollIntoView({behavior: 'smooth'});"
        f"</script><!-- {session.revision} -->",
        height=0,
    )


client = get_relay_client(settings.backend_url)
session = get_session()

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("🤖 AI Chat")
st.sidebar.caption(f"Backend: `{settings.backend_url}`")
if client.check_health():
    st.sidebar.success("Backend is running")
else:
    st.sidebar.warning("Backend is not reachable")

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
header, clear_column = st.columns([4, 1])
header.title("AI Chat")
header.caption("Powered by Google Gemini")
if session.messages and clear_column.button("Clear Chat"):
    session.clear()
    st.rerun()

# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------
if not session.messages:
    st.subheader("👋 Welcome to AI Chat!")
    st.write("Start a conversation by typing a message below.")

for message in session.messages:
    render_message(message)

prompt = st.chat_input("Type your message here...", disabled=session.pending)
if prompt:
    session.input_text = prompt
    text = session.begin_submit()
    if text is not None:
        render_message(session.messages[-1])
        with st.chat_message("assistant"):
            with st.spinner("🤖 AI is typing..."):
                session.complete(client, text)
        st.rerun()

scroll_to_newest(session)
