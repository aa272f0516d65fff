"""
UI layer
Purpose: Streamlit-only glue. Renders the transcript, collects user input, and
delegates all work to the controller. Keeps UI concerns (layout/state widgets)
separate from the chat core so logic can be unit tested without Streamlit.
"""

import asyncio

import streamlit as st

from chatcore.config import get_settings
from chatcore.controller import ConversationController
from chatcore.i18n import StaticStringProvider
from chatcore.interfaces import StringProvider
from chatcore.logging import configure_logging, get_logger
from chatcore.models import Role
from chatcore.services.llm_openai import OpenAIResponder
from chatcore.session import ChatSession

settings = get_settings()
configure_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = get_logger("chat_app")

# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="AI Chat",
    page_icon="💬",
    layout="centered",
)

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
if "chat_session" not in st_session:
    st_session.chat_session = ChatSession.create()
st_session.setdefault("controller", None)
st_session.setdefault("api_key_in_use", "")
st_session.setdefault("language", settings.LANGUAGE)

provider: StringProvider = StaticStringProvider()


# ---------------------------
# Helpers
# ---------------------------
def chat_strings():
    """Strings for the committed UI language."""
    return provider.strings(st_session.language)


def build_controller(api_key: str) -> ConversationController:
    """Wire the session to an OpenAI responder."""
    responder = OpenAIResponder(
        api_key=api_key,
        settings=settings.llm_settings(),
        system=settings.SYSTEM_PROMPT,
    )
    return ConversationController(
        st_session.chat_session,
        responder,
        welcome_text=chat_strings().welcome,
        timeout=settings.RESPONDER_TIMEOUT_SECONDS,
    )


def get_controller():
    """Return the controller object."""
    return st_session.get("controller")


def reset_session():
    """Discard the transcript and start a fresh session."""
    st_session.chat_session = ChatSession.create()
    st_session.controller = None
    st_session.api_key_in_use = ""
    logger.info("session_reset")


# ---------------------------
# Sidebar
# ---------------------------
with st.sidebar:
    st.header("Settings")
    st.selectbox(
        "Language",
        provider.languages(),
        key="language",
        disabled=get_controller() is not None,
    )
    user_api_key = st.text_input(
        "OpenAI API key",
        type="password",
        value=settings.OPENAI_API_KEY.get_secret_value(),
    )
    if st.button("New chat"):
        reset_session()
        st.rerun()

if not user_api_key:
    st_session.controller = None
    st_session.api_key_in_use = ""
    st.info("Enter your OpenAI API key in the sidebar to start chatting.")
    st.stop()

# Same ChatSession on rebuild: transcript and welcome flag carry over.
if get_controller() is None or user_api_key != st_session.api_key_in_use:
    try:
        st_session.controller = build_controller(user_api_key)
        st_session.api_key_in_use = user_api_key
        logger.info("controller_built")
    except RuntimeError as e:
        st_session.controller = None
        st.error(str(e))
        st.stop()

controller = get_controller()
strings = chat_strings()
controller.initialize()

# ---------------------------
# Transcript
# ---------------------------
for msg in controller.get_history():
    with st.chat_message(msg.role.value):
        st.markdown(msg.content)
        st.caption(msg.timestamp.astimezone().strftime("%H:%M:%S"))

raw = st.chat_input(strings.placeholder, disabled=controller.pending)
if raw and raw.strip():
    with st.chat_message(Role.USER.value):
        st.markdown(raw.strip())
    with st.chat_message(Role.ASSISTANT.value):
        with st.spinner(strings.thinking):
            asyncio.run(controller.send(raw))
    st.rerun()
