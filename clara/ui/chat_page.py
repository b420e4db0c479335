"""Streamlit chat interface backed by the SSE streaming API."""

import asyncio
from functools import partial

import streamlit as st

from clara.agent.personas import PERSONA_TAGLINES, Persona
from clara.chat.controller import ChatController
from clara.models.schemas import Role, TranscriptEntry
from clara.ui.client import stream_reply


def get_controller() -> ChatController:
    """Return this browser session's controller, creating it on first run."""
    if "controller" not in st.session_state:
        st.session_state.controller = ChatController(stream_reply)
    return st.session_state.controller


def render_entry(entry: TranscriptEntry) -> None:
    is_user = entry.role is Role.USER
    with st.chat_message("user" if is_user else "assistant"):
        if entry.text:
            st.markdown(entry.text)
        else:
            st.markdown("_Clara is typing..._")
        st.caption(entry.timestamp.strftime("%I:%M %p"))


def render_transcript(placeholder, transcript: list[TranscriptEntry]) -> None:
    with placeholder.container():
        for entry in transcript:
            render_entry(entry)


def render_sidebar(controller: ChatController) -> None:
    with st.sidebar:
        st.title("✨ Clara AI")
        st.caption("Your Intelligent Assistant")

        modes = list(Persona)
        selected = st.radio(
            "Assistant Mode",
            modes,
            index=modes.index(controller.persona),
            format_func=lambda p: p.value,
        )
        if selected != controller.persona:
            controller.select_persona(selected)

        if st.button("New chat"):
            controller.clear()


def chat_page() -> None:
    """Main chat page."""
    st.set_page_config(page_title="Clara AI", page_icon="✨")
    controller = get_controller()
    # Placeholders from the previous run are gone; re-bind below.
    controller.on_update = lambda transcript: None
    render_sidebar(controller)

    st.subheader(controller.persona.value)
    st.caption(PERSONA_TAGLINES[controller.persona])

    placeholder = st.empty()
    controller.on_update = partial(render_transcript, placeholder)
    render_transcript(placeholder, controller.transcript)

    # The script run blocks inside submit(), so a second send cannot start
    # until this one finishes; submit() also ignores sends while busy.
    prompt = st.chat_input(f"Message Clara about {controller.persona.value.lower()}...")
    if prompt:
        asyncio.run(controller.submit(prompt))

    if controller.error:
        if controller.blocking:
            st.error(controller.error)
        else:
            st.warning(controller.error)

    st.caption("Clara AI can make mistakes. Consider checking important information.")


if __name__ == "__main__":
    chat_page()
