"""Streamlit interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with streaming support
    - Assistant mode selection
    - New chat / error display

Contains no business logic. Transcript state lives in clara.chat and
replies come from the API over SSE.
"""
