"""Pydantic models for API payloads and transcript state.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - TranscriptEntry: Individual message shown in the chat
    - ChatRequest: Incoming chat request payload
    - StreamChunk: One SSE event of a streamed reply
    - PersonaInfo: Selectable assistant mode
"""

from clara.models.schemas import (
    ChatRequest,
    PersonaInfo,
    Role,
    StreamChunk,
    StreamStatus,
    TranscriptEntry,
)

__all__ = [
    "ChatRequest",
    "PersonaInfo",
    "Role",
    "StreamChunk",
    "StreamStatus",
    "TranscriptEntry",
]
