import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from clara.agent.personas import DEFAULT_PERSONA, Persona


class Role(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    MODEL = "model"


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class TranscriptEntry(BaseModel):
    """A single message shown in the chat transcript.

    Attributes:
        id: Unique entry identifier.
        role: Who wrote the entry (user or model).
        text: Message text; grows while a model reply streams in.
        timestamp: Creation time.
        is_error: Whether the entry reports a failure.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    text: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)
    is_error: bool = False


class ChatRequest(BaseModel):
    """Request payload for the chat streaming endpoint.

    Attributes:
        message: User's message.
        persona: Assistant mode to answer in.
    """

    message: str = Field(..., min_length=1)
    persona: Persona = DEFAULT_PERSONA

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None


class PersonaInfo(BaseModel):
    """A selectable assistant mode with its short description."""

    persona: Persona
    tagline: str
