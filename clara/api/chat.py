"""Chat streaming endpoint and persona listing.

Streams replies as Server-Sent Events, one ``data:`` line per StreamChunk.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from clara.agent.personas import PERSONA_TAGLINES, Persona
from clara.agent.session import SessionManager
from clara.errors import ConfigurationError, StreamError
from clara.models.schemas import ChatRequest, PersonaInfo, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


def get_session_manager(request: Request) -> SessionManager:
    """Return the session manager owned by the running application."""
    return request.app.state.session_manager


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


async def _event_stream(fragments: AsyncIterator[str]) -> AsyncGenerator[str]:
    """Wrap reply fragments as SSE events ending with a done chunk."""
    try:
        async for fragment in fragments:
            yield _sse(
                StreamChunk(content=fragment, done=False, status=StreamStatus.GENERATING)
            )
    except StreamError as e:
        logger.error(f"Streaming reply failed: {e}")
        yield _sse(
            StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e))
        )
        return

    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("/chat/stream")
async def chat_stream(
    payload: ChatRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> StreamingResponse:
    """Stream Clara's reply to a message in the requested mode.

    Args:
        payload: Message text and persona.
        manager: Session manager of the running application.

    Returns:
        ``text/event-stream`` response of StreamChunk events.

    Raises:
        422: Empty or whitespace-only message, or unknown persona.
        503: Model credentials are not configured.
    """
    try:
        session = manager.ensure_session(payload.persona)
    except ConfigurationError as e:
        logger.error(f"Cannot create chat session: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Chat model is not configured. Set LLM_API_KEY or OPENAI_API_KEY.",
        ) from e

    return StreamingResponse(
        _event_stream(session.send(payload.message)),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/personas", response_model=list[PersonaInfo])
async def list_personas() -> list[PersonaInfo]:
    """List the assistant modes in display order."""
    return [PersonaInfo(persona=p, tagline=PERSONA_TAGLINES[p]) for p in Persona]
