"""SSE client for the chat streaming endpoint."""

import logging
import os
from collections.abc import AsyncGenerator

import httpx
from pydantic import ValidationError

from clara.agent.personas import Persona
from clara.errors import ConfigurationError, StreamError
from clara.models.schemas import StreamChunk

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

# Replies are not time-limited; only connecting is.
_TIMEOUT = httpx.Timeout(10.0, read=None)

_NOT_CONFIGURED = "Chat model is not configured"


def _unavailable_detail(response: httpx.Response) -> str:
    """Return the 503 detail, tolerating bodies from proxies that are not JSON."""
    try:
        body = response.json()
    except ValueError:
        logger.warning(f"Non-JSON 503 body: {response.text[:200]!r}")
        return _NOT_CONFIGURED
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return _NOT_CONFIGURED


async def stream_reply(
    message: str,
    persona: Persona,
    *,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncGenerator[str]:
    """Consume the SSE stream from /chat/stream, yielding reply fragments.

    Args:
        message: The user's message.
        persona: Mode to answer in.
        base_url: API root, defaults to API_BASE_URL.
        transport: Optional httpx transport (used by tests).

    Yields:
        Reply text fragments in delivery order.

    Raises:
        ConfigurationError: If the API reports missing model credentials.
        StreamError: On HTTP errors, connection failures, malformed events,
            error events, or a stream that ends without a done event.
    """
    async with httpx.AsyncClient(
        base_url=base_url or API_BASE_URL, timeout=_TIMEOUT, transport=transport
    ) as client:
        try:
            async with client.stream(
                "POST",
                "/chat/stream",
                json={"message": message, "persona": Persona(persona).value},
                headers={"Accept": "text/event-stream"},
            ) as response:
                if response.status_code == httpx.codes.SERVICE_UNAVAILABLE:
                    await response.aread()
                    raise ConfigurationError(_unavailable_detail(response))
                response.raise_for_status()

                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    chunk = StreamChunk.model_validate_json(line[6:])
                    if chunk.error:
                        raise StreamError(chunk.error)
                    if chunk.done:
                        return
                    if chunk.content:
                        yield chunk.content
        except httpx.HTTPStatusError as e:
            raise StreamError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise StreamError(f"Connection failed: {e}") from e
        except ValidationError as e:
            raise StreamError(f"Malformed stream event: {e}") from e

    logger.warning("Reply stream closed before completion")
    raise StreamError("Reply stream closed before completion")
