"""Unit tests for the UI's SSE client, using httpx.MockTransport."""

import json

import httpx
import pytest

from clara.agent.personas import Persona
from clara.errors import ConfigurationError, StreamError
from clara.models.schemas import StreamChunk, StreamStatus
from clara.ui.client import stream_reply


def sse_body(*chunks: StreamChunk) -> bytes:
    return "".join(f"data: {c.model_dump_json()}\n\n" for c in chunks).encode()


def content(text: str) -> StreamChunk:
    return StreamChunk(content=text, done=False, status=StreamStatus.GENERATING)


DONE = StreamChunk(content="", done=True, status=StreamStatus.COMPLETE)


def transport_returning(response: httpx.Response, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return response

    return httpx.MockTransport(handler)


async def collect(**kwargs) -> list[str]:
    return [f async for f in stream_reply(base_url="http://test", **kwargs)]


class TestStreamReply:
    """Tests for successful streams."""

    async def test_yields_content_until_done(self) -> None:
        body = sse_body(content("Hel"), content("lo"), DONE, content("ignored"))
        transport = transport_returning(
            httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})
        )

        fragments = await collect(message="Hi", persona=Persona.EDC, transport=transport)

        assert fragments == ["Hel", "lo"]

    async def test_posts_message_and_persona(self) -> None:
        seen: list[httpx.Request] = []
        transport = transport_returning(httpx.Response(200, content=sse_body(DONE)), seen)

        await collect(message="Hi", persona=Persona.WELLNESS, transport=transport)

        request = seen[0]
        assert request.url.path == "/chat/stream"
        assert json.loads(request.content) == {"message": "Hi", "persona": "Wellness"}

    async def test_ignores_non_data_lines(self) -> None:
        body = b": keep-alive\n\n" + sse_body(content("ok"), DONE)
        transport = transport_returning(httpx.Response(200, content=body))

        assert await collect(message="Hi", persona=Persona.EDC, transport=transport) == ["ok"]


class TestStreamReplyFailures:
    """Failures map onto ConfigurationError and StreamError."""

    async def test_service_unavailable_is_configuration_error(self) -> None:
        transport = transport_returning(
            httpx.Response(503, json={"detail": "Chat model is not configured."})
        )

        with pytest.raises(ConfigurationError, match="not configured"):
            await collect(message="Hi", persona=Persona.EDC, transport=transport)

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(503, text="<html>Service Unavailable</html>"),
            httpx.Response(503, json=["unexpected"]),
            httpx.Response(503, json={"detail": None}),
        ],
    )
    async def test_service_unavailable_without_detail_uses_default(
        self, response: httpx.Response
    ) -> None:
        """A 503 from a proxy still maps to ConfigurationError."""
        transport = transport_returning(response)

        with pytest.raises(ConfigurationError, match="not configured"):
            await collect(message="Hi", persona=Persona.EDC, transport=transport)

    async def test_http_error_is_stream_error(self) -> None:
        transport = transport_returning(httpx.Response(500, text="boom"))

        with pytest.raises(StreamError, match="HTTP 500"):
            await collect(message="Hi", persona=Persona.EDC, transport=transport)

    async def test_connection_failure_is_stream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(StreamError, match="Connection failed"):
            await collect(message="Hi", persona=Persona.EDC, transport=httpx.MockTransport(handler))

    async def test_error_event_is_stream_error(self) -> None:
        error = StreamChunk(content="", done=True, status=StreamStatus.ERROR, error="upstream down")
        transport = transport_returning(httpx.Response(200, content=sse_body(content("a"), error)))
        received: list[str] = []

        with pytest.raises(StreamError, match="upstream down"):
            async for fragment in stream_reply(
                "Hi", Persona.EDC, base_url="http://test", transport=transport
            ):
                received.append(fragment)

        assert received == ["a"]

    async def test_stream_without_done_is_stream_error(self) -> None:
        transport = transport_returning(httpx.Response(200, content=sse_body(content("a"))))

        with pytest.raises(StreamError, match="before completion"):
            await collect(message="Hi", persona=Persona.EDC, transport=transport)

    async def test_malformed_event_is_stream_error(self) -> None:
        transport = transport_returning(httpx.Response(200, content=b"data: {not json}\n\n"))

        with pytest.raises(StreamError, match="Malformed"):
            await collect(message="Hi", persona=Persona.EDC, transport=transport)
