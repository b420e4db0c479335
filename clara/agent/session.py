"""Conversation sessions bound to a Clara persona, with streaming replies.

Core module for the assistant's model access and session lifecycle.

Architecture Decisions:

1. **One live session per manager** - A session is bound to exactly one
   persona. When a different persona is requested the manager builds a new
   session and drops its reference to the old one. The old handle is never
   mutated, so a reply already streaming from it finishes against the old
   instructions.

2. **Explicit owner** - The manager is a plain object owned by whoever needs
   it (the API app keeps one on ``app.state``). There is no module-level
   "current chat" variable.

3. **Credentials at creation time** - Configuration is read each time a
   session is built, so a missing key surfaces as ``ConfigurationError`` on
   the send that needed it and no half-built session is left behind.

4. **In-session history** - Each session keeps its own user/assistant turns
   so follow-up questions have context. History is only extended after a
   reply completes; a failed reply leaves it untouched.

5. **Streaming Generator** - The SDK returns raw completion chunks. We
   extract just the text deltas, providing a clean interface for the SSE
   endpoint and the chat controller. No retries: upstream failures surface
   as ``StreamError``.
"""

import logging
import uuid
from collections.abc import AsyncGenerator, AsyncIterator, Callable

from openai import AsyncOpenAI

from clara.agent.config import ChatConfig, get_chat_config
from clara.agent.personas import Persona, build_system_instruction
from clara.errors import StreamError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ChatConfig], AsyncOpenAI]
ConfigFactory = Callable[[], ChatConfig]


def create_client(config: ChatConfig) -> AsyncOpenAI:
    """Create the async OpenAI-compatible client for a session."""
    return AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)


class ChatSession:
    """A conversation with the upstream model under one persona.

    Attributes:
        session_id: Unique identifier, used in logs.
        persona: The persona this session is bound to.
        system_instruction: Base persona text plus the persona focus.
    """

    def __init__(self, persona: Persona, config: ChatConfig, client: AsyncOpenAI) -> None:
        self.session_id = str(uuid.uuid4())
        self.persona = persona
        self.system_instruction = build_system_instruction(persona)
        self._config = config
        self._client = client
        self._history: list[dict[str, str]] = []

    @property
    def temperature(self) -> float:
        return self._config.temperature

    @property
    def history(self) -> list[dict[str, str]]:
        """Completed turns, oldest first."""
        return list(self._history)

    def _build_messages(self, text: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system_instruction},
            *self._history,
            {"role": "user", "content": text},
        ]

    def send(self, text: str) -> AsyncIterator[str]:
        """Send a message and return the reply as a lazy fragment stream.

        The returned iterator is single-pass. Nothing is sent upstream until
        it is first awaited.

        Args:
            text: The user's message.

        Returns:
            Async iterator of reply text fragments.

        Raises:
            ValueError: If the message is empty after trimming.
        """
        message = text.strip()
        if not message:
            raise ValueError("Message must not be empty")
        return self._stream(message)

    async def _stream(self, message: str) -> AsyncGenerator[str]:
        reply_parts: list[str] = []
        try:
            stream = await self._client.chat.completions.create(
                model=self._config.model_name,
                messages=self._build_messages(message),
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
                stream=True,
            )

            async for chunk in stream:
                choice = chunk.choices[0] if chunk.choices else None
                if choice is None or choice.delta is None:
                    continue
                if choice.delta.content:
                    reply_parts.append(choice.delta.content)
                    yield choice.delta.content

        except Exception as e:
            logger.error(f"Reply stream failed for session {self.session_id}: {e}")
            raise StreamError(f"Upstream reply failed: {e}") from e

        self._history.append({"role": "user", "content": message})
        self._history.append({"role": "assistant", "content": "".join(reply_parts)})


class SessionManager:
    """Owns the single live session and rebuilds it on persona change."""

    def __init__(
        self,
        config_factory: ConfigFactory = get_chat_config,
        client_factory: ClientFactory = create_client,
    ) -> None:
        """Initialize the session manager.

        Args:
            config_factory: Builds the model configuration. Raises
                ConfigurationError when credentials are missing.
            client_factory: Builds the upstream client from a configuration.
        """
        self._config_factory = config_factory
        self._client_factory = client_factory
        self._session: ChatSession | None = None

    @property
    def current(self) -> ChatSession | None:
        return self._session

    def ensure_session(self, persona: Persona | str) -> ChatSession:
        """Return a session bound to ``persona``, creating one if needed.

        Args:
            persona: Requested persona, or its string value.

        Returns:
            The live session for that persona.

        Raises:
            ValueError: If ``persona`` is not a known persona.
            ConfigurationError: If credentials are missing or invalid.
        """
        persona = Persona(persona)
        if self._session is not None and self._session.persona is persona:
            return self._session

        config = self._config_factory()
        session = ChatSession(persona, config, self._client_factory(config))

        if self._session is None:
            logger.info(f"Created session {session.session_id} for {persona.value} mode")
        else:
            logger.info(
                f"Replaced session {self._session.session_id} "
                f"({self._session.persona.value}) with {session.session_id} "
                f"({persona.value})"
            )
        self._session = session
        return session

    def stream(self, text: str, persona: Persona | str) -> AsyncIterator[str]:
        """Ensure a session for ``persona`` and stream its reply to ``text``."""
        return self.ensure_session(persona).send(text)

    def reset(self) -> None:
        """Drop the current session; the next send starts a new one."""
        self._session = None
