"""Transcript state and stream accumulation for the chat UI.

Folds a streamed reply into the transcript one fragment at a time and
publishes every intermediate state, so any presentation layer can re-render
as text arrives. Contains no UI code.
"""

import logging
from collections.abc import AsyncIterable, Callable

from clara.agent.personas import DEFAULT_PERSONA, Persona, greeting_for
from clara.errors import ConfigurationError
from clara.models.schemas import Role, TranscriptEntry

logger = logging.getLogger(__name__)

FragmentSource = Callable[[str, Persona], AsyncIterable[str]]
Publisher = Callable[[list[TranscriptEntry]], None]

CONNECTION_ERROR_MESSAGE = (
    "I'm having trouble connecting right now. "
    "Please check your connection or try again."
)
CONFIGURATION_ERROR_MESSAGE = (
    "Clara is not configured. Set LLM_API_KEY (or OPENAI_API_KEY) and restart."
)


def _no_publish(transcript: list[TranscriptEntry]) -> None:
    pass


async def accumulate(
    transcript: list[TranscriptEntry],
    open_stream: Callable[[], AsyncIterable[str]],
    publish: Publisher = _no_publish,
) -> TranscriptEntry:
    """Stream a model reply into a new transcript entry.

    The empty entry is appended and published before the stream is opened.
    Fragments are appended in delivery order, publishing after each one. If
    opening or reading the stream fails or is cancelled, the entry is removed
    (partial text included) and the exception is re-raised.

    Args:
        transcript: Transcript to mutate.
        open_stream: Zero-argument callable returning the fragment stream.
        publish: Called with the transcript after every mutation.

    Returns:
        The finished model entry.
    """
    entry = TranscriptEntry(role=Role.MODEL)
    transcript.append(entry)
    publish(transcript)

    try:
        async for fragment in open_stream():
            entry.text += fragment
            publish(transcript)
    except BaseException:
        transcript[:] = [e for e in transcript if e is not entry]
        raise

    return entry


class ChatController:
    """Manages chat state for one user: transcript, mode and send status.

    Attributes:
        transcript: Ordered entries, oldest first.
        persona: Mode used for the next send.
        is_sending: True while a reply is streaming.
        error: User-facing message for the last failed send, if any.
        blocking: True when the last failure was a configuration error.
        on_update: Called with the transcript after every mutation.
    """

    def __init__(
        self,
        source: FragmentSource,
        persona: Persona = DEFAULT_PERSONA,
        on_update: Publisher | None = None,
    ) -> None:
        self._source = source
        self.on_update = on_update or _no_publish
        self.persona = persona
        self.transcript: list[TranscriptEntry] = [self._greeting()]
        self.is_sending = False
        self.error: str | None = None
        self.blocking = False

    def _greeting(self) -> TranscriptEntry:
        return TranscriptEntry(role=Role.MODEL, text=greeting_for(self.persona))

    def _publish(self, transcript: list[TranscriptEntry] | None = None) -> None:
        self.on_update(self.transcript if transcript is None else transcript)

    def select_persona(self, persona: Persona) -> None:
        """Switch mode for subsequent sends and greet in the new mode."""
        persona = Persona(persona)
        if persona is self.persona:
            return
        self.persona = persona
        self.transcript.append(self._greeting())
        self._publish()

    def clear(self) -> None:
        """Start a new chat in the current mode."""
        self.transcript = [self._greeting()]
        self.error = None
        self.blocking = False
        self._publish()

    async def submit(self, text: str, persona: Persona | None = None) -> bool:
        """Send a user message and stream the reply into the transcript.

        Blank input, or input arriving while a reply is still streaming, is
        ignored. Failures are converted into ``error`` and never raised.

        Args:
            text: Raw user input.
            persona: Mode to answer in; switches mode first if it differs.

        Returns:
            True if a send was attempted, False if the input was ignored.
        """
        message = text.strip()
        if not message or self.is_sending:
            logger.debug("Ignoring blank input or send while busy")
            return False

        if persona is not None:
            self.select_persona(persona)

        self.transcript.append(TranscriptEntry(role=Role.USER, text=message))
        self.is_sending = True
        self.error = None
        self.blocking = False

        current = self.persona
        try:
            await accumulate(
                self.transcript,
                lambda: self._source(message, current),
                self._publish,
            )
        except ConfigurationError as e:
            logger.error(f"Chat configuration error: {e}")
            self.error = CONFIGURATION_ERROR_MESSAGE
            self.blocking = True
        except Exception as e:
            logger.error(f"Chat error: {e}")
            self.error = CONNECTION_ERROR_MESSAGE
        finally:
            self.is_sending = False
            self._publish()

        return True
