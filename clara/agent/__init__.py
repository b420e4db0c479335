"""Model access for the Clara assistant.

Handles persona instructions, model configuration and the lifecycle of the
single live conversation session.

Responsibilities:
    - Persona definitions and system instruction assembly
    - Environment-driven model configuration
    - Session creation and replacement on persona change
    - Streaming reply generation

Maintains clean separation from the HTTP and UI layers.
"""

from clara.agent.config import ChatConfig, get_chat_config
from clara.agent.personas import Persona, build_system_instruction
from clara.agent.session import ChatSession, SessionManager

__all__ = [
    "ChatConfig",
    "ChatSession",
    "Persona",
    "SessionManager",
    "build_system_instruction",
    "get_chat_config",
]
