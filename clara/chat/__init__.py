"""Chat state shared by every presentation layer.

Responsibilities:
    - Transcript ownership and the greeting for the active mode
    - Submit guard for blank input and sends already in flight
    - Folding streamed fragments into the in-progress reply
    - Converting failures into user-visible error state
"""

from clara.chat.controller import ChatController, accumulate

__all__ = ["ChatController", "accumulate"]
