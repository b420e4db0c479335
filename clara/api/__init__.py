"""FastAPI endpoints for Clara Chat.

HTTP and streaming routes with async request handling.
Supports Server-Sent Events for real-time reply streaming.

Endpoints:
    - GET /health: Service health status
    - GET /personas: Selectable assistant modes
    - POST /chat/stream: Streamed reply to a message in a given mode
"""

from clara.api.app import app, create_app

__all__ = ["app", "create_app"]
