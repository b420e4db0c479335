"""Clara Chat - a persona-driven assistant with streamed replies.

Combines FastAPI for HTTP streaming, the OpenAI SDK for model access,
Streamlit for the chat interface, and Pydantic for data validation.

Components:
    - agent: persona instructions, configuration and conversation sessions
    - chat: transcript state and stream accumulation
    - api: HTTP endpoints and streaming responses
    - ui: web interface for chat interactions
    - models: request/response and transcript schemas
"""

__version__ = "0.1.0"
