"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - agent/: configuration, personas and session lifecycle
    - chat/: stream accumulation and the submit guard
    - ui/: SSE client error mapping

Uses fakes for the model provider and httpx.MockTransport for HTTP.
Leverages pytest-check for multiple assertions per test.
"""
