"""Integration tests for components working together as a system.

Coverage:
    - API endpoints with real HTTP requests over ASGITransport
    - SSE streaming format and error events
    - Full chat flow from controller through the API to the session

Only the upstream model client is replaced, with a scripted fake.
"""
