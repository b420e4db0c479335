"""Test package for Clara Chat.

Unit tests for isolated logic and integration tests for workflows.

Structure:
    - unit/: Individual function and class tests
    - integration/: API and end-to-end chat flow tests
    - fakes.py: Scripted stand-ins for the upstream model client

No test reaches a real model provider.
Leverages pytest with pytest-check for soft assertions.
"""
