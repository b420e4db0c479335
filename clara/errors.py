"""Exceptions shared by the agent, API and UI layers."""


class ClaraError(Exception):
    """Base class for Clara Chat errors."""

    pass


class ConfigurationError(ClaraError):
    """Raised when credentials or model settings are missing or invalid.

    Fatal to the operation that needed them: no session is created.
    """

    pass


class StreamError(ClaraError):
    """Raised when the upstream reply fails before or during streaming."""

    pass
