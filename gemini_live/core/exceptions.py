"""
Exceptions raised by the Gemini Live client.
"""


class GeminiLiveError(Exception):
    """Base class for all client errors."""


class ConstructionError(GeminiLiveError, ValueError):
    """Raised when the client is created with an invalid API key or config."""


class InputValidationError(GeminiLiveError, ValueError):
    """Raised for malformed send input or an invalid timeout."""


class SessionStateError(GeminiLiveError, RuntimeError):
    """Raised when an operation needs a ready session and the session is not ready."""


class RequestTimeoutError(GeminiLiveError, TimeoutError):
    """Raised when a request does not complete within its deadline."""


class TransportError(GeminiLiveError, ConnectionError):
    """Raised when a frame cannot be written to the socket or the socket closed."""


class ProtocolError(GeminiLiveError):
    """Raised for server frames that cannot be parsed or turned into a response."""
