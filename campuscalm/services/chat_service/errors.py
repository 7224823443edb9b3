"""Chat service exceptions.

Parse degradation is deliberately absent: ResponseParser always succeeds.
"""


class ChatServiceError(Exception):
    """Base exception for chat service errors."""
    pass


class ValidationError(ChatServiceError):
    """Request body missing a usable message."""
    pass


class UpstreamError(ChatServiceError):
    """Generative call failed, timed out, or no client is configured."""
    pass
