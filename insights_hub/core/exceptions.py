from __future__ import annotations


class ValidationError(ValueError):
    """Raised when form input is missing or malformed, before any downstream call."""


class ConfigurationError(RuntimeError):
    """Raised when a required secret is not configured."""


class DownstreamError(RuntimeError):
    """Raised when the LLM or mail-transfer call fails."""


class SchemaError(DownstreamError):
    """Raised when a downstream response does not match the expected shape."""


class SummaryGenerationError(DownstreamError):
    pass


class ChatResponseError(DownstreamError):
    pass


class NotificationError(DownstreamError):
    pass
