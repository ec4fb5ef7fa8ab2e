"""Custom exceptions for the video job client."""

UNEXPECTED_PROVIDER_ERROR = "Unexpected error while communicating with OpenAI."


class VideoJobError(Exception):
    """Base exception for video job errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(VideoJobError):
    """Raised when a request input is rejected before any network I/O."""

    def __init__(self, field: str, details: str):
        self.field = field
        super().__init__(f"Invalid {field}: {details}")


class ConfigurationError(VideoJobError):
    """Raised when the client configuration cannot serve a request."""


class InvalidCredentialError(VideoJobError):
    """Raised when the provider rejects the configured API key."""

    def __init__(self, status_code: int | None = None):
        self.status_code = status_code
        super().__init__("Invalid API key. Please check your OpenAI API key and try again.")


class TransportError(VideoJobError):
    """Raised when the provider SDK or the backend proxy reports a failure."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
