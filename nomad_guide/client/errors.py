class DirectoryLoadError(Exception):
    """The country list could not be loaded. ``message`` is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(DirectoryLoadError):
    """Endpoint URL or nonce missing; raised before any request is made."""


class TransportError(DirectoryLoadError):
    """Network failure, timeout, HTTP error status or an unreadable body."""


class LogicalFailure(DirectoryLoadError):
    """The server answered with a failure envelope."""
