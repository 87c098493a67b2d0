"""Custom exceptions for contentbridge.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks like FastAPI.

Converters never raise. The resolver does not catch provider errors,
so anything a provider raises reaches the caller unchanged.
"""


class ContentBridgeError(Exception):
    """Base exception for contentbridge.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProviderNotFoundError(ContentBridgeError):
    """No provider registered under the requested ID."""

    status_code: int = 404  # Not Found


class ProviderDataError(ContentBridgeError):
    """A provider returned a document that could not be parsed.

    Raised by collaborators when upstream data is unreadable or does not
    match the content model.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)


class UnsupportedConversionError(ContentBridgeError):
    """No converter exists between the requested formats."""

    status_code: int = 400  # Bad Request


class InvalidFormatError(ContentBridgeError):
    """Format name is not one of the four content formats."""

    status_code: int = 400  # Bad Request
