"""
Plugin error taxonomy.

Every error raised by the plugin carries a FailureKind so callers can
branch on the classification instead of on exception types or messages.

Construction-time errors (bad contract address) are fatal. Errors raised
while fetching a single token are caught by the collection walker and
degrade to an absent result for that token.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_ADDRESS = "invalid_address"
    INVALID_URI_SCHEME = "invalid_uri_scheme"

    # Payload decoding failures
    INVALID_DATA_URI = "invalid_data_uri"
    INVALID_JSON = "invalid_json"

    # Chain or HTTP failures
    EXTERNAL_CALL_FAILURE = "external_call_failure"


class NFTPluginError(Exception):
    """
    Base class for errors the plugin knows how to explain.

    Subclass this for errors where the plugin knows exactly what went wrong.
    """

    kind: FailureKind

    def __init__(self, message: str, detail: str | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class InvalidAddressError(NFTPluginError):
    """Raised when a string is not a well-formed chain address."""

    kind = FailureKind.INVALID_ADDRESS

    def __init__(self, address: object) -> None:
        self.address = address
        super().__init__(f"Not a valid address: {address!r}")


class InvalidURISchemeError(NFTPluginError):
    """Raised when a resolver is handed a URI it does not support."""

    kind = FailureKind.INVALID_URI_SCHEME

    def __init__(self, uri: str, expected_prefix: str) -> None:
        self.uri = uri
        self.expected_prefix = expected_prefix
        super().__init__(
            f"Unsupported token URI: {uri[:60]!r}",
            detail=f"expected prefix {expected_prefix!r}",
        )


class InvalidDataURIError(NFTPluginError):
    """Raised for data URIs with a wrong prefix or undecodable base64."""

    kind = FailureKind.INVALID_DATA_URI


class InvalidJSONError(NFTPluginError):
    """Raised when a metadata payload is not a JSON object."""

    kind = FailureKind.INVALID_JSON


class ExternalCallError(NFTPluginError):
    """Raised when a contract call or HTTP request fails."""

    kind = FailureKind.EXTERNAL_CALL_FAILURE
