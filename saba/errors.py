class SabaError(Exception):
    """Base error for saba."""


class ParseError(SabaError):
    """Raised when a URL cannot be decomposed."""


class UnsupportedSchemeError(ParseError):
    """Raised when the URL is not recognized as plain HTTP."""

    def __init__(self, message: str = "Only HTTP scheme is supported") -> None:
        super().__init__(message)


class NetworkError(SabaError):
    """Raised when host lookup, TCP connect or send fails."""


class ProtocolError(SabaError):
    """Raised when the server response violates HTTP/1.x framing."""


class UnexpectedInputError(SabaError):
    """Raised when fetch input passes the parser but cannot be used on the wire."""
