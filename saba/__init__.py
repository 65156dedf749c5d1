from saba.url import ParsedUrl, Url, parse_url
from saba.client import HttpClient
from saba.models import Response
from saba.errors import (
    SabaError,
    ParseError,
    UnsupportedSchemeError,
    NetworkError,
    ProtocolError,
    UnexpectedInputError,
)

__all__ = [
    "Url",
    "ParsedUrl",
    "parse_url",
    "HttpClient",
    "Response",
    "SabaError",
    "ParseError",
    "UnsupportedSchemeError",
    "NetworkError",
    "ProtocolError",
    "UnexpectedInputError",
]
