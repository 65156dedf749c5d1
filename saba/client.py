from __future__ import annotations

import logging
import re
import socket
import urllib.parse

from saba.compression import accept_encoding
from saba.connection import Connection
from saba.errors import NetworkError, UnexpectedInputError
from saba.models import Response
from saba.url import parse_url

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "saba/0.1"

# Whitespace and control characters would split the request line or headers.
_UNSAFE_TARGET = re.compile(r"[\x00-\x20\x7f]")
_UNSAFE_FIELD = re.compile(r"[\r\n\x00]")
# Every printable ASCII character passes through quote() untouched; only
# non-ASCII text is percent-encoded (as UTF-8).
_TARGET_SAFE = "".join(chr(c) for c in range(0x21, 0x7F))


def request_target(path: str) -> str:
    """
    Turn a parser path (no leading slash, optional ``?query``) into the
    request-target sent on the wire.
    """
    if _UNSAFE_TARGET.search(path):
        raise UnexpectedInputError(f"Invalid character in request target: {path!r}")
    return "/" + urllib.parse.quote(path, safe=_TARGET_SAFE)


class HttpClient:
    """
    Blocking HTTP/1.1 client fed by ``saba.url``. One connection per request,
    always sent with ``Connection: close``.

    Args:
        timeout: Connect and socket read timeout in seconds
        auto_decompress: Decode gzip/deflate/br bodies (default: True)
        headers: Headers sent with every request, overriding the defaults
    """

    def __init__(
        self,
        timeout: float = 10.0,
        auto_decompress: bool = True,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self.auto_decompress = auto_decompress
        self.headers = dict(headers or {})

    def lookup_host(self, host: str, port: int) -> list[str]:
        """Resolve ``host`` to a de-duplicated list of IPv4/IPv6 addresses."""
        try:
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as exc:
            raise NetworkError(f"Failed to find IP addresses: {exc}") from exc
        addresses: list[str] = []
        for *_, sockaddr in infos:
            if sockaddr[0] not in addresses:
                addresses.append(sockaddr[0])
        if not addresses:
            raise NetworkError("Failed to find IP addresses")
        logger.debug("resolved %s to %s", host, addresses)
        return addresses

    def build_request(
        self, host: str, path: str, headers: dict[str, str] | None = None
    ) -> bytes:
        """
        Serialize ``GET /<path>`` for ``host``. Client and per-call headers
        replace defaults of the same name (case-insensitive) in place.
        """
        fields = {
            name.lower(): (name, value)
            for name, value in (
                ("Host", host),
                ("User-Agent", DEFAULT_USER_AGENT),
                ("Accept", "text/html"),
                ("Accept-Encoding", accept_encoding(self.auto_decompress)),
                ("Connection", "close"),
            )
        }
        for name, value in {**self.headers, **(headers or {})}.items():
            fields[name.lower()] = (name, value)

        lines = [f"GET {request_target(path)} HTTP/1.1"]
        for name, value in fields.values():
            if _UNSAFE_FIELD.search(name) or _UNSAFE_FIELD.search(value):
                raise UnexpectedInputError(f"Invalid character in header {name!r}")
            lines.append(f"{name}: {value}")
        try:
            return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1")
        except UnicodeEncodeError as exc:
            raise UnexpectedInputError(f"Header not encodable as latin-1: {exc}") from exc

    def get(
        self,
        host: str,
        port: int,
        path: str,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """
        Send ``GET /<path>`` to ``host:port``.

        ``path`` is in the form ``saba.url`` produces, without the leading
        slash; it may carry a ``?query`` suffix. The request is fully built
        before any lookup or connect, so bad input never opens a socket.
        """
        if not host:
            raise NetworkError("Failed to find IP addresses: empty host")
        request = self.build_request(host, path, headers)
        addresses = self.lookup_host(host, port)
        conn = Connection(
            host,
            port,
            addresses,
            timeout=self.timeout,
            auto_decompress=self.auto_decompress,
        )
        return conn.exchange(request)

    def fetch(self, url: str, headers: dict[str, str] | None = None) -> Response:
        """
        Parse ``url`` and GET it.

        Raises:
            UnsupportedSchemeError: ``url`` is not an ``http://`` URL.
            UnexpectedInputError: bad port, or a path or header that cannot
                go on the wire.
            NetworkError: lookup, connect or transfer failed.
            ProtocolError: the response could not be parsed.
        """
        parsed = parse_url(url)
        if not (parsed.port.isascii() and parsed.port.isdigit()):
            raise UnexpectedInputError(f"Invalid port: {parsed.port!r}")
        port = parsed.port_number
        if not 0 < port <= 65535:
            raise UnexpectedInputError(f"Port out of range: {port}")
        return self.get(parsed.host, port, parsed.target, headers=headers)
