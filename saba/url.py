r"""
Minimal decomposition of ``http://`` URLs into host, port, path and searchpart.

    http://example.com:8080/path/to/resource?query=1
           \_________/ \__/ \_______________/ \_____/
              host     port       path      searchpart

The leading ``/`` of the path is consumed as a delimiter and is not part of
``path``; callers building a request line put it back. Nothing is normalized.
"""

from __future__ import annotations

from typing import NamedTuple

from .errors import UnsupportedSchemeError

HTTP_PREFIX = "http://"
DEFAULT_PORT = "80"


class ParsedUrl(NamedTuple):
    raw: str
    host: str
    port: str
    path: str
    searchpart: str

    @property
    def port_number(self) -> int:
        return int(self.port)

    @property
    def target(self) -> str:
        """Path plus ``?searchpart`` when present, still without the leading slash."""
        if self.searchpart:
            return f"{self.path}?{self.searchpart}"
        return self.path


class Url:
    """
    Unparsed URL shell.

    Construction never validates; ``parse()`` fills in the derived fields on
    this object and returns an immutable ``ParsedUrl`` copy.
    """

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self.host = ""
        self.port = ""
        self.path = ""
        self.searchpart = ""

    def is_http(self) -> bool:
        # Substring test, not a prefix test: "xhttp://host" is accepted.
        return HTTP_PREFIX in self.raw

    def _strip_scheme(self) -> str:
        if self.raw.startswith(HTTP_PREFIX):
            return self.raw[len(HTTP_PREFIX):]
        return self.raw

    def _extract_host(self, rest: str) -> str:
        authority = rest.partition("/")[0]
        return authority.partition(":")[0]

    def _extract_port(self, rest: str) -> str:
        authority = rest.partition("/")[0]
        _, colon, port = authority.partition(":")
        if not colon:
            return DEFAULT_PORT
        return port

    def _extract_path(self, rest: str) -> str:
        _, slash, tail = rest.partition("/")
        if not slash:
            return ""
        return tail.partition("?")[0]

    def _extract_searchpart(self, rest: str) -> str:
        _, slash, tail = rest.partition("/")
        if not slash:
            return ""
        return tail.partition("?")[2]

    def parse(self) -> ParsedUrl:
        """
        Decompose ``raw`` into host, port, path and searchpart.

        Raises:
            UnsupportedSchemeError: ``raw`` does not contain ``http://``.
        """
        if not self.is_http():
            raise UnsupportedSchemeError()
        rest = self._strip_scheme()
        self.host = self._extract_host(rest)
        self.port = self._extract_port(rest)
        self.path = self._extract_path(rest)
        self.searchpart = self._extract_searchpart(rest)
        return ParsedUrl(self.raw, self.host, self.port, self.path, self.searchpart)

    def __repr__(self) -> str:
        return (
            f"Url(raw={self.raw!r}, host={self.host!r}, port={self.port!r}, "
            f"path={self.path!r}, searchpart={self.searchpart!r})"
        )


def parse_url(raw: str) -> ParsedUrl:
    return Url(raw).parse()
