from __future__ import annotations

from collections.abc import Iterable


def find_header(headers: Iterable[tuple[str, str]], name: str) -> str | None:
    """First value of ``name`` (case-insensitive), or None."""
    key = name.lower()
    for header_name, value in headers:
        if header_name.lower() == key:
            return value
    return None


class Response:
    """Status line, headers and decoded body of one HTTP/1.x response."""

    def __init__(
        self,
        version: str,
        status_code: int,
        reason: str,
        headers: Iterable[tuple[str, str]],
        body: bytes,
    ) -> None:
        self.version = version
        self.status_code = status_code
        self.reason = reason
        self.headers: list[tuple[str, str]] = list(headers)
        self.body = body

    def header_value(self, name: str) -> str:
        value = find_header(self.headers, name)
        if value is None:
            raise KeyError(f"failed to find {name} in headers")
        return value

    @property
    def charset(self) -> str:
        ctype = find_header(self.headers, "Content-Type") or ""
        for param in ctype.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return "utf-8"

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.charset, errors="replace")
        except LookupError:
            return self.body.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {len(self.body)} bytes>"
