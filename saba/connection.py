from __future__ import annotations

import logging
import socket
from collections.abc import Iterator, Sequence
from typing import BinaryIO

from .compression import decode_body
from .errors import NetworkError, ProtocolError
from .models import Response, find_header

logger = logging.getLogger(__name__)


def _parse_status_line(line: bytes) -> tuple[str, int, str]:
    # e.g. b"HTTP/1.1 200 OK\r\n"; the reason phrase may be empty.
    text = line.decode("latin-1").rstrip("\r\n")
    protocol, _, rest = text.partition(" ")
    code, _, reason = rest.partition(" ")
    if not protocol.startswith("HTTP/") or not (
        len(code) == 3 and code.isascii() and code.isdigit()
    ):
        raise ProtocolError(f"Malformed status line: {line!r}")
    return protocol[len("HTTP/"):], int(code), reason


def _read_headers(stream: BinaryIO) -> list[tuple[str, str]]:
    headers: list[tuple[str, str]] = []
    for line in iter(stream.readline, b""):
        if line in (b"\r\n", b"\n"):
            break
        name, colon, value = line.partition(b":")
        if not colon:
            raise ProtocolError(f"Malformed header line: {line!r}")
        headers.append((name.decode("latin-1").strip(), value.decode("latin-1").strip()))
    return headers


def _read_exactly(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) < size:
        raise ProtocolError("Unexpected EOF while reading body")
    return data


def _iter_chunks(stream: BinaryIO) -> Iterator[bytes]:
    while True:
        line = stream.readline()
        if not line:
            raise ProtocolError("Unexpected EOF in chunked body")
        size_field = line.split(b";", 1)[0].strip()
        try:
            size = int(size_field, 16)
        except ValueError as exc:
            raise ProtocolError(f"Invalid chunk size line: {line!r}") from exc
        if size == 0:
            # Trailer fields up to the blank line are discarded.
            for trailer in iter(stream.readline, b""):
                if trailer in (b"\r\n", b"\n"):
                    break
            return
        yield _read_exactly(stream, size)
        stream.readline()


def _read_body(stream: BinaryIO, headers: list[tuple[str, str]]) -> bytes:
    if "chunked" in (find_header(headers, "Transfer-Encoding") or "").lower():
        return b"".join(_iter_chunks(stream))
    length = find_header(headers, "Content-Length")
    if length is None:
        # Connection: close delimits the body.
        return stream.read()
    try:
        size = int(length)
    except ValueError as exc:
        raise ProtocolError(f"Invalid Content-Length: {length!r}") from exc
    if size < 0:
        raise ProtocolError(f"Invalid Content-Length: {length!r}")
    return _read_exactly(stream, size)


def read_response(stream: BinaryIO, auto_decompress: bool = True) -> Response:
    """Parse one HTTP/1.x response from a buffered binary stream."""
    status_line = stream.readline()
    if not status_line:
        raise ProtocolError("Empty response")
    version, status_code, reason = _parse_status_line(status_line)
    headers = _read_headers(stream)
    body = _read_body(stream, headers)
    if auto_decompress:
        body = decode_body(body, find_header(headers, "Content-Encoding") or "")
    return Response(version, status_code, reason, headers, body)


class Connection:
    """
    One plain-TCP exchange with ``host``. ``addresses`` are its resolved IPs,
    tried in order; the socket is closed once the response has been read.
    """

    def __init__(
        self,
        host: str,
        port: int,
        addresses: Sequence[str],
        timeout: float = 10.0,
        auto_decompress: bool = True,
    ) -> None:
        self.host = host
        self.port = port
        self.addresses = list(addresses)
        self.timeout = timeout
        self.auto_decompress = auto_decompress
        self.sock: socket.socket | None = None

    def connect(self) -> None:
        if not self.addresses:
            raise NetworkError(f"No addresses to connect to for {self.host}")
        errors: list[str] = []
        for address in self.addresses:
            try:
                self.sock = socket.create_connection(
                    (address, self.port), timeout=self.timeout
                )
            except OSError as exc:
                errors.append(f"{address}: {exc}")
                continue
            logger.debug("connected to %s via %s:%d", self.host, address, self.port)
            return
        raise NetworkError(f"TCP connection failed: {'; '.join(errors)}")

    def exchange(self, request: bytes) -> Response:
        """Send fully built request bytes and read the response."""
        if self.sock is None:
            self.connect()
        assert self.sock is not None
        try:
            try:
                self.sock.sendall(request)
            except OSError as exc:
                raise NetworkError(f"Send failed: {exc}") from exc
            try:
                with self.sock.makefile("rb") as stream:
                    response = read_response(stream, self.auto_decompress)
            except OSError as exc:
                raise NetworkError(f"Receive failed: {exc}") from exc
        finally:
            self.close()
        logger.debug("%s answered %d", self.host, response.status_code)
        return response

    def close(self) -> None:
        if self.sock is not None:
            try:
                self.sock.close()
            finally:
                self.sock = None
