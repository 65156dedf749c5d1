"""
Content-Encoding support for fetched pages: gzip, deflate and brotli (br).
"""

from __future__ import annotations

import gzip
import zlib

import brotli

ACCEPT_ENCODING = "gzip, deflate, br"


def _inflate(data: bytes) -> bytes:
    # Servers send both raw and zlib-wrapped deflate.
    try:
        return zlib.decompress(data, -zlib.MAX_WBITS)
    except zlib.error:
        return zlib.decompress(data)


_DECODERS = {
    "gzip": gzip.decompress,
    "x-gzip": gzip.decompress,
    "deflate": _inflate,
    "br": brotli.decompress,
}
_DECODE_ERRORS = (OSError, EOFError, zlib.error, brotli.error)


def decode_body(body: bytes, content_encoding: str) -> bytes:
    """
    Undo ``content_encoding`` (codings applied in listed order, so removed in
    reverse). Unknown codings are skipped; a body that fails to decode is
    returned as received.
    """
    if not body or not content_encoding:
        return body
    decoded = body
    for coding in reversed(content_encoding.lower().split(",")):
        decoder = _DECODERS.get(coding.strip())
        if decoder is None:
            continue
        try:
            decoded = decoder(decoded)
        except _DECODE_ERRORS:
            return body
    return decoded


def accept_encoding(auto_decompress: bool = True) -> str:
    return ACCEPT_ENCODING if auto_decompress else "identity"
