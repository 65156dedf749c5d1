"""Pytest configuration and fixtures."""

import io

import pytest
from saba.models import Response


@pytest.fixture
def sample_response():
    """Create a sample Response object."""
    return Response(
        version="1.1",
        status_code=200,
        reason="OK",
        headers=[
            ("Content-Type", "text/html; charset=utf-8"),
            ("Content-Length", "13"),
        ],
        body=b"<p>hello</p>\n",
    )


@pytest.fixture
def mock_socket(mocker):
    """Create a mock socket."""
    return mocker.MagicMock()


@pytest.fixture
def wire_socket(mocker):
    """Build a mock socket whose makefile() serves ``data``."""

    def _make(data: bytes):
        sock = mocker.MagicMock()
        sock.makefile.return_value = io.BytesIO(data)
        return sock

    return _make
