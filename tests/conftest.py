"""Shared fixtures: in-memory zip archives and a fake requests session."""

import io
import zipfile
from typing import Dict, Iterable, Tuple, Union
from unittest.mock import MagicMock

import pytest


def _build_zip(entries: Iterable[Tuple[str, Union[str, bytes]]]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries:
            zf.writestr(name, content)
    return buffer.getvalue()


class _ForwardOnlyWriter:
    """Write-only file object; zipfile falls back to data descriptors for it."""

    def __init__(self):
        self.buffer = io.BytesIO()

    def write(self, data):
        return self.buffer.write(data)

    def flush(self):
        pass


def _build_streamed_zip(entries: Iterable[Tuple[str, Union[str, bytes]]]) -> bytes:
    writer = _ForwardOnlyWriter()
    with zipfile.ZipFile(writer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries:
            zf.writestr(name, content)
    return writer.buffer.getvalue()


def _build_response(status: int = 200, body: bytes = b"", step: int = 16) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    response.headers = {"content-length": str(len(body))}

    # Small chunks regardless of the requested size, to cross entry boundaries.
    def iter_content(chunk_size=None, decode_unicode=False):
        for i in range(0, len(body), step):
            yield body[i:i + step]

    response.iter_content.side_effect = iter_content
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


@pytest.fixture
def make_zip():
    """Build zip bytes from (name, content) pairs, in order."""
    return _build_zip


@pytest.fixture
def make_streamed_zip():
    """Build zip bytes whose entry sizes only appear in trailing data descriptors."""
    return _build_streamed_zip


@pytest.fixture
def make_response():
    return _build_response


@pytest.fixture
def make_session():
    """Build a fake session that answers GETs by URL fragment.

    ``routes`` maps a URL fragment (e.g. "/export") to a response or an
    exception instance to raise.
    """

    def factory(routes: Dict[str, object]) -> MagicMock:
        session = MagicMock()
        session.headers = {}

        def get(url, **kwargs):
            for fragment, outcome in routes.items():
                if fragment in url:
                    if isinstance(outcome, BaseException):
                        raise outcome
                    return outcome
            raise AssertionError(f"Unexpected GET {url}")

        session.get.side_effect = get
        return session

    return factory
