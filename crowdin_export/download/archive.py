"""Forward-only reading of a zip archive as it streams in."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import requests
from stream_unzip import UnzipError, stream_unzip

from crowdin_export.core.exceptions import DownloadFailedError, TransformFailedError
from crowdin_export.core.logger import setup_logger

logger = setup_logger(__name__)

# Raised by the zip reader or by the HTTP layer while chunks are still arriving.
STREAM_ERRORS = (UnzipError, requests.exceptions.RequestException, OSError)


def decode_entry_name(raw: bytes) -> str:
    """Decode a zip entry name. UTF-8 first, then the zip default code page."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("cp437")


@dataclass
class ArchiveEntry:
    """One entry of the inbound archive.

    ``chunks`` is shared with the underlying reader and must be exhausted
    (read or drained) before the next entry is requested.
    """

    name: str
    size: Optional[int]
    chunks: Iterator[bytes]

    @property
    def is_directory(self) -> bool:
        return self.name.endswith("/")

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    def read(self) -> bytes:
        """Read the remaining content of this entry."""
        return b"".join(self.read_chunks())

    def read_text(self, encoding: str = "utf-8") -> str:
        data = self.read()
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            raise TransformFailedError(f"Entry {self.name} is not valid {encoding} text: {e}") from e

    def drain(self) -> None:
        """Discard unread content so the reader can advance."""
        for _ in self.read_chunks():
            pass

    def read_chunks(self) -> Iterator[bytes]:
        try:
            yield from self.chunks
        except STREAM_ERRORS as e:
            raise DownloadFailedError(
                f"Failed reading archive entry {self.name}: {type(e).__name__}: {e}"
            ) from e


def iter_archive_entries(zipped_chunks: Iterable[bytes]) -> Iterator[ArchiveEntry]:
    """Yield the entries of a zip byte stream in archive order.

    The local file headers are read as they arrive; the central directory is
    never consulted. Stream and format errors surface as DownloadFailedError.
    """
    try:
        for raw_name, size, chunks in stream_unzip(zipped_chunks):
            entry = ArchiveEntry(name=decode_entry_name(raw_name), size=size, chunks=chunks)
            logger.debug(f"Archive entry: {entry.name} ({entry.size if entry.size is not None else '?'} bytes)")
            yield entry
    except STREAM_ERRORS as e:
        raise DownloadFailedError(
            f"Could not read download as a zip stream: {type(e).__name__}: {e}"
        ) from e
