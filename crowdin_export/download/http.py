"""HTTP session and streaming helpers for the Crowdin API."""

import re
from typing import Iterator, Optional, Tuple

import requests
from tqdm import tqdm

from crowdin_export import __version__
from crowdin_export.config import env
from crowdin_export.core.logger import setup_logger

logger = setup_logger(__name__)

USER_AGENT = f"crowdin-export/{__version__}"
DOWNLOAD_HEADERS = {
    "User-Agent": USER_AGENT,
}
CHUNK_SIZE = 64 * 1024

_KEY_PARAM = re.compile(r"(key=)[^&]*")


def get_request_timeout() -> Tuple[float, Optional[float]]:
    """Return the (connect, read) timeout pair. A read timeout of None waits indefinitely."""
    return (env.REQUEST_CONNECT_TIMEOUT, env.REQUEST_READ_TIMEOUT)


def redact_url(url: str) -> str:
    """Mask the API key in a URL so it can be logged."""
    return _KEY_PARAM.sub(r"\1***", url)


class CrowdinClient:
    """Thin wrapper around a requests session with the fixed client headers.

    Each request is a single attempt; redirects are followed.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[Tuple[float, Optional[float]]] = None,
    ):
        self.timeout = timeout or get_request_timeout()
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._session.headers.update(DOWNLOAD_HEADERS)

    def get(self, url: str, stream: bool = False) -> requests.Response:
        """Issue a GET. Raises requests.exceptions.RequestException when it cannot be opened."""
        logger.debug(f"GET: {redact_url(url)}")
        return self._session.get(
            url,
            stream=stream,
            allow_redirects=True,
            timeout=self.timeout,
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "CrowdinClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def iter_response_chunks(
    response: requests.Response,
    desc: str = "Downloading",
    chunk_size: int = CHUNK_SIZE,
) -> Iterator[bytes]:
    """Yield the response body in chunks, updating a progress bar as they arrive."""
    total_size = int(response.headers.get("content-length", 0) or 0)
    bytes_downloaded = 0
    pbar = tqdm(
        total=total_size or None,
        unit="B",
        unit_scale=True,
        desc=desc,
        disable=None if env.SHOW_PROGRESS else True,
    )
    try:
        for chunk in response.iter_content(chunk_size=chunk_size):
            if chunk:
                bytes_downloaded += len(chunk)
                pbar.update(len(chunk))
                yield chunk
    finally:
        pbar.close()
    logger.debug(f"Download completed: {bytes_downloaded} bytes")
