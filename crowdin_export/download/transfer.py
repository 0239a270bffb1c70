"""Download the exported bundle and rewrite it entry by entry.

The archive is read as a stream: each entry is decoded, unescaped and handed
to the output sink before the next one is read. Only one entry is held in
memory at a time.
"""

from contextlib import closing
from pathlib import Path
from typing import Optional

import requests

from crowdin_export.core.exceptions import DownloadConnectionError, DownloadFailedError
from crowdin_export.core.logger import setup_logger
from crowdin_export.core.models import ExportRequest, TransferResult, TransformedEntry
from crowdin_export.download.archive import ArchiveEntry, iter_archive_entries
from crowdin_export.download.http import CrowdinClient, iter_response_chunks, redact_url
from crowdin_export.download.outputs import OutputSink, resolve_output_sink
from crowdin_export.download.transform import unescape_lines

logger = setup_logger(__name__)


def transform_entry(entry: ArchiveEntry) -> TransformedEntry:
    """Read one entry as UTF-8 text and unescape it."""
    text = entry.read_text()
    return TransformedEntry(name=entry.name, data=unescape_lines(text).encode("utf-8"))


def _open_download(client: CrowdinClient, url: str) -> requests.Response:
    try:
        response = client.get(url, stream=True)
    except requests.exceptions.RequestException as e:
        raise DownloadConnectionError(
            f"Could not connect to {redact_url(url)}: {type(e).__name__}: {e}"
        ) from e

    if not response.ok:
        status = response.status_code
        response.close()
        raise DownloadFailedError(f"Download of {redact_url(url)} failed with HTTP {status}")
    return response


def _copy_entries(entries, sink: OutputSink) -> int:
    """Feed non-empty file entries to the sink. Returns the number skipped."""
    skipped = 0
    for entry in entries:
        if entry.is_directory or entry.is_empty:
            entry.drain()
            skipped += 1
            continue

        transformed = transform_entry(entry)
        # Size was not declared in the local header and the content is empty.
        if entry.size is None and not transformed.data:
            skipped += 1
            continue

        sink.accept(transformed)
    return skipped


def transfer_archive(
    request: ExportRequest,
    output_path: Path,
    extract: bool = True,
    client: Optional[CrowdinClient] = None,
) -> TransferResult:
    """Download the project bundle and write it to ``output_path``.

    With ``extract`` each file lands under ``output_path``; otherwise a new zip
    archive is written at ``output_path``.

    Raises:
        DownloadConnectionError: The download request could not be opened.
        DownloadFailedError: Bad status, broken stream or not a zip archive.
        TransformFailedError: An entry is not UTF-8 text.
        SinkWriteError: The output could not be written.
    """
    if client is None:
        with CrowdinClient() as owned_client:
            return transfer_archive(request, output_path, extract, owned_client)

    output_path = Path(output_path)
    logger.info("Downloading Crowdin localizations.")

    # Released in reverse order: sink, then zip reader, then the connection.
    with _open_download(client, request.download_url) as response:
        with closing(iter_archive_entries(iter_response_chunks(response))) as entries:
            with resolve_output_sink(extract, output_path) as sink:
                skipped = _copy_entries(entries, sink)

    result = TransferResult(
        mode=sink.mode,
        output_path=output_path,
        entries_written=sink.entries_written,
        entries_skipped=skipped,
    )
    logger.info(
        f"Wrote {result.entries_written} file(s) to {output_path} "
        f"({result.mode}, {result.entries_skipped} skipped)"
    )
    return result
