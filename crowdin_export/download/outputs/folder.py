from __future__ import annotations

from crowdin_export.core.exceptions import SinkWriteError
from crowdin_export.core.logger import setup_logger
from crowdin_export.core.models import EXTRACT_MODE, TransformedEntry
from crowdin_export.download.fs import replace_file, resolve_within
from crowdin_export.download.outputs import OutputSink, register_sink

logger = setup_logger(__name__)


@register_sink(EXTRACT_MODE, supports=lambda extract: extract)
class ExtractSink(OutputSink):
    """Write each entry to ``output_path/<entry name>``.

    Directories are created per entry as needed; nothing is created up front.
    """

    def _write(self, entry: TransformedEntry) -> None:
        try:
            target = resolve_within(self.output_path, entry.name)
        except ValueError as e:
            raise SinkWriteError(str(e)) from e

        logger.debug(f"Extracting file: {entry.name}")
        try:
            replace_file(target, entry.data)
        except OSError as e:
            raise SinkWriteError(f"Failed to write {target}: {e}") from e
