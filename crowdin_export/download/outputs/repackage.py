from __future__ import annotations

import zipfile
from typing import Optional

from crowdin_export.core.exceptions import SinkWriteError
from crowdin_export.core.logger import setup_logger
from crowdin_export.core.models import REPACKAGE_MODE, TransformedEntry
from crowdin_export.download.fs import ensure_parent_dirs
from crowdin_export.download.outputs import OutputSink, register_sink

logger = setup_logger(__name__)


@register_sink(REPACKAGE_MODE, supports=lambda extract: not extract)
class RepackageSink(OutputSink):
    """Write every entry into one new zip archive at ``output_path``.

    The archive is truncated on open. Entry names must be unique.
    """

    def __init__(self, output_path):
        super().__init__(output_path)
        self._archive: Optional[zipfile.ZipFile] = None
        self._names: set[str] = set()

    def _open(self) -> None:
        try:
            ensure_parent_dirs(self.output_path)
            self._archive = zipfile.ZipFile(self.output_path, "w", compression=zipfile.ZIP_DEFLATED)
        except OSError as e:
            raise SinkWriteError(f"Cannot create archive {self.output_path}: {e}") from e
        logger.debug(f"Repackaging into: {self.output_path}")

    def _write(self, entry: TransformedEntry) -> None:
        if entry.name in self._names:
            raise SinkWriteError(f"Duplicate entry in output archive: {entry.name}")
        try:
            self._archive.writestr(entry.name, entry.data)
        except (OSError, ValueError) as e:
            raise SinkWriteError(f"Failed to add {entry.name} to {self.output_path}: {e}") from e
        self._names.add(entry.name)
        logger.debug(f"Repackaged file: {entry.name}")

    def _close(self) -> None:
        archive, self._archive = self._archive, None
        if archive is None:
            return
        try:
            archive.close()
        except OSError as e:
            raise SinkWriteError(f"Failed to finalize archive {self.output_path}: {e}") from e
