from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from crowdin_export.core.exceptions import ConfigInvalidError

DEFAULT_BASE_URL = "https://api.crowdin.com"

# Formatted with the base URL, project id and API key.
EXPORT_URL = "{base}/api/project/{project_id}/export?key={api_key}"
DOWNLOAD_URL = "{base}/api/project/{project_id}/download/all.zip?key={api_key}"

EXTRACT_MODE = "extract"
REPACKAGE_MODE = "repackage"


@dataclass(frozen=True)
class ExportRequest:
    """Identifies one Crowdin project export."""

    project_id: str
    api_key: str
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        if not self.project_id or not str(self.project_id).strip():
            raise ConfigInvalidError("Project ID must be set for Crowdin")

    def _format(self, template: str) -> str:
        return template.format(
            base=self.base_url.rstrip("/"),
            project_id=self.project_id,
            api_key=self.api_key,
        )

    @property
    def export_url(self) -> str:
        return self._format(EXPORT_URL)

    @property
    def download_url(self) -> str:
        return self._format(DOWNLOAD_URL)


@dataclass(frozen=True)
class TransformedEntry:
    """A file entry whose text has been unescaped and re-encoded as UTF-8."""

    name: str
    data: bytes


@dataclass(frozen=True)
class TransferResult:
    mode: str
    output_path: Path
    entries_written: int
    entries_skipped: int
