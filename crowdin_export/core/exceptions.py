"""Error types raised by the export and transfer stages.

Every error carries the name of the operation that failed. The underlying
cause, when there is one, is chained with ``raise ... from``.
"""

from typing import Optional


class CrowdinExportError(Exception):
    """Base class for every failure of a sync run."""

    operation = "sync"

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        if operation is not None:
            self.operation = operation

    def __str__(self) -> str:
        return f"{self.operation}: {super().__str__()}"


class ConfigInvalidError(CrowdinExportError):
    """Raised when required settings are missing or malformed."""

    operation = "config"


class ExportError(CrowdinExportError):
    """Raised when the export trigger fails."""

    operation = "export"


class InvalidCredentialsError(ExportError):
    """Raised when Crowdin rejects the API key (HTTP 401)."""

    pass


class ConnectionFailedError(CrowdinExportError):
    """Raised when a request cannot be opened at all."""

    operation = "connect"


class ExportConnectionError(ExportError, ConnectionFailedError):
    """Raised when the export trigger request cannot connect."""

    pass


class DownloadFailedError(CrowdinExportError):
    """Raised when the archive cannot be downloaded or read as a zip stream."""

    operation = "download"


class DownloadConnectionError(ConnectionFailedError, DownloadFailedError):
    """Raised when the download request cannot connect."""

    operation = "download"


class TransformFailedError(CrowdinExportError):
    """Raised when entry content cannot be decoded as text."""

    operation = "transform"


class SinkWriteError(CrowdinExportError):
    """Raised when a transformed entry cannot be written to the output."""

    operation = "write"
