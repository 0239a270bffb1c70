from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Type

from crowdin_export.core.exceptions import ConfigInvalidError, CrowdinExportError
from crowdin_export.core.logger import setup_logger
from crowdin_export.core.models import TransformedEntry

logger = setup_logger(__name__)


class OutputSink(ABC):
    """Destination for transformed entries.

    Opened once before the first entry and closed exactly once afterwards,
    whatever happened in between. Use as a context manager.
    """

    mode: str = ""

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.entries_written = 0
        self._opened = False
        self._closed = False

    def open(self) -> None:
        if self._opened:
            return
        self._open()
        self._opened = True

    def accept(self, entry: TransformedEntry) -> None:
        if not self._opened or self._closed:
            raise RuntimeError(f"{type(self).__name__} is not open")
        self._write(entry)
        self.entries_written += 1

    def close(self) -> None:
        if not self._opened or self._closed:
            return
        self._closed = True
        self._close()

    def __enter__(self) -> "OutputSink":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the original error; a failing close is only reported.
        try:
            self.close()
        except CrowdinExportError as close_error:
            logger.warning(f"Failed to close {self.mode} output {self.output_path}: {close_error}")

    def _open(self) -> None:
        pass

    @abstractmethod
    def _write(self, entry: TransformedEntry) -> None:
        ...

    def _close(self) -> None:
        pass


@dataclass(frozen=True)
class SinkRegistration:
    mode: str
    supports: Callable[[bool], bool]
    factory: Type[OutputSink]


_SINK_REGISTRY: list[SinkRegistration] = []
_SINKS_LOADED = False


def register_sink(
    mode: str,
    supports: Callable[[bool], bool],
) -> Callable[[Type[OutputSink]], Type[OutputSink]]:
    """Register an OutputSink class for the extract flag values it handles."""

    def decorator(cls: Type[OutputSink]) -> Type[OutputSink]:
        cls.mode = mode
        _SINK_REGISTRY.append(SinkRegistration(mode=mode, supports=supports, factory=cls))
        return cls

    return decorator


def load_output_sinks() -> None:
    global _SINKS_LOADED
    if _SINKS_LOADED:
        return

    from . import folder  # noqa: F401
    from . import repackage  # noqa: F401

    _SINKS_LOADED = True


def resolve_output_sink(extract: bool, output_path: Path) -> OutputSink:
    """Build the sink for the requested mode. The sink is not opened yet."""
    load_output_sinks()
    for entry in _SINK_REGISTRY:
        if entry.supports(extract):
            return entry.factory(output_path)
    raise ConfigInvalidError(f"No output sink registered for extract={extract}")
