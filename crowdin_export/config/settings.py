"""Resolve sync settings from explicit values and the environment."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from crowdin_export.config import env
from crowdin_export.core.exceptions import ConfigInvalidError
from crowdin_export.core.logger import setup_logger
from crowdin_export.core.models import DEFAULT_BASE_URL, ExportRequest

logger = setup_logger(__name__)

# Guards against a deferred value that keeps returning callables.
_MAX_DEFERRED_DEPTH = 32

DEFAULT_OUTPUT_DIR = Path("translations")
DEFAULT_OUTPUT_ARCHIVE = Path("translations.zip")


@dataclass(frozen=True)
class SyncSettings:
    project_id: Optional[str]
    api_key: Optional[str]
    output: Path
    extract: bool = True
    offline: bool = False
    base_url: str = DEFAULT_BASE_URL

    def to_request(self) -> ExportRequest:
        if not self.project_id:
            raise ConfigInvalidError("Project ID must be set for Crowdin")
        return ExportRequest(
            project_id=self.project_id,
            api_key=self.api_key or "",
            base_url=self.base_url,
        )


def resolve_value(value: Any) -> Any:
    """Call deferred (zero-argument callable) values until a plain value comes back."""
    depth = 0
    while callable(value):
        depth += 1
        if depth > _MAX_DEFERRED_DEPTH:
            raise ConfigInvalidError("Deferred setting did not resolve to a value")
        value = value()
    return value


def _as_optional_str(value: Any) -> Optional[str]:
    value = resolve_value(value)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_bool(value: Any) -> bool:
    value = resolve_value(value)
    if isinstance(value, str):
        return env.string_to_bool(value)
    return bool(value)


def resolve_settings(
    project_id: Any = None,
    api_key: Any = None,
    output: Any = None,
    extract: Any = None,
    offline: Any = None,
    base_url: Any = None,
) -> SyncSettings:
    """Build SyncSettings, falling back to the environment for unset values.

    Every argument may be a plain value or a zero-argument callable.
    """
    output_value = resolve_value(output)
    extract_value = resolve_value(extract)
    offline_value = resolve_value(offline)

    extract_flag = _as_bool(extract_value) if extract_value is not None else env.CROWDIN_EXTRACT
    if output_value is not None:
        output_path = Path(output_value)
    elif env.CROWDIN_OUTPUT is not None:
        output_path = env.CROWDIN_OUTPUT
    else:
        output_path = DEFAULT_OUTPUT_DIR if extract_flag else DEFAULT_OUTPUT_ARCHIVE

    settings = SyncSettings(
        project_id=_as_optional_str(project_id) or env.CROWDIN_PROJECT_ID,
        api_key=_as_optional_str(api_key) or env.CROWDIN_API_KEY,
        output=output_path,
        extract=extract_flag,
        offline=_as_bool(offline_value) if offline_value is not None else env.OFFLINE,
        base_url=_as_optional_str(base_url) or env.CROWDIN_BASE_URL or DEFAULT_BASE_URL,
    )
    logger.debug(
        f"Settings: project={settings.project_id} output={settings.output} "
        f"extract={settings.extract} offline={settings.offline} base_url={settings.base_url}"
    )
    return settings


def get_skip_reason(settings: SyncSettings) -> Optional[str]:
    """Return why the sync should not run, or None when it should."""
    if not settings.api_key:
        return "Crowdin API key is not set, skipping."
    if settings.offline:
        return "Offline mode is enabled, skipping."
    return None
