"""Bootstrap configuration read from environment variables.

Values are read once at import time. Callers that need fresh values (tests,
long-lived processes) patch the module attributes directly.
"""

import os
from pathlib import Path
from typing import Optional


def string_to_bool(s: str) -> bool:
    return s.strip().lower() in ["true", "yes", "1", "y", "on"]


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Crowdin project
CROWDIN_PROJECT_ID = os.getenv("CROWDIN_PROJECT_ID") or None
CROWDIN_API_KEY = os.getenv("CROWDIN_API_KEY") or None
CROWDIN_BASE_URL = os.getenv("CROWDIN_BASE_URL", "https://api.crowdin.com")

# Output
# Unset means "translations" in extract mode and "translations.zip" in repackage mode.
CROWDIN_OUTPUT = Path(os.environ["CROWDIN_OUTPUT"]) if os.getenv("CROWDIN_OUTPUT") else None
CROWDIN_EXTRACT = string_to_bool(os.getenv("CROWDIN_EXTRACT", "true"))

# Network
OFFLINE = string_to_bool(os.getenv("OFFLINE", "false"))
REQUEST_CONNECT_TIMEOUT = _float_env("REQUEST_CONNECT_TIMEOUT", 10.0)
# None waits indefinitely for a response.
REQUEST_READ_TIMEOUT = _float_env("REQUEST_READ_TIMEOUT", None)
SHOW_PROGRESS = string_to_bool(os.getenv("SHOW_PROGRESS", "true"))

# Logging
DEBUG = string_to_bool(os.getenv("DEBUG", "false"))
LOG_LEVEL = "DEBUG" if DEBUG else os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_LOGGING = string_to_bool(os.getenv("ENABLE_LOGGING", "false"))
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
