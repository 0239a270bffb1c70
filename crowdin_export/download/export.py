"""Ask Crowdin to rebuild the downloadable translation bundle."""

from typing import Optional

import requests

from crowdin_export.core.exceptions import ExportConnectionError, InvalidCredentialsError
from crowdin_export.core.logger import setup_logger
from crowdin_export.core.models import ExportRequest
from crowdin_export.download.http import CrowdinClient, redact_url

logger = setup_logger(__name__)


def trigger_export(request: ExportRequest, client: Optional[CrowdinClient] = None) -> None:
    """Trigger a server-side export for the project.

    Only the status code is inspected. A 401 means the API key was rejected;
    any other status is accepted, including server errors.

    Raises:
        InvalidCredentialsError: Crowdin answered 401.
        ExportConnectionError: The request could not be opened.
    """
    if client is None:
        with CrowdinClient() as owned_client:
            return trigger_export(request, owned_client)

    url = request.export_url
    logger.debug("Exporting Crowdin localizations.")

    try:
        response = client.get(url, stream=True)
    except requests.exceptions.RequestException as e:
        raise ExportConnectionError(
            f"Could not connect to {redact_url(url)}: {type(e).__name__}: {e}"
        ) from e

    # The body is never read; closing releases the connection.
    with response:
        status = response.status_code

    if status == 401:
        raise InvalidCredentialsError("Invalid Crowdin API key")

    if not 200 <= status < 300:
        logger.warning(f"Crowdin export returned HTTP {status}, continuing with download")
    else:
        logger.debug(f"Crowdin export accepted (HTTP {status})")
