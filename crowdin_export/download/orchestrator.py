"""Run the export trigger followed by the archive transfer."""

from typing import Optional

from crowdin_export.config.settings import SyncSettings
from crowdin_export.core.logger import setup_logger
from crowdin_export.core.models import TransferResult
from crowdin_export.download.export import trigger_export
from crowdin_export.download.http import CrowdinClient
from crowdin_export.download.transfer import transfer_archive

logger = setup_logger(__name__)


def sync_translations(
    settings: SyncSettings,
    client: Optional[CrowdinClient] = None,
) -> TransferResult:
    """Export, download and write translations for one project.

    The download is not attempted when the export trigger fails. Settings
    are expected to be runnable (see ``get_skip_reason``).
    """
    request = settings.to_request()

    if client is None:
        with CrowdinClient() as owned_client:
            return sync_translations(settings, owned_client)

    logger.info(f"Syncing Crowdin project {request.project_id} -> {settings.output}")
    trigger_export(request, client)
    return transfer_archive(request, settings.output, settings.extract, client)
