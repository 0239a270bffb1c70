"""Command-line entry point."""

import argparse
import sys
from typing import List, Optional

from crowdin_export import __version__
from crowdin_export.config.settings import get_skip_reason, resolve_settings
from crowdin_export.core.exceptions import ConfigInvalidError, CrowdinExportError
from crowdin_export.core.logger import set_level, setup_logger
from crowdin_export.download.orchestrator import sync_translations

logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crowdin-export",
        description="Export a Crowdin project and download its translations",
    )
    parser.add_argument("--project-id", help="Crowdin project identifier (env: CROWDIN_PROJECT_ID)")
    parser.add_argument("--api-key", help="Crowdin API key (env: CROWDIN_API_KEY)")
    parser.add_argument(
        "--output",
        "-o",
        help=(
            "Output directory, or zip file with --repackage "
            "(env: CROWDIN_OUTPUT; default: translations or translations.zip)"
        ),
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--extract",
        dest="extract",
        action="store_const",
        const=True,
        help="Write each translation file under the output directory (default)",
    )
    mode.add_argument(
        "--repackage",
        dest="extract",
        action="store_const",
        const=False,
        help="Write a cleaned zip archive to the output path",
    )
    parser.add_argument("--offline", action="store_const", const=True, help="Skip the sync")
    parser.add_argument("--base-url", help="Crowdin API base URL (env: CROWDIN_BASE_URL)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level("DEBUG")

    settings = resolve_settings(
        project_id=args.project_id,
        api_key=args.api_key,
        output=args.output,
        extract=args.extract,
        offline=args.offline,
        base_url=args.base_url,
    )

    skip_reason = get_skip_reason(settings)
    if skip_reason:
        logger.info(skip_reason)
        return EXIT_OK

    try:
        result = sync_translations(settings)
    except ConfigInvalidError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG
    except CrowdinExportError as e:
        logger.error(f"Crowdin sync failed: {e}")
        return EXIT_FAILED

    print(f"{result.entries_written} file(s) written to {result.output_path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
