# /run.py
import argparse
import logging
import os
import sys

import sentry_sdk
from dotenv import load_dotenv
from sentry_sdk.integrations.logging import LoggingIntegration

from config import get_config
from odoo_sync.catalog_export import run_catalog_export
from odoo_sync.config_service import ConfigManager, OdooSettings
from odoo_sync.exceptions import AuthError, BackendFault, ConfigError, InputFileError
from odoo_sync.stock_sync import run_stock_sync


load_dotenv()

logger = logging.getLogger(__name__)


def init_sentry():
    """Initialize Sentry error tracking if SENTRY_DSN is configured."""
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        return

    environment = os.getenv("APP_ENV") or "production"
    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=environment,
        integrations=[
            LoggingIntegration(
                level=logging.INFO,        # Capture info and above as breadcrumbs
                event_level=logging.ERROR  # Send errors and above as events
            ),
        ],
        attach_stacktrace=True,
        debug=os.getenv("SENTRY_DEBUG", "0") == "1",
    )
    logging.info(f"Sentry initialized for environment: {environment}")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync stock quantities and export the product catalog with Odoo.")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["sync-stock", "export-catalog"],
        default="sync-stock",
        help="sync-stock (default) pushes quantities from the input file; export-catalog dumps products",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    app_config = get_config(os.getenv("APP_ENV", ""))

    logging.basicConfig(
        level=logging.DEBUG if app_config.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    init_sentry()

    config_manager = ConfigManager()
    files = config_manager.file_names(app_config)

    try:
        settings = OdooSettings.from_env(timeout=config_manager.request_timeout(app_config))
        if args.command == "export-catalog":
            catalog = run_catalog_export(settings, files["catalog_output"])
            logger.info(f"Exported {len(catalog)} products to {files['catalog_output']}")
        else:
            report = run_stock_sync(settings, files["stock_input"], files["report_output"])
            logger.info(f"Processed {report.total} records, report saved to {files['report_output']}")
    except (ConfigError, InputFileError, AuthError, BackendFault) as e:
        logger.error(e.message)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
