import json
import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

from config import Config
from odoo_sync.exceptions import ConfigError


# Configure logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OdooSettings:
    url: str
    database: str
    username: str
    password: str
    timeout: float = Config.REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, timeout: float = Config.REQUEST_TIMEOUT) -> "OdooSettings":
        """
        Build settings from environment variables (a .env file is honoured).

        ODOO_DB is preferred; ODOO_BD is accepted for older .env files.

        Raises:
            ConfigError: If any of the required variables is missing or blank.
        """
        load_dotenv()

        values = {
            "ODOO_URL": os.getenv("ODOO_URL"),
            "ODOO_DB": os.getenv("ODOO_DB") or os.getenv("ODOO_BD"),
            "ODOO_USERNAME": os.getenv("ODOO_USERNAME"),
            "ODOO_PASSWORD": os.getenv("ODOO_PASSWORD"),
        }
        missing = [key for key, value in values.items() if not (value or "").strip()]
        if missing:
            raise ConfigError(f"Missing Odoo settings: {', '.join(missing)}")

        return cls(
            url=values["ODOO_URL"].strip().rstrip("/"),
            database=values["ODOO_DB"].strip(),
            username=values["ODOO_USERNAME"].strip(),
            password=values["ODOO_PASSWORD"],
            timeout=timeout,
        )


class ConfigManager:
    def __init__(self, config_path="config.json"):
        self._config_path = config_path
        self._resolved_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), self._config_path)
        self.config = self._load_config()

    @property
    def resolved_path(self):
        return self._resolved_path

    def _load_config(self):
        """Load configuration from the file or initialize an empty config."""
        path = self._resolved_path
        if os.path.exists(path):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
            except json.JSONDecodeError:
                logger.error(f"Invalid JSON in {path}. Loading empty configuration.")
        return {}

    def get(self, *keys, default=None):
        """
        Access nested values.
        Supports both:
          get("a", "b", "c")  and  get("a.b.c")
        """
        # Allow a single dotted string
        if len(keys) == 1 and isinstance(keys[0], str) and "." in keys[0]:
            keys = keys[0].split(".")

        node = self.config
        for k in keys:
            if isinstance(node, dict) and k in node:
                node = node[k]
            else:
                return default
        return node

    def file_names(self, base: type[Config] = Config) -> dict:
        """Input/output file names, config.json overriding the class defaults."""
        return {
            "stock_input": self.get("files.stock_input", default=base.STOCK_INPUT_FILE),
            "report_output": self.get("files.report_output", default=base.REPORT_OUTPUT_FILE),
            "catalog_output": self.get("files.catalog_output", default=base.CATALOG_OUTPUT_FILE),
        }

    def request_timeout(self, base: type[Config] = Config) -> float:
        return float(self.get("odoo.timeout", default=base.REQUEST_TIMEOUT))
