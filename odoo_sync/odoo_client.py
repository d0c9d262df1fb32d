import itertools
import logging

import requests

from odoo_sync.config_service import OdooSettings
from odoo_sync.exceptions import AuthError, BackendFault


logger = logging.getLogger(__name__)


class OdooClient:
    """
    Encapsulates a session against an Odoo backend over its JSON-RPC endpoint.

    Every public call is a single HTTP round trip. There is no retry and no
    pagination; a search returning no rows is a normal result, not a fault.

    Attributes:
        settings (OdooSettings): URL, database and credentials for the backend.
        uid (int | None): Session user id, set by authenticate().
    """

    def __init__(self, settings: OdooSettings, http_client=None):
        """
        Args:
            settings (OdooSettings): Connection settings.
            http_client: Object with a requests-style ``post``. Defaults to a
                new ``requests.Session``.
        """
        self.settings = settings
        self.endpoint = f"{settings.url.rstrip('/')}/jsonrpc"
        self.http_client = http_client or requests.Session()
        self.uid = None
        self._ids = itertools.count(1)

    def call(self, service: str, method: str, *args):
        """
        Invoke ``service.method(*args)`` and return its result.

        Raises:
            BackendFault: On transport errors, HTTP error statuses, unreadable
                responses, or an error member in the JSON-RPC reply.
        """
        payload = {
            "jsonrpc": "2.0",
            "method": "call",
            "params": {"service": service, "method": method, "args": list(args)},
            "id": next(self._ids),
        }

        try:
            response = self.http_client.post(self.endpoint, json=payload, timeout=self.settings.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {self.endpoint} failed: {e}")
            raise BackendFault(f"Request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Unreadable response from {self.endpoint}: {e}")
            raise BackendFault(f"Unreadable response: {e}") from e

        if not isinstance(body, dict):
            logger.error(f"Unreadable response from {self.endpoint}: {body!r}")
            raise BackendFault(f"Unreadable response: expected a JSON object, got {type(body).__name__}")

        error = body.get("error")
        if error:
            if not isinstance(error, dict):
                error = {"message": str(error)}
            data = error.get("data")
            if not isinstance(data, dict):
                data = {}
            message = data.get("message") or error.get("message") or "Unknown Odoo error"
            logger.error(f"Odoo fault in {service}.{method}: {message}")
            raise BackendFault(message, data=data)

        return body.get("result")

    def authenticate(self) -> int:
        """
        Log in once and keep the uid for the rest of the run.

        Raises:
            AuthError: If Odoo rejects the credentials or the call faults.
        """
        s = self.settings
        try:
            uid = self.call("common", "authenticate", s.database, s.username, s.password, {})
        except BackendFault as e:
            raise AuthError(f"Error authenticating against Odoo: {e.message}") from e

        if not uid:
            raise AuthError(f"Odoo rejected the credentials for {s.username} on {s.database}")

        logger.info(f"Authenticated against {s.url} (database {s.database}) as uid {uid}")
        self.uid = uid
        return uid

    def execute_kw(self, model: str, method: str, args: list, kwargs: dict | None = None):
        if self.uid is None:
            raise AuthError("Not authenticated. Call authenticate() first.")
        s = self.settings
        return self.call("object", "execute_kw", s.database, self.uid, s.password, model, method, args, kwargs or {})

    def search_read(self, model: str, domain: list, fields: list[str], limit: int | None = None) -> list[dict]:
        """Return the records of ``model`` matching ``domain``, possibly empty."""
        kwargs = {"fields": fields}
        if limit:
            kwargs["limit"] = limit
        records = self.execute_kw(model, "search_read", [domain], kwargs) or []
        logger.debug(f"{model} {domain} -> {records}")
        return records

    def search_one(self, model: str, domain: list, fields: list[str]) -> dict | None:
        """
        Return the first record matching ``domain`` or None.

        Two rows are requested so an ambiguous match can be reported; the
        first one is still returned.
        """
        records = self.search_read(model, domain, fields, limit=2)
        if not records:
            return None
        if len(records) > 1:
            logger.warning(f"Ambiguous match in {model} for {domain}; using id {records[0].get('id')}")
        return records[0]

    def create(self, model: str, values: dict) -> int:
        new_id = self.execute_kw(model, "create", [values])
        logger.debug(f"Created {model} {new_id}: {values}")
        return new_id
