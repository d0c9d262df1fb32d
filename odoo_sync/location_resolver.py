import logging

logger = logging.getLogger(__name__)

LOCATION_MODEL = "stock.location"


class LocationResolver:
    """Exact lookup of stock.location by complete name (e.g. 'WH/Stock'). No caching."""

    def __init__(self, client):
        self.client = client

    def resolve(self, name: str) -> int | None:
        name = (name or "").strip()
        if not name:
            return None
        record = self.client.search_one(LOCATION_MODEL, [("complete_name", "=", name)], ["id", "complete_name"])
        if record is None:
            logger.debug(f"No location named {name!r}")
            return None
        return record["id"]
