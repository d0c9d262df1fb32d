import pytest

from odoo_sync.config_service import OdooSettings
from test_helpers import FakeCatalogClient, make_location, make_product


@pytest.fixture
def odoo_settings():
    """Fixture for connection settings pointing at a dummy backend."""
    return OdooSettings(
        url="https://odoo.example.com",
        database="testdb",
        username="tester@example.com",
        password="secret",
        timeout=5,
    )


@pytest.fixture
def catalog_records():
    """Fixture for a small Odoo catalog: products, attribute values and locations."""
    return {
        "product.product": [
            make_product(42, "X1", "Foo"),
            make_product(43, "ABC123", "Widget", attributes=["Red", "Large"], attribute_value_ids=[7, 9]),
            make_product(44, "ABC123", "Widget", attributes=["Blue", "Large"], attribute_value_ids=[8, 9]),
            make_product(50, "SRV1", "Installation", type="service"),
            make_product(51, "CNS1", "Glue", type="consu"),
            make_product(60, "OLD9", "Renamed Lamp"),
            make_product(70, "TSH", "T-Shirt", attributes=["Green"], attribute_value_ids=[11]),
        ],
        "product.attribute.value": [
            {"id": 7, "name": "Red"},
            {"id": 8, "name": "Blue"},
            {"id": 9, "name": "Large"},
            {"id": 11, "name": "Green"},
        ],
        "stock.location": [
            make_location(7, "WH/Stock"),
            make_location(8, "WH/Stock/Shelf 1"),
        ],
    }


@pytest.fixture
def fake_client(catalog_records):
    """Fixture for an authenticated in-memory catalog client."""
    client = FakeCatalogClient(records=catalog_records)
    client.authenticate()
    return client
