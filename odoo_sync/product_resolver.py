from __future__ import annotations

import logging

from odoo_sync.models import ProductDescriptor, ResolvedProduct

logger = logging.getLogger(__name__)

PRODUCT_MODEL = "product.product"
ATTRIBUTE_VALUE_MODEL = "product.attribute.value"
PRODUCT_FIELDS = ["id", "name", "default_code", "type"]

# Odoo product types that carry on-hand quantities ("consu" and "service" do not).
STOCKABLE_TYPES = frozenset({"product"})


def is_stockable(record: dict) -> bool:
    return record.get("type") in STOCKABLE_TYPES


class ProductResolver:
    """
    Map a parsed descriptor to a product.product record.

    Strategies are tried in order and the first hit wins, so a match on
    code skips the name and attribute lookups entirely:
      1) default_code, narrowed by exact name and by every attribute value
      2) exact name
      3) first attribute only, via its product.attribute.value id
    """

    def __init__(self, client):
        self.client = client

    def resolve(self, descriptor: ProductDescriptor) -> ResolvedProduct | None:
        record = (
            self._by_code(descriptor)
            or self._by_name(descriptor)
            or self._by_first_attribute(descriptor)
        )
        if record is None:
            logger.debug(f"No product for {descriptor.raw!r}")
            return None

        valid = is_stockable(record)
        if not valid:
            logger.info(f"Product {record.get('id')} ({descriptor.raw!r}) is type {record.get('type')!r}, not stockable")
        return ResolvedProduct(id=record["id"], valid=valid)

    def _by_code(self, descriptor: ProductDescriptor) -> dict | None:
        if not descriptor.code:
            return None
        domain = [("default_code", "=", descriptor.code)]
        if descriptor.name:
            domain.append(("name", "=", descriptor.name))
        for attr in descriptor.attributes:
            domain.append(("product_template_attribute_value_ids.name", "=", attr))
        return self.client.search_one(PRODUCT_MODEL, domain, PRODUCT_FIELDS)

    def _by_name(self, descriptor: ProductDescriptor) -> dict | None:
        if not descriptor.name:
            return None
        return self.client.search_one(PRODUCT_MODEL, [("name", "=", descriptor.name)], PRODUCT_FIELDS)

    def _by_first_attribute(self, descriptor: ProductDescriptor) -> dict | None:
        # Only the first attribute is used; multi-attribute disambiguation is not attempted here.
        if not descriptor.attributes:
            return None
        value = self.client.search_one(
            ATTRIBUTE_VALUE_MODEL,
            [("name", "=", descriptor.attributes[0])],
            ["id", "name"],
        )
        if value is None:
            return None
        return self.client.search_one(
            PRODUCT_MODEL,
            [("product_template_attribute_value_ids.product_attribute_value_id", "in", [value["id"]])],
            PRODUCT_FIELDS,
        )
