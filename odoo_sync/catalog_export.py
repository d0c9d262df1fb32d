"""
Dump stockable product templates with their variants and attribute values.

Output is one record per product.template (type 'product') carrying its own
fields plus:
  - product_product: the template's variants
  - product_template_attribute_line: [{attribute_id: <name>, values: [{id, name}]}]
"""
from __future__ import annotations

import logging

from odoo_sync.file_service import write_json_atomically
from odoo_sync.odoo_client import OdooClient

logger = logging.getLogger(__name__)

TEMPLATE_FIELDS = ["id", "name", "categ_id", "default_code", "list_price", "barcode"]
VARIANT_FIELDS = ["id", "name", "default_code", "lst_price", "barcode", "product_tmpl_id"]
ATTRIBUTE_LINE_FIELDS = ["id", "product_tmpl_id", "attribute_id", "value_ids"]
ATTRIBUTE_VALUE_FIELDS = ["id", "name", "attribute_id"]

VARIANT_EXPORT_KEYS = ("id", "name", "default_code", "lst_price", "barcode")


def _m2o_id(value):
    """Many2one values come back as [id, display_name], or False when empty."""
    return value[0] if isinstance(value, (list, tuple)) and value else None


def _m2o_name(value):
    return value[1] if isinstance(value, (list, tuple)) and len(value) > 1 else None


def combine_catalog(
    templates: list[dict],
    variants: list[dict],
    attribute_lines: list[dict],
    attribute_values: list[dict],
) -> list[dict]:
    """Nest variants and attribute lines under their templates. Pure, no backend calls."""
    values_by_id = {v["id"]: v for v in attribute_values}

    combined = []
    for template in templates:
        tmpl_id = template["id"]

        template_variants = [
            {key: v.get(key) for key in VARIANT_EXPORT_KEYS}
            for v in variants
            if _m2o_id(v.get("product_tmpl_id")) == tmpl_id
        ]

        template_lines = []
        for line in attribute_lines:
            if _m2o_id(line.get("product_tmpl_id")) != tmpl_id:
                continue
            values = [
                {"id": values_by_id[vid]["id"], "name": values_by_id[vid]["name"]}
                for vid in line.get("value_ids") or []
                if vid in values_by_id
            ]
            template_lines.append({"attribute_id": _m2o_name(line.get("attribute_id")), "values": values})

        combined.append({
            **template,
            "product_product": template_variants,
            "product_template_attribute_line": template_lines,
        })

    return combined


def export_catalog(client) -> list[dict]:
    """Fetch templates, variants, attribute lines and values, then combine them."""
    templates = client.search_read("product.template", [("type", "=", "product")], TEMPLATE_FIELDS)
    template_ids = [t["id"] for t in templates]
    logger.info(f"Fetched {len(templates)} stockable product templates")

    variants = client.search_read("product.product", [("product_tmpl_id", "in", template_ids)], VARIANT_FIELDS)
    attribute_lines = client.search_read(
        "product.template.attribute.line",
        [("product_tmpl_id", "in", template_ids)],
        ATTRIBUTE_LINE_FIELDS,
    )

    value_ids = [vid for line in attribute_lines for vid in (line.get("value_ids") or [])]
    attribute_values = client.search_read(
        "product.attribute.value",
        [("id", "in", value_ids)],
        ATTRIBUTE_VALUE_FIELDS,
    )
    logger.info(
        f"Fetched {len(variants)} variants, {len(attribute_lines)} attribute lines, "
        f"{len(attribute_values)} attribute values"
    )

    return combine_catalog(templates, variants, attribute_lines, attribute_values)


def run_catalog_export(settings, output_path, client=None) -> list[dict]:
    client = client or OdooClient(settings)
    client.authenticate()

    catalog = export_catalog(client)
    write_json_atomically(catalog, output_path)
    return catalog
