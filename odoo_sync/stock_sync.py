"""
Push on-hand quantities from a JSON file into Odoo as stock.quant records.

Each input record is taken through parse -> product -> location -> create
and ends in exactly one bucket of the OutcomeReport. Records are handled
one at a time in input order; a failure on one record is reported against
that record and the run moves on to the next.
"""
from __future__ import annotations

import logging
from typing import Iterable

from odoo_sync.descriptor import parse
from odoo_sync.exceptions import BackendFault
from odoo_sync.file_service import load_stock_records, write_json_atomically
from odoo_sync.location_resolver import LocationResolver
from odoo_sync.models import (
    ErrorEntry,
    NotFoundEntry,
    Outcome,
    OutcomeReport,
    StockRecord,
    SuccessEntry,
)
from odoo_sync.odoo_client import OdooClient
from odoo_sync.product_resolver import ProductResolver

logger = logging.getLogger(__name__)

QUANT_MODEL = "stock.quant"

REASON_INVALID_CODE = "invalid code"
REASON_PRODUCT_NOT_FOUND = "product not found"
REASON_PRODUCT_NOT_VALID = "product not valid for inventory"
REASON_LOCATION_NOT_FOUND = "location not found"


def _error_message(exc: Exception) -> str:
    if isinstance(exc, BackendFault):
        return exc.message
    return str(exc) or type(exc).__name__


def process_record(
    record: StockRecord,
    products: ProductResolver,
    locations: LocationResolver,
    client,
) -> Outcome:
    """Run one record to its terminal outcome. Never raises for backend or data problems."""
    product = record.product_id
    try:
        descriptor = parse(product)
        if not isinstance(product, str) or not descriptor.code:
            return NotFoundEntry(product=product, reason=REASON_INVALID_CODE)

        resolved = products.resolve(descriptor)
        if resolved is None:
            return NotFoundEntry(product=product, reason=REASON_PRODUCT_NOT_FOUND)
        if not resolved.valid:
            return NotFoundEntry(product=product, reason=REASON_PRODUCT_NOT_VALID)

        location_id = locations.resolve(record.location_id)
        if location_id is None:
            return NotFoundEntry(product=product, reason=REASON_LOCATION_NOT_FOUND)

        quant_id = client.create(QUANT_MODEL, {
            "product_id": resolved.id,
            "location_id": location_id,
            "quantity": record.quantity,
        })
        logger.debug(f"stock.quant {quant_id} created for {product!r}")
        return SuccessEntry(product=product, location=record.location_id, quantity=record.quantity)

    except Exception as e:
        logger.error(f"Error processing {product!r}: {e}")
        return ErrorEntry(product=product, error=_error_message(e))


def sync_stock(records: Iterable[StockRecord], client) -> OutcomeReport:
    """
    Process every record in order and fold the outcomes into a new report.

    The client must already be authenticated.
    """
    products = ProductResolver(client)
    locations = LocationResolver(client)
    report = OutcomeReport()

    for index, record in enumerate(records, start=1):
        outcome = process_record(record, products, locations, client)
        report.add(outcome)

        if isinstance(outcome, SuccessEntry):
            logger.info(f"[{index}] {record.product_id} @ {record.location_id}: {record.quantity}")
        elif isinstance(outcome, NotFoundEntry):
            logger.warning(f"[{index}] {record.product_id}: {outcome.reason}")

    logger.info(
        f"Stock sync finished: {len(report.success)} ok, "
        f"{len(report.not_found)} not found, {len(report.errors)} errors"
    )
    return report


def run_stock_sync(settings, input_path, output_path, client=None) -> OutcomeReport:
    """
    Load the input file, authenticate, sync, and write the report.

    Input and authentication failures propagate (InputFileError, AuthError)
    before any record is processed, and no report is written in that case.
    """
    records = load_stock_records(input_path)

    client = client or OdooClient(settings)
    client.authenticate()

    report = sync_stock(records, client)
    write_json_atomically(report.to_dict(), output_path)
    return report
