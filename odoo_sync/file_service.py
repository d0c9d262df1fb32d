import json
import logging
import os
from pathlib import Path

from odoo_sync.exceptions import InputFileError
from odoo_sync.models import StockRecord

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("product_id", "location_id", "quantity")


def _validate_row(row, index: int) -> None:
    if not isinstance(row, dict):
        raise InputFileError(f"Record {index} is not an object")
    missing = [f for f in REQUIRED_FIELDS if f not in row]
    if missing:
        raise InputFileError(f"Record {index} is missing {', '.join(missing)}")
    # A non-string product_id is kept; the sync reports it as an invalid code.
    if not isinstance(row["location_id"], str):
        raise InputFileError(f"Record {index}: location_id must be a string")
    qty = row["quantity"]
    if isinstance(qty, bool) or not isinstance(qty, (int, float)):
        raise InputFileError(f"Record {index}: quantity must be a number, got {qty!r}")


def load_stock_records(path) -> list[StockRecord]:
    """
    Read the stock input file: a JSON array of
    {"product_id": ..., "location_id": ..., "quantity": ...} objects.

    Raises:
        InputFileError: If the file is missing, is not valid JSON, or any
            record has the wrong shape. Nothing is processed in that case.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise InputFileError(f"Input file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Unable to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputFileError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise InputFileError(f"{path} must contain a JSON array of stock records")

    for index, row in enumerate(data):
        _validate_row(row, index)

    logger.info(f"Loaded {len(data)} stock records from {path}")
    return [StockRecord.from_dict(row) for row in data]


def write_json_atomically(data, final_path) -> None:
    """
    Pretty-print ``data`` to a temp file, flush to disk, then atomically
    replace the target so a reader never sees a half-written report.
    """
    final_path = str(final_path)
    parent = os.path.dirname(os.path.abspath(final_path))
    os.makedirs(parent, exist_ok=True)

    tmp_path = f"{final_path}.tmp"
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            try:
                os.fsync(f.fileno())
            except (OSError, AttributeError, ValueError):
                # Ignore if the platform/filesystem doesn't support it
                pass
        os.replace(tmp_path, final_path)
    except Exception:
        logger.error(f"Failed to write {final_path}; removing {tmp_path}")
        try:
            os.remove(tmp_path)
        except OSError:
            pass
        raise

    logger.info(f"Wrote {final_path}")
