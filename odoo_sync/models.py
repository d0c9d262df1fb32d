from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class ProductDescriptor:
    raw: str
    code: Optional[str]                 # text inside the first [...]
    name: str                           # raw minus code and attribute suffix, trimmed
    attributes: Tuple[str, ...] = ()    # trailing (a, b, ...) tokens, in order


@dataclass(frozen=True)
class StockRecord:
    product_id: str                     # raw descriptor; null or non-string ends as "invalid code"
    location_id: str                    # location complete name
    quantity: float

    @classmethod
    def from_dict(cls, row: dict) -> StockRecord:
        return cls(
            product_id=row["product_id"],
            location_id=row["location_id"],
            quantity=row["quantity"],
        )


@dataclass(frozen=True)
class ResolvedProduct:
    id: int
    valid: bool                         # False for non-stockable product types


@dataclass(frozen=True)
class SuccessEntry:
    product: str
    location: str
    quantity: float

    def to_dict(self) -> dict:
        return {"product": self.product, "location": self.location, "quantity": self.quantity}


@dataclass(frozen=True)
class NotFoundEntry:
    product: str
    reason: str

    def to_dict(self) -> dict:
        return {"product": self.product, "reason": self.reason}


@dataclass(frozen=True)
class ErrorEntry:
    product: str
    error: str

    def to_dict(self) -> dict:
        return {"product": self.product, "error": self.error}


Outcome = Union[SuccessEntry, NotFoundEntry, ErrorEntry]


@dataclass
class OutcomeReport:
    success: List[SuccessEntry] = field(default_factory=list)
    not_found: List[NotFoundEntry] = field(default_factory=list)
    errors: List[ErrorEntry] = field(default_factory=list)

    def add(self, outcome: Outcome) -> None:
        """Append an outcome to the bucket matching its type."""
        if isinstance(outcome, SuccessEntry):
            self.success.append(outcome)
        elif isinstance(outcome, NotFoundEntry):
            self.not_found.append(outcome)
        elif isinstance(outcome, ErrorEntry):
            self.errors.append(outcome)
        else:
            raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")

    @property
    def total(self) -> int:
        return len(self.success) + len(self.not_found) + len(self.errors)

    def to_dict(self) -> dict:
        return {
            "success": [e.to_dict() for e in self.success],
            "notFound": [e.to_dict() for e in self.not_found],
            "errors": [e.to_dict() for e in self.errors],
        }
