"""Header and row checks applied before items are normalized."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .config import REQUIRED_FIELDS, REQUIRED_VALUES
from .models import FieldMapping, RawRow


class MissingColumnsError(ValueError):
    """The export header lacks columns the field mapping requires."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required columns: {', '.join(self.missing)}")


@dataclass(slots=True)
class RowValidation:
    row: RawRow
    line_number: int
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_structure(headers: Iterable[str], mapping: FieldMapping) -> list[str]:
    """Return mapped required columns absent from ``headers``.

    Required keys left unmapped are not reported.
    """
    present = set(headers)
    missing: list[str] = []
    for name in REQUIRED_FIELDS:
        column = mapping.column(name)
        if column and column not in present:
            missing.append(column)
    return missing


def validate_row(row: RawRow, index: int, mapping: FieldMapping) -> RowValidation:
    # index is 0-based over data rows; the header occupies line 1
    result = RowValidation(row=row, line_number=index + 2)
    for name in REQUIRED_VALUES:
        column = mapping.column(name) or name
        value = row.get(column) if mapping.is_mapped(name) else None
        if value is None or not str(value).strip():
            result.errors.append(f"'{column}' is required")
    return result
