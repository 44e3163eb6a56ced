"""MetricsService: orchestrates validation and normalization of export rows."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

import pandas as pd

from .field_config import default_field_mapping
from .mappers import normalize_row
from .models import FieldMapping, Item, RawRow
from .validation import MissingColumnsError, RowValidation, validate_row, validate_structure

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


@dataclass(slots=True)
class ProcessingResult:
    items: tuple[Item, ...] = ()
    rejected: list[RowValidation] = field(default_factory=list)
    total_rows: int = 0

    @property
    def valid_rows(self) -> int:
        return len(self.items)


def rows_from_frame(df: pd.DataFrame) -> list[dict[str, str]]:
    """Turn a parsed export frame into raw rows of strings (missing -> "")."""
    if df.empty:
        return []
    clean = df.astype(object).where(df.notna(), "")
    return [{str(col): str(val) for col, val in rec.items()} for rec in clean.to_dict(orient="records")]


class MetricsService:
    def __init__(self, mapping: FieldMapping | None = None):
        self.mapping = mapping or default_field_mapping()

    def process(
        self,
        rows: Iterable[RawRow],
        *,
        headers: Sequence[str] | None = None,
        mapping: FieldMapping | None = None,
        progress: ProgressCallback | None = None,
    ) -> ProcessingResult:
        """Run one processing pass over ``rows``.

        When ``headers`` is given, the mapped required columns must all be
        present or ``MissingColumnsError`` is raised before any row is read.
        Rows without key/type are collected in ``rejected``; every other
        row becomes an Item. Nothing is kept between calls.
        """
        mapping = mapping or self.mapping
        if headers is not None:
            missing = validate_structure(headers, mapping)
            if missing:
                raise MissingColumnsError(missing)

        materialized = list(rows)
        total = len(materialized)
        if progress:
            progress("Validating rows", 0, total)

        items: list[Item] = []
        rejected: list[RowValidation] = []
        for idx, row in enumerate(materialized):
            check = validate_row(row, idx, mapping)
            if not check.is_valid:
                rejected.append(check)
                continue
            items.append(normalize_row(row, mapping))
            if progress:
                progress("Deriving item metrics", idx + 1, total)

        if rejected:
            logger.warning(
                "Rejected %s of %s rows (first at line %s: %s)",
                len(rejected),
                total,
                rejected[0].line_number,
                "; ".join(rejected[0].errors),
            )
        logger.info("Processed %s items from %s rows", len(items), total)
        return ProcessingResult(items=tuple(items), rejected=rejected, total_rows=total)

    def process_frame(
        self,
        df: pd.DataFrame,
        *,
        mapping: FieldMapping | None = None,
        progress: ProgressCallback | None = None,
    ) -> ProcessingResult:
        headers = [str(col) for col in df.columns]
        return self.process(rows_from_frame(df), headers=headers, mapping=mapping, progress=progress)
