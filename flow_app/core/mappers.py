"""Mapping raw export rows into Item instances."""

from __future__ import annotations

import math
from collections.abc import Iterable

import pandas as pd

from .blocks import parse_block_history
from .config import ITEM_TABLE_COLUMNS, SECONDS_PER_WORKDAY
from .dates import days_between
from .models import FieldMapping, Item, RawRow


def parse_estimate(value: str | None) -> int:
    """Convert an estimate in seconds to 8-hour workdays, rounding half up."""
    if not value or not isinstance(value, str):
        return 0
    try:
        seconds = float(value)
    except ValueError:
        return 0
    if not math.isfinite(seconds):
        return 0
    return math.floor(seconds / SECONDS_PER_WORKDAY + 0.5)


def _or_none(value: str | None) -> str | None:
    return value or None


def normalize_row(row: RawRow, mapping: FieldMapping) -> Item:
    def get(name: str) -> str | None:
        return mapping.value(row, name)

    created = get("created")
    resolved = get("resolved")
    delivery_start = get("delivery_start")
    delivery_end = get("delivery_end")
    discovery_start = get("discovery_start")
    discovery_end = get("discovery_end")
    approval = get("approval")
    refinement = get("refinement")
    release = get("release")

    analysis_to_approval = days_between(discovery_start, approval) or 0
    refinement_to_prioritization = days_between(discovery_end, refinement) or 0
    sprint_to_review = days_between(delivery_start, delivery_end) or 0
    release_to_done = days_between(release, resolved) or 0

    block_annotation = _or_none(get("block"))

    return Item(
        key=get("key") or "",
        type=get("type") or "",
        status=_or_none(get("status")),
        area=_or_none(get("area")),
        created=created,
        resolved=resolved,
        delivery_start=delivery_start,
        delivery_end=delivery_end,
        discovery_start=discovery_start,
        discovery_end=discovery_end,
        approval=approval,
        refinement=refinement,
        release=release,
        lead_time=days_between(created, resolved),
        delivery_time=days_between(delivery_start, delivery_end),
        discovery_time=days_between(discovery_start, discovery_end),
        analysis_to_approval=analysis_to_approval,
        refinement_to_prioritization=refinement_to_prioritization,
        sprint_to_review=sprint_to_review,
        release_to_done=release_to_done,
        total_effort=(
            analysis_to_approval + refinement_to_prioritization + sprint_to_review + release_to_done
        ),
        estimate=parse_estimate(get("estimate")),
        block_annotation=block_annotation,
        block_history=parse_block_history(block_annotation),
    )


def normalize_rows(rows: Iterable[RawRow], mapping: FieldMapping) -> tuple[Item, ...]:
    return tuple(normalize_row(row, mapping) for row in rows)


def items_to_dataframe(items: Iterable[Item]) -> pd.DataFrame:
    rows = []
    for i in items:
        rows.append(
            {
                "key": i.key,
                "type": i.type,
                "status": i.status,
                "area": i.area,
                "created": i.created,
                "resolved": i.resolved,
                "lead_time": i.lead_time,
                "discovery_time": i.discovery_time,
                "delivery_time": i.delivery_time,
                "analysis_to_approval": i.analysis_to_approval,
                "refinement_to_prioritization": i.refinement_to_prioritization,
                "sprint_to_review": i.sprint_to_review,
                "release_to_done": i.release_to_done,
                "total_effort": i.total_effort,
                "estimate": i.estimate,
                "block_periods": len(i.block_history.periods),
                "total_blocked_days": i.total_blocked_days,
                "is_currently_blocked": i.is_currently_blocked,
            }
        )
    df = pd.DataFrame(rows, columns=list(ITEM_TABLE_COLUMNS))
    # Nullable integers keep missing day counts as <NA> instead of float NaN
    for col in ("lead_time", "discovery_time", "delivery_time"):
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("Int64")
    return df
