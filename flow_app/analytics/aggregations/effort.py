"""Effort and block-time roll-ups."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from flow_app.core.models import Item


@dataclass(slots=True)
class EffortTotals:
    items: int = 0
    total_effort: int = 0
    total_blocked_days: int = 0
    total_estimate: int = 0
    currently_blocked: int = 0


def effort_totals(items: Iterable[Item]) -> EffortTotals:
    totals = EffortTotals()
    for item in items:
        totals.items += 1
        totals.total_effort += item.total_effort
        totals.total_blocked_days += item.total_blocked_days
        totals.total_estimate += item.estimate
        if item.is_currently_blocked:
            totals.currently_blocked += 1
    return totals


def block_periods_frame(items: Iterable[Item]) -> pd.DataFrame:
    """One row per reconstructed block period, keyed by item."""
    columns = [
        "key",
        "block_date",
        "unblock_date",
        "block_status",
        "unblock_status",
        "block_author",
        "unblock_author",
        "blocked_days",
        "still_blocked",
        "block_description",
        "unblock_description",
    ]
    rows = []
    for item in items:
        for period in item.block_history.periods:
            rows.append(
                {
                    "key": item.key,
                    "block_date": period.block_date,
                    "unblock_date": period.unblock_date,
                    "block_status": period.block_status,
                    "unblock_status": period.unblock_status,
                    "block_author": period.block_author,
                    "unblock_author": period.unblock_author,
                    "blocked_days": period.blocked_days,
                    "still_blocked": period.still_blocked,
                    "block_description": period.block_description,
                    "unblock_description": period.unblock_description,
                }
            )
    df = pd.DataFrame(rows, columns=columns)
    df["blocked_days"] = pd.to_numeric(df["blocked_days"], errors="coerce").astype("Int64")
    return df
