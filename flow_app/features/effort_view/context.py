"""Pure helpers to build effort/block view context (no UI)."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field

import pandas as pd

from flow_app.analytics.aggregations.effort import EffortTotals, block_periods_frame, effort_totals
from flow_app.analytics.segments import filters as seg
from flow_app.core.config import SETTINGS
from flow_app.core.mappers import items_to_dataframe
from flow_app.core.models import Item


@dataclass(slots=True)
class EffortViewContext:
    items: list[Item]
    totals: EffortTotals
    table: pd.DataFrame = field(default_factory=pd.DataFrame)
    block_periods: pd.DataFrame = field(default_factory=pd.DataFrame)
    types: list[str] = field(default_factory=list)
    areas: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)


def build_effort_context(
    items: Sequence[Item],
    *,
    types: Collection[str] | None = None,
    areas: Collection[str] | None = None,
    statuses: Collection[str] | None = None,
) -> EffortViewContext:
    # selections compare accent-free lowercase labels
    selected = seg.filter_items(items, types=types, areas=areas, statuses=statuses, normalize=True)
    return EffortViewContext(
        items=selected,
        totals=effort_totals(selected),
        table=items_to_dataframe(selected).head(SETTINGS.max_table_rows),
        block_periods=block_periods_frame(selected),
        types=seg.unique_values(items, "type"),
        areas=seg.unique_values(items, "area"),
        statuses=seg.unique_values(items, "status"),
    )
