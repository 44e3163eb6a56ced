"""Pure helpers to build lead/delivery/discovery view context (no UI)."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Sequence
from dataclasses import dataclass, field

import pandas as pd

from flow_app.analytics.aggregations import monthly
from flow_app.analytics.segments import filters as seg
from flow_app.core.config import DEFAULT_BUCKET_BOUNDARIES, DEFAULT_PERCENTILES
from flow_app.core.models import Item


@dataclass(frozen=True, slots=True)
class MetricView:
    """Pairs a day-count metric with the date its months are keyed on."""

    name: str
    metric: str
    date_selector: str
    segment: Callable[[Iterable[Item]], list[Item]]


LEAD_TIME_VIEW = MetricView("Lead Time", "lead_time", "resolved", seg.lead_time_items)
DELIVERY_VIEW = MetricView("Delivery", "delivery_time", "delivery_end", seg.delivery_items)
DISCOVERY_VIEW = MetricView("Discovery", "discovery_time", "discovery_end", seg.discovery_items)


@dataclass(slots=True)
class MetricViewContext:
    view: MetricView
    items: list[Item]
    areas: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    monthly_summary: pd.DataFrame = field(default_factory=pd.DataFrame)
    monthly_percentiles: pd.DataFrame = field(default_factory=pd.DataFrame)
    type_percentiles: pd.DataFrame = field(default_factory=pd.DataFrame)
    monthly_distribution: pd.DataFrame = field(default_factory=pd.DataFrame)
    type_distribution: pd.DataFrame = field(default_factory=pd.DataFrame)
    monthly_mean_by_type: pd.DataFrame = field(default_factory=pd.DataFrame)


def build_metric_context(
    items: Sequence[Item],
    view: MetricView = LEAD_TIME_VIEW,
    *,
    areas: Collection[str] | None = None,
    types: Collection[str] | None = None,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
    boundaries: Sequence[float] = DEFAULT_BUCKET_BOUNDARIES,
) -> MetricViewContext:
    """Build every table a metric page shows.

    Parameters
    ----------
    items : sequence of Item
        Full processed item set.
    view : MetricView
        Metric/date pairing; its segment filter selects eligible items.
    areas, types : collections of str, optional
        Exact-match selections applied after segmenting; empty means all.
    percentiles : sequence of float
        Percentiles for the summary tables.
    boundaries : sequence of float
        Bucket upper bounds for the distribution tables.

    Returns
    -------
    MetricViewContext
        Segment, filter options and summary tables.
    """
    segment = view.segment(items)
    ctx = MetricViewContext(
        view=view,
        items=[],
        areas=seg.unique_values(segment, "area"),
        types=seg.unique_values(segment, "type"),
    )
    selected = seg.filter_items(segment, areas=areas, types=types)
    ctx.items = selected
    if not selected:
        return ctx

    ctx.monthly_summary = monthly.monthly_summary(selected, view.metric, view.date_selector, percentiles)
    ctx.monthly_percentiles = monthly.monthly_percentiles_by_type(
        selected, view.metric, view.date_selector, percentiles, include_overall=True
    )
    ctx.type_percentiles = monthly.type_percentiles(selected, view.metric, percentiles)
    ctx.monthly_distribution = monthly.monthly_distribution_by_type(
        selected, view.metric, view.date_selector, boundaries
    )
    ctx.type_distribution = monthly.type_distribution(selected, view.metric, boundaries)
    ctx.monthly_mean_by_type = monthly.monthly_mean_by_type(selected, view.metric, view.date_selector)
    return ctx
