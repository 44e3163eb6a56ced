"""Per-month and per-type summary tables consumed by percentile/distribution cards."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import pandas as pd

from flow_app.analytics.metrics.binning import bucket_distribution
from flow_app.core.config import DEFAULT_BUCKET_BOUNDARIES, DEFAULT_PERCENTILES, OVERALL_LABEL
from flow_app.core.models import Item

from .grouping import Selector, group_by_month, group_by_type, metric_values
from .stats import mean, percentile_label, summarize

DISTRIBUTION_COLUMNS = ["month_key", "month_label", "type", "bucket", "count", "percentage"]


def _summary_columns(percentiles: Sequence[float]) -> list[str]:
    return ["count", "mean", "median", *[percentile_label(p) for p in percentiles], "min", "max"]


def _all_types(items: Iterable[Item]) -> list[str]:
    return sorted({item.type for item in items if item.type})


def monthly_summary(
    items: Sequence[Item],
    metric: Selector,
    date_selector: Selector,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
) -> pd.DataFrame:
    """One row per month: count, mean, median, percentiles, min and max.

    Months without any non-null metric value are dropped.
    """
    columns = ["month_key", "month_label", *_summary_columns(percentiles)]
    rows = []
    for group in group_by_month(items, date_selector):
        summary = summarize(metric_values(group.items, metric), percentiles)
        if summary.count == 0:
            continue
        rows.append({"month_key": group.month_key, "month_label": group.month_label, **summary.as_row()})
    return pd.DataFrame(rows, columns=columns)


def type_percentiles(
    items: Sequence[Item],
    metric: Selector,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
) -> pd.DataFrame:
    """Summary per item type over the whole set; types with no values are omitted."""
    columns = ["type", *_summary_columns(percentiles)]
    rows = []
    for type_name, members in group_by_type(items).items():
        summary = summarize(metric_values(members, metric), percentiles)
        if summary.count == 0:
            continue
        rows.append({"type": type_name, **summary.as_row()})
    return pd.DataFrame(rows, columns=columns)


def monthly_percentiles_by_type(
    items: Sequence[Item],
    metric: Selector,
    date_selector: Selector,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
    *,
    include_overall: bool = False,
) -> pd.DataFrame:
    """Month × type summary table.

    Every type present anywhere in ``items`` gets a row in every month, with
    ``count == 0`` and empty statistics where the month has no values for
    it. With ``include_overall`` an extra block labelled "Média Geral"
    (``month_key == "average"``) summarizes all months together, keeping
    only types that have values.
    """
    columns = ["month_key", "month_label", "type", *_summary_columns(percentiles)]
    types = _all_types(items)
    rows = []
    for group in group_by_month(items, date_selector):
        by_type = group_by_type(group.items)
        for type_name in types:
            summary = summarize(metric_values(by_type.get(type_name, []), metric), percentiles)
            rows.append(
                {
                    "month_key": group.month_key,
                    "month_label": group.month_label,
                    "type": type_name,
                    **summary.as_row(),
                }
            )
    if include_overall:
        # The overall block covers only items that fall into some month
        dated = [item for group in group_by_month(items, date_selector) for item in group.items]
        overall = type_percentiles(dated, metric, percentiles)
        if not overall.empty:
            overall.insert(0, "month_label", OVERALL_LABEL)
            overall.insert(0, "month_key", "average")
            rows.extend(overall.to_dict(orient="records"))
    return pd.DataFrame(rows, columns=columns)


def monthly_mean_by_type(items: Sequence[Item], metric: Selector, date_selector: Selector) -> pd.DataFrame:
    """Wide table of mean metric per type, one row per month (chart series)."""
    rows = []
    for group in group_by_month(items, date_selector):
        row: dict[str, object] = {"month_key": group.month_key, "month_label": group.month_label}
        for type_name, members in group_by_type(group.items).items():
            if not type_name:
                continue
            value = mean(metric_values(members, metric))
            if value is not None:
                row[type_name] = value
        if len(row) > 2:
            rows.append(row)
    if not rows:
        return pd.DataFrame(columns=["month_key", "month_label"])
    return pd.DataFrame(rows)


def _distribution_rows(month_key, month_label, type_name, values, boundaries) -> list[dict]:
    return [
        {
            "month_key": month_key,
            "month_label": month_label,
            "type": type_name,
            "bucket": bucket.label,
            "count": bucket.count,
            "percentage": bucket.percentage,
        }
        for bucket in bucket_distribution(values, boundaries)
    ]


def type_distribution(
    items: Sequence[Item],
    metric: Selector,
    boundaries: Sequence[float] = DEFAULT_BUCKET_BOUNDARIES,
) -> pd.DataFrame:
    """Long table of bucket counts per type (no month split)."""
    rows: list[dict] = []
    for type_name, members in group_by_type(items).items():
        values = metric_values(members, metric)
        rows.extend(_distribution_rows(None, None, type_name, values, boundaries))
    return pd.DataFrame(rows, columns=DISTRIBUTION_COLUMNS)


def monthly_distribution_by_type(
    items: Sequence[Item],
    metric: Selector,
    date_selector: Selector,
    boundaries: Sequence[float] = DEFAULT_BUCKET_BOUNDARIES,
) -> pd.DataFrame:
    """Long table of bucket counts per month × type.

    As with the percentile table, every known type appears in every month;
    an empty group reports zero counts and zero percentages.
    """
    types = _all_types(items)
    rows: list[dict] = []
    for group in group_by_month(items, date_selector):
        by_type = group_by_type(group.items)
        for type_name in types:
            values = metric_values(by_type.get(type_name, []), metric)
            rows.extend(_distribution_rows(group.month_key, group.month_label, type_name, values, boundaries))
    return pd.DataFrame(rows, columns=DISTRIBUTION_COLUMNS)
