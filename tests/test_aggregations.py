import pytest

from flow_app.analytics.aggregations.grouping import group_by_month, group_by_type, metric_values
from flow_app.analytics.aggregations.monthly import (
    monthly_distribution_by_type,
    monthly_mean_by_type,
    monthly_percentiles_by_type,
    monthly_summary,
    type_distribution,
    type_percentiles,
)
from flow_app.analytics.aggregations.stats import mean, median, percentile, round_half_up, summarize
from flow_app.analytics.metrics.binning import assign_buckets, bucket_distribution, bucket_labels
from flow_app.core.models import Item


def _items():
    return [
        Item(key="A-1", type="Story", resolved="10/mar/24 10:00 AM", lead_time=10),
        Item(key="A-2", type="Story", resolved="28/mar/24 04:00 PM", lead_time=40),
        Item(key="A-3", type="Task", resolved="02/jan/24 09:00 AM", lead_time=70),
        Item(key="A-4", type="Task", resolved="15/jan/24 09:00 AM", lead_time=200),
        Item(key="A-5", type="Story", resolved="", lead_time=5),
        Item(key="A-6", type="Story", resolved="31/xyz/24 10:00 AM", lead_time=7),
        Item(key="A-7", type="Task", resolved="05/mar/24 11:00 AM", lead_time=None),
    ]


def test_percentile_interpolation():
    assert percentile([1, 2, 3, 4], 0.5) == 2.5
    assert percentile([1, 2, 3], 0.5) == 2
    assert percentile([1, 2, 3, 4], 0) == 1
    assert percentile([1, 2, 3, 4], 1) == 4
    assert percentile([10, 20], 0.85) == pytest.approx(18.5)
    assert percentile([7], 0.95) == 7
    assert percentile([], 0.5) is None


def test_median():
    assert median([4, 1, 3, 2]) == 2.5
    assert median([3, 1, 2]) == 2
    assert median([]) is None


def test_round_half_up():
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(None) is None


def test_summarize():
    summary = summarize([3, None, 1, 2, 4])
    assert summary.count == 4
    assert summary.mean == 2.5
    assert summary.median == 2.5
    assert summary.minimum == 1
    assert summary.maximum == 4
    assert set(summary.percentiles) == {0.95, 0.85, 0.70}
    empty = summarize([])
    assert empty.count == 0
    assert empty.mean is None
    assert empty.percentiles[0.95] is None


def test_bucket_distribution_counts():
    buckets = bucket_distribution([10, 40, 70, 200], [30, 60, 90, 180])
    assert [b.count for b in buckets] == [1, 1, 1, 0, 1]
    assert sum(b.percentage for b in buckets) == pytest.approx(100)
    assert buckets[0].upper == 30 and buckets[0].lower is None
    assert buckets[-1].lower == 180 and buckets[-1].upper is None


def test_bucket_boundaries_are_inclusive():
    buckets = bucket_distribution([30, 31, 60, 90, 180, 181], [30, 60, 90, 180])
    assert [b.count for b in buckets] == [1, 2, 1, 1, 1]


def test_bucket_distribution_empty_group():
    buckets = bucket_distribution([None], [30, 60])
    assert [b.count for b in buckets] == [0, 0, 0]
    assert [b.percentage for b in buckets] == [0.0, 0.0, 0.0]


def test_bucket_labels():
    assert bucket_labels([30, 60, 90, 180]) == [
        "até 30 dias",
        "31–60 dias",
        "61–90 dias",
        "91–180 dias",
        "acima de 180 dias",
    ]


def test_group_by_month_orders_and_excludes_unparseable():
    items = _items()
    groups = group_by_month(items, "resolved")
    assert [g.month_key for g in groups] == ["2024-01", "2024-03"]
    assert [g.month_label for g in groups] == ["janeiro de 2024", "março de 2024"]
    assert [i.key for i in groups[1].items] == ["A-1", "A-2", "A-7"]
    assert sum(len(g.items) for g in groups) == 5


def test_group_by_month_with_callable_selector():
    groups = group_by_month(_items(), lambda item: item.resolved if item.type == "Task" else None)
    assert [g.month_key for g in groups] == ["2024-01", "2024-03"]
    assert sum(len(g.items) for g in groups) == 3


def test_group_by_type_exact_match():
    items = _items() + [Item(key="B-1", type="story")]
    grouped = group_by_type(items)
    assert list(grouped) == ["Story", "Task", "story"]
    assert len(grouped["Story"]) == 4


def test_metric_values_skip_none():
    assert metric_values(_items(), "lead_time") == [10, 40, 70, 200, 5, 7]


def test_monthly_summary_frame():
    df = monthly_summary(_items(), "lead_time", "resolved")
    assert list(df["month_key"]) == ["2024-01", "2024-03"]
    jan = df.iloc[0]
    assert jan["count"] == 2
    assert jan["mean"] == 135
    assert jan["median"] == 135
    assert jan["min"] == 70 and jan["max"] == 200
    assert {"p95", "p85", "p70"} <= set(df.columns)
    # March has a Task with no lead time; it is not counted
    assert df.iloc[1]["count"] == 2


def test_monthly_percentiles_by_type_includes_zero_rows_and_overall():
    df = monthly_percentiles_by_type(_items(), "lead_time", "resolved", include_overall=True)
    months = df[df["month_key"] != "average"]
    assert len(months) == 4  # 2 months x 2 types
    jan_story = months[(months["month_key"] == "2024-01") & (months["type"] == "Story")].iloc[0]
    assert jan_story["count"] == 0
    overall = df[df["month_key"] == "average"]
    assert set(overall["type"]) == {"Story", "Task"}
    assert set(overall["month_label"]) == {"Média Geral"}
    assert overall[overall["type"] == "Story"].iloc[0]["count"] == 2


def test_type_percentiles_whole_set():
    df = type_percentiles(_items(), "lead_time")
    story = df[df["type"] == "Story"].iloc[0]
    assert story["count"] == 4
    assert story["min"] == 5 and story["max"] == 40


def test_distribution_frames():
    df = type_distribution(_items(), "lead_time")
    task = df[df["type"] == "Task"]
    assert list(task["count"]) == [0, 0, 1, 0, 1]
    assert task["percentage"].sum() == pytest.approx(100)

    monthly = monthly_distribution_by_type(_items(), "lead_time", "resolved", [30, 60])
    assert len(monthly) == 2 * 2 * 3
    jan_story = monthly[(monthly["month_key"] == "2024-01") & (monthly["type"] == "Story")]
    assert jan_story["count"].sum() == 0
    assert jan_story["percentage"].sum() == 0


def test_monthly_mean_by_type():
    df = monthly_mean_by_type(_items(), "lead_time", "resolved")
    assert list(df["month_key"]) == ["2024-01", "2024-03"]
    assert df.iloc[0]["Task"] == 135
    assert df.iloc[1]["Story"] == 25


def test_percentile_ignores_input_order():
    assert percentile([4, 1, 3, 2], 0.5) == 2.5
    assert percentile([40, 10, 30, 20], 0.95) == pytest.approx(38.5)
    assert mean([2, 4]) == 3
    assert mean([]) is None


def test_assign_buckets_uses_given_labels():
    labels = ["curto", "medio", "longo"]
    assigned = assign_buckets([0, 30, 30.5, 61], [30, 60], labels)
    assert [str(label) for label in assigned] == ["curto", "curto", "medio", "longo"]


def test_bucket_distribution_without_boundaries():
    buckets = bucket_distribution([1, 500], [])
    assert [(b.label, b.count) for b in buckets] == [("todos", 2)]
    assert buckets[0].percentage == 100
