"""Descriptive statistics over day-count metrics (pure functions)."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from flow_app.core.config import DEFAULT_PERCENTILES


def _as_array(values: Iterable[float | None]) -> np.ndarray:
    return np.asarray([v for v in values if v is not None], dtype=float)


def percentile(values: Iterable[float], p: float) -> float | None:
    """Linearly interpolated percentile for ``p`` in [0, 1].

    Uses numpy's default ``linear`` method: the rank index is
    ``p * (n - 1)`` and the result blends the neighbouring order
    statistics, so ``p=0`` gives the minimum and ``p=1`` the maximum.
    Input order does not matter. Returns None when empty.

    Examples
    --------
    >>> percentile([1, 2, 3, 4], 0.5)
    2.5
    >>> percentile([1, 2, 3], 0.5)
    2.0
    """
    arr = _as_array(values)
    if arr.size == 0:
        return None
    return float(np.percentile(arr, p * 100))


def median(values: Iterable[float]) -> float | None:
    arr = _as_array(values)
    if arr.size == 0:
        return None
    return float(np.median(arr))


def mean(values: Iterable[float]) -> float | None:
    arr = _as_array(values)
    if arr.size == 0:
        return None
    return float(np.mean(arr))


def round_half_up(value: float | None) -> int | None:
    """Round .5 away from zero on the positive side, as display cards do."""
    if value is None:
        return None
    return math.floor(value + 0.5)


def percentile_label(p: float) -> str:
    return f"p{round(p * 100)}"


@dataclass(slots=True)
class MetricSummary:
    count: int = 0
    mean: float | None = None
    median: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    percentiles: dict[float, float | None] = field(default_factory=dict)

    def as_row(self) -> dict[str, object]:
        row: dict[str, object] = {
            "count": self.count,
            "mean": self.mean,
            "median": self.median,
        }
        for p, value in self.percentiles.items():
            row[percentile_label(p)] = value
        row["min"] = self.minimum
        row["max"] = self.maximum
        return row


def summarize(
    values: Iterable[float | None],
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
) -> MetricSummary:
    """Count, mean, median, min/max and percentiles of the non-null values."""
    ordered = sorted(v for v in values if v is not None)
    if not ordered:
        return MetricSummary(percentiles={p: None for p in percentiles})
    return MetricSummary(
        count=len(ordered),
        mean=mean(ordered),
        median=median(ordered),
        minimum=ordered[0],
        maximum=ordered[-1],
        percentiles={p: percentile(ordered, p) for p in percentiles},
    )
