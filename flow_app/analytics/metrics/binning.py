"""Fixed-range bucketing for day-count distributions.

Boundaries are ascending inclusive upper bounds. With ``[30, 60, 90, 180]``
the buckets are ``≤30``, ``31–60``, ``61–90``, ``91–180`` and an overflow
bucket ``>180``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from flow_app.core.config import DEFAULT_BUCKET_BOUNDARIES


@dataclass(frozen=True, slots=True)
class Bucket:
    label: str
    lower: float | None  # exclusive; None for the first bucket
    upper: float | None  # inclusive; None for the overflow bucket
    count: int
    percentage: float


def bucket_labels(boundaries: Sequence[float]) -> list[str]:
    """Human-readable labels such as "até 30 dias" / "acima de 180 dias"."""
    if not boundaries:
        return ["todos"]
    labels = [f"até {_fmt(boundaries[0])} dias"]
    for lower, upper in zip(boundaries, boundaries[1:]):
        # day counts are whole numbers, so an exclusive bound of 30 reads as 31
        start = _fmt(lower + 1) if float(lower).is_integer() else f">{_fmt(lower)}"
        labels.append(f"{start}–{_fmt(upper)} dias")
    labels.append(f"acima de {_fmt(boundaries[-1])} dias")
    return labels


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def bucket_edges(boundaries: Sequence[float]) -> list[float]:
    return [-np.inf, *boundaries, np.inf]


def assign_buckets(
    values: Iterable[float],
    boundaries: Sequence[float],
    labels: Sequence[str] | None = None,
) -> pd.Categorical:
    """Label each value with its bucket (upper bounds inclusive)."""
    return pd.cut(
        np.asarray(list(values), dtype=float),
        bins=bucket_edges(boundaries),
        right=True,
        labels=list(labels) if labels is not None else bucket_labels(boundaries),
    )


def bucket_distribution(
    values: Iterable[float | None],
    boundaries: Sequence[float] = DEFAULT_BUCKET_BOUNDARIES,
) -> list[Bucket]:
    """Count values into ``len(boundaries) + 1`` ordered buckets.

    None values are skipped. Percentages are relative to the number of
    counted values and are 0 for an empty group.

    Parameters
    ----------
    values : iterable of numbers
        Metric values for one group (e.g. lead times of one type).
    boundaries : sequence of numbers
        Ascending inclusive upper bounds.

    Returns
    -------
    list[Bucket]
        One entry per bucket, in ascending order.
    """
    bounds = list(boundaries)
    labels = bucket_labels(bounds)
    counted = [v for v in values if v is not None]
    counts = pd.Series(dtype=int)
    if counted:
        counts = pd.Series(assign_buckets(counted, bounds, labels)).value_counts(sort=False)
    total = int(counts.sum())

    buckets: list[Bucket] = []
    edges: list[float | None] = [None, *bounds, None]
    for idx, label in enumerate(labels):
        count = int(counts.get(label, 0))
        buckets.append(
            Bucket(
                label=label,
                lower=edges[idx],
                upper=edges[idx + 1],
                count=count,
                percentage=(count / total * 100) if total else 0.0,
            )
        )
    return buckets
