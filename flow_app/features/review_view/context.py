"""Pure helpers to build review aging context (no UI)."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from flow_app.analytics.metrics.review import ReviewEntry, ReviewStats, review_items, review_stats
from flow_app.core.models import Item


@dataclass(slots=True)
class ReviewViewContext:
    entries: list[ReviewEntry]
    stats: ReviewStats
    areas: list[str] = field(default_factory=list)
    types: dict[str, str] = field(default_factory=dict)  # normalized -> first original label
    period_counts: dict[str, int] = field(default_factory=dict)


def build_review_context(
    items: Sequence[Item],
    now: datetime,
    *,
    areas: Collection[str] | None = None,
    periods: Collection[str] | None = None,
    types: Collection[str] | None = None,
) -> ReviewViewContext:
    """Items currently in review, filtered by area, aging period and normalized type."""
    all_entries = review_items(items, now)
    type_labels: dict[str, str] = {}
    for entry in all_entries:
        type_labels.setdefault(entry.normalized_type, entry.item.type or "Desconhecido")

    entries = [
        entry
        for entry in all_entries
        if (not areas or entry.item.area in areas)
        and (not periods or entry.period in periods)
        and (not types or entry.normalized_type in types)
    ]
    counts: dict[str, int] = {}
    for entry in entries:
        counts[entry.period] = counts.get(entry.period, 0) + 1

    return ReviewViewContext(
        entries=entries,
        stats=review_stats(entries),
        areas=sorted({entry.item.area for entry in all_entries if entry.item.area}),
        types=dict(sorted(type_labels.items(), key=lambda pair: pair[1])),
        period_counts=counts,
    )
