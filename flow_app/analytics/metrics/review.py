"""Review aging: how long items in a review status have sat there."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from flow_app.analytics.aggregations.stats import round_half_up
from flow_app.core.config import REVIEW_BOUNDARIES, REVIEW_PERIOD_LABELS
from flow_app.core.dates import ceil_days, parse_date
from flow_app.core.models import Item
from flow_app.core.status import is_review_status, normalize_label

from .binning import assign_buckets


@dataclass(frozen=True, slots=True)
class ReviewEntry:
    item: Item
    normalized_type: str
    days_in_review: int
    period: str


@dataclass(slots=True)
class ReviewStats:
    total: int = 0
    average: int | None = None
    minimum: int | None = None
    maximum: int | None = None


def days_in_review(item: Item, now: datetime) -> int | None:
    """Whole days (rounded up) between the review date and ``now``.

    The review date is the delivery end marker. The distance is absolute,
    so a review date after ``now`` still counts forward.
    """
    reviewed = parse_date(item.delivery_end)
    if reviewed is None:
        return None
    return ceil_days(abs(now - reviewed))


def review_period(days: int) -> str:
    return str(assign_buckets([days], REVIEW_BOUNDARIES, REVIEW_PERIOD_LABELS)[0])


def review_items(items: Iterable[Item], now: datetime) -> list[ReviewEntry]:
    entries: list[ReviewEntry] = []
    for item in items:
        if not is_review_status(item.status):
            continue
        days = days_in_review(item, now)
        if days is None:
            continue
        entries.append(
            ReviewEntry(
                item=item,
                normalized_type=normalize_label(item.type),
                days_in_review=days,
                period=review_period(days),
            )
        )
    return entries


def review_stats(entries: Iterable[ReviewEntry]) -> ReviewStats:
    days = [entry.days_in_review for entry in entries]
    if not days:
        return ReviewStats()
    return ReviewStats(
        total=len(days),
        average=round_half_up(sum(days) / len(days)),
        minimum=min(days),
        maximum=max(days),
    )
