"""Partition items by calendar month of a chosen date and by item type."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from operator import attrgetter

from flow_app.core.config import MONTH_NAMES
from flow_app.core.dates import parse_date
from flow_app.core.models import Item

Selector = str | Callable[[Item], object]


def resolve_selector(selector: Selector) -> Callable[[Item], object]:
    """Accept an Item attribute name or a callable and return a callable."""
    if callable(selector):
        return selector
    return attrgetter(selector)


def month_key(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}"


def month_label(moment: datetime) -> str:
    """Display label in the export locale, e.g. ``"março de 2024"``."""
    return f"{MONTH_NAMES[moment.month]} de {moment.year}"


@dataclass(slots=True)
class MonthGroup:
    month_key: str
    month_label: str
    items: list[Item] = field(default_factory=list)


def group_by_month(items: Iterable[Item], date_selector: Selector) -> list[MonthGroup]:
    """Group items by the month of ``date_selector``, oldest month first.

    ``date_selector`` picks the raw export date (attribute name such as
    ``"resolved"`` or a callable). Items whose selected date does not parse
    are left out of every group. Item order within a month is preserved.
    """
    select = resolve_selector(date_selector)
    groups: dict[str, MonthGroup] = {}
    for item in items:
        moment = parse_date(select(item))
        if moment is None:
            continue
        key = month_key(moment)
        group = groups.get(key)
        if group is None:
            group = groups[key] = MonthGroup(month_key=key, month_label=month_label(moment))
        group.items.append(item)
    return [groups[key] for key in sorted(groups)]


def group_by_type(items: Iterable[Item]) -> dict[str, list[Item]]:
    """Exact-match partition on ``Item.type`` in first-seen order."""
    grouped: dict[str, list[Item]] = {}
    for item in items:
        grouped.setdefault(item.type, []).append(item)
    return grouped


def metric_values(items: Iterable[Item], metric: Selector) -> list:
    select = resolve_selector(metric)
    return [value for value in (select(item) for item in items) if value is not None]
