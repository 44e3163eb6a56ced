"""Item segment filters feeding the metric views."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from flow_app.core.config import LEAD_TIME_EXCLUDED_TYPES
from flow_app.core.models import Item
from flow_app.core.status import normalize_label


def lead_time_items(
    items: Iterable[Item],
    excluded_types: Collection[str] = LEAD_TIME_EXCLUDED_TYPES,
) -> list[Item]:
    excluded = {t.lower() for t in excluded_types}
    return [
        item
        for item in items
        if item.lead_time is not None and item.resolved and (item.type or "").lower() not in excluded
    ]


def delivery_items(items: Iterable[Item]) -> list[Item]:
    return [item for item in items if item.delivery_time is not None and item.delivery_end]


def discovery_items(items: Iterable[Item]) -> list[Item]:
    return [item for item in items if item.discovery_time is not None and item.discovery_end]


def filter_items(
    items: Iterable[Item],
    *,
    areas: Collection[str] | None = None,
    types: Collection[str] | None = None,
    statuses: Collection[str] | None = None,
    normalize: bool = False,
) -> list[Item]:
    """Keep items matching every non-empty selection.

    With ``normalize`` the selections are compared against accent-free
    lowercase labels (see ``normalize_label``); otherwise values must match
    exactly.
    """

    def key(value: str | None) -> str | None:
        return normalize_label(value) if normalize else value

    def wanted(selection: Collection[str] | None) -> set | None:
        if not selection:
            return None
        return {key(v) for v in selection}

    area_set, type_set, status_set = wanted(areas), wanted(types), wanted(statuses)
    out: list[Item] = []
    for item in items:
        if area_set is not None and key(item.area) not in area_set:
            continue
        if type_set is not None and key(item.type) not in type_set:
            continue
        if status_set is not None and key(item.status) not in status_set:
            continue
        out.append(item)
    return out


def unique_values(items: Iterable[Item], attribute: str) -> list[str]:
    """Sorted distinct non-empty values of an Item attribute."""
    return sorted({value for value in (getattr(item, attribute) for item in items) if value})
