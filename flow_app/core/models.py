"""Domain data models for tracker export items and block histories."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import date

from .config import FIELD_KEY_ALIASES, FIELD_KEYS

RawRow = Mapping[str, str]


def canonical_field_key(raw_key: object) -> str | None:
    name = FIELD_KEY_ALIASES.get(str(raw_key), str(raw_key))
    return name if name in FIELD_KEYS else None


@dataclass(frozen=True, slots=True)
class FieldMapping:
    """Canonical field key -> export column name; "" leaves a field untracked."""

    key: str = ""
    type: str = ""
    status: str = ""
    area: str = ""
    created: str = ""
    resolved: str = ""
    delivery_start: str = ""
    delivery_end: str = ""
    discovery_start: str = ""
    discovery_end: str = ""
    approval: str = ""
    refinement: str = ""
    release: str = ""
    block: str = ""
    estimate: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, object] | None) -> FieldMapping:
        values: dict[str, str] = {}
        for raw_key, column in (data or {}).items():
            name = canonical_field_key(raw_key)
            if name is None:
                continue
            values[name] = "" if column is None else str(column).strip()
        return cls(**values)

    def column(self, name: str) -> str | None:
        column = getattr(self, name, "")
        return column or None

    def is_mapped(self, name: str) -> bool:
        return self.column(name) is not None

    def value(self, row: RawRow, name: str) -> str | None:
        column = self.column(name)
        if column is None:
            return None
        return row.get(column)

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True, slots=True)
class BlockPeriod:
    block_date: date
    unblock_date: date | None
    block_status: str | None
    unblock_status: str | None
    block_author: str | None
    unblock_author: str | None
    blocked_days: int | None
    still_blocked: bool
    block_description: str = ""
    unblock_description: str | None = None


@dataclass(frozen=True, slots=True)
class BlockHistory:
    periods: tuple[BlockPeriod, ...] = ()
    total_blocked_days: int = 0
    is_currently_blocked: bool = False


@dataclass(frozen=True, slots=True)
class Item:
    key: str
    type: str
    status: str | None = None
    area: str | None = None

    # Raw date fields, as found in the export
    created: str | None = None
    resolved: str | None = None
    delivery_start: str | None = None
    delivery_end: str | None = None
    discovery_start: str | None = None
    discovery_end: str | None = None
    approval: str | None = None
    refinement: str | None = None
    release: str | None = None

    # Derived day counts (None when an endpoint is missing)
    lead_time: int | None = None
    delivery_time: int | None = None
    discovery_time: int | None = None

    # Effort breakdown (0 when an endpoint is missing)
    analysis_to_approval: int = 0
    refinement_to_prioritization: int = 0
    sprint_to_review: int = 0
    release_to_done: int = 0
    total_effort: int = 0

    estimate: int = 0
    block_annotation: str | None = None
    block_history: BlockHistory = field(default_factory=BlockHistory)

    @property
    def total_blocked_days(self) -> int:
        return self.block_history.total_blocked_days

    @property
    def is_currently_blocked(self) -> bool:
        return self.block_history.is_currently_blocked
