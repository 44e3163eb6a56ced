"""Central configuration, constants, and shared field definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Date Parsing (export locale)
# =============================================================================
# Three-letter month abbreviations used by the tracker export (pt-BR)
MONTH_ABBREVIATIONS: dict[str, int] = {
    "jan": 1,
    "fev": 2,
    "mar": 3,
    "abr": 4,
    "mai": 5,
    "jun": 6,
    "jul": 7,
    "ago": 8,
    "set": 9,
    "out": 10,
    "nov": 11,
    "dez": 12,
}

# Full month names for display labels ("março de 2024")
MONTH_NAMES: dict[int, str] = {
    1: "janeiro",
    2: "fevereiro",
    3: "março",
    4: "abril",
    5: "maio",
    6: "junho",
    7: "julho",
    8: "agosto",
    9: "setembro",
    10: "outubro",
    11: "novembro",
    12: "dezembro",
}

# Two-digit export years are always offset from this base
CENTURY_BASE: int = 2000

# =============================================================================
# Effort / Estimate Conversion
# =============================================================================
SECONDS_PER_WORKDAY: int = 8 * 60 * 60

# =============================================================================
# Aggregation Defaults
# =============================================================================
# Bucket upper bounds (days) for distribution cards; values above the last
# bound land in an overflow bucket.
DEFAULT_BUCKET_BOUNDARIES: Sequence[int] = (30, 60, 90, 180)

# Percentiles shown on percentile cards, highest first
DEFAULT_PERCENTILES: Sequence[float] = (0.95, 0.85, 0.70)

# Review aging ranges (days)
REVIEW_BOUNDARIES: Sequence[int] = (30, 60, 90)
REVIEW_PERIOD_LABELS: Sequence[str] = (
    "até 30 dias",
    "31-60 dias",
    "61-90 dias",
    "acima de 91 dias",
)

# Item types excluded from lead time views (compared lowercase)
LEAD_TIME_EXCLUDED_TYPES: frozenset[str] = frozenset({"epic", "bug"})

# Placeholder for missing labels after normalization
UNKNOWN_LABEL: str = "desconhecido"

# Label for the all-months aggregate row
OVERALL_LABEL: str = "Média Geral"

# =============================================================================
# Field Mapping
# =============================================================================
# Canonical field keys in declaration order
FIELD_KEYS: Sequence[str] = (
    "key",
    "type",
    "status",
    "area",
    "created",
    "resolved",
    "delivery_start",
    "delivery_end",
    "discovery_start",
    "discovery_end",
    "approval",
    "refinement",
    "release",
    "block",
    "estimate",
)

# Keys whose mapped column must exist in the export header
REQUIRED_FIELDS: Sequence[str] = ("key", "type", "status", "area", "created", "resolved")

# Keys that must hold a non-empty value on every accepted row
REQUIRED_VALUES: Sequence[str] = ("key", "type")

# camelCase / legacy spellings accepted when building a mapping from a dict
FIELD_KEY_ALIASES: dict[str, str] = {
    "deliveryStart": "delivery_start",
    "deliveryEnd": "delivery_end",
    "discoveryStart": "discovery_start",
    "discoveryEnd": "discovery_end",
    "aprovacao": "approval",
    "refinamento": "refinement",
}

# Column headers of the stock tracker export
DEFAULT_FIELD_MAPPING: dict[str, str] = {
    "key": "Chave da item",
    "type": "Tipo de item",
    "status": "Status",
    "area": "Area",
    "created": "Criado",
    "resolved": "Resolvido",
    "delivery_start": "Início do Delivery",
    "delivery_end": "Final do Delivery",
    "discovery_start": "Início do Discovery",
    "discovery_end": "Final do Discovery",
    "approval": "Aprovação",
    "refinement": "Refinamento",
    "release": "Release",
    "block": "Bloqueio",
    "estimate": "Estimativa",
}

FIELD_MAPPING_FILENAME = "field_mapping.yaml"

# Column order for flat item tables
ITEM_TABLE_COLUMNS: Sequence[str] = (
    "key",
    "type",
    "status",
    "area",
    "created",
    "resolved",
    "lead_time",
    "discovery_time",
    "delivery_time",
    "analysis_to_approval",
    "refinement_to_prioritization",
    "sprint_to_review",
    "release_to_done",
    "total_effort",
    "estimate",
    "block_periods",
    "total_blocked_days",
    "is_currently_blocked",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000


SETTINGS = AppSettings()
