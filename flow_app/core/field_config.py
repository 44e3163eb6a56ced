"""Load the export field mapping from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import DEFAULT_FIELD_MAPPING, FIELD_MAPPING_FILENAME
from .models import FieldMapping, canonical_field_key

logger = logging.getLogger(__name__)


def default_field_mapping() -> FieldMapping:
    return FieldMapping.from_dict(DEFAULT_FIELD_MAPPING)


def load_field_mapping(path: str | Path | None = None) -> FieldMapping:
    """Read ``fields:`` from a mapping file, filling gaps from the defaults.

    ``path`` may point at the YAML file or at a directory containing
    ``field_mapping.yaml``; it defaults to the package directory. A key
    explicitly set to an empty string stays unmapped. The result is not
    cached; callers hold on to it for the duration of a processing run.
    """
    base = Path(path or Path(__file__).resolve().parent.parent)
    yaml_path = base / FIELD_MAPPING_FILENAME if base.is_dir() else base
    if not yaml_path.exists():
        return default_field_mapping()
    try:
        data = yaml.safe_load(yaml_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Falling back to default field mapping (%s): %s", yaml_path, exc)
        return default_field_mapping()
    fields = data.get("fields") if isinstance(data, dict) else None
    if not isinstance(fields, dict):
        return default_field_mapping()
    merged = dict(DEFAULT_FIELD_MAPPING)
    for raw_key, column in fields.items():
        name = canonical_field_key(raw_key)
        if name is None:
            logger.debug("Ignoring unknown field key %r in %s", raw_key, yaml_path)
            continue
        merged[name] = "" if column is None else str(column).strip()
    return FieldMapping.from_dict(merged)
