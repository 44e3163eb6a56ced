"""Label normalization and status checks shared by filters and views."""

from __future__ import annotations

import unicodedata

from .config import UNKNOWN_LABEL


def normalize_label(value: str | None) -> str:
    """Strip accents, lowercase and trim a type/area/status label.

    Examples
    --------
    >>> normalize_label("Histórias ")
    'historias'
    >>> normalize_label(None)
    'desconhecido'
    """
    if not value:
        return UNKNOWN_LABEL
    decomposed = unicodedata.normalize("NFD", str(value))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


def is_review_status(value: str | None) -> bool:
    return bool(value) and "review" in str(value).lower()
