"""Block/unblock history reconstruction from the tracker's annotation field.

The annotation is a flat string of entries, each introduced by a
``DATA[YYYY-MM-DD]`` token and optionally carrying ``STATUS[...]`` and
``AUTOR[...]`` tags anywhere inside it; whatever text remains is the entry
description::

    DATA[2024-01-01]STATUS[Aguardando]AUTOR[Ana] motivoDATA[2024-01-05]...

Entries are sorted chronologically and paired up: the first of each pair is
the block event, the second the matching unblock. A trailing entry without
a partner means the item is still blocked.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .dates import ceil_days
from .models import BlockHistory, BlockPeriod

logger = logging.getLogger(__name__)

ENTRY_MARKER = "DATA["

DATE_PATTERN = re.compile(r"DATA\[(\d{4}-\d{2}-\d{2})\]")
STATUS_PATTERN = re.compile(r"STATUS\[([^\]]+)\]")
AUTHOR_PATTERN = re.compile(r"AUTOR\[([^\]]+)\]")
TAG_PATTERN = re.compile(r"DATA\[\d{4}-\d{2}-\d{2}\]|AUTOR\[[^\]]+\]|STATUS\[[^\]]+\]")


class _State(Enum):
    SEEKING_ENTRY = "seeking_entry"
    IN_ENTRY = "in_entry"


@dataclass(frozen=True, slots=True)
class BlockEntry:
    text: str
    date: date | None
    status: str | None
    author: str | None
    description: str


def split_entries(text: str | None) -> list[str]:
    """Cut the annotation into raw entries, each starting with ``DATA[``.

    Text before the first marker is discarded. A ``DATA[`` occurring inside
    a free-text description also opens a new entry.
    """
    if not text:
        return []
    entries: list[str] = []
    state = _State.SEEKING_ENTRY
    start = 0
    pos = 0
    while True:
        found = text.find(ENTRY_MARKER, pos)
        if state is _State.SEEKING_ENTRY:
            if found < 0:
                break
            state = _State.IN_ENTRY
            start = found
            pos = found + len(ENTRY_MARKER)
            continue
        # IN_ENTRY: the entry runs up to the next marker or the end of text
        if found < 0:
            entries.append(text[start:])
            break
        entries.append(text[start:found])
        start = found
        pos = found + len(ENTRY_MARKER)
    return entries


def parse_entry(text: str) -> BlockEntry:
    date_match = DATE_PATTERN.search(text)
    status_match = STATUS_PATTERN.search(text)
    author_match = AUTHOR_PATTERN.search(text)
    entry_date = None
    if date_match:
        try:
            entry_date = date.fromisoformat(date_match.group(1))
        except ValueError:
            logger.debug("Ignoring block entry with invalid date: %r", text)
    return BlockEntry(
        text=text,
        date=entry_date,
        status=status_match.group(1) if status_match else None,
        author=author_match.group(1) if author_match else None,
        description=TAG_PATTERN.sub("", text).strip(),
    )


def parse_block_entries(text: str | None) -> list[BlockEntry]:
    return [parse_entry(chunk) for chunk in split_entries(text)]


def parse_block_history(text: str | None) -> BlockHistory:
    """Reconstruct block periods and the running blocked-day total."""
    dated = [entry for entry in parse_block_entries(text) if entry.date is not None]
    if not dated:
        return BlockHistory()
    dated.sort(key=lambda entry: entry.date)

    periods: list[BlockPeriod] = []
    total = 0
    for idx in range(0, len(dated), 2):
        block = dated[idx]
        if idx + 1 < len(dated):
            unblock = dated[idx + 1]
            days = ceil_days(unblock.date - block.date)
            total += days
            periods.append(
                BlockPeriod(
                    block_date=block.date,
                    unblock_date=unblock.date,
                    block_status=block.status,
                    unblock_status=unblock.status,
                    block_author=block.author,
                    unblock_author=unblock.author,
                    blocked_days=days,
                    still_blocked=False,
                    block_description=block.description,
                    unblock_description=unblock.description,
                )
            )
        else:
            periods.append(
                BlockPeriod(
                    block_date=block.date,
                    unblock_date=None,
                    block_status=block.status,
                    unblock_status=None,
                    block_author=block.author,
                    unblock_author=None,
                    blocked_days=None,
                    still_blocked=True,
                    block_description=block.description,
                )
            )

    return BlockHistory(
        periods=tuple(periods),
        total_blocked_days=total,
        is_currently_blocked=len(dated) % 2 != 0,
    )
