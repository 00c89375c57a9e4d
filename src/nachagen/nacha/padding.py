"""Blocking-factor padding."""

from __future__ import annotations

import math

from nachagen.nacha.constants import BLOCKING_FACTOR, FILLER_RECORD


def block_count(record_count: int) -> int:
    """Number of blocks needed for ``record_count`` records, filler excluded."""
    return math.ceil(record_count / BLOCKING_FACTOR)


def filler_needed(record_count: int) -> int:
    return -record_count % BLOCKING_FACTOR


def pad_to_block(lines: list[str]) -> list[str]:
    """Return ``lines`` followed by enough filler records to fill the last block."""
    return lines + [FILLER_RECORD] * filler_needed(len(lines))
