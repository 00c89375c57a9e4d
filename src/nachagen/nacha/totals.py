"""Running totals over an ordered entry list."""

from __future__ import annotations

from functools import reduce
from typing import Iterable

from nachagen.models.ach import PaymentEntry
from nachagen.models.nacha_file import RunningTotals


def fold_totals(entries: Iterable[PaymentEntry], initial: RunningTotals | None = None) -> RunningTotals:
    """Fold ``entries`` into a single RunningTotals snapshot, in order."""
    return reduce(RunningTotals.add, entries, initial or RunningTotals())
