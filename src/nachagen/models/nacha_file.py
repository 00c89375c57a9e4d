"""NACHA artifact models: running totals, summary, generated file, run result."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from nachagen.models.ach import PaymentEntry
from nachagen.nacha.fields import to_cents

_CENT = Decimal("0.01")


class RunningTotals(BaseModel):
    """Immutable accumulator snapshot for one batch.

    ``entry_hash`` is the plain integer sum of routing-number prefixes; it is
    only cut to ten digits when a control record renders it.
    """

    entry_count: int = 0
    entry_hash: int = 0
    total_credit_cents: int = 0
    total_debit_cents: int = 0

    model_config = {"frozen": True}

    def add(self, entry: PaymentEntry) -> RunningTotals:
        """Return a new snapshot that includes ``entry``."""
        cents = to_cents(entry.amount)
        update = {
            "entry_count": self.entry_count + 1,
            "entry_hash": self.entry_hash + int(entry.routing_number[:8]),
        }
        if entry.is_credit:
            update["total_credit_cents"] = self.total_credit_cents + cents
        else:
            update["total_debit_cents"] = self.total_debit_cents + cents
        return self.model_copy(update=update)

    @property
    def total_credit_amount(self) -> Decimal:
        return (Decimal(self.total_credit_cents) / 100).quantize(_CENT)

    @property
    def total_debit_amount(self) -> Decimal:
        return (Decimal(self.total_debit_cents) / 100).quantize(_CENT)


class EntryTrace(BaseModel):
    """Trace number assigned to an entry while it was encoded."""

    entry_id: str
    trace_number: str

    model_config = {"frozen": True}


class FileSummary(BaseModel):
    total_entries: int
    total_credit_amount: Decimal
    total_debit_amount: Decimal
    entry_hash: int
    effective_date: date
    batch_count: int = 1
    block_count: int = 0

    model_config = {"frozen": True}


class NachaFile(BaseModel):
    """A fully built NACHA file: fixed-width lines plus derived summary."""

    file_name: str
    lines: tuple[str, ...]
    traces: tuple[EntryTrace, ...] = ()
    summary: FileSummary

    model_config = {"frozen": True}

    @property
    def content(self) -> str:
        return "\n".join(self.lines)


class GenerationState(StrEnum):
    LOADING_CONTEXT = "loading-context"
    VALIDATING = "validating"
    ENCODING = "encoding"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    FAILED = "failed"


class GenerationResult(BaseModel):
    """Outcome of one generation run: the artifact, or a structured failure."""

    batch_id: str
    state: GenerationState
    transitions: list[GenerationState] = Field(default_factory=list)
    nacha_file: Optional[NachaFile] = None
    storage_path: str = ""
    error_kind: str = ""
    violations: list[str] = Field(default_factory=list)
    retryable: bool = False

    @property
    def success(self) -> bool:
        return self.state == GenerationState.COMPLETED
