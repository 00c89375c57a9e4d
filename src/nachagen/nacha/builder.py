"""Assemble a complete single-batch NACHA file from validated inputs."""

from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from nachagen.core.exceptions import EncodingInvariantError
from nachagen.models.ach import BatchContext, PaymentEntry
from nachagen.models.nacha_file import EntryTrace, FileSummary, NachaFile
from nachagen.nacha.constants import BLOCKING_FACTOR, RECORD_SIZE
from nachagen.nacha.padding import block_count, pad_to_block
from nachagen.nacha.records import (
    encode_batch_control,
    encode_batch_header,
    encode_entry_detail,
    encode_file_control,
    encode_file_header,
    trace_number,
)
from nachagen.nacha.totals import fold_totals

BATCH_COUNT = 1


def file_name_for(batch_number: int, effective_date: date) -> str:
    return f"ACH_{batch_number}_{effective_date.strftime('%Y%m%d')}.txt"


def build_nacha_file(
    context: BatchContext,
    entries: Sequence[PaymentEntry],
    created_at: datetime,
) -> NachaFile:
    """Encode ``entries`` in order into a padded NACHA file.

    Inputs must already have passed ``ensure_valid``. The output depends only
    on the arguments, so the same inputs always produce the same bytes.

    Returns:
        The NachaFile artifact with its per-entry trace numbers and summary.
    """
    lines = [encode_file_header(context, created_at), encode_batch_header(context)]

    traces: list[EntryTrace] = []
    for position, entry in enumerate(entries, start=1):
        trace = trace_number(context.origin_routing_number, position)
        lines.append(encode_entry_detail(entry, trace))
        traces.append(EntryTrace(entry_id=entry.entry_id, trace_number=trace))

    totals = fold_totals(entries)
    lines.append(encode_batch_control(context, totals))

    # File Control is itself one of the counted records
    blocks = block_count(len(lines) + 1)
    lines.append(encode_file_control(totals, BATCH_COUNT, blocks))

    lines = pad_to_block(lines)
    _check_layout(lines)

    summary = FileSummary(
        total_entries=totals.entry_count,
        total_credit_amount=totals.total_credit_amount,
        total_debit_amount=totals.total_debit_amount,
        entry_hash=totals.entry_hash,
        effective_date=context.effective_date,
        batch_count=BATCH_COUNT,
        block_count=blocks,
    )
    return NachaFile(
        file_name=file_name_for(context.batch_number, context.effective_date),
        lines=tuple(lines),
        traces=tuple(traces),
        summary=summary,
    )


def _check_layout(lines: list[str]) -> None:
    for line in lines:
        if len(line) != RECORD_SIZE:
            raise EncodingInvariantError("record", line, RECORD_SIZE)
    if len(lines) % BLOCKING_FACTOR:
        raise EncodingInvariantError("block", str(len(lines)), BLOCKING_FACTOR)
