"""Record encoders for the five NACHA record types used by a PPD file.

Every function is pure: typed inputs in, one 94-character line out.
"""

from __future__ import annotations

from datetime import date, datetime

from nachagen.models.ach import BatchContext, PaymentEntry
from nachagen.models.nacha_file import RunningTotals
from nachagen.nacha import constants as c
from nachagen.nacha.fields import (
    alphanumeric,
    blank,
    finalize_record,
    hash_field,
    numeric,
    to_cents,
)


def yymmdd(value: date) -> str:
    return value.strftime("%y%m%d")


def trace_number(origin_routing_number: str, position: int) -> str:
    """Originating DFI followed by the 1-based entry position."""
    return alphanumeric(origin_routing_number[:8], 8, "trace_odfi") + numeric(position, 7, "trace_sequence")


def encode_file_header(context: BatchContext, created_at: datetime) -> str:
    return finalize_record([
        c.FILE_HEADER,
        c.PRIORITY_CODE,
        " " + alphanumeric(context.destination_routing, 9, "immediate_destination"),
        alphanumeric(context.origin_routing_number, 10, "immediate_origin"),
        yymmdd(created_at),
        created_at.strftime("%H%M"),
        alphanumeric(context.file_id_modifier, 1, "file_id_modifier"),
        c.RECORD_SIZE_FIELD,
        c.BLOCKING_FACTOR_FIELD,
        c.FORMAT_CODE,
        alphanumeric(context.destination_name, 23, "destination_name", truncate=True),
        alphanumeric(context.company_name, 23, "origin_name", truncate=True),
        blank(8),  # reference code
    ])


def encode_batch_header(context: BatchContext) -> str:
    effective = yymmdd(context.effective_date)
    return finalize_record([
        c.BATCH_HEADER,
        alphanumeric(context.service_class_code, 3, "service_class_code"),
        alphanumeric(context.company_name, 16, "company_name", truncate=True),
        blank(20),  # company discretionary data
        alphanumeric(context.company_id, 10, "company_id"),
        alphanumeric(context.standard_entry_class, 3, "standard_entry_class"),
        alphanumeric(context.entry_description, 10, "entry_description", truncate=True),
        effective,  # descriptive date
        effective,
        blank(3),  # settlement date, assigned by the ACH operator
        c.ORIGINATOR_STATUS_CODE,
        alphanumeric(context.origin_dfi, 8, "origin_dfi"),
        numeric(context.batch_number, 7, "batch_number"),
    ])


def encode_entry_detail(entry: PaymentEntry, trace: str) -> str:
    return finalize_record([
        c.ENTRY_DETAIL,
        alphanumeric(entry.transaction_code, 2, "transaction_code"),
        alphanumeric(entry.routing_number[:8], 8, "receiving_dfi"),
        alphanumeric(entry.routing_number[-1:], 1, "check_digit"),
        alphanumeric(entry.account_number, 17, "account_number"),
        numeric(to_cents(entry.amount), 10, "amount"),
        alphanumeric(entry.individual_id, 15, "individual_id", truncate=True),
        alphanumeric(entry.individual_name, 22, "individual_name", truncate=True),
        blank(2),  # discretionary data
        c.ADDENDA_INDICATOR,
        alphanumeric(trace.zfill(15), 15, "trace_number"),
    ])


def encode_batch_control(context: BatchContext, totals: RunningTotals) -> str:
    return finalize_record([
        c.BATCH_CONTROL,
        alphanumeric(context.service_class_code, 3, "service_class_code"),
        numeric(totals.entry_count, 6, "entry_addenda_count"),
        hash_field(totals.entry_hash, 10),
        numeric(totals.total_debit_cents, 12, "total_debit"),
        numeric(totals.total_credit_cents, 12, "total_credit"),
        alphanumeric(context.company_id, 10, "company_id"),
        blank(19),  # message authentication code
        blank(6),  # reserved
        alphanumeric(context.origin_dfi, 8, "origin_dfi"),
        numeric(context.batch_number, 7, "batch_number"),
    ])


def encode_file_control(totals: RunningTotals, batch_count: int, block_count: int) -> str:
    return finalize_record([
        c.FILE_CONTROL,
        numeric(batch_count, 6, "batch_count"),
        numeric(block_count, 6, "block_count"),
        numeric(totals.entry_count, 8, "entry_addenda_count"),
        hash_field(totals.entry_hash, 10),
        numeric(totals.total_debit_cents, 12, "total_debit"),
        numeric(totals.total_credit_cents, 12, "total_credit"),
        blank(39),  # reserved
    ])
