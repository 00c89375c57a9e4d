"""Pre-encoding validation of the run context and payment entries.

A NACHA file is atomic from the bank's point of view, so validation either
accepts the whole batch or reports every problem it found. Anything that
passes here fits its record field: encoding never sees user input it cannot
render.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from nachagen.core.exceptions import ConfigurationError, EmptyBatchError, ValidationError
from nachagen.models.ach import BatchContext, PaymentEntry
from nachagen.nacha.constants import (
    MAX_BATCH_ENTRIES,
    MAX_BATCH_NUMBER,
    MAX_ENTRY_AMOUNT_CENTS,
    MAX_TOTAL_CENTS,
)
from nachagen.nacha.fields import to_cents
from nachagen.nacha.totals import fold_totals

_ABA_WEIGHTS = (3, 7, 1, 3, 7, 1, 3, 7, 1)
_FILE_ID_MODIFIER = re.compile(r"[A-Z0-9]")
_ENTRY_CLASS = re.compile(r"[A-Z]{3}")


@dataclass(frozen=True)
class ValidationLimits:
    """Optional limits applied on top of the required-field checks."""

    max_per_transaction: Decimal | None = None
    max_per_file: Decimal | None = None
    validate_routing_checksum: bool = False


def _is_digits(value: str, width: int) -> bool:
    # isdigit() alone also accepts non-ASCII digits
    return len(value) == width and value.isascii() and value.isdigit()


def is_routing_format(routing_number: str) -> bool:
    return _is_digits(routing_number, 9)


def routing_checksum_ok(routing_number: str) -> bool:
    """ABA MOD-10 check: weighted digit sum must be a multiple of 10."""
    if not is_routing_format(routing_number):
        return False
    total = sum(int(d) * w for d, w in zip(routing_number, _ABA_WEIGHTS))
    return total % 10 == 0


def validate_context(context: BatchContext) -> list[str]:
    """Check every context field the file and batch records render."""
    violations: list[str] = []
    if not context.origin_routing_number:
        violations.append("Missing origin routing number")
    elif not is_routing_format(context.origin_routing_number):
        violations.append("Origin routing number must be 9 digits")
    if not context.origin_account_number:
        violations.append("Missing origin account number")
    if not context.company_id:
        violations.append("Missing company ID")
    elif len(context.company_id) > 10:
        violations.append("Company ID must be at most 10 characters")
    elif not context.company_id.isascii():
        violations.append("Company ID must be ASCII")
    if not context.company_name.isascii():
        violations.append("Company name must be ASCII")

    if context.immediate_destination and not is_routing_format(context.immediate_destination):
        violations.append("Immediate destination must be 9 digits")
    if not context.immediate_destination_name.isascii():
        violations.append("Immediate destination name must be ASCII")

    if not _FILE_ID_MODIFIER.fullmatch(context.file_id_modifier):
        violations.append("File ID modifier must be one uppercase letter or digit")
    if not _is_digits(context.service_class_code, 3):
        violations.append("Service class code must be 3 digits")
    if not _ENTRY_CLASS.fullmatch(context.standard_entry_class):
        violations.append("Standard entry class must be 3 uppercase letters")
    if not context.entry_description.isascii():
        violations.append("Entry description must be ASCII")
    if not 0 <= context.batch_number <= MAX_BATCH_NUMBER:
        violations.append(f"Batch number must be between 0 and {MAX_BATCH_NUMBER}")
    return violations


def validate_entry(entry: PaymentEntry, limits: ValidationLimits = ValidationLimits()) -> list[str]:
    prefix = f"Entry {entry.entry_id}"
    violations: list[str] = []

    if not entry.routing_number:
        violations.append(f"{prefix}: Missing routing number")
    elif not is_routing_format(entry.routing_number):
        violations.append(f"{prefix}: Routing number must be 9 digits")
    elif limits.validate_routing_checksum and not routing_checksum_ok(entry.routing_number):
        violations.append(f"{prefix}: Routing number fails check digit validation")

    if not entry.account_number:
        violations.append(f"{prefix}: Missing account number")
    elif len(entry.account_number) > 17:
        violations.append(f"{prefix}: Account number exceeds 17 characters")
    elif not entry.account_number.isascii():
        violations.append(f"{prefix}: Account number must be ASCII")

    # Sub-cent amounts round to zero cents and count as missing
    cents = to_cents(entry.amount) if entry.amount is not None and entry.amount.is_finite() else 0
    if cents < 1:
        violations.append(f"{prefix}: Invalid amount")
    elif cents > MAX_ENTRY_AMOUNT_CENTS:
        violations.append(f"{prefix}: Amount {entry.amount} exceeds the 10-digit amount field")
    elif limits.max_per_transaction is not None and entry.amount > limits.max_per_transaction:
        violations.append(
            f"{prefix}: Amount {entry.amount} exceeds per-transaction limit {limits.max_per_transaction}"
        )

    if not entry.individual_name:
        violations.append(f"{prefix}: Missing individual name")
    elif not entry.individual_name.isascii():
        violations.append(f"{prefix}: Individual name must be ASCII")

    if not entry.individual_id.isascii():
        violations.append(f"{prefix}: Individual ID must be ASCII")

    if not _is_digits(entry.transaction_code, 2):
        violations.append(f"{prefix}: Transaction code must be 2 digits")

    return violations


def validate_entries(
    entries: Sequence[PaymentEntry], limits: ValidationLimits = ValidationLimits()
) -> list[str]:
    violations: list[str] = []
    for entry in entries:
        violations.extend(validate_entry(entry, limits))

    if limits.max_per_file is not None:
        total = sum((e.amount for e in entries if e.amount is not None and e.amount > 0), Decimal("0"))
        if total > limits.max_per_file:
            violations.append(f"Batch total {total} exceeds per-file limit {limits.max_per_file}")

    if not violations:
        violations.extend(_control_field_violations(entries))
    return violations


def _control_field_violations(entries: Sequence[PaymentEntry]) -> list[str]:
    """Batch-wide counts and totals must fit the control record fields."""
    violations: list[str] = []
    if len(entries) > MAX_BATCH_ENTRIES:
        violations.append(f"Batch has {len(entries)} entries, more than the {MAX_BATCH_ENTRIES} allowed")
        return violations
    totals = fold_totals(entries)
    if totals.total_credit_cents > MAX_TOTAL_CENTS:
        violations.append(f"Batch credit total {totals.total_credit_amount} exceeds the 12-digit total field")
    if totals.total_debit_cents > MAX_TOTAL_CENTS:
        violations.append(f"Batch debit total {totals.total_debit_amount} exceeds the 12-digit total field")
    return violations


def ensure_valid(
    context: BatchContext,
    entries: Sequence[PaymentEntry],
    limits: ValidationLimits = ValidationLimits(),
    batch_id: str = "",
) -> None:
    """Raise on the first failing stage: context, emptiness, then entries."""
    context_violations = validate_context(context)
    if context_violations:
        raise ConfigurationError(
            "Company ACH configuration incomplete: " + "; ".join(context_violations),
            context_violations,
        )
    if not entries:
        raise EmptyBatchError(batch_id)
    entry_violations = validate_entries(entries, limits)
    if entry_violations:
        raise ValidationError(entry_violations)
