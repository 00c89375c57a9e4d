"""ACH input models: company settings, batches, payment entries, run context."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, field_validator


class EntryStatus(StrEnum):
    PENDING = "pending"
    PROCESSED = "processed"


class BatchStatus(StrEnum):
    PENDING = "pending"
    GENERATED = "generated"


class PaymentEntry(BaseModel):
    """One instruction to move money to or from a receiver's bank account.

    Banking fields are optional at model level: a missing routing number is
    a validation finding to be reported alongside every other one, not a
    parse failure.
    """

    entry_id: str
    sequence: int = 0
    routing_number: str = ""
    account_number: str = ""
    transaction_code: str = "22"
    amount: Optional[Decimal] = None
    individual_id: str = ""
    individual_name: str = ""
    status: EntryStatus = EntryStatus.PENDING

    model_config = {"frozen": True, "str_strip_whitespace": True}

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_from_float(cls, value: Any) -> Any:
        # float -> str -> Decimal keeps 100.1 as 100.1 rather than its binary expansion
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @property
    def is_credit(self) -> bool:
        """Transaction codes 2x are credits; everything else is a debit."""
        return self.transaction_code.startswith("2")


class CompanySettings(BaseModel):
    """Company ACH identity as stored alongside the company profile."""

    company_id: str
    company_name: str = ""
    ach_routing_number: str = ""
    ach_account_number: str = ""
    ach_company_id: str = ""
    immediate_destination: str = ""
    immediate_destination_name: str = ""

    model_config = {"str_strip_whitespace": True}


class AchBatch(BaseModel):
    """An ACH batch row and, once generated, its file metadata."""

    batch_id: str
    company_id: str = ""
    batch_number: int = 1
    status: BatchStatus = BatchStatus.PENDING
    file_name: str = ""
    storage_path: str = ""
    total_entries: int = 0
    total_credit_amount: Decimal = Decimal("0")
    total_debit_amount: Decimal = Decimal("0")
    entry_hash: int = 0
    generated_at: Optional[datetime] = None


class BatchContext(BaseModel):
    """Read-only company identity and batch options for one generation run."""

    origin_routing_number: str = ""
    origin_account_number: str = ""
    company_id: str = ""
    company_name: str = ""
    batch_number: int = 1
    effective_date: date

    immediate_destination: str = ""
    immediate_destination_name: str = ""
    file_id_modifier: str = "A"
    service_class_code: str = "200"
    standard_entry_class: str = "PPD"
    entry_description: str = "PAYROLL"

    model_config = {"frozen": True, "str_strip_whitespace": True}

    @property
    def destination_routing(self) -> str:
        return self.immediate_destination or self.origin_routing_number

    @property
    def destination_name(self) -> str:
        return self.immediate_destination_name or self.company_name

    @property
    def origin_dfi(self) -> str:
        """First 8 digits of the originating routing number."""
        return self.origin_routing_number[:8]
