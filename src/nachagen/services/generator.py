"""NachaFileGenerator: one batch in, one NACHA file (or a structured failure) out.

States: loading-context -> validating -> encoding -> finalizing -> completed,
with ``failed`` reachable from any of them. All I/O happens here through the
injected store and file store; encoding itself is pure.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable

from nachagen.core.config import AppSettings
from nachagen.core.exceptions import (
    BatchAlreadyGeneratedError,
    BatchNotFoundError,
    ConfigurationError,
    EncodingInvariantError,
    NachaGenError,
)
from nachagen.core.logging import get_logger
from nachagen.core.protocols import IBatchStore, IFileStore
from nachagen.models.ach import AchBatch, BatchContext, BatchStatus, CompanySettings, PaymentEntry
from nachagen.models.nacha_file import GenerationResult, GenerationState, NachaFile
from nachagen.nacha.builder import build_nacha_file
from nachagen.nacha.validation import ValidationLimits, ensure_valid

logger = get_logger(__name__)

AUDIT_ACTION_GENERATED = "nacha_file_generated"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _Run:
    """Tracks state transitions for a single generate() call."""

    def __init__(self, batch_id: str) -> None:
        self.batch_id = batch_id
        self.state = GenerationState.LOADING_CONTEXT
        self.transitions: list[GenerationState] = []

    def enter(self, state: GenerationState) -> None:
        self.state = state
        self.transitions.append(state)
        logger.debug("NACHA generation state change", extra={"batch_id": self.batch_id, "state": state.value})

    def fail(self, exc: NachaGenError) -> GenerationResult:
        failed_in = self.state
        self.enter(GenerationState.FAILED)
        violations = getattr(exc, "violations", None) or [str(exc)]
        logger.warning(
            "NACHA generation failed",
            extra={
                "batch_id": self.batch_id,
                "failed_in": failed_in.value,
                "error_kind": type(exc).__name__,
                "violation_count": len(violations),
            },
        )
        return GenerationResult(
            batch_id=self.batch_id,
            state=GenerationState.FAILED,
            transitions=list(self.transitions),
            error_kind=type(exc).__name__,
            violations=list(violations),
            retryable=exc.retryable,
        )


class NachaFileGenerator:
    """Orchestrates loading, validation, encoding and persistence of one batch."""

    def __init__(
        self,
        *,
        store: IBatchStore,
        file_store: IFileStore,
        settings: AppSettings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._file_store = file_store
        self._settings = settings or AppSettings()
        self._clock = clock
        nacha = self._settings.nacha
        self._limits = ValidationLimits(
            max_per_transaction=nacha.max_per_transaction,
            max_per_file=nacha.max_per_file,
            validate_routing_checksum=nacha.validate_routing_checksum,
        )

    def build_context(self, batch: AchBatch, company: CompanySettings, effective_date: date) -> BatchContext:
        nacha = self._settings.nacha
        return BatchContext(
            origin_routing_number=company.ach_routing_number,
            origin_account_number=company.ach_account_number,
            company_id=company.ach_company_id,
            company_name=company.company_name,
            batch_number=batch.batch_number,
            effective_date=effective_date,
            immediate_destination=company.immediate_destination,
            immediate_destination_name=company.immediate_destination_name,
            file_id_modifier=nacha.file_id_modifier,
            service_class_code=nacha.service_class_code,
            standard_entry_class=nacha.standard_entry_class,
            entry_description=nacha.entry_description,
        )

    def storage_path_for(self, company_id: str, nacha_file: NachaFile) -> str:
        return f"{self._settings.s3.prefix}{company_id}/{nacha_file.file_name}"

    def _prepare_entries(self, entries: list[PaymentEntry]) -> list[PaymentEntry]:
        """Fill the default transaction code and fall back to the entry id as payee ID."""
        default_code = self._settings.nacha.default_transaction_code
        prepared = []
        for entry in entries:
            update = {}
            if not entry.transaction_code:
                update["transaction_code"] = default_code
            if not entry.individual_id:
                update["individual_id"] = entry.entry_id
            prepared.append(entry.model_copy(update=update) if update else entry)
        return prepared

    def generate(self, batch_id: str, company_id: str, effective_date: date) -> GenerationResult:
        """Run one batch through the full pipeline.

        Data and storage problems come back as a failed GenerationResult.
        EncodingInvariantError is raised: it means the encoder is wrong, not
        the data.
        """
        run = _Run(batch_id)
        logger.info("Generating NACHA file", extra={"batch_id": batch_id, "company_id": company_id})
        try:
            run.enter(GenerationState.LOADING_CONTEXT)
            batch = self._store.get_batch(batch_id)
            if batch is None:
                raise BatchNotFoundError(batch_id)
            if batch.status == BatchStatus.GENERATED:
                raise BatchAlreadyGeneratedError(batch_id)
            company = self._store.get_company_settings(company_id)
            if company is None:
                raise ConfigurationError(f"Company ACH settings not found: {company_id}")
            context = self.build_context(batch, company, effective_date)
            entries = self._prepare_entries(self._store.get_pending_entries(batch_id))

            run.enter(GenerationState.VALIDATING)
            ensure_valid(context, entries, self._limits, batch_id=batch_id)

            run.enter(GenerationState.ENCODING)
            logger.info("Encoding ACH entries", extra={"batch_id": batch_id, "entry_count": len(entries)})
            nacha_file = build_nacha_file(context, entries, created_at=self._clock())

            run.enter(GenerationState.FINALIZING)
            storage_path = self._finalize(batch_id, company_id, nacha_file)
        except EncodingInvariantError:
            logger.exception("NACHA encoding invariant violated", extra={"batch_id": batch_id})
            raise
        except NachaGenError as exc:
            return run.fail(exc)

        run.enter(GenerationState.COMPLETED)
        summary = nacha_file.summary
        logger.info(
            "NACHA file generated",
            extra={
                "batch_id": batch_id,
                "file_name": nacha_file.file_name,
                "total_entries": summary.total_entries,
                "total_credit_amount": str(summary.total_credit_amount),
                "total_debit_amount": str(summary.total_debit_amount),
            },
        )
        return GenerationResult(
            batch_id=batch_id,
            state=GenerationState.COMPLETED,
            transitions=list(run.transitions),
            nacha_file=nacha_file,
            storage_path=storage_path,
        )

    def _finalize(self, batch_id: str, company_id: str, nacha_file: NachaFile) -> str:
        # mark_entries_processed is the commit point; any earlier failure leaves
        # the batch pending and a retry regenerates it in full.
        storage_path = self._file_store.write(
            self.storage_path_for(company_id, nacha_file),
            nacha_file.content.encode("ascii"),
            content_type="text/plain",
        )
        self._store.save_generated_file(batch_id, nacha_file, storage_path)
        summary = nacha_file.summary
        self._store.append_audit_log(
            batch_id,
            company_id,
            AUDIT_ACTION_GENERATED,
            {
                "file_name": nacha_file.file_name,
                "total_entries": summary.total_entries,
                "total_credits": summary.total_credit_amount,
                "total_debits": summary.total_debit_amount,
                "entry_hash": summary.entry_hash,
            },
        )
        self._store.mark_entries_processed(batch_id, list(nacha_file.traces))
        return storage_path


def create_generator(settings: AppSettings | None = None) -> NachaFileGenerator:
    """Build a generator wired to the configured production backends."""
    from nachagen.persistence import create_persistence

    settings = settings or AppSettings()
    store, _cache, file_store = create_persistence(settings)
    return NachaFileGenerator(store=store, file_store=file_store, settings=settings)
