"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from nachagen.core.exceptions import BatchStoreError
from nachagen.models.ach import (
    AchBatch,
    BatchStatus,
    CompanySettings,
    EntryStatus,
    PaymentEntry,
)
from nachagen.models.nacha_file import EntryTrace, NachaFile


class MemoryBatchStore:
    """Dict-backed IBatchStore for unit tests."""

    def __init__(self) -> None:
        self._batches: dict[str, AchBatch] = {}
        self._companies: dict[str, CompanySettings] = {}
        self._entries: dict[str, dict[str, PaymentEntry]] = {}
        self._traces: dict[str, str] = {}
        self._contents: dict[str, str] = {}
        self.audit_log: list[dict[str, Any]] = []
        self.mark_calls: int = 0

    # ---- seeding helpers ----

    def add_batch(self, batch: AchBatch) -> None:
        self._batches[batch.batch_id] = batch

    def add_company(self, company: CompanySettings) -> None:
        self._companies[company.company_id] = company

    def add_entries(self, batch_id: str, entries: list[PaymentEntry]) -> None:
        bucket = self._entries.setdefault(batch_id, {})
        for entry in entries:
            bucket[entry.entry_id] = entry

    def entries(self, batch_id: str) -> list[PaymentEntry]:
        return sorted(self._entries.get(batch_id, {}).values(), key=lambda e: e.sequence)

    def trace_for(self, entry_id: str) -> str | None:
        return self._traces.get(entry_id)

    def content_for(self, batch_id: str) -> str | None:
        return self._contents.get(batch_id)

    # ---- IBatchStore methods ----

    def get_batch(self, batch_id: str) -> AchBatch | None:
        return self._batches.get(batch_id)

    def get_company_settings(self, company_id: str) -> CompanySettings | None:
        return self._companies.get(company_id)

    def get_pending_entries(self, batch_id: str) -> list[PaymentEntry]:
        batch = self._batches.get(batch_id)
        if batch is not None and batch.status == BatchStatus.GENERATED:
            return []
        return [e for e in self.entries(batch_id) if e.status == EntryStatus.PENDING]

    def save_generated_file(self, batch_id: str, nacha_file: NachaFile, storage_path: str) -> None:
        summary = nacha_file.summary
        batch = self._batches.get(batch_id)
        if batch is None or batch.status == BatchStatus.GENERATED:
            raise BatchStoreError(f"Batch {batch_id!r} is missing or already generated")
        self._batches[batch_id] = batch.model_copy(update={
            "file_name": nacha_file.file_name,
            "storage_path": storage_path,
            "total_entries": summary.total_entries,
            "total_credit_amount": summary.total_credit_amount,
            "total_debit_amount": summary.total_debit_amount,
            "entry_hash": summary.entry_hash,
        })
        self._contents[batch_id] = nacha_file.content

    def append_audit_log(
        self, batch_id: str, company_id: str, action_type: str, details: dict[str, Any]
    ) -> None:
        self.audit_log.append({
            "batch_id": batch_id,
            "company_id": company_id,
            "action_type": action_type,
            "action_details": details,
        })

    def mark_entries_processed(self, batch_id: str, traces: list[EntryTrace]) -> None:
        """Commit the batch as generated and stamp every entry, all or nothing."""
        self.mark_calls += 1
        batch = self._batches.get(batch_id)
        bucket = self._entries.get(batch_id, {})
        if batch is None or batch.status == BatchStatus.GENERATED:
            raise BatchStoreError(f"Batch {batch_id!r} is missing or already generated")
        if any(t.entry_id not in bucket or bucket[t.entry_id].status != EntryStatus.PENDING for t in traces):
            raise BatchStoreError(f"Batch {batch_id!r} has entries that are no longer pending")
        self._batches[batch_id] = batch.model_copy(update={
            "status": BatchStatus.GENERATED,
            "generated_at": datetime.now(timezone.utc),
        })
        for trace in traces:
            bucket[trace.entry_id] = bucket[trace.entry_id].model_copy(
                update={"status": EntryStatus.PROCESSED}
            )
            self._traces[trace.entry_id] = trace.trace_number


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests; written objects land in ``files``."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self.files[path] = data
        self.content_types[path] = content_type
        return path
