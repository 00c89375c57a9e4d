"""Protocol interfaces for all nachagen collaborators.

The generator talks to storage only through these Protocols: structural
typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nachagen.models.ach import AchBatch, CompanySettings, PaymentEntry
    from nachagen.models.nacha_file import EntryTrace, NachaFile


# ---------------------------------------------------------------------------
# Persistence: Batch Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IBatchStore(Protocol):
    """Source of batches, company ACH settings and pending entries."""

    def get_batch(self, batch_id: str) -> AchBatch | None: ...

    def get_company_settings(self, company_id: str) -> CompanySettings | None: ...

    def get_pending_entries(self, batch_id: str) -> list[PaymentEntry]: ...

    def save_generated_file(
        self, batch_id: str, nacha_file: NachaFile, storage_path: str
    ) -> None: ...

    def append_audit_log(
        self, batch_id: str, company_id: str, action_type: str, details: dict[str, Any]
    ) -> None: ...

    def mark_entries_processed(self, batch_id: str, traces: list[EntryTrace]) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface for read-through lookups."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """Artifact sink (S3, local filesystem, memory). Returns the stored location."""

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str: ...
