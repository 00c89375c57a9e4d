"""nachagen exception hierarchy."""

from __future__ import annotations


class NachaGenError(Exception):
    """Base exception for all nachagen errors."""

    retryable = False


class ConfigurationError(NachaGenError):
    """Company ACH identity is missing or incomplete."""

    def __init__(self, message: str, violations: list[str] | None = None) -> None:
        self.violations = violations or [message]
        super().__init__(message)


class ValidationError(NachaGenError):
    """One or more payment entries failed validation.

    Carries every violation found so the caller can correct the batch in one
    pass.
    """

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        super().__init__("Validation errors:\n" + "\n".join(self.violations))


class EmptyBatchError(NachaGenError):
    """No pending entries were found for the batch."""

    def __init__(self, batch_id: str) -> None:
        self.batch_id = batch_id
        super().__init__(f"No pending entries found for batch {batch_id}")


class BatchNotFoundError(NachaGenError):
    """The requested ACH batch does not exist."""

    def __init__(self, batch_id: str) -> None:
        self.batch_id = batch_id
        super().__init__(f"Batch not found: {batch_id}")


class BatchAlreadyGeneratedError(NachaGenError):
    """The batch was already committed as generated; its entries are processed."""

    def __init__(self, batch_id: str) -> None:
        self.batch_id = batch_id
        super().__init__(f"Batch already generated: {batch_id}")


class EncodingInvariantError(NachaGenError):
    """A computed field does not fit its declared width.

    This is a programming defect, never a user-facing validation result.
    """

    def __init__(self, field: str, value: str, width: int) -> None:
        self.field = field
        self.value = value
        self.width = width
        super().__init__(f"Field {field!r} value {value!r} exceeds width {width}")


class StorageError(NachaGenError):
    """A backend I/O call failed. Safe to retry."""

    retryable = True


class BatchStoreError(StorageError):
    """Batch store (DynamoDB) operation failed."""


class TraceStampError(BatchStoreError):
    """The batch committed as generated, but some entry rows were not stamped.

    The committed batch status already counts those entries as processed, so
    regenerating would only be refused.
    """

    retryable = False


class FileStoreError(StorageError):
    """Artifact storage operation failed."""


class CacheError(StorageError):
    """Redis cache operation failed."""
