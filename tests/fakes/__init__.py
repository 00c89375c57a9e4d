"""Shared test doubles: re-export memory backends and input factories."""

from __future__ import annotations

from nachagen.persistence.memory_backend import (
    MemoryBatchStore,
    MemoryCacheBackend,
    MemoryFileStore,
)
from tests.fakes.factories import EFFECTIVE_DATE, make_company, make_context, make_entry, seeded_store

__all__ = [
    "EFFECTIVE_DATE",
    "MemoryBatchStore",
    "MemoryCacheBackend",
    "MemoryFileStore",
    "make_company",
    "make_context",
    "make_entry",
    "seeded_store",
]
