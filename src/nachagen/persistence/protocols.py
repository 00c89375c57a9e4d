"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from nachagen.core.protocols import ICacheBackend, IFileStore, IBatchStore

__all__ = ["IBatchStore", "ICacheBackend", "IFileStore"]
