"""Filesystem backend implementing IFileStore, for the CLI and local runs."""

from __future__ import annotations

from pathlib import Path

from nachagen.core.exceptions import FileStoreError


class LocalFileStore:
    """IFileStore writing artifacts under a root directory."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self._root / path

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise FileStoreError(f"Local write failed for {path!r}: {exc}") from exc
        return str(target)
