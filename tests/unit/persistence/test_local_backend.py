"""Unit tests for LocalFileStore."""

from __future__ import annotations

import pytest

from nachagen.core.exceptions import FileStoreError
from nachagen.persistence.local_backend import LocalFileStore


@pytest.fixture
def local_store(tmp_path):
    return LocalFileStore(tmp_path / "output")


class TestWrite:
    def test_creates_parent_directories(self, local_store, tmp_path):
        result = local_store.write("nacha/acme/ACH_1_20240601.txt", b"101")
        target = tmp_path / "output" / "nacha" / "acme" / "ACH_1_20240601.txt"
        assert result == str(target)
        assert target.read_bytes() == b"101"

    def test_overwrites_existing_file(self, local_store, tmp_path):
        local_store.write("a.txt", b"old")
        local_store.write("a.txt", b"new")
        assert (tmp_path / "output" / "a.txt").read_bytes() == b"new"

    def test_path_under_a_file_raises(self, local_store):
        local_store.write("blocker", b"x")
        with pytest.raises(FileStoreError):
            local_store.write("blocker/a.txt", b"y")
