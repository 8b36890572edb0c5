from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def write_bin(tmp_path: Path):
    """Write raw bytes to a file under tmp_path and return its path."""

    def _write(data: bytes, name: str = "asset.bin") -> Path:
        p = tmp_path / name
        p.write_bytes(data)
        return p

    return _write
