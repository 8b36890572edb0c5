from __future__ import annotations

import hashlib
from pathlib import Path


def sha1_region(path: Path, start: int = 0, end: int = 0, *, chunk_bytes: int = 1 << 20) -> str:
    """SHA-1 of bytes ``[start, end)`` of a file; ``end <= 0`` means up to EOF."""
    h = hashlib.sha1()
    remaining = int(end) - int(start) if int(end) > 0 else None
    with path.open("rb") as f:
        f.seek(int(start))
        while remaining is None or remaining > 0:
            n = int(chunk_bytes) if remaining is None else min(int(chunk_bytes), remaining)
            b = f.read(n)
            if not b:
                break
            h.update(b)
            if remaining is not None:
                remaining -= len(b)
    return h.hexdigest()
