from __future__ import annotations

import io
import struct
from pathlib import Path


def f32(*vals: float, order: str = "<") -> bytes:
    return struct.pack(f"{order}{len(vals)}f", *vals)


def i16(*vals: int, order: str = "<") -> bytes:
    return struct.pack(f"{order}{len(vals)}h", *vals)


def u16(*vals: int, order: str = "<") -> bytes:
    return struct.pack(f"{order}{len(vals)}H", *vals)


def u32(*vals: int, order: str = "<") -> bytes:
    return struct.pack(f"{order}{len(vals)}I", *vals)


def read_obj(path: Path) -> tuple[list[tuple[float, ...]], list[tuple[int, ...]]]:
    verts: list[tuple[float, ...]] = []
    faces: list[tuple[int, ...]] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        if line.startswith("v "):
            verts.append(tuple(float(t) for t in line.split()[1:]))
        elif line.startswith("f "):
            faces.append(tuple(int(t) for t in line.split()[1:]))
    return verts, faces


class RelativeSeekFails(io.BytesIO):
    """BytesIO whose relative seeks raise, as on a pipe."""

    def seek(self, offset, whence=io.SEEK_SET):
        if whence == io.SEEK_CUR:
            raise OSError("relative seek not supported")
        return super().seek(offset, whence)
