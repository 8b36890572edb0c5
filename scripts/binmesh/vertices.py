from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from binmesh.config import ExtractionConfig
from binmesh.cursor import ByteCursor
from binmesh.encodings import VertexEncoding


AXES = ("X", "Y", "Z")


@dataclass
class VertexResult:
    vertices: np.ndarray  # (N, 3) float32, row index == vertex index
    warnings: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return int(self.vertices.shape[0])


def decode_vertex(buf: bytes, encoding: VertexEncoding, *, byte_order: str = "little", swap_yz: bool = True) -> np.ndarray:
    """Decode one raw vertex record into an unscaled float32 (x, y, z)."""
    raw = np.frombuffer(buf, dtype=encoding.dtype(byte_order), count=3)
    xyz = raw.astype(np.float32)
    if encoding is VertexEncoding.I16 and swap_yz:
        # source (a, b, c) -> (x=a, y=c, z=b)
        xyz = xyz[[0, 2, 1]]
    return xyz


def sanitize_vertex(xyz: np.ndarray) -> tuple[np.ndarray, list[str]]:
    """Replace NaN components with 0.0; returns the fixed vertex and the axes that were NaN."""
    bad = np.isnan(xyz)
    if not bad.any():
        return xyz, []
    fixed = np.where(bad, np.float32(0.0), xyz).astype(np.float32)
    return fixed, [AXES[i] for i in np.flatnonzero(bad)]


def extract_vertices(cursor: ByteCursor, cfg: ExtractionConfig) -> VertexResult:
    """Read vertex records from the cursor position until data or the configured region runs out.

    Loop per record: decode, scale, zero NaNs, append, then stop at ``end_offset``
    or skip ``stride`` bytes. A short read is the normal end of data.
    """
    enc = cfg.vertex_type
    size = enc.record_size
    scale = np.float32(cfg.scale)
    end = int(cfg.end_offset)

    rows: list[np.ndarray] = []
    warnings: list[str] = []
    while True:
        pos = cursor.tell()
        if end > 0 and pos + size > end:
            break
        buf = cursor.read_exact(size)
        if buf is None:
            print(f"Reached end of vertex data at {pos}")
            break

        with np.errstate(invalid="ignore"):
            xyz = decode_vertex(buf, enc, byte_order=cfg.byte_order, swap_yz=cfg.swap_yz) * scale
        xyz, nan_axes = sanitize_vertex(xyz)
        if nan_axes:
            msg = f"Encountered NaN for vertex {len(rows)} at {pos}, {' '.join(nan_axes)} - defaulting to 0.0!"
            print(f"[WARN] {msg}")
            warnings.append(msg)
        if cfg.verbose:
            print(f"\tx( {xyz[0]:f} ) y( {xyz[1]:f} ) z( {xyz[2]:f} )")
        rows.append(xyz)

        if end > 0 and cursor.tell() >= end:
            break
        if not cursor.skip(cfg.stride) and cfg.stride > 0:
            break

    vertices = np.vstack(rows).astype(np.float32, copy=False) if rows else np.zeros((0, 3), dtype=np.float32)
    print(f"Loaded in {vertices.shape[0]} vertices")
    return VertexResult(vertices=vertices, warnings=warnings)
