from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from binmesh.config import ExtractionConfig
from binmesh.cursor import ByteCursor


COMPONENTS = ("X", "Y", "Z", "W")


@dataclass
class FaceResult:
    faces: np.ndarray  # (M, 3|4) uint32, zero-based, already clamped
    warnings: list[str] = field(default_factory=list)
    expected: int = 0

    @property
    def count(self) -> int:
        return int(self.faces.shape[0])


def empty_faces(elements: int) -> np.ndarray:
    return np.zeros((0, int(elements)), dtype=np.uint32)


def expected_face_count(cfg: ExtractionConfig) -> int:
    if not cfg.has_faces:
        return 0
    face_bytes = int(cfg.face_end_offset) - int(cfg.face_start_offset)
    return face_bytes // (cfg.face_type.width * cfg.face_elements)


def clamp_face(face: np.ndarray, vertex_count: int) -> list[str]:
    """Clamp out-of-range indices to 0 in place; returns the clamped components as ``X (idx)`` labels."""
    hits: list[str] = []
    for i in range(face.shape[0]):
        if int(face[i]) >= int(vertex_count):
            hits.append(f"{COMPONENTS[i]} ({int(face[i])})")
            face[i] = 0
    return hits


def extract_faces(cursor: ByteCursor, cfg: ExtractionConfig, vertex_count: int) -> FaceResult:
    """Read index records from ``[face_start_offset, face_end_offset)``.

    Faces are never dropped here: short reads leave the remaining components at 0
    and out-of-range indices are clamped to 0, each with a warning.
    """
    elements = cfg.face_elements
    if not cfg.has_faces:
        return FaceResult(faces=empty_faces(elements))

    print("Attempting to read in faces...")
    cursor.seek_to(cfg.face_start_offset)

    width = cfg.face_type.width
    dtype = cfg.face_type.dtype(cfg.byte_order)
    num_faces = expected_face_count(cfg)

    rows: list[np.ndarray] = []
    warnings: list[str] = []
    for i in range(num_faces):
        if cursor.tell() > cfg.face_end_offset:
            break

        face = np.zeros((elements,), dtype=np.uint32)
        for c in range(elements):
            buf = cursor.read_exact(width)
            if buf is None:
                msg = (
                    f"Failed to load in face element {COMPONENTS[c].lower()} ({i}), "
                    "some faces may be missing or incorrect!"
                )
                print(f"[WARN] {msg}")
                warnings.append(msg)
                break
            face[c] = np.frombuffer(buf, dtype=dtype, count=1)[0]

        if cfg.verbose:
            print("\t" + " ".join(f"{COMPONENTS[c].lower()}( {int(face[c])} )" for c in range(elements)))

        hits = clamp_face(face, vertex_count)
        if hits:
            msg = f"Encountered out of bound vertex index in face {i}, {' '.join(hits)} - defaulting to 0!"
            print(f"[WARN] {msg}")
            warnings.append(msg)

        rows.append(face)
        if not cursor.skip(cfg.face_stride) and cfg.face_stride > 0:
            break

    faces = np.vstack(rows) if rows else empty_faces(elements)
    print(f"Loaded in {faces.shape[0]} faces")
    return FaceResult(faces=faces, warnings=warnings, expected=num_faces)


def degenerate_mask(faces: np.ndarray) -> np.ndarray:
    """True for rows holding the same vertex index more than once."""
    if faces.shape[0] == 0:
        return np.zeros((0,), dtype=bool)
    srt = np.sort(faces, axis=1)
    return (srt[:, 1:] == srt[:, :-1]).any(axis=1)


def drop_degenerate_faces(faces: np.ndarray, *, verbose: bool = False) -> tuple[np.ndarray, int]:
    """Return (kept_faces, dropped_count). Runs on post-clamp indices."""
    bad = degenerate_mask(faces)
    if verbose:
        for row in faces[bad]:
            print(f"Invalid face indices found ({' '.join(str(int(v)) for v in row)})!")
    return faces[~bad], int(bad.sum())
