from __future__ import annotations

from pathlib import Path

import numpy as np


OBJ_HEADER = "# Generated by bin2obj"


def write_obj(path: Path, vertices: np.ndarray, faces: np.ndarray | None = None, *, source: str | None = None) -> None:
    """Write vertices (Nx3) and zero-based faces (Mx3 or Mx4) as OBJ; faces are written 1-based."""
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise ValueError("vertices must be Nx3")
    if faces is not None and (faces.ndim != 2 or faces.shape[1] not in (3, 4)):
        raise ValueError("faces must be Mx3 or Mx4")

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(f"{OBJ_HEADER}\n")
        if source:
            f.write(f"# source: {source}\n")
        f.write("\n")
        for x, y, z in vertices:
            f.write(f"v {x:.6f} {y:.6f} {z:.6f}\n")
        if faces is None:
            return
        for row in faces.astype(np.int64) + 1:
            f.write("f " + " ".join(str(int(i)) for i in row) + "\n")
