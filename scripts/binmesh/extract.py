from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from binmesh.config import ExtractionConfig
from binmesh.cursor import ByteCursor
from binmesh.errors import ExtractionError
from binmesh.faces import drop_degenerate_faces, extract_faces
from binmesh.obj_io import write_obj
from binmesh.report import build_report, write_report
from binmesh.vertices import extract_vertices


@dataclass
class MeshExtraction:
    vertices: np.ndarray
    faces: np.ndarray  # clamped, degenerate faces still included
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RunSummary:
    out_path: Path
    vertex_count: int
    face_count: int
    faces_written: int


def extract_mesh(cfg: ExtractionConfig) -> MeshExtraction:
    """Run both extraction stages over ``cfg.input_path``; the file is closed before returning."""
    if cfg.input_path is None:
        raise ExtractionError("no input path given")
    src = Path(cfg.input_path)
    print(f'Loading "{src}"')
    try:
        f = src.open("rb")
    except OSError as e:
        raise ExtractionError(f'Failed to open "{src}"!') from e

    with f:
        cursor = ByteCursor(f)
        cursor.seek_to(cfg.start_offset)
        vres = extract_vertices(cursor, cfg)
        fres = extract_faces(cursor, cfg, vres.count)

    return MeshExtraction(vertices=vres.vertices, faces=fres.faces, warnings=vres.warnings + fres.warnings)


def run(cfg: ExtractionConfig) -> RunSummary:
    mesh = extract_mesh(cfg)
    kept, _dropped = drop_degenerate_faces(mesh.faces, verbose=cfg.verbose)

    out_path = Path(cfg.out_path)
    try:
        write_obj(out_path, mesh.vertices, kept, source=Path(cfg.input_path).name if cfg.input_path else None)
    except OSError as e:
        raise ExtractionError(f'Failed to write "{out_path}"!') from e
    print(f'[OK] Wrote "{out_path}"!')

    if cfg.report_path is not None:
        report = build_report(
            cfg,
            vertex_count=mesh.vertices.shape[0],
            face_count=mesh.faces.shape[0],
            emitted_faces=kept.shape[0],
            warnings=mesh.warnings,
        )
        write_report(Path(cfg.report_path), report)
        print(f"[OK] wrote report: {cfg.report_path}")

    return RunSummary(
        out_path=out_path,
        vertex_count=int(mesh.vertices.shape[0]),
        face_count=int(mesh.faces.shape[0]),
        faces_written=int(kept.shape[0]),
    )
