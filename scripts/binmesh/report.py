from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from _lib.hash import sha1_region
from _lib.time import utc_now_iso
from binmesh.config import ExtractionConfig
from binmesh.errors import ExtractionError


def build_report(
    cfg: ExtractionConfig,
    *,
    vertex_count: int,
    face_count: int,
    emitted_faces: int,
    warnings: list[str],
) -> dict[str, Any]:
    if cfg.input_path is None:
        raise ExtractionError("report needs an input path")
    src = Path(cfg.input_path)
    regions: dict[str, Any] = {
        "vertices": {
            "start": int(cfg.start_offset),
            "end": int(cfg.end_offset),
            "sha1": sha1_region(src, cfg.start_offset, cfg.end_offset),
        }
    }
    if cfg.has_faces:
        regions["faces"] = {
            "start": int(cfg.face_start_offset),
            "end": int(cfg.face_end_offset),
            "sha1": sha1_region(src, cfg.face_start_offset, cfg.face_end_offset),
        }
    return {
        "generated_at": utc_now_iso(),
        "input": str(src),
        "input_bytes": int(src.stat().st_size),
        "output": str(cfg.out_path),
        "config": cfg.to_dict(),
        "regions": regions,
        "counts": {
            "vertices": int(vertex_count),
            "faces": int(face_count),
            "faces_written": int(emitted_faces),
            "faces_dropped": int(face_count) - int(emitted_faces),
        },
        "warnings": list(warnings),
    }


def write_report(path: Path, report: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
