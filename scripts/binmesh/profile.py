"""YAML extraction profiles.

A profile groups settings per stage; ``defaults:`` chains other profiles::

    defaults: [base.yaml]
    output: mesh.obj
    byte_order: big
    vertices:
      start_offset: 0x80
      end_offset: 0x9DC
      stride: 4
      type: 0
    faces:
      start_offset: 0xA00
      end_offset: 0x1200
      type: 0
      quad: false
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from _lib.yaml_cfg import ProfileError, load_with_defaults
from binmesh.errors import ExtractionError


TOP_LEVEL = {
    "input": "input_path",
    "output": "out_path",
    "byte_order": "byte_order",
    "verbose": "verbose",
    "report": "report_path",
}
VERTEX_KEYS = {
    "start_offset": "start_offset",
    "end_offset": "end_offset",
    "stride": "stride",
    "scale": "scale",
    "type": "vertex_type",
    "swap_yz": "swap_yz",
}
FACE_KEYS = {
    "start_offset": "face_start_offset",
    "end_offset": "face_end_offset",
    "stride": "face_stride",
    "type": "face_type",
    "quad": "face_quad",
}


def _flatten_section(section: Any, keys: dict[str, str], name: str, src: Path) -> dict[str, Any]:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ExtractionError(f"`{name}` must be a mapping in {src}")
    unknown = sorted(set(section) - set(keys))
    if unknown:
        raise ExtractionError(f"unknown `{name}` keys {unknown} in {src} (allowed: {sorted(keys)})")
    return {keys[k]: v for k, v in section.items()}


def flatten_profile(profile: dict[str, Any], src: Path) -> dict[str, Any]:
    """Map a sectioned profile onto flat ``ExtractionConfig`` field names."""
    out: dict[str, Any] = {}
    for k, v in profile.items():
        if k in TOP_LEVEL:
            out[TOP_LEVEL[k]] = v
        elif k == "vertices":
            out.update(_flatten_section(v, VERTEX_KEYS, "vertices", src))
        elif k == "faces":
            out.update(_flatten_section(v, FACE_KEYS, "faces", src))
        else:
            allowed = sorted([*TOP_LEVEL, "vertices", "faces", "defaults"])
            raise ExtractionError(f"unknown profile key {k!r} in {src} (allowed: {allowed})")
    return out


def load_profile(path: Path) -> dict[str, Any]:
    try:
        profile = load_with_defaults(path)
    except ProfileError as e:
        raise ExtractionError(str(e)) from e
    return flatten_profile(profile, path)
