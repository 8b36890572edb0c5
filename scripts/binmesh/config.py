from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from binmesh.encodings import (
    BYTE_ORDERS,
    FaceEncoding,
    VertexEncoding,
    face_encoding_from_selector,
    vertex_encoding_from_selector,
)
from binmesh.errors import ExtractionError


DEFAULT_OUT_PATH = "dump.obj"


@dataclass(frozen=True)
class ExtractionConfig:
    input_path: Path | None = None
    out_path: Path = Path(DEFAULT_OUT_PATH)

    start_offset: int = 0
    end_offset: int = 0  # 0 = read to EOF
    stride: int = 0
    scale: float = 1.0
    vertex_type: VertexEncoding = VertexEncoding.F32
    swap_yz: bool = True
    byte_order: str = "little"

    face_start_offset: int = 0
    face_end_offset: int = 0
    face_stride: int = 0
    face_type: FaceEncoding = FaceEncoding.I32
    face_quad: bool = False

    verbose: bool = False
    report_path: Path | None = None

    @property
    def face_elements(self) -> int:
        return 4 if self.face_quad else 3

    @property
    def has_faces(self) -> bool:
        return self.face_end_offset > self.face_start_offset

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        for k, v in out.items():
            if isinstance(v, Path):
                out[k] = str(v)
            elif isinstance(v, (VertexEncoding, FaceEncoding)):
                out[k] = v.name
        return out


CONFIG_KEYS = frozenset(f.name for f in fields(ExtractionConfig))

_OFFSET_KEYS = ("start_offset", "end_offset", "stride", "face_start_offset", "face_end_offset", "face_stride")
_BOOL_KEYS = ("swap_yz", "face_quad", "verbose")
_PATH_KEYS = ("input_path", "out_path", "report_path")


def parse_offset(value: Any) -> int:
    """Byte offsets: ints, decimal strings or 0x-prefixed hex strings."""
    if isinstance(value, bool):
        raise ExtractionError(f"invalid byte offset: {value!r}")
    if isinstance(value, int):
        n = value
    else:
        s = str(value).strip().lower()
        try:
            n = int(s, 16) if s.startswith("0x") else int(s, 10)
        except ValueError:
            raise ExtractionError(f"invalid byte offset: {value!r}") from None
    if n < 0:
        raise ExtractionError(f"byte offset must be non-negative, got {n}")
    return n


def config_from_mapping(values: dict[str, Any], *, base: ExtractionConfig | None = None) -> ExtractionConfig:
    """Build a config from a flat mapping of field name -> raw value.

    Keys missing from ``values`` keep their value from ``base`` (or the defaults).
    """
    unknown = sorted(set(values) - CONFIG_KEYS)
    if unknown:
        raise ExtractionError(f"unknown config keys: {unknown} (allowed: {sorted(CONFIG_KEYS)})")

    kw: dict[str, Any] = asdict(base) if base is not None else {}
    for k, v in values.items():
        if k in _OFFSET_KEYS:
            kw[k] = parse_offset(v)
        elif k in _BOOL_KEYS:
            if not isinstance(v, bool):
                raise ExtractionError(f"{k} must be true or false, got {v!r}")
            kw[k] = v
        elif k in _PATH_KEYS:
            kw[k] = Path(v) if v is not None else None
        elif k == "scale":
            try:
                kw[k] = float(v)
            except (TypeError, ValueError):
                raise ExtractionError(f"invalid scale: {v!r}") from None
        elif k == "vertex_type":
            kw[k] = vertex_encoding_from_selector(v)
        elif k == "face_type":
            kw[k] = face_encoding_from_selector(v)
        elif k == "byte_order":
            order = str(v).strip().lower()
            if order not in BYTE_ORDERS:
                raise ExtractionError(f"unknown byte order: {v!r} (supported: {sorted(BYTE_ORDERS)})")
            kw[k] = order
    return ExtractionConfig(**kw)
