from __future__ import annotations

from enum import Enum

import numpy as np

from binmesh.errors import ExtractionError


BYTE_ORDERS = {"little": "<", "big": ">"}


class VertexEncoding(Enum):
    F32 = 0  # float32 x3
    I16 = 1  # int16 x3, widened

    @property
    def component_width(self) -> int:
        return 4 if self is VertexEncoding.F32 else 2

    @property
    def record_size(self) -> int:
        return 3 * self.component_width

    def dtype(self, byte_order: str = "little") -> np.dtype:
        code = "f4" if self is VertexEncoding.F32 else "i2"
        return np.dtype(_order_prefix(byte_order) + code)


class FaceEncoding(Enum):
    I16 = 0  # uint16
    I32 = 1  # uint32

    @property
    def width(self) -> int:
        return 2 if self is FaceEncoding.I16 else 4

    def dtype(self, byte_order: str = "little") -> np.dtype:
        code = "u2" if self is FaceEncoding.I16 else "u4"
        return np.dtype(_order_prefix(byte_order) + code)


def _order_prefix(byte_order: str) -> str:
    try:
        return BYTE_ORDERS[byte_order]
    except KeyError:
        raise ExtractionError(f"unknown byte order: {byte_order!r} (supported: {sorted(BYTE_ORDERS)})") from None


def vertex_encoding_from_selector(value: int | str | VertexEncoding) -> VertexEncoding:
    if isinstance(value, VertexEncoding):
        return value
    try:
        return VertexEncoding(int(value))
    except (TypeError, ValueError):
        raise ExtractionError(f"invalid vertex type selector: {value!r} (0 = float32, 1 = int16)") from None


def face_encoding_from_selector(value: int | str | FaceEncoding) -> FaceEncoding:
    if isinstance(value, FaceEncoding):
        return value
    try:
        return FaceEncoding(int(value))
    except (TypeError, ValueError):
        raise ExtractionError(f"invalid face type selector: {value!r} (0 = int16, 1 = int32)") from None
