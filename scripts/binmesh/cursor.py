from __future__ import annotations

import os
from typing import BinaryIO

from binmesh.errors import ExtractionError


class ByteCursor:
    """Read position over a seekable binary stream.

    Short reads come back as ``None`` and failed relative skips as ``False``;
    only the absolute ``seek_to`` is fatal.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def tell(self) -> int:
        return int(self._stream.tell())

    def seek_to(self, offset: int) -> None:
        try:
            self._stream.seek(int(offset), os.SEEK_SET)
        except (OSError, ValueError, OverflowError) as e:
            raise ExtractionError(f"Failed to seek to {offset}!") from e

    def read_exact(self, n: int) -> bytes | None:
        buf = self._stream.read(int(n))
        if len(buf) != int(n):
            return None
        return buf

    def skip(self, n: int) -> bool:
        try:
            self._stream.seek(int(n), os.SEEK_CUR)
        except (OSError, ValueError, OverflowError):
            return False
        return True
