"""Payload staging: ordered byte contributions destined for the BIN chunk.

Each registration returns the byte offset its data will occupy in the
concatenated chunk. Order of registration is the order on disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

import numpy as np

UINT32_MAX = 0xFFFFFFFF

Payload = Union[bytes, bytearray, memoryview, np.ndarray]


def pad4(n: int) -> int:
    """Round n up to the next multiple of 4."""
    return (n + 3) & ~3


@dataclass(frozen=True)
class PayloadDescriptor:
    """One staged contribution: either a view onto caller memory or an owned copy."""

    data: Union[bytes, memoryview]
    size: int
    offset: int
    owned: bool


def _as_bytes_view(data: Payload) -> memoryview:
    if isinstance(data, np.ndarray):
        data = np.ascontiguousarray(data)
    return memoryview(data).cast("B")


class PayloadStaging:
    """Append-only list of payload descriptors for one export."""

    def __init__(self) -> None:
        self._items: list[PayloadDescriptor] = []
        self.data_bytes = 0

    def register(self, data: Payload, own_copy: bool = False) -> int:
        """Stage ``data`` and return its offset within the BIN chunk.

        With ``own_copy`` the bytes are copied now; otherwise only a view is
        kept and the caller must leave the buffer untouched until the export
        completes.
        """
        view = _as_bytes_view(data)
        size = view.nbytes
        if self.data_bytes + size > UINT32_MAX:
            raise OverflowError(
                f"Staged payload total {self.data_bytes} + {size} exceeds uint32 range"
            )

        stored: Union[bytes, memoryview] = view.tobytes() if own_copy else view
        offset = self.data_bytes
        self._items.append(PayloadDescriptor(stored, size, offset, own_copy))
        self.data_bytes += size
        return offset

    def padded_size(self) -> int:
        return pad4(self.data_bytes)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PayloadDescriptor]:
        return iter(self._items)
