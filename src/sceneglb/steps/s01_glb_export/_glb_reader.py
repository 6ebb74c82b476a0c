"""GLB reader: parse and validate a binary glTF container."""

from __future__ import annotations

import json
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ._glb_writer import (
    CHUNK_HEADER_SIZE,
    CHUNK_TYPE_BIN,
    CHUNK_TYPE_JSON,
    GLB_MAGIC,
    GLB_VERSION,
    HEADER_SIZE,
)

CHUNK_NAMES = {CHUNK_TYPE_JSON: "JSON", CHUNK_TYPE_BIN: "BIN"}


class GlbFormatError(ValueError):
    """The file is not a well-formed GLB container."""


@dataclass
class GlbChunk:
    type: int
    length: int
    data: bytes

    @property
    def type_name(self) -> str:
        return CHUNK_NAMES.get(self.type, f"0x{self.type:08X}")


@dataclass
class GlbFile:
    magic: int
    version: int
    total_length: int
    chunks: list[GlbChunk] = field(default_factory=list)

    @property
    def json(self) -> dict[str, Any]:
        chunk = self._chunk(CHUNK_TYPE_JSON)
        if chunk is None:
            raise GlbFormatError("No JSON chunk")
        return json.loads(chunk.data.decode("utf-8"))

    @property
    def bin(self) -> bytes:
        chunk = self._chunk(CHUNK_TYPE_BIN)
        return chunk.data if chunk is not None else b""

    def _chunk(self, chunk_type: int) -> GlbChunk | None:
        return next((c for c in self.chunks if c.type == chunk_type), None)


def parse_glb(data: bytes) -> GlbFile:
    """Parse an in-memory GLB container."""
    if len(data) < HEADER_SIZE:
        raise GlbFormatError(f"Truncated header: {len(data)} bytes")

    magic, version, total_length = struct.unpack_from("<III", data, 0)
    if magic != GLB_MAGIC:
        raise GlbFormatError(f"Bad magic 0x{magic:08X}")
    if version != GLB_VERSION:
        raise GlbFormatError(f"Unsupported version {version}")
    if total_length != len(data):
        raise GlbFormatError(
            f"Header length {total_length} does not match file size {len(data)}"
        )

    glb = GlbFile(magic=magic, version=version, total_length=total_length)
    pos = HEADER_SIZE
    while pos < len(data):
        if pos + CHUNK_HEADER_SIZE > len(data):
            raise GlbFormatError(f"Truncated chunk header at offset {pos}")
        length, chunk_type = struct.unpack_from("<II", data, pos)
        pos += CHUNK_HEADER_SIZE
        if length % 4:
            raise GlbFormatError(f"Chunk length {length} at offset {pos} not 4-byte aligned")
        if pos + length > len(data):
            raise GlbFormatError(f"Chunk at offset {pos} overruns file ({length} bytes)")
        glb.chunks.append(GlbChunk(chunk_type, length, data[pos:pos + length]))
        pos += length

    if not glb.chunks or glb.chunks[0].type != CHUNK_TYPE_JSON:
        raise GlbFormatError("First chunk must be JSON")
    return glb


def read_glb(path: Path) -> GlbFile:
    """Read and parse a GLB file from disk."""
    with open(path, "rb") as f:
        return parse_glb(f.read())
