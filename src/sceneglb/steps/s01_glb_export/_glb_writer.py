"""GLB writer: frames a glTF JSON document and staged payloads as a binary container.

Layout (all integers little-endian uint32):

    header     magic "glTF" | version 2 | total length
    chunk 0    length | "JSON" | UTF-8 JSON text, space padded to 4 bytes
    chunk 1    length | "BIN\\0" | concatenated payloads, zero padded to 4 bytes

Every failure is reported through the logger callback at severity 2 and
turns into a ``False`` return; bytes already written stay on disk.
"""

from __future__ import annotations

import enum
import json
import logging
import struct
from pathlib import Path
from typing import Any, BinaryIO

from sceneglb.core.logging import LEVEL_ERROR, LoggerCallback

from ._staging import UINT32_MAX, PayloadStaging, pad4

logger = logging.getLogger(__name__)

GLB_MAGIC = 0x46546C67
GLB_VERSION = 2
CHUNK_TYPE_JSON = 0x4E4F534A
CHUNK_TYPE_BIN = 0x004E4942

HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8

JSON_PAD_BYTE = b" "
BIN_PAD_BYTE = b"\x00"


class WriterState(enum.Enum):
    IDLE = "idle"
    HEADER_WRITTEN = "header_written"
    JSON_WRITTEN = "json_written"
    BIN_WRITTEN = "bin_written"
    DONE = "done"
    FAILED = "failed"


def serialize_document(document: dict[str, Any]) -> bytes:
    """Compact UTF-8 JSON text, no padding."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def pad_json(data: bytes) -> bytes:
    return data + JSON_PAD_BYTE * (pad4(len(data)) - len(data))


def container_length(json_chunk_length: int, bin_chunk_length: int) -> int:
    """Total file size for padded chunk lengths."""
    return (
        HEADER_SIZE
        + CHUNK_HEADER_SIZE + json_chunk_length
        + CHUNK_HEADER_SIZE + bin_chunk_length
    )


def _open_destination(path: Path) -> BinaryIO:
    return open(path, "wb")


class GlbWriter:
    """Single-use writer for one destination path.

    ``state`` follows IDLE -> HEADER_WRITTEN -> JSON_WRITTEN -> BIN_WRITTEN
    -> DONE, or drops to FAILED from any of them.
    """

    def __init__(self, path: Path, log: LoggerCallback):
        self.path = Path(path)
        self.log = log
        self.state = WriterState.IDLE
        self.bytes_written = 0
        self.json_chunk_length = 0
        self.bin_chunk_length = 0

    def write(self, document: dict[str, Any], staging: PayloadStaging) -> bool:
        if self.state is not WriterState.IDLE:
            raise RuntimeError(f"GlbWriter for {self.path} already used (state={self.state.value})")

        json_chunk = pad_json(serialize_document(document))
        self.json_chunk_length = len(json_chunk)
        self.bin_chunk_length = staging.padded_size()
        total_length = container_length(self.json_chunk_length, self.bin_chunk_length)
        if total_length > UINT32_MAX:
            return self._fail("%s: Container too large (%d bytes)", self.path, total_length)

        try:
            stream = _open_destination(self.path)
        except OSError as exc:
            return self._fail(
                "Failed to open %s for writing: %s", self.path, exc.strerror or exc
            )

        try:
            with stream:
                ok = self._write_chunks(stream, json_chunk, staging, total_length)
        except OSError as exc:
            if self.state is WriterState.FAILED:
                logger.debug(f"Close after failure also failed for {self.path}: {exc}")
                return False
            return self._fail("%s: Error closing file: %s", self.path, exc.strerror or exc)

        if not ok:
            return False
        self.state = WriterState.DONE
        return True

    def _write_chunks(
        self,
        stream: BinaryIO,
        json_chunk: bytes,
        staging: PayloadStaging,
        total_length: int,
    ) -> bool:
        header = struct.pack("<III", GLB_MAGIC, GLB_VERSION, total_length)
        if not self._write(stream, header):
            return self._fail("%s: Error writing header", self.path)
        self.state = WriterState.HEADER_WRITTEN

        json_header = struct.pack("<II", len(json_chunk), CHUNK_TYPE_JSON)
        if not self._write(stream, json_header):
            return self._fail("%s: Error writing JSON chunk header", self.path)
        if not self._write(stream, json_chunk):
            return self._fail("%s: Error writing JSON data", self.path)
        self.state = WriterState.JSON_WRITTEN

        bin_header = struct.pack("<II", self.bin_chunk_length, CHUNK_TYPE_BIN)
        if not self._write(stream, bin_header):
            return self._fail("%s: Error writing BIN chunk header", self.path)

        offset = 0
        for item in staging:
            if not self._write(stream, item.data):
                return self._fail(
                    "%s: Error writing BIN chunk data at offset %d", self.path, offset
                )
            offset += item.size

        padding = self.bin_chunk_length - offset
        if padding and not self._write(stream, BIN_PAD_BYTE * padding):
            return self._fail(
                "%s: Error writing BIN chunk data at offset %d", self.path, offset
            )
        self.state = WriterState.BIN_WRITTEN
        return True

    def _write(self, stream: BinaryIO, data: bytes | memoryview) -> bool:
        expected = len(data) if isinstance(data, bytes) else data.nbytes
        try:
            written = stream.write(data)
        except OSError as exc:
            logger.debug(f"Write to {self.path} raised: {exc}")
            return False
        # Raw streams may report a short write instead of raising
        if written != expected:
            logger.debug(f"Short write to {self.path}: {written}/{expected} bytes")
            self.bytes_written += written or 0
            return False
        self.bytes_written += expected
        return True

    def _fail(self, fmt: str, *args: Any) -> bool:
        self.state = WriterState.FAILED
        self.log(LEVEL_ERROR, fmt, *args)
        return False
