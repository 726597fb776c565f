"""Zstandard compression of segment data."""

from __future__ import annotations

import io
from typing import Iterable, Union

import zstandard

DEFAULT_COMPRESSION_LEVEL = 9

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


class SegmentCompressionError(Exception):
    """Raised when segment data cannot be compressed or decompressed."""


def compress_segment_with_level(data: BytesLike, level: int) -> bytes:
    """Compress data into a Zstandard frame at the given level."""
    try:
        return zstandard.ZstdCompressor(level=level).compress(bytes(data))
    except zstandard.ZstdError as exc:
        raise SegmentCompressionError("failed to compress segment with ZSTD") from exc


def compress_segment(data: BytesLike) -> bytes:
    """Compress data at the default level."""
    return compress_segment_with_level(data, DEFAULT_COMPRESSION_LEVEL)


def decompress_segment(compressed: BytesLike) -> bytes:
    """Decompress all Zstandard frames in compressed."""
    payload = bytes(compressed)
    decompressor = zstandard.ZstdDecompressor()
    out = bytearray()
    try:
        with decompressor.stream_reader(
            io.BytesIO(payload), read_across_frames=True
        ) as reader:
            while chunk := reader.read(1 << 16):
                out.extend(chunk)
    except zstandard.ZstdError as exc:
        raise SegmentCompressionError("failed to decompress segment with ZSTD") from exc
    return bytes(out)