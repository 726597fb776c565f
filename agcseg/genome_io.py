"""Reading and writing FASTA genomes, with optional numeric base conversion."""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Tuple, Union

PathLike = Union[str, Path]

# Codes for bytes 64..127; every letter not listed maps to 30 (unknown symbol).
_UPPER_CODES = (
    32, 0, 11, 1, 12, 30, 30, 2, 13, 30, 30, 9, 30, 10, 4, 30,
    30, 30, 5, 7, 3, 15, 14, 8, 30, 6, 30, 30, 30, 30, 30, 30,
)
_CNV_NUM = bytes(range(64)) + bytes(_UPPER_CODES * 2)

# Only bytes strictly above 64 and below 128 belong to a sequence.
_DROPPED = bytes(c for c in range(256) if c <= 64 or c >= 128)
_CONVERT_TABLE = _CNV_NUM + bytes(range(128, 256))


def parse_sample_from_header(header: str) -> Tuple[str, str]:
    """Split a ``sample#haplotype#contig`` header into sample and contig names.

    Headers with fewer than three ``#``-separated parts give the sample
    ``"unknown"`` and the whole header as contig name.
    """
    parts = header.split("#")
    if len(parts) >= 3:
        return f"{parts[0]}#{parts[1]}", "#".join(parts[2:])
    return "unknown", header


class GenomeReader:
    """Sequential FASTA reader over a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream: Optional[BinaryIO] = stream
        self._next_header: Optional[bytes] = None

    @classmethod
    def open(cls, path: PathLike) -> "GenomeReader":
        """Open a FASTA file; names ending in ``.gz`` are read as (multi-member) gzip."""
        path = Path(path)
        if path.suffix == ".gz":
            return cls(gzip.open(path, "rb"))
        return cls(open(path, "rb"))

    def read_contig_raw(self) -> Optional[Tuple[str, bytes]]:
        """Next contig with its sequence lines exactly as stored, newlines included.

        Returns None at end of input, or when the header or the sequence is empty.
        """
        if self._stream is None:
            return None

        if self._next_header is not None:
            header_line, self._next_header = self._next_header, None
        else:
            header_line = self._stream.readline()
            if not header_line:
                return None

        contig_id = header_line.decode("utf-8", errors="replace").lstrip(">").strip()

        sequence = bytearray()
        while line := self._stream.readline():
            if line.startswith(b">"):
                self._next_header = line
                break
            sequence += line

        if not contig_id or not sequence:
            return None
        return contig_id, bytes(sequence)

    def _read_filtered(self, converted: bool) -> Optional[Tuple[str, bytes]]:
        raw = self.read_contig_raw()
        if raw is None:
            return None
        contig_id, sequence = raw
        table = _CONVERT_TABLE if converted else None
        return contig_id, sequence.translate(table, _DROPPED)

    def read_contig(self) -> Optional[Tuple[str, bytes]]:
        """Next contig with only its sequence letters kept, as ASCII."""
        return self._read_filtered(False)

    def read_contig_converted(self) -> Optional[Tuple[str, bytes]]:
        """Next contig with letters converted to numeric codes (A=0, C=1, G=2, T=3)."""
        return self._read_filtered(True)

    def read_contig_with_sample(self) -> Optional[Tuple[str, str, str, bytes]]:
        """Next converted contig as (full header, sample name, contig name, sequence)."""
        result = self.read_contig_converted()
        if result is None:
            return None
        header, sequence = result
        sample_name, contig_name = parse_sample_from_header(header)
        return header, sample_name, contig_name, sequence

    def close(self) -> None:
        """Close the underlying stream; further reads return None."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        self._next_header = None

    def __enter__(self) -> "GenomeReader":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class GenomeWriter:
    """FASTA writer that stores each contig on a single line."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    @classmethod
    def create(cls, path: PathLike) -> "GenomeWriter":
        """Create (or truncate) a FASTA file for writing."""
        return cls(open(path, "wb"))

    def save_contig_directly(
        self, contig_id: str, contig: Union[bytes, bytearray, Iterable[int]], gzip_level: int = 0
    ) -> None:
        """Write a header line and the sequence without line wrapping.

        gzip_level is accepted for interface compatibility; output is always plain.
        """
        self._stream.write(b">" + contig_id.encode("utf-8") + b"\n")
        self._stream.write(bytes(contig))
        self._stream.write(b"\n")

    def close(self) -> None:
        """Flush and close the underlying stream."""
        if not self._stream.closed:
            self._stream.flush()
            self._stream.close()

    def __enter__(self) -> "GenomeWriter":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()