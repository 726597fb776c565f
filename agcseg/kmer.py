"""Compact 2-bit k-mers holding direct and reverse-complement codes."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Union

_MASK64 = (1 << 64) - 1

_ENCODING = {"A": 0, "C": 1, "G": 2, "T": 3}
_DECODING = "ACGT"


class KmerMode(Enum):
    """Which orientation of a k-mer is reported."""

    DIRECT = "direct"
    REV_COMP = "rev_comp"
    CANONICAL = "canonical"


def reverse_complement(base: int) -> int:
    """Complement a 2-bit base (A<->T, C<->G); anything else maps to 4."""
    return {0: 3, 1: 2, 2: 1, 3: 0}.get(base, 4)


class Kmer:
    """A k-mer of at most 32 bases packed into the top bits of a 64-bit word."""

    def __init__(self, max_size: int, variant: KmerMode) -> None:
        self.kmer_dir = 0
        self.kmer_rc = 0
        self.cur_size = 0
        self.max_size = max_size
        self.variant = variant
        self._shift = 64 - 2 * max_size
        self._mask = (_MASK64 << self._shift) & _MASK64

    @classmethod
    def from_values(
        cls,
        kmer_dir: int,
        kmer_rc: int,
        max_size: int,
        cur_size: int,
        variant: KmerMode,
    ) -> "Kmer":
        """Build a k-mer from already computed direct and reverse-complement codes."""
        kmer = cls(max_size, variant)
        kmer.kmer_dir = kmer_dir & _MASK64
        kmer.kmer_rc = kmer_rc & _MASK64
        kmer.cur_size = cur_size
        return kmer

    def reset(self) -> None:
        """Empty the k-mer."""
        self.kmer_dir = 0
        self.kmer_rc = 0
        self.cur_size = 0

    def _push_rc(self, symbol: int) -> None:
        rc = (self.kmer_rc >> 2) + ((reverse_complement(symbol) << 62) & _MASK64)
        self.kmer_rc = rc & _MASK64 & self._mask

    def _push_dir(self, symbol: int) -> None:
        if self.cur_size == self.max_size:
            shifted = (self.kmer_dir << 2) & _MASK64
            self.kmer_dir = (shifted + ((symbol << self._shift) & _MASK64)) & _MASK64
        else:
            self.cur_size += 1
            offset = 64 - 2 * self.cur_size
            self.kmer_dir = (self.kmer_dir + ((symbol << offset) & _MASK64)) & _MASK64

    def insert_canonical(self, symbol: int) -> None:
        """Append a base, updating both orientations."""
        self._push_rc(symbol)
        self._push_dir(symbol)

    def insert(self, symbol: int) -> None:
        """Append a base according to the k-mer's mode."""
        if self.variant is KmerMode.DIRECT:
            self._push_dir(symbol)
        elif self.variant is KmerMode.REV_COMP:
            self._push_rc(symbol)
            if self.cur_size < self.max_size:
                self.cur_size += 1
        else:
            self.insert_canonical(symbol)

    def data(self) -> int:
        """Code of the k-mer in its mode's orientation."""
        if self.variant is KmerMode.DIRECT:
            return self.kmer_dir
        if self.variant is KmerMode.REV_COMP:
            return self.kmer_rc
        return min(self.kmer_dir, self.kmer_rc)

    def data_canonical(self) -> int:
        """Smaller of the direct and reverse-complement codes."""
        return min(self.kmer_dir, self.kmer_rc)

    def data_dir(self) -> int:
        """Direct code, or 0 in reverse-complement mode."""
        return 0 if self.variant is KmerMode.REV_COMP else self.kmer_dir

    def data_rc(self) -> int:
        """Reverse-complement code, or 0 in direct mode."""
        return 0 if self.variant is KmerMode.DIRECT else self.kmer_rc

    def is_full(self) -> bool:
        """True once max_size bases have been inserted."""
        return self.cur_size == self.max_size

    def symbol(self, pos: int) -> int:
        """The 2-bit base at position pos."""
        if self.variant is KmerMode.REV_COMP:
            return (self.kmer_rc >> (64 - 2 * self.cur_size + 2 * pos)) & 3
        return (self.kmer_dir >> (62 - 2 * pos)) & 3

    def swap_dir_rc(self) -> None:
        """Exchange the two orientations (canonical mode only)."""
        if self.variant is KmerMode.CANONICAL:
            self.kmer_dir, self.kmer_rc = self.kmer_rc, self.kmer_dir

    def is_dir_oriented(self) -> bool:
        """True in canonical mode when the direct code is not larger."""
        return self.variant is KmerMode.CANONICAL and self.kmer_dir <= self.kmer_rc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Kmer):
            return NotImplemented
        if self.variant is KmerMode.REV_COMP:
            return self.kmer_rc == other.kmer_rc
        return self.kmer_dir == other.kmer_dir

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Kmer(max_size={self.max_size}, cur_size={self.cur_size}, "
            f"variant={self.variant.name}, dir={self.kmer_dir:#x}, rc={self.kmer_rc:#x})"
        )


def encode_base(c: str) -> Optional[int]:
    """Encode a nucleotide letter as 0..3, or None if it is not A, C, G or T."""
    return _ENCODING.get(c.upper()) if len(c) == 1 else None


def decode_base(val: int) -> Optional[str]:
    """Decode 0..3 to A, C, G or T, or None for any other value."""
    return _DECODING[val] if 0 <= val < 4 else None


def extract_kmer(
    sequence: Union[str, bytes, Sequence[int]], pos: int, k: int, mode: KmerMode
) -> Optional[Kmer]:
    """Build a k-mer from k letters of sequence starting at pos.

    Returns None when the window runs past the end or holds a non-ACGT letter.
    """
    if pos + k > len(sequence):
        return None
    kmer = Kmer(k, mode)
    for item in sequence[pos : pos + k]:
        letter = chr(item) if isinstance(item, int) else item
        base = encode_base(letter)
        if base is None:
            return None
        kmer.insert(base)
    return kmer


def reverse_complement_kmer(kmer: int, k: int) -> int:
    """Reverse complement of a packed k-mer code."""
    shift = 64 - 2 * k
    result = 0
    for i in range(k):
        base = (kmer >> (shift + 2 * i)) & 3
        result |= reverse_complement(base) << (shift + 2 * (k - 1 - i))
    return result & _MASK64


def canonical_kmer(kmer: int, k: int) -> int:
    """Smaller of a packed k-mer and its reverse complement."""
    return min(kmer, reverse_complement_kmer(kmer, k))