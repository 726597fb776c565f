"""Splitting of numeric contigs into segments bounded by splitter k-mers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Container, Iterable, List, Tuple

from agcseg.kmer import Kmer, KmerMode

MISSING_KMER = (1 << 64) - 1
"""Sentinel for a segment end that has no bounding splitter k-mer."""


@dataclass
class Segment:
    """A stretch of a contig together with its flanking k-mer codes."""

    data: bytes
    front_kmer: int = MISSING_KMER
    back_kmer: int = MISSING_KMER

    def __len__(self) -> int:
        return len(self.data)


def split_at_splitters_with_size(
    contig: Iterable[int],
    splitters: Container[int],
    k: int,
    min_segment_size: int,
) -> List[Segment]:
    """Split a contig at every occurrence of a splitter k-mer.

    Consecutive segments overlap by k bases, so a contig is rebuilt from the
    first segment followed by every later segment without its first k bases.
    The k-mer is restarted after each split. min_segment_size is accepted for
    interface compatibility; the distance rule applies only when splitters are
    chosen, not here.
    """
    data = bytes(contig)
    if len(data) < k:
        return [Segment(data)]

    segments: List[Segment] = []
    kmer = Kmer(k, KmerMode.CANONICAL)
    segment_start = 0
    front_kmer = MISSING_KMER
    recent_kmers: List[Tuple[int, int]] = []

    for pos, base in enumerate(data):
        if base > 3:
            kmer.reset()
            recent_kmers.clear()
            continue
        kmer.insert(base)
        if not kmer.is_full():
            continue
        kmer_value = kmer.data()
        recent_kmers.append((pos, kmer_value))
        if kmer_value in splitters:
            piece = data[segment_start : pos + 1]
            if piece:
                segments.append(Segment(piece, front_kmer, kmer_value))
            segment_start = max(pos + 1 - k, 0)
            front_kmer = kmer_value
            recent_kmers.clear()
            kmer.reset()

    # Look back for the rightmost splitter that leaves room for the overlap.
    for pos, kmer_value in reversed(recent_kmers):
        if kmer_value not in splitters:
            continue
        segment_end = pos + 1
        remaining_after = len(data) - segment_end
        if remaining_after > k:
            if segment_end > segment_start:
                piece = data[segment_start:segment_end]
                if piece:
                    segments.append(Segment(piece, front_kmer, kmer_value))
                    segment_start = max(pos + 1 - k, 0)
                    front_kmer = kmer_value
            break
        if remaining_after == 0:
            if segment_end > segment_start:
                piece = data[segment_start:segment_end]
                if piece:
                    segments.append(Segment(piece, front_kmer, kmer_value))
                    segment_start = len(data)
            break

    if segment_start < len(data):
        piece = data[segment_start:]
        if piece:
            segments.append(Segment(piece, front_kmer, MISSING_KMER))

    if not segments:
        segments.append(Segment(data))

    # A trailing segment shorter than k cannot carry the overlap; fold it back.
    if len(segments) >= 2 and len(segments[-1]) < k:
        last = segments.pop()
        previous = segments[-1]
        segments[-1] = Segment(
            previous.data + last.data, previous.front_kmer, last.back_kmer
        )

    return segments


def split_at_splitters(
    contig: Iterable[int], splitters: Container[int], k: int
) -> List[Segment]:
    """Split a contig at every splitter k-mer without restarting the k-mer.

    Consecutive segments overlap by k bases.
    """
    data = bytes(contig)
    if len(data) < k:
        return [Segment(data)]

    segments: List[Segment] = []
    kmer = Kmer(k, KmerMode.CANONICAL)
    segment_start = 0
    front_kmer = MISSING_KMER

    for pos, base in enumerate(data):
        if base > 3:
            kmer.reset()
            continue
        kmer.insert(base)
        if not kmer.is_full():
            continue
        kmer_value = kmer.data()
        if kmer_value in splitters:
            piece = data[segment_start : pos + 1]
            if piece:
                segments.append(Segment(piece, front_kmer, kmer_value))
            segment_start = max(pos + 1 - k, 0)
            front_kmer = kmer_value

    if segment_start < len(data):
        piece = data[segment_start:]
        if piece:
            segments.append(Segment(piece, front_kmer, MISSING_KMER))

    if not segments:
        segments.append(Segment(data))

    return segments