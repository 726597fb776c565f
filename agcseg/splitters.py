"""Selection of splitter k-mers from reference contigs."""

from __future__ import annotations

from typing import Container, Iterable, List, Sequence, Set

from agcseg.kmer import Kmer, KmerMode
from agcseg.kmer_extract import enumerate_kmers, remove_non_singletons


def find_candidate_kmers_multi(contigs: Iterable[Iterable[int]], k: int) -> List[int]:
    """Sorted canonical k-mers occurring exactly once across all contigs."""
    all_kmers = sorted(code for contig in contigs for code in enumerate_kmers(contig, k))
    return remove_non_singletons(all_kmers, 0)


def _find_actual_splitters_in_contig(
    contig: Iterable[int], candidates: Container[int], k: int, segment_size: int
) -> List[int]:
    """Candidates that a scan of the contig actually uses as split points."""
    used: List[int] = []
    kmer = Kmer(k, KmerMode.CANONICAL)
    current_len = segment_size
    recent_kmers: List[int] = []

    for base in contig:
        if base > 3:
            kmer.reset()
            recent_kmers.clear()
        else:
            kmer.insert(base)
            if kmer.is_full():
                kmer_value = kmer.data()
                recent_kmers.append(kmer_value)
                if current_len >= segment_size and kmer_value in candidates:
                    used.append(kmer_value)
                    current_len = 0
                    kmer.reset()
                    recent_kmers.clear()
        current_len += 1

    rightmost = next((v for v in reversed(recent_kmers) if v in candidates), None)
    if rightmost is not None:
        used.append(rightmost)

    return used


def determine_splitters(
    contigs: Sequence[Iterable[int]], k: int, segment_size: int
) -> Set[int]:
    """Splitter k-mers actually used when segmenting the reference contigs.

    Candidates are the singleton canonical k-mers of the reference; a scan of
    each contig then keeps those met after at least segment_size bases since
    the previous split, plus the rightmost candidate near each contig's end.
    """
    candidates = set(find_candidate_kmers_multi(contigs, k))
    used: Set[int] = set()
    for contig in contigs:
        used.update(_find_actual_splitters_in_contig(contig, candidates, k, segment_size))
    return used


def is_splitter(kmer: int, splitters: Container[int]) -> bool:
    """True if kmer is among the splitters."""
    return kmer in splitters