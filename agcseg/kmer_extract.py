"""Enumeration of canonical k-mers and selection of singletons."""

from __future__ import annotations

from itertools import groupby
from typing import Iterable, List

from agcseg.kmer import Kmer, KmerMode


def enumerate_kmers(contig: Iterable[int], k: int) -> List[int]:
    """Canonical codes of every full k-mer in a numeric contig, in order.

    Bases above 3 (N and other codes) restart the k-mer.
    """
    kmer = Kmer(k, KmerMode.CANONICAL)
    result: List[int] = []
    for base in contig:
        if base > 3:
            kmer.reset()
            continue
        kmer.insert(base)
        if kmer.is_full():
            result.append(kmer.data())
    return result


def remove_non_singletons(values: List[int], virtual_begin: int) -> List[int]:
    """Keep the first virtual_begin values, then only values occurring once.

    The part from virtual_begin onwards must be sorted.
    """
    kept = list(values[:virtual_begin])
    for value, run in groupby(values[virtual_begin:]):
        if sum(1 for _ in run) == 1:
            kept.append(value)
    return kept


def find_candidate_kmers(contig: Iterable[int], k: int) -> List[int]:
    """Sorted canonical k-mers that appear exactly once in the contig."""
    return remove_non_singletons(sorted(enumerate_kmers(contig, k)), 0)