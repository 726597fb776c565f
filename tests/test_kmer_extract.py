from agcseg.kmer import Kmer, KmerMode
from agcseg.kmer_extract import (
    enumerate_kmers,
    find_candidate_kmers,
    remove_non_singletons,
)


def test_enumerate_kmers_simple():
    assert len(enumerate_kmers([0, 1, 2, 3], 3)) == 2


def test_enumerate_kmers_with_n():
    assert len(enumerate_kmers([0, 1, 4, 2, 3], 3)) == 0


def test_enumerate_kmers_short_sequence():
    assert len(enumerate_kmers([0, 1], 3)) == 0


def test_enumerate_kmers_values_are_canonical():
    kmer = Kmer(4, KmerMode.CANONICAL)
    for b in [0, 0, 0, 1]:
        kmer.insert(b)
    assert enumerate_kmers(bytes([0, 0, 0, 1]), 4) == [kmer.data()]
    assert enumerate_kmers([2, 3, 3, 3], 4) == [kmer.data()]


def test_enumerate_kmers_resumes_after_n():
    assert len(enumerate_kmers([0, 1, 4, 2, 3, 0], 3)) == 1


def test_remove_non_singletons():
    assert remove_non_singletons([1, 2, 2, 3, 3, 3, 4, 5, 5, 6], 0) == [1, 4, 6]


def test_remove_non_singletons_with_virtual_begin():
    assert remove_non_singletons([1, 1, 2, 3, 3, 4, 5, 5], 2) == [1, 1, 2, 4]


def test_remove_non_singletons_empty():
    assert remove_non_singletons([], 0) == []


def test_find_candidate_kmers():
    assert len(find_candidate_kmers([0, 1, 2, 3, 0, 1, 2, 3], 3)) == 0


def test_find_candidate_kmers_sorted_and_unique():
    candidates = find_candidate_kmers([0, 0, 0, 0, 1, 1, 1, 1, 2, 2, 2, 2], 3)
    assert candidates == sorted(set(candidates))
    assert len(candidates) > 0