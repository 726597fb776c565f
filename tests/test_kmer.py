import pytest

from agcseg.kmer import (
    Kmer,
    KmerMode,
    canonical_kmer,
    decode_base,
    encode_base,
    extract_kmer,
    reverse_complement,
    reverse_complement_kmer,
)


def _build(bases, k, mode):
    kmer = Kmer(k, mode)
    for b in bases:
        kmer.insert(b)
    return kmer


def test_reverse_complement():
    assert reverse_complement(0) == 3
    assert reverse_complement(1) == 2
    assert reverse_complement(2) == 1
    assert reverse_complement(3) == 0
    assert reverse_complement(7) == 4


def test_encode_decode():
    assert encode_base("A") == 0
    assert encode_base("C") == 1
    assert encode_base("G") == 2
    assert encode_base("T") == 3
    assert decode_base(0) == "A"
    assert decode_base(1) == "C"
    assert decode_base(2) == "G"
    assert decode_base(3) == "T"


def test_encode_decode_invalid():
    assert encode_base("N") is None
    assert decode_base(4) is None


def test_kmer_insertion():
    kmer = _build([0, 1, 2, 3], 4, KmerMode.CANONICAL)
    assert kmer.is_full()
    assert kmer.cur_size == 4


def test_kmer_not_full_until_k_bases():
    kmer = _build([0, 1, 2], 4, KmerMode.CANONICAL)
    assert not kmer.is_full()
    assert kmer.cur_size == 3


def test_kmer_data():
    kmer = _build([0, 0, 0, 0], 4, KmerMode.DIRECT)
    assert kmer.data_dir() >> 56 == 0


def test_canonical_kmer_is_min():
    kmer = _build([0, 1, 2, 3], 4, KmerMode.CANONICAL)
    canonical = kmer.data_canonical()
    assert canonical in (kmer.kmer_dir, kmer.kmer_rc)
    assert canonical == min(kmer.kmer_dir, kmer.kmer_rc)


def test_direct_code_layout():
    kmer = _build([0, 1, 2, 3], 4, KmerMode.DIRECT)
    assert kmer.data() == 0x1B << 56
    assert [kmer.symbol(i) for i in range(4)] == [0, 1, 2, 3]
    assert kmer.data_rc() == 0


def test_canonical_non_palindrome():
    kmer = _build([0, 0, 0, 1], 4, KmerMode.CANONICAL)  # AAAC, rc GTTT
    assert kmer.kmer_dir == 1 << 56
    assert kmer.kmer_rc == 0xBF << 56
    assert kmer.data() == 1 << 56
    assert kmer.is_dir_oriented()


def test_rev_comp_mode():
    kmer = _build([0, 0, 0, 1], 4, KmerMode.REV_COMP)
    assert kmer.is_full()
    assert kmer.data() == 0xBF << 56
    assert kmer.data_dir() == 0


def test_rolling_window_drops_oldest():
    kmer = _build([3, 0, 0, 0, 1], 4, KmerMode.CANONICAL)
    assert kmer.kmer_dir == 1 << 56
    assert kmer.kmer_rc == 0xBF << 56


def test_reset():
    kmer = _build([0, 1, 2, 3], 4, KmerMode.CANONICAL)
    kmer.reset()
    assert kmer.cur_size == 0
    assert kmer.kmer_dir == 0 and kmer.kmer_rc == 0


def test_swap_dir_rc():
    kmer = _build([0, 0, 0, 1], 4, KmerMode.CANONICAL)
    kmer.swap_dir_rc()
    assert kmer.kmer_dir == 0xBF << 56
    assert kmer.kmer_rc == 1 << 56
    assert not kmer.is_dir_oriented()


def test_swap_ignored_in_direct_mode():
    kmer = _build([0, 0, 0, 1], 4, KmerMode.DIRECT)
    before = kmer.kmer_dir
    kmer.swap_dir_rc()
    assert kmer.kmer_dir == before
    assert not kmer.is_dir_oriented()


def test_from_values_and_equality():
    built = _build([0, 0, 0, 1], 4, KmerMode.CANONICAL)
    made = Kmer.from_values(1 << 56, 0xBF << 56, 4, 4, KmerMode.CANONICAL)
    assert made == built
    assert made.is_full()
    other = _build([0, 0, 0, 2], 4, KmerMode.CANONICAL)
    assert not (made == other)


def test_full_length_32():
    kmer = _build([3] * 32, 32, KmerMode.DIRECT)
    assert kmer.data() == (1 << 64) - 1
    kmer.insert(0)
    assert kmer.data() == ((1 << 64) - 1) ^ 3


def test_reverse_complement_kmer_values():
    assert reverse_complement_kmer(1 << 56, 4) == 0xBF << 56
    assert canonical_kmer(0xBF << 56, 4) == 1 << 56
    assert canonical_kmer(1 << 56, 4) == 1 << 56


@pytest.mark.parametrize("bases", [[0, 1, 2, 3, 3], [2, 2, 0, 1, 3], [1, 1, 1, 1, 0]])
def test_reverse_complement_kmer_involution(bases):
    code = _build(bases, 5, KmerMode.DIRECT).data()
    assert reverse_complement_kmer(reverse_complement_kmer(code, 5), 5) == code


def test_reverse_complement_kmer_matches_kmer_rc():
    kmer = _build([2, 0, 3, 1, 1, 2], 6, KmerMode.CANONICAL)
    assert reverse_complement_kmer(kmer.kmer_dir, 6) == kmer.kmer_rc


def test_extract_kmer():
    kmer = extract_kmer(b"TTAAAC", 2, 4, KmerMode.CANONICAL)
    assert kmer is not None
    assert kmer.kmer_dir == 1 << 56
    from_str = extract_kmer("TTAAAC", 2, 4, KmerMode.CANONICAL)
    assert from_str == kmer


def test_extract_kmer_out_of_range():
    assert extract_kmer(b"ACGT", 2, 4, KmerMode.DIRECT) is None


def test_extract_kmer_invalid_base():
    assert extract_kmer(b"ACNT", 0, 4, KmerMode.DIRECT) is None