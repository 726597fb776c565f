# agcseg

Building blocks for compressing collections of genomes by cutting them into
segments at shared k-mers and coding each segment against a reference one.

Sequences are handled as `bytes` in numeric form: A=0, C=1, G=2, T=3, with
larger codes for N (4) and other IUPAC symbols.

## Modules

- `agcseg.kmer` – `Kmer` packs up to 32 bases, two bits each, into the top
  bits of a 64-bit code and keeps both the direct and reverse-complement
  codes. `KmerMode` (`DIRECT`, `REV_COMP`, `CANONICAL`) chooses what
  `Kmer.data()` reports; canonical is the smaller of the two codes. Helpers:
  `reverse_complement`, `encode_base`, `decode_base`, `extract_kmer`,
  `canonical_kmer` and `reverse_complement_kmer`.
- `agcseg.kmer_extract` – `enumerate_kmers` lists the canonical codes of all
  full k-mers of a contig (bases above 3 restart the k-mer),
  `remove_non_singletons` keeps values that occur once in a sorted list, and
  `find_candidate_kmers` combines the two.
- `agcseg.splitters` – `determine_splitters(contigs, k, segment_size)`
  returns the set of singleton k-mers that a scan of the reference contigs
  actually splits at (at least `segment_size` bases apart, plus the rightmost
  candidate of each contig). `find_candidate_kmers_multi` and `is_splitter`
  support it.
- `agcseg.segment` – `split_at_splitters_with_size` and `split_at_splitters`
  cut a contig into `Segment` objects (`data`, `front_kmer`, `back_kmer`)
  that overlap by k bases, so a contig is rebuilt from the first segment and
  every later one without its first k bases. Missing flanks are
  `MISSING_KMER` (2**64 - 1). The `min_segment_size` argument is accepted but
  does not affect where a contig is cut.
- `agcseg.lz_diff` – `LZDiff(min_match_len)` indexes a reference with
  `prepare`, then `encode` turns a target into a byte string of literals,
  N-runs and matches, and `decode` rebuilds it. A target equal to the
  reference encodes to `b""`. `min_match_len` below 4 raises `ValueError`, as
  does decoding a match that lies outside the reference.
- `agcseg.segment_compression` – `compress_segment` (Zstandard level 9),
  `compress_segment_with_level` and `decompress_segment`; failures raise
  `SegmentCompressionError`.
- `agcseg.genome_io` – `GenomeReader` reads FASTA from a binary stream or,
  through `GenomeReader.open`, from a file (names ending in `.gz` are read as
  gzip). `read_contig` keeps the sequence letters as ASCII,
  `read_contig_converted` gives numeric codes, `read_contig_with_sample`
  also splits `sample#haplotype#contig` headers with
  `parse_sample_from_header`, and `read_contig_raw` returns the lines as
  stored. Each returns `None` at the end of the input. `GenomeWriter` writes
  each contig as a header line and one unwrapped sequence line; its
  `gzip_level` argument is accepted but output is always plain. Both classes
  are context managers.

## Installation

```
pip install .
```

## Example

```python
from agcseg.genome_io import GenomeReader
from agcseg.lz_diff import LZDiff
from agcseg.segment import split_at_splitters_with_size
from agcseg.segment_compression import compress_segment, decompress_segment
from agcseg.splitters import determine_splitters

with GenomeReader.open("reference.fa.gz") as reader:
    contigs = []
    while (record := reader.read_contig_converted()) is not None:
        name, sequence = record
        contigs.append(sequence)

splitters = determine_splitters(contigs, 21, 1000)
segments = split_at_splitters_with_size(contigs[0], splitters, 21, 1000)

lz = LZDiff(15)
lz.prepare(segments[0].data)
encoded = lz.encode(segments[-1].data)
assert lz.decode(encoded) == segments[-1].data

packed = compress_segment(encoded)
assert decompress_segment(packed) == encoded
```

## What it does not do

The package provides the pieces only. It has no archive container to store
segments, groups and sample metadata in, no compressor or decompressor that
drives the whole pipeline over FASTA files, and no command-line program.

## Tests

```
pip install .[test]
pytest
```