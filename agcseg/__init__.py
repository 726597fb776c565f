"""K-mers, splitter selection, contig segmentation, LZ diff coding, Zstandard packing and FASTA I/O."""

__version__ = "0.1.0"

__all__ = [
    "genome_io",
    "kmer",
    "kmer_extract",
    "lz_diff",
    "segment",
    "segment_compression",
    "splitters",
]