[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agcseg"
version = "0.1.0"
description = "Genome segmentation at splitter k-mers, LZ diff coding, Zstandard packing and FASTA I/O"
requires-python = ">=3.10"
dependencies = [
    "zstandard",
]
keywords = ["bioinformatics", "genomics", "compression", "k-mer", "fasta"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["agcseg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
