#!/usr/bin/env python3
"""
wordchain - Word-level Markov Chain Text Generator
==================================================

Builds a first-order word transition model from text and generates new
text by weighted random walks over it.

Quick Start
-----------
    from wordchain import WordChain

    chain = WordChain()
    chain.add("The cat sat. The dog ran.")

    words = chain.generate_words(10)
    sentences = chain.generate_sentences(2)

    # Snapshot and restore
    data = chain.to_dict()
    restored = WordChain.create(data)

Modules
-------
    wordchain.table    - Transition counts per word
    wordchain.sampler  - Cumulative-distribution weighted sampling
    wordchain.chain    - Word and sentence walks, snapshot facade
    wordchain.snapshot - Snapshot export/load
    wordchain.ingest   - Chunked ingestion of text files
    wordchain.settings - YAML application settings

CLI Usage
---------
    python -m wordchain train corpus.txt -o model.json
    python -m wordchain sentences -m model.json -n 3
"""

__version__ = "0.1.0"

from .errors import (
    WordChainError,
    InvalidArgument,
    EmptyModel,
    UnsupportedOperation,
    MalformedSnapshot,
)
from .table import Entry, TransitionTable, tokenize
from .sampler import WeightedSampler, compile_entry
from .chain import WordChain, GenerationConfig
from .snapshot import export_snapshot, parse_snapshot
from .ingest import IngestConfig, IngestProgress, ingest_file, iter_ingest

__all__ = [
    '__version__',
    # Model
    'WordChain',
    'GenerationConfig',
    'TransitionTable',
    'Entry',
    'tokenize',
    'WeightedSampler',
    'compile_entry',
    # Snapshots
    'export_snapshot',
    'parse_snapshot',
    # Ingestion
    'IngestConfig',
    'IngestProgress',
    'ingest_file',
    'iter_ingest',
    # Errors
    'WordChainError',
    'InvalidArgument',
    'EmptyModel',
    'UnsupportedOperation',
    'MalformedSnapshot',
]
