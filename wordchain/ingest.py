#!/usr/bin/env python3
"""
Corpus Ingestion
================
Feeds text files into a chain in chunks of lines.

``iter_ingest`` yields after every chunk so callers can interleave other
work (progress display, cancellation checks) with a long ingestion. Where
the yields fall never changes the result: the model ends up identical to
adding the whole file as one string.

Usage:
    from wordchain.ingest import ingest_file

    progress = ingest_file(chain, "corpus.txt")
    print(f"{progress.lines} lines, {progress.pairs} pairs")
"""

import logging
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Union

from wordchain.chain import WordChain
from wordchain.settings import get_setting
from wordchain.table import tokenize

logger = logging.getLogger(__name__)


@dataclass
class IngestConfig:
    """Configuration for chunked ingestion."""
    chunk_lines: Optional[int] = None
    encoding: Optional[str] = None

    def __post_init__(self):
        cfg = get_setting("ingest", {}) or {}
        if self.chunk_lines is None:
            self.chunk_lines = cfg.get("chunk_lines", 500)
        if self.encoding is None:
            self.encoding = cfg.get("encoding", "utf-8")
        if self.chunk_lines <= 0:
            raise ValueError(f"chunk_lines must be positive, got {self.chunk_lines}")


@dataclass
class IngestProgress:
    """Running totals of an ingestion."""
    chunks: int = 0
    lines: int = 0
    pairs: int = 0


def iter_chunks(lines: Iterable[str], chunk_lines: int) -> Iterator[List[str]]:
    """Batch an iterable of lines into lists of at most ``chunk_lines``."""
    it = iter(lines)
    while True:
        chunk = list(islice(it, chunk_lines))
        if not chunk:
            return
        yield chunk


def iter_ingest(chain: WordChain,
                lines: Iterable[str],
                config: Optional[IngestConfig] = None) -> Iterator[IngestProgress]:
    """Add ``lines`` to ``chain`` and yield progress after each chunk.

    Line breaks count as plain whitespace: the last word of a line is
    paired with the first word of the next non-blank line, exactly as if
    the whole text had been added at once.
    """
    config = config or IngestConfig()
    progress = IngestProgress()
    carry = None

    for chunk in iter_chunks(lines, config.chunk_lines):
        for line in chunk:
            tokens = tokenize(line)
            if carry is not None and tokens:
                progress.pairs += chain.table.ingest_text(f"{carry} {line}")
            else:
                progress.pairs += chain.table.ingest_text(line)
            if tokens:
                carry = tokens[-1]
        progress.chunks += 1
        progress.lines += len(chunk)
        yield progress


def ingest_file(chain: WordChain,
                filepath: Union[str, Path],
                config: Optional[IngestConfig] = None,
                on_progress: Optional[Callable[[IngestProgress], None]] = None) -> IngestProgress:
    """
    Ingest a text file line by line.

    Args:
        chain: Chain to feed
        filepath: Text file to read
        config: Chunking options (settings defaults if None)
        on_progress: Called with the running totals after each chunk

    Returns:
        Final IngestProgress
    """
    config = config or IngestConfig()
    progress = IngestProgress()

    with open(filepath, encoding=config.encoding) as f:
        for progress in iter_ingest(chain, f, config):
            if on_progress:
                on_progress(progress)

    logger.info(f"Ingested {filepath}: {progress.lines} lines, {progress.pairs} pairs")
    return progress


__all__ = [
    'IngestConfig',
    'IngestProgress',
    'iter_chunks',
    'iter_ingest',
    'ingest_file',
]
