#!/usr/bin/env python3
"""
Transition Table
================
Frequency table behind the word chain. Maps every word seen as a
predecessor to the successors observed after it, with counts.

Each entry also carries a cached cumulative distribution (see
``wordchain.sampler``). Any observation on an entry drops that cache; the
sampler rebuilds it on the next draw.

Usage:
    from wordchain.table import TransitionTable

    table = TransitionTable()
    table.ingest_text("The cat sat. The dog ran.")
    table.size                  # 4
    table.edge_count            # 5
    table.get("The").related    # {'cat': 1, 'dog': 1}
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r'\s+')
SENTENCE_RE = re.compile(r'[?!.]')


def tokenize(text: str) -> List[str]:
    """Collapse whitespace runs, trim, split on the separator, drop empties."""
    return [t for t in WHITESPACE_RE.sub(' ', text.strip()).split(' ') if t]


def has_sentence_boundary(text: str) -> bool:
    """True if the text contains a sentence terminator (. ! ?)."""
    return SENTENCE_RE.search(text) is not None


# =============================================================================
# Entry
# =============================================================================

@dataclass
class Entry:
    """Outgoing-edge statistics for a single word."""
    total: int = 0
    related: Dict[str, int] = field(default_factory=dict)

    # Compiled distribution: None while stale, parallel tuples while fresh
    thresholds: Optional[Tuple[int, ...]] = field(default=None, repr=False)
    words: Optional[Tuple[str, ...]] = field(default=None, repr=False)

    @property
    def compiled(self) -> bool:
        return self.thresholds is not None

    def invalidate(self):
        self.thresholds = None
        self.words = None

    @property
    def distribution(self) -> Optional[Dict[int, str]]:
        """Threshold -> successor mapping, or None when stale."""
        if self.thresholds is None:
            return None
        return dict(zip(self.thresholds, self.words))


# =============================================================================
# Table
# =============================================================================

class TransitionTable:
    """First-order word transition counts.

    Not thread-safe: callers must not ``observe``/``reset`` while another
    thread is drawing from the same table.
    """

    def __init__(self):
        self._entries: Dict[str, Entry] = {}
        self._edge_count = 0
        self._has_sentence_boundary = False

    def observe(self, first: str, second: str):
        """Record one ``first -> second`` transition."""
        entry = self._entries.get(first)
        if entry is None:
            entry = Entry()
            self._entries[first] = entry

        if second not in entry.related:
            entry.related[second] = 0

        entry.related[second] += 1
        entry.total += 1
        self._edge_count += 1
        entry.invalidate()

    def ingest_text(self, text: str) -> int:
        """Tokenize ``text`` and observe every consecutive word pair.

        Degenerate input (empty or a single token) is ignored.

        Returns:
            Number of pairs observed
        """
        if not self._has_sentence_boundary:
            self._has_sentence_boundary = has_sentence_boundary(text)

        tokens = tokenize(text)
        if len(tokens) < 2:
            return 0

        for first, second in zip(tokens, tokens[1:]):
            self.observe(first, second)

        pairs = len(tokens) - 1
        logger.debug(f"Ingested {pairs} pairs ({len(self._entries)} entries)")
        return pairs

    def has(self, word: str) -> bool:
        return word in self._entries

    def get(self, word: str) -> Optional[Entry]:
        return self._entries.get(word)

    def items(self) -> Iterator[Tuple[str, Entry]]:
        return iter(self._entries.items())

    def __contains__(self, word: str) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def keys(self) -> List[str]:
        return list(self._entries)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    @property
    def has_sentence_boundary(self) -> bool:
        return self._has_sentence_boundary

    def reset(self):
        """Drop all entries, counters and the sentence boundary flag."""
        self._entries.clear()
        self._edge_count = 0
        self._has_sentence_boundary = False

    def install(self, entries: Dict[str, Entry], edge_count: int,
                has_sentence_boundary: bool):
        """Replace the table contents with already-validated data."""
        self.reset()
        self._entries.update(entries)
        self._edge_count = edge_count
        self._has_sentence_boundary = has_sentence_boundary


__all__ = [
    'Entry',
    'TransitionTable',
    'tokenize',
    'has_sentence_boundary',
]
