#!/usr/bin/env python3
"""
Word Chain
==========
First-order word Markov chain: feed it text, then walk it to produce
words or whole sentences.

Usage:
    from wordchain import WordChain

    chain = WordChain()
    chain.add("The cat sat. The dog ran.")

    chain.generate_words(5)            # ['dog', 'ran.', ...]
    chain.generate_sentences(2)        # stops after two terminators
    data = chain.to_dict()             # snapshot
    copy = WordChain.create(data)

Every instance owns its own table; chains never share state.
"""

import math
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from wordchain.errors import EmptyModel, InvalidArgument, UnsupportedOperation
from wordchain.sampler import RandomSource, WeightedSampler, compile_entry
from wordchain.settings import get_setting
from wordchain.snapshot import (
    SnapshotInput,
    export_snapshot,
    dumps,
    parse_snapshot,
    read_snapshot,
    save_snapshot,
)
from wordchain.table import TransitionTable, has_sentence_boundary

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class GenerationConfig:
    """Defaults for generation calls."""
    halt_on_dead_end: Optional[bool] = None

    def __post_init__(self):
        cfg = get_setting("generation", {}) or {}
        if self.halt_on_dead_end is None:
            self.halt_on_dead_end = bool(cfg.get("halt_on_dead_end", False))


def _validate_count(count, what: str) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, float)):
        raise InvalidArgument(f"{what} must be a positive finite integer, got {count!r}")
    if isinstance(count, float):
        if not math.isfinite(count) or not count.is_integer():
            raise InvalidArgument(f"{what} must be a positive finite integer, got {count!r}")
        count = int(count)
    if count <= 0:
        raise InvalidArgument(f"{what} must be a positive finite integer, got {count!r}")
    return count


# =============================================================================
# Chain
# =============================================================================

class WordChain:
    """Transition table plus sampler, with word and sentence walks."""

    def __init__(self,
                 random: Optional[RandomSource] = None,
                 config: Optional[GenerationConfig] = None):
        """
        Args:
            random: Uniform source of floats in [0, 1) used for every draw
            config: Generation defaults (read from settings if None)
        """
        self.table = TransitionTable()
        self.sampler = WeightedSampler(random)
        self.config = config or GenerationConfig()

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    def add(self, text: str) -> 'WordChain':
        self.table.ingest_text(text)
        return self

    def add_many(self, texts) -> 'WordChain':
        for text in texts:
            self.table.ingest_text(text)
        return self

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _random_key(self) -> str:
        keys = self.table.keys
        return keys[self.sampler.choose_index(len(keys))]

    def _reseed(self) -> Optional[str]:
        """Successor of a random key, or None if no entry can produce one."""
        # Entries with no observations only come from external snapshots
        if not any(entry.total > 0 for _, entry in self.table.items()):
            return None
        while True:
            word = self.next_word(None)
            if word is not None:
                return word

    def next_word(self, current: Optional[str] = None) -> Optional[str]:
        """Draw the word following ``current``.

        With ``current=None`` a uniformly random known word is used as the
        starting point. Unknown words have no successor and give None.

        Raises:
            EmptyModel: If nothing has been ingested
        """
        if self.table.size == 0:
            raise EmptyModel("Cannot generate words, this model has no processed data")

        if current is None:
            current = self._random_key()

        entry = self.table.get(current)
        if entry is None:
            return None
        return self.sampler.draw(entry)

    def generate_words(self,
                       count: int,
                       start: Optional[str] = None,
                       halt_on_dead_end: Optional[bool] = None) -> List[str]:
        """
        Walk the chain for up to ``count`` words.

        Args:
            count: Number of words to produce, including the start word
            start: Starting word (a random known word if None)
            halt_on_dead_end: Stop early when a word has no successors
                instead of re-seeding (config default if None)

        Returns:
            List of words; shorter than ``count`` only when halted
        """
        count = _validate_count(count, "Word count")
        if self.table.size == 0:
            raise EmptyModel("Cannot generate words, this model has no processed data")
        if halt_on_dead_end is None:
            halt_on_dead_end = self.config.halt_on_dead_end

        current = start if start is not None else self._random_key()
        output = [current]

        while len(output) < count:
            current = self.next_word(current)
            if current is None:
                if halt_on_dead_end:
                    break
                current = self._reseed()
                if current is None:
                    logger.warning("No word in the model has a successor, stopping early")
                    break
                logger.debug(f"Dead end, re-seeded with '{current}'")

            output.append(current)

        return output

    def generate_sentences(self, count: int, start: Optional[str] = None) -> List[str]:
        """
        Walk the chain until ``count`` sentence-terminated words were drawn.

        Never bounded: a chain whose terminators are unreachable keeps
        walking. Stops early only when no word in the model has a
        successor left to draw.

        Raises:
            UnsupportedOperation: If no ingested text had a terminator
        """
        if not self.table.has_sentence_boundary:
            raise UnsupportedOperation(
                "Model data does not contain delimiters - sentences cannot be generated"
            )
        count = _validate_count(count, "Sentence count")
        if self.table.size == 0:
            raise EmptyModel("Cannot generate sentences, this model has no processed data")

        current = start
        output = []
        if current is not None:
            output.append(current)

        while count > 0:
            current = self.next_word(current)
            if current is None:
                current = self._reseed()
                if current is None:
                    logger.warning("No word in the model has a successor, stopping early")
                    break
                logger.debug(f"Dead end, re-seeded with '{current}'")

            output.append(current)
            if has_sentence_boundary(current):
                count -= 1

        return output

    @staticmethod
    def text(words: List[str]) -> str:
        return ' '.join(words)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def finalize(self):
        """Compile every entry."""
        for _, entry in self.table.items():
            compile_entry(entry)

    def to_dict(self) -> dict:
        return export_snapshot(self.table)

    def to_json(self, indent: int = None) -> str:
        return dumps(self.table, indent=indent)

    def load(self, data: SnapshotInput) -> 'WordChain':
        """Replace this chain's contents with a snapshot.

        The snapshot is fully validated first; on MalformedSnapshot the
        chain is left as it was.
        """
        parsed = parse_snapshot(data)
        parsed.install(self.table)
        logger.debug(f"Loaded {self.table.size} entries, {self.table.edge_count} edges")
        return self

    def save(self, filepath: Union[str, Path]):
        save_snapshot(self.table, filepath)

    @classmethod
    def create(cls, data: SnapshotInput, **kwargs) -> 'WordChain':
        return cls(**kwargs).load(data)

    @classmethod
    def from_file(cls, filepath: Union[str, Path], **kwargs) -> 'WordChain':
        chain = cls(**kwargs)
        read_snapshot(filepath).install(chain.table)
        return chain

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def reset(self):
        self.table.reset()

    def has(self, word: str) -> bool:
        return self.table.has(word)

    @property
    def size(self) -> int:
        return self.table.size

    @property
    def keys(self) -> List[str]:
        return self.table.keys

    @property
    def edge_count(self) -> int:
        return self.table.edge_count

    @property
    def has_sentence_boundary(self) -> bool:
        return self.table.has_sentence_boundary


__all__ = [
    'GenerationConfig',
    'WordChain',
]
