#!/usr/bin/env python3
"""
Weighted Sampler
================
Draws successor words from a table entry in proportion to their counts.

Theory:
-------
An entry's counts are turned into a cumulative distribution once, by
walking ``related`` in insertion order and recording the running sum:

    related = {'x': 1, 'y': 3}   ->   thresholds (1, 4), words ('x', 'y')

A roll is an integer in [0, total). The drawn word is the one owning the
first threshold strictly greater than the roll, so 'x' wins roll 0 and 'y'
wins rolls 1-3. The distribution is cached on the entry and rebuilt only
after the entry changes.
"""

import bisect
import random as _random
import logging
from typing import Callable, Optional

from wordchain.table import Entry

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]


def compile_entry(entry: Entry, force: bool = False) -> Entry:
    """Build the cumulative distribution of ``entry`` if it is stale.

    Args:
        entry: Entry to compile (updated in place)
        force: Rebuild even if the cached distribution is fresh

    Returns:
        The same entry, now compiled
    """
    if entry.compiled and not force:
        return entry

    running = 0
    thresholds = []
    words = []
    for word, count in entry.related.items():
        running += count
        thresholds.append(running)
        words.append(word)

    entry.thresholds = tuple(thresholds)
    entry.words = tuple(words)
    return entry


class WeightedSampler:
    """Weighted successor selection with an injectable random source."""

    def __init__(self, random: Optional[RandomSource] = None):
        """
        Args:
            random: Zero-argument callable returning floats in [0, 1).
                    Defaults to ``random.random``.
        """
        self.random = random or _random.random

    def compile(self, entry: Entry, force: bool = False) -> Entry:
        return compile_entry(entry, force=force)

    def choose_index(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        # Float rounding can land exactly on n for large n
        return min(int(self.random() * n), n - 1)

    def draw(self, entry: Entry) -> Optional[str]:
        """Draw a successor of ``entry``, or None if it has no observations."""
        if entry.total <= 0:
            return None

        compile_entry(entry)

        roll = self.choose_index(entry.total)
        index = bisect.bisect_right(entry.thresholds, roll)
        if index >= len(entry.words):
            # Only reachable if total disagrees with related
            logger.warning(f"Roll {roll} outside distribution (total={entry.total})")
            return None
        return entry.words[index]


__all__ = [
    'RandomSource',
    'WeightedSampler',
    'compile_entry',
]
