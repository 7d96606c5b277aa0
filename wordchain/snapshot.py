#!/usr/bin/env python3
"""
Snapshots
=========
Export and load of a transition table as plain data.

Format:
    {
        "edgeCount": 5,
        "hasSentenceBoundary": true,
        "entries": [
            ["The", {"total": 2, "related": {"cat": 1, "dog": 1}}],
            ...
        ]
    }

Compiled distributions are never written, and are never trusted on load:
every loaded entry starts stale and is recompiled on first draw.

Snapshots written by the original format (``edges``, ``words``,
``hasSentences``) are accepted as well.
"""

import json
import math
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

from wordchain.errors import MalformedSnapshot
from wordchain.sampler import compile_entry
from wordchain.table import Entry, TransitionTable

logger = logging.getLogger(__name__)

EDGE_COUNT_KEY = 'edgeCount'
SENTENCE_KEY = 'hasSentenceBoundary'
ENTRIES_KEY = 'entries'

# Original format -> current format
LEGACY_KEYS = {
    'edges': EDGE_COUNT_KEY,
    'hasSentences': SENTENCE_KEY,
    'words': ENTRIES_KEY,
}

SnapshotInput = Union[str, bytes, Dict[str, Any]]


@dataclass
class ParsedSnapshot:
    """Validated snapshot contents, ready to install into a table."""
    entries: Dict[str, Entry]
    edge_count: int
    has_sentence_boundary: bool

    def install(self, table: TransitionTable):
        table.install(self.entries, self.edge_count, self.has_sentence_boundary)


# =============================================================================
# Export
# =============================================================================

def export_snapshot(table: TransitionTable) -> dict:
    """Compile every entry, then emit the snapshot structure."""
    for _, entry in table.items():
        compile_entry(entry)

    return {
        EDGE_COUNT_KEY: table.edge_count,
        SENTENCE_KEY: table.has_sentence_boundary,
        ENTRIES_KEY: [
            [word, {'total': entry.total, 'related': dict(entry.related)}]
            for word, entry in table.items()
        ],
    }


def dumps(table: TransitionTable, indent: int = None) -> str:
    return json.dumps(export_snapshot(table), indent=indent, ensure_ascii=False)


# =============================================================================
# Load
# =============================================================================

def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_word(value: Any) -> bool:
    return isinstance(value, str) and bool(value) and not any(c.isspace() for c in value)


def _decode(data: SnapshotInput) -> dict:
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except ValueError as e:
            raise MalformedSnapshot(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedSnapshot(f"Snapshot must be a mapping, got {type(data).__name__}")

    normalized = dict(data)
    for legacy, current in LEGACY_KEYS.items():
        if current not in normalized and legacy in normalized:
            normalized[current] = normalized[legacy]
    return normalized


def _parse_entry(index: int, item: Any) -> tuple:
    if not isinstance(item, (list, tuple)) or len(item) != 2:
        raise MalformedSnapshot(f"Entry #{index} must be a [word, data] pair")

    word, body = item
    if not _is_word(word):
        raise MalformedSnapshot(f"Entry #{index} has an invalid word: {word!r}")
    if not isinstance(body, dict):
        raise MalformedSnapshot(f"Entry '{word}' data must be a mapping")

    related = body.get('related')
    if not isinstance(related, dict):
        raise MalformedSnapshot(f"Entry '{word}' is missing 'related'")

    for successor, count in related.items():
        if not _is_word(successor):
            raise MalformedSnapshot(f"Entry '{word}' has an invalid successor: {successor!r}")
        if not _is_count(count) or count <= 0:
            raise MalformedSnapshot(
                f"Entry '{word}' has a non-positive count for '{successor}': {count!r}"
            )

    expected = sum(related.values())
    total = body.get('total', expected)
    if not _is_count(total) or total != expected:
        raise MalformedSnapshot(
            f"Entry '{word}' total {total!r} does not match its counts ({expected})"
        )

    return word, Entry(total=total, related=dict(related))


def parse_snapshot(data: SnapshotInput) -> ParsedSnapshot:
    """Validate snapshot data without touching any table.

    Args:
        data: Snapshot mapping, or its JSON text encoding

    Returns:
        ParsedSnapshot with stale entries

    Raises:
        MalformedSnapshot: If required fields are missing or inconsistent
    """
    data = _decode(data)

    if ENTRIES_KEY not in data:
        raise MalformedSnapshot(f"Snapshot is missing '{ENTRIES_KEY}'")
    raw_entries = data[ENTRIES_KEY]
    if not isinstance(raw_entries, list):
        raise MalformedSnapshot(f"'{ENTRIES_KEY}' must be a list of [word, data] pairs")

    entries: Dict[str, Entry] = {}
    for index, item in enumerate(raw_entries):
        word, entry = _parse_entry(index, item)
        if word in entries:
            raise MalformedSnapshot(f"Duplicate entry for '{word}'")
        entries[word] = entry

    expected = sum(e.total for e in entries.values())
    edge_count = data.get(EDGE_COUNT_KEY)
    if isinstance(edge_count, bool) or not isinstance(edge_count, (int, float)):
        edge_count = expected
        logger.debug(f"Reconstructed edge count from entries: {edge_count}")
    elif not (math.isfinite(edge_count) and edge_count == int(edge_count)) or edge_count != expected:
        raise MalformedSnapshot(
            f"'{EDGE_COUNT_KEY}' {edge_count!r} does not match the entry totals ({expected})"
        )

    has_boundary = data.get(SENTENCE_KEY, False)
    if not isinstance(has_boundary, bool):
        raise MalformedSnapshot(f"'{SENTENCE_KEY}' must be a boolean, got {has_boundary!r}")

    return ParsedSnapshot(
        entries=entries,
        edge_count=int(edge_count),
        has_sentence_boundary=has_boundary,
    )


# =============================================================================
# Persistence
# =============================================================================

def save_snapshot(table: TransitionTable, filepath: Union[str, Path]):
    """Write a snapshot of ``table`` to a JSON file"""
    Path(filepath).write_text(dumps(table, indent=2), encoding='utf-8')


def read_snapshot(filepath: Union[str, Path]) -> ParsedSnapshot:
    """Read and validate a snapshot JSON file"""
    return parse_snapshot(Path(filepath).read_text(encoding='utf-8'))


__all__ = [
    'ParsedSnapshot',
    'export_snapshot',
    'dumps',
    'parse_snapshot',
    'save_snapshot',
    'read_snapshot',
]
