"""
Tests for Corpus Ingestion
==========================
Tests for chunked ingestion in wordchain/ingest.py.
"""

import pytest

from wordchain import WordChain
from wordchain.ingest import IngestConfig, ingest_file, iter_chunks, iter_ingest

LINES = [
    "The cat sat.\n",
    "The dog ran.\n",
    "\n",
    "A bird sang loudly!\n",
    "single\n",
    "The cat ran away\n",
]


class TestIterChunks:
    """Tests for iter_chunks()."""

    def test_batches(self):
        assert list(iter_chunks(range(7), 3)) == [[0, 1, 2], [3, 4, 5], [6]]

    def test_empty(self):
        assert list(iter_chunks([], 3)) == []


class TestIterIngest:
    """Tests for iter_ingest()."""

    def test_yields_after_each_chunk(self):
        chain = WordChain()
        steps = [
            (p.chunks, p.lines)
            for p in iter_ingest(chain, LINES, IngestConfig(chunk_lines=2))
        ]
        assert steps == [(1, 2), (2, 4), (3, 6)]

    def test_chunking_does_not_change_result(self):
        direct = WordChain().add(''.join(LINES))

        for chunk_lines in (1, 2, 4, 100):
            chunked = WordChain()
            for _ in iter_ingest(chunked, LINES, IngestConfig(chunk_lines=chunk_lines)):
                pass
            assert chunked.to_dict() == direct.to_dict()

    def test_counts_pairs(self):
        chain = WordChain()
        *_, last = iter_ingest(chain, LINES, IngestConfig(chunk_lines=10))
        assert last.pairs == chain.edge_count == 14

    def test_pairs_span_line_breaks(self):
        chain = WordChain()
        lines = ["The cat\n", "\n", "sat on the mat.\n"]
        for _ in iter_ingest(chain, lines, IngestConfig(chunk_lines=1)):
            pass

        assert chain.edge_count == 5
        assert chain.table.get('cat').related == {'sat': 1}
        assert chain.to_dict() == WordChain().add("The cat\n\nsat on the mat.\n").to_dict()

    def test_lazy(self):
        chain = WordChain()
        gen = iter_ingest(chain, LINES, IngestConfig(chunk_lines=1))
        assert chain.size == 0
        next(gen)
        assert chain.edge_count == 2


class TestIngestFile:
    """Tests for ingest_file()."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / 'corpus.txt'
        path.write_text(''.join(LINES), encoding='utf-8')

        seen = []
        chain = WordChain()
        progress = ingest_file(
            chain, path, IngestConfig(chunk_lines=4), on_progress=lambda p: seen.append(p.lines)
        )

        assert seen == [4, 6]
        assert progress.lines == 6
        assert chain.has_sentence_boundary
        assert chain.table.get('The').related == {'cat': 2, 'dog': 1}

    def test_matches_whole_text(self, tmp_path):
        text = "The cat\nsat on the mat.\nThe dog\n   ran off!\n"
        path = tmp_path / 'wrapped.txt'
        path.write_text(text, encoding='utf-8')

        chain = WordChain()
        progress = ingest_file(chain, path, IngestConfig(chunk_lines=1))
        direct = WordChain().add(text)

        assert (chain.edge_count, progress.pairs) == (direct.edge_count, direct.edge_count)
        assert chain.to_dict() == direct.to_dict()

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.txt'
        path.write_text('', encoding='utf-8')
        progress = ingest_file(WordChain(), path)
        assert progress.lines == 0
        assert progress.chunks == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ingest_file(WordChain(), tmp_path / 'nope.txt')


class TestIngestConfig:
    """Tests for IngestConfig defaults."""

    def test_defaults_from_settings(self):
        config = IngestConfig()
        assert config.chunk_lines == 500
        assert config.encoding == 'utf-8'

    def test_rejects_non_positive_chunk(self):
        with pytest.raises(ValueError):
            IngestConfig(chunk_lines=0)
