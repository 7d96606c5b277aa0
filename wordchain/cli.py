#!/usr/bin/env python3
"""
Wordchain CLI
=============
Command-line interface for training word chains and generating text.

Usage:
    wordchain train corpus.txt -o model.json
    wordchain words -m model.json -n 30
    wordchain sentences -m model.json -n 3 --start The
    wordchain stats -m model.json --top 10
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table

from wordchain import __version__
from wordchain.chain import WordChain
from wordchain.errors import WordChainError
from wordchain.ingest import IngestConfig, ingest_file
from wordchain.settings import get_setting

logger = logging.getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def result(self, text: str):
        """Primary command output; printed even in quiet mode."""
        self.console.print(text, markup=False, soft_wrap=True)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", markup=False, soft_wrap=True)

    def success(self, msg: str):
        if not self.quiet:
            self.console.print(f"OK: {msg}", markup=False, soft_wrap=True)

    def table(self, title: str, headers: list, rows: list):
        """Print a formatted table."""
        if self.quiet:
            return

        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def setup_logging(verbose: bool = False):
    level = 'DEBUG' if verbose else get_setting('logging.level', 'WARNING')
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format=get_setting('logging.format', '%(levelname)s %(name)s: %(message)s'),
    )


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value!r}")
    return number


def make_chain(args) -> WordChain:
    rng = random.Random(args.seed) if args.seed is not None else None
    return WordChain(random=rng.random if rng else None)


def load_chain(args) -> WordChain:
    chain = make_chain(args)
    return chain.load(Path(args.model).read_text(encoding='utf-8'))


# =============================================================================
# Commands
# =============================================================================

def cmd_train(args, out: Output):
    """Ingest text files and write a snapshot."""
    chain = make_chain(args)
    config = IngestConfig(chunk_lines=args.chunk_lines)

    missing = [f for f in args.files if not Path(f).is_file()]
    if missing:
        out.error(f"File not found: {', '.join(missing)}")
        return 1

    columns = (
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        TextColumn("{task.fields[lines]} lines"),
        TimeElapsedColumn(),
    )
    with Progress(*columns, console=out.console, disable=out.quiet) as progress:
        for filepath in args.files:
            task = progress.add_task(Path(filepath).name, total=None, lines=0)
            ingest_file(
                chain, filepath, config,
                on_progress=lambda p, task=task: progress.update(task, lines=p.lines),
            )
            progress.update(task, total=1, completed=1)

    chain.save(args.output)
    out.success(
        f"{chain.size} words, {chain.edge_count} transitions saved to {args.output}"
    )
    return 0


def cmd_words(args, out: Output):
    """Generate a run of words."""
    chain = load_chain(args)
    count = args.count if args.count is not None else get_setting('generation.default_words', 25)
    halt = True if args.halt else None

    words = chain.generate_words(count, start=args.start, halt_on_dead_end=halt)
    out.result(chain.text(words))
    return 0


def cmd_sentences(args, out: Output):
    """Generate whole sentences."""
    chain = load_chain(args)
    count = args.count if args.count is not None else get_setting('generation.default_sentences', 3)

    words = chain.generate_sentences(count, start=args.start)
    out.result(chain.text(words))
    return 0


def cmd_stats(args, out: Output):
    """Show model statistics."""
    chain = load_chain(args)

    out.table('Model', ['Metric', 'Value'], [
        ['Words', chain.size],
        ['Transitions', chain.edge_count],
        ['Sentence boundaries', 'yes' if chain.has_sentence_boundary else 'no'],
    ])

    if args.top:
        busiest = sorted(chain.table.items(), key=lambda kv: kv[1].total, reverse=True)
        rows = []
        for i, (word, entry) in enumerate(busiest[:args.top], 1):
            top_next = max(entry.related.items(), key=lambda kv: kv[1])[0] if entry.related else '-'
            rows.append([i, word, entry.total, len(entry.related), top_next])
        out.table('Busiest words', ['#', 'Word', 'Total', 'Successors', 'Most common next'], rows)

    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wordchain',
        description='Word-level Markov chain text generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wordchain train book.txt -o book.json
  wordchain words -m book.json -n 40 --seed 7
  wordchain sentences -m book.json -n 2
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- train ---
    p = subparsers.add_parser('train', aliases=['t'], help='Build a model from text files')
    p.add_argument('files', nargs='+', help='Text files to ingest')
    p.add_argument('--output', '-o', required=True, help='Snapshot file to write')
    p.add_argument('--chunk-lines', type=positive_int, help='Lines per ingestion chunk')

    # --- words ---
    p = subparsers.add_parser('words', aliases=['w'], help='Generate words')
    p.add_argument('--model', '-m', required=True, help='Snapshot file')
    p.add_argument('-n', '--count', type=int, help='Number of words')
    p.add_argument('--start', help='Starting word')
    p.add_argument('--halt', action='store_true', help='Stop at the first dead end')

    # --- sentences ---
    p = subparsers.add_parser('sentences', aliases=['s'], help='Generate sentences')
    p.add_argument('--model', '-m', required=True, help='Snapshot file')
    p.add_argument('-n', '--count', type=int, help='Number of sentences')
    p.add_argument('--start', help='Starting word')

    # --- stats ---
    p = subparsers.add_parser('stats', help='Show model statistics')
    p.add_argument('--model', '-m', required=True, help='Snapshot file')
    p.add_argument('--top', type=int, default=10, help='Busiest words to list (default: 10)')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    # Handle aliases
    cmd_map = {'t': 'train', 'w': 'words', 's': 'sentences'}
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'train': cmd_train,
        'words': cmd_words,
        'sentences': cmd_sentences,
        'stats': cmd_stats,
    }

    handler = commands.get(command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except (WordChainError, OSError) as e:
        out.error(str(e))
        if args.verbose:
            logger.exception("Command failed")
        return 1


if __name__ == '__main__':
    sys.exit(main())
