#!/usr/bin/env python3
"""
wndict - Parse Princeton WordNet files into a dictionary of words and definitions.

Reads every index.X/data.X pair in a WordNet dict directory and writes one of:
  (default)        dictionary.sqlite3   SQLite database
  -S, --dump-sql   dictionary_dump.sql  SQL statements
  -J, --to-json    dictionary.json      JSON document
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from wndict import __version__
from wndict.aggregate import build_lexical_index
from wndict.config import load_config
from wndict.errors import NoWordsFoundError, WndictError
from wndict.export_json import word_data_to_json
from wndict.export_sql import dump_sql
from wndict.export_sqlite import create_word_database
from wndict.file_pairs import find_index_data_pairs, validate_directory
from wndict.filters import FilterPolicy


logger = logging.getLogger(__name__)


OUTPUT_DIR_ENV = 'WNDICT_OUTPUT_DIR'

EXPORTERS = {
    'database': (create_word_database, "Database"),
    'sql': (dump_sql, "SQL"),
    'json': (word_data_to_json, "JSON"),
}


def parse_char_counts(value: str) -> List[int]:
    """argparse type for a comma separated list of character counts."""
    counts = []
    for part in value.split(','):
        part = part.strip()
        if not part:
            continue
        try:
            count = int(part)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid character count: '{part}'")
        if count < 0:
            raise argparse.ArgumentTypeError(f"character count must not be negative: {count}")
        counts.append(count)
    return counts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='wndict',
        description="Get a list of English words & definitions by parsing Princeton's WordNet files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # SQLite database in the current directory
  wndict -d /usr/share/wordnet/dict

  # Five-letter words without punctuation, as JSON
  wndict -d dict -c 5 -W -J -o build

  # SQL statements, words of 3 to 8 characters
  wndict -d dict -m 3 -M 8 -S
        """
    )

    parser.add_argument(
        '-d', '--directory',
        type=Path,
        help='Directory where WordNet files are located (index.adj, data.adj, ...)'
    )
    parser.add_argument(
        '-o', '--output-directory',
        type=Path,
        help=f'Directory to place output file into (default: ${OUTPUT_DIR_ENV} or working directory)'
    )
    parser.add_argument(
        '-c', '--char-counts',
        type=parse_char_counts,
        metavar='N[,N...]',
        help='Comma separated list of character counts to save'
    )
    parser.add_argument(
        '-m', '--min-chars',
        type=int,
        help='Minimum character count of a word to save (default: 0)'
    )
    parser.add_argument(
        '-M', '--max-chars',
        type=int,
        help='Maximum character count of a word to save (default: 45)'
    )
    parser.add_argument(
        '-k', '--keep-numbers',
        action='store_true',
        default=None,
        help='Keep words with numbers'
    )
    parser.add_argument(
        '-W', '--only-whole-words',
        action='store_true',
        default=None,
        help='Only keep words without punctuation or spaces'
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '-S', '--dump-sql',
        action='store_true',
        help='Render database as SQL statements rather than an SQLite database'
    )
    mode.add_argument(
        '-J', '--to-json',
        action='store_true',
        help='Render dictionary as JSON rather than an SQLite database'
    )

    parser.add_argument(
        '--pos-keyed-definitions',
        action='store_true',
        default=None,
        help='Key definitions by part of speech and offset so offsets from different files do not collide'
    )
    parser.add_argument(
        '--config',
        type=Path,
        help='YAML or JSON file with default settings'
    )
    parser.add_argument(
        '--stats',
        action='store_true',
        help='Print statistics about the parsed dictionary'
    )
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable the live progress display'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def resolve_settings(args: argparse.Namespace, parser: argparse.ArgumentParser) -> Dict[str, Any]:
    """Merge command-line arguments over config file values."""
    if args.char_counts and (args.min_chars is not None or args.max_chars is not None):
        parser.error("argument -c/--char-counts: not allowed with -m/--min-chars or -M/--max-chars")

    config = load_config(args.config) if args.config else {}

    directory = args.directory or config.get('directory')
    if directory is None:
        parser.error("the following arguments are required: -d/--directory")

    if args.dump_sql:
        mode = 'sql'
    elif args.to_json:
        mode = 'json'
    else:
        mode = config.get('mode', 'database')

    output_directory = (
        args.output_directory
        or config.get('output_directory')
        or os.environ.get(OUTPUT_DIR_ENV)
        or Path.cwd()
    )

    # Length options given on the command line replace the file's length options
    if args.char_counts or args.min_chars is not None or args.max_chars is not None:
        min_chars, max_chars, char_counts = args.min_chars, args.max_chars, args.char_counts
    else:
        min_chars = config.get('min_chars')
        max_chars = config.get('max_chars')
        char_counts = config.get('char_counts')

    def flag(name: str) -> bool:
        value = getattr(args, name)
        return value if value is not None else config.get(name, False)

    policy = FilterPolicy.from_options(
        min_chars=min_chars,
        max_chars=max_chars,
        char_counts=char_counts,
        keep_numbers=flag('keep_numbers'),
        only_whole_words=flag('only_whole_words'),
    )

    return {
        'directory': Path(directory),
        'output_directory': Path(output_directory),
        'mode': mode,
        'policy': policy,
        'key_by_pos': flag('pos_keyed_definitions'),
    }


def run(settings: Dict[str, Any], show_progress: bool = True, show_stats: bool = False) -> Path:
    """
    Parse the WordNet directory and write the selected output.

    Raises:
        WndictError: on invalid directories, unreadable files or empty results
    """
    validate_directory(settings['directory'])
    validate_directory(settings['output_directory'])

    pairs = find_index_data_pairs(settings['directory'])
    index = build_lexical_index(
        pairs,
        settings['policy'],
        key_by_pos=settings['key_by_pos'],
        show_progress=show_progress
    )

    if len(index) == 0:
        raise NoWordsFoundError()

    if show_stats:
        print_stats(index.get_stats())

    exporter, label = EXPORTERS[settings['mode']]
    output_path = exporter(settings['output_directory'], index)
    logger.info(f"{label} created successfully!")
    return output_path


def print_stats(stats: Dict[str, Any]):
    print("\n=== WordNet Dictionary Statistics ===")
    print(f"Total words: {stats['total_words']:,}")
    print(f"Total definitions: {stats['total_definitions']:,}")
    print(f"Referenced definitions: {stats['referenced_definitions']:,}")
    print(f"Orphan definitions: {stats['orphan_definitions']:,}")
    print(f"Words without definitions: {stats['words_without_definitions']:,}")
    print("\nDefinitions by POS:")
    for pos, count in stats['definitions_by_pos'].items():
        print(f"  {pos}: {count:,}")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for wndict CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger('wndict').setLevel(logging.DEBUG)

    try:
        settings = resolve_settings(args, parser)
        run(settings, show_progress=not args.no_progress, show_stats=args.stats)
    except WndictError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
