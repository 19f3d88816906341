#!/usr/bin/env python3
"""
aggregate.py — Fold WordNet index/data pairs into one lexical index.

For every pair, each index line is parsed, filtered, and its offsets are
resolved against the paired data file. Results are merged into two tables:

  - definitions: key -> Definition (first writer wins)
  - words: word -> set of definition keys (union across files)

By default the key is the raw byte offset, which is only unique within one
data file: a noun and an adjective definition at the same offset collide and
the later one is dropped. Pass key_by_pos=True to key definitions by
(part_of_speech, offset) instead.
"""

from collections import Counter
from dataclasses import dataclass
import logging
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple, Union

from wndict.definitions import Definition, DefinitionResolver
from wndict.errors import SourceReadError
from wndict.file_pairs import IndexDataPair
from wndict.filters import FilterPolicy, is_header_line
from wndict.index_parser import parse_index_line
from wndict.progress_display import AggregationProgress


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


DefinitionKey = Union[int, Tuple[str, int]]


@dataclass(frozen=True)
class LexicalIndex:
    """Read-only result of one aggregation run."""

    definitions: Mapping[DefinitionKey, Definition]
    words: Mapping[str, FrozenSet[DefinitionKey]]

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word) -> bool:
        return word in self.words

    def definitions_for(self, word: str) -> List[Definition]:
        """Definitions of a word in ascending key order."""
        return [
            self.definitions[key]
            for key in sorted(self.words[word])
            if key in self.definitions
        ]

    def get_stats(self) -> Dict:
        referenced: Set[DefinitionKey] = set()
        for keys in self.words.values():
            referenced.update(keys)

        pos_counts = Counter(d.part_of_speech for d in self.definitions.values())

        return {
            'total_words': len(self.words),
            'total_definitions': len(self.definitions),
            'referenced_definitions': len(referenced & self.definitions.keys()),
            'orphan_definitions': len(self.definitions.keys() - referenced),
            'words_without_definitions': sum(1 for keys in self.words.values() if not keys),
            'definitions_by_pos': dict(sorted(pos_counts.items())),
        }


class LexicalAggregator:
    """
    Single writer for the word and definition tables of a run.

    Pairs are added one at a time with add_pair(); build() freezes the state
    into a LexicalIndex, after which no more data can be added.
    """

    def __init__(
        self,
        policy: FilterPolicy,
        key_by_pos: bool = False,
        resolver_factory: Callable[..., DefinitionResolver] = DefinitionResolver
    ):
        self.policy = policy
        self.key_by_pos = key_by_pos
        self.resolver_factory = resolver_factory

        self.definitions: Dict[DefinitionKey, Definition] = {}
        self.words: Dict[str, Set[DefinitionKey]] = {}

        self.lines_read = 0
        self.headers_skipped = 0
        self.words_rejected = 0
        self.resolver_calls = 0
        self.cache_hits = 0
        self._built = False

    def _check_open(self):
        if self._built:
            raise RuntimeError("Lexical index already built; aggregator is closed")

    def definition_key(self, part_of_speech: str, offset: int) -> DefinitionKey:
        if self.key_by_pos:
            return (part_of_speech, offset)
        return offset

    def add_word(self, word: str, keys: Iterable[DefinitionKey]):
        """Insert a word or union new keys into its existing set."""
        self._check_open()
        existing = self.words.get(word)
        if existing is None:
            self.words[word] = set(keys)
        else:
            existing.update(keys)

    def ensure_definition(self, key: DefinitionKey, offset: int,
                          resolver: DefinitionResolver) -> Definition:
        """Return the definition for key, resolving it only if it is new."""
        self._check_open()
        definition = self.definitions.get(key)
        if definition is not None:
            self.cache_hits += 1
            return definition

        definition = resolver.resolve(offset)
        self.resolver_calls += 1
        self.definitions[key] = definition
        return definition

    def add_line(self, line: str, part_of_speech: str, resolver: DefinitionResolver) -> bool:
        """Process one index line. Returns True if its word was kept."""
        entry = parse_index_line(line)
        if entry is None:
            if is_header_line(line):
                self.headers_skipped += 1
            return False

        if not self.policy.keeps(entry.word):
            self.words_rejected += 1
            return False

        keys = {offset: self.definition_key(part_of_speech, offset) for offset in sorted(entry.offsets)}
        self.add_word(entry.word, keys.values())

        for offset, key in keys.items():
            self.ensure_definition(key, offset, resolver)

        return True

    def add_pair(self, pair: IndexDataPair, progress: Optional[AggregationProgress] = None):
        """
        Read one index/data pair into the tables.

        Raises:
            SourceReadError: if either file cannot be opened or read
        """
        self._check_open()
        pos = pair.part_of_speech
        logger.info(f"Reading {pair.index_path.name} -> {pair.data_path.name} ({pos})")

        if progress:
            progress.start_pair(pos)

        start_calls = self.resolver_calls
        start_hits = self.cache_hits
        lines = 0
        kept = 0

        try:
            with open(pair.data_path, 'rb') as data_file, \
                    open(pair.index_path, 'r', encoding='utf-8') as index_file:
                resolver = self.resolver_factory(data_file, pos)

                for line in index_file:
                    lines += 1
                    self.lines_read += 1
                    if self.add_line(line, pos, resolver):
                        kept += 1

                    if progress:
                        progress.update(lines=lines, words=kept,
                                        definitions=self.resolver_calls - start_calls,
                                        cache_hits=self.cache_hits - start_hits)
        except UnicodeDecodeError as e:
            raise SourceReadError(pair.index_path, e) from e
        except OSError as e:
            raise SourceReadError(e.filename or pair.index_path, e) from e

        if progress:
            progress.update(lines=lines, words=kept,
                            definitions=self.resolver_calls - start_calls,
                            cache_hits=self.cache_hits - start_hits, force=True)

        logger.debug(f"  {lines:,} lines, {kept:,} words kept, "
                     f"{self.resolver_calls - start_calls:,} definitions resolved")

    def build(self) -> LexicalIndex:
        """Freeze the tables. Words are ordered by code point."""
        self._check_open()
        self._built = True

        words = {word: frozenset(self.words[word]) for word in sorted(self.words)}
        return LexicalIndex(
            definitions=MappingProxyType(dict(self.definitions)),
            words=MappingProxyType(words)
        )


def build_lexical_index(
    pairs: Iterable[IndexDataPair],
    policy: FilterPolicy,
    key_by_pos: bool = False,
    show_progress: bool = True
) -> LexicalIndex:
    """Run the full aggregation pass over all pairs."""
    logger.info("Getting words and definitions...")
    logger.info(f"  Filter: {policy.describe()}")
    if key_by_pos:
        logger.info("  Definitions keyed by (part of speech, offset)")

    aggregator = LexicalAggregator(policy, key_by_pos=key_by_pos)

    if show_progress:
        with AggregationProgress() as progress:
            for pair in pairs:
                aggregator.add_pair(pair, progress)
    else:
        for pair in pairs:
            aggregator.add_pair(pair)

    index = aggregator.build()

    logger.info(f"  Lines read: {aggregator.lines_read:,}")
    logger.info(f"  Words kept: {len(index):,} ({aggregator.words_rejected:,} rejected)")
    logger.info(f"  Definitions: {len(index.definitions):,} "
                f"({aggregator.cache_hits:,} shared lookups skipped)")

    return index
