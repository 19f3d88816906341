"""Pytest configuration and shared fixtures."""
import pytest
from pathlib import Path
from typing import Dict, Iterable, List, Tuple


LICENSE_LINES = [
    "  1 This software and database is being provided to you, the LICENSEE, by  \n",
    "  2 Princeton University under the following license.  By obtaining, using  \n",
]


def index_line(word: str, pos_letter: str, offsets: Iterable[int]) -> str:
    """Format an index line the way WordNet lays them out."""
    offsets = list(offsets)
    count = len(offsets)
    rendered = " ".join(f"{offset:08d}" for offset in offsets)
    return f"{word} {pos_letter} {count} 1 @ {count} 0 {rendered}  \n"


class WordNetBuilder:
    """Writes miniature index/data pairs with correct byte offsets."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.offsets: Dict[str, Dict[str, int]] = {}

    def write_data_file(self, pos: str, senses: Dict[str, str], header_lines: int = 1) -> Dict[str, int]:
        """Write data.<pos>; returns the byte offset of each named sense line."""
        offsets = {}
        position = 0
        with open(self.directory / f"data.{pos}", 'wb') as f:
            for line in LICENSE_LINES[:header_lines]:
                raw = line.encode('utf-8')
                f.write(raw)
                position += len(raw)

            for name, body in senses.items():
                raw = f"{position:08d} {body}\n".encode('utf-8')
                offsets[name] = position
                f.write(raw)
                position += len(raw)

        self.offsets[pos] = offsets
        return offsets

    def write_index_file(self, pos: str, entries: List[Tuple[str, List[str]]], pos_letter: str = 'n'):
        """Write index.<pos>; entries are (word, [sense names from data.<pos>])."""
        offsets = self.offsets.get(pos, {})
        lines = list(LICENSE_LINES)
        for word, names in entries:
            lines.append(index_line(word, pos_letter, [offsets[name] for name in names]))
        (self.directory / f"index.{pos}").write_text("".join(lines), encoding='utf-8')

    def add_pair(self, pos: str, senses: Dict[str, str], entries: List[Tuple[str, List[str]]],
                 pos_letter: str = 'n', header_lines: int = 1) -> Dict[str, int]:
        offsets = self.write_data_file(pos, senses, header_lines=header_lines)
        self.write_index_file(pos, entries, pos_letter=pos_letter)
        return offsets


@pytest.fixture
def wordnet_builder(tmp_path):
    """Empty WordNet directory with a builder for index/data pairs."""
    directory = tmp_path / "dict"
    directory.mkdir()
    return WordNetBuilder(directory)


@pytest.fixture
def wordnet_dir(wordnet_builder):
    """
    A small noun/verb WordNet directory.

    Notes:
      - "dog" and "canine" share one noun sense
      - "bank" and "cat" appear in both files
      - "ghost" points at a data line without a gloss marker
      - "lonely" lists no offsets at all
      - the verb data file has a longer header so its offsets never
        coincide with noun offsets
    """
    wordnet_builder.add_pair(
        'noun',
        {
            'bank': "17 n 01 bank 0 000 | sloping land beside a body of water; \"they fished from the bank\"",
            'cat': "05 n 01 cat 0 000 | feline mammal usually having thick soft fur; \"the cat purred\"",
            'dog': "05 n 02 dog 0 canine 0 000 | a member of the genus Canis; \"the dog barked all night\"",
            'ghost': "18 n 01 ghost 0 000 no gloss marker on this line",
            'lantern': "06 n 01 jack-o'-lantern 0 000 | a pumpkin's lantern with a carved face; \"children carved one\"",
            '3d': "10 n 01 3d 0 000 | a film that gives the illusion of depth;",
        },
        [
            ('bank', ['bank']),
            ('canine', ['dog']),
            ('cat', ['cat']),
            ('dog', ['dog']),
            ('ghost', ['ghost']),
            ("jack-o'-lantern", ['lantern']),
            ('lonely', []),
            ('3d', ['3d']),
        ],
        pos_letter='n'
    )
    wordnet_builder.add_pair(
        'verb',
        {
            'bank': "38 v 01 bank 0 000 | tip laterally; \"the pilot had to bank the aircraft\"",
            'cat': "35 v 01 cat 0 000 | beat with a cat-o'-nine-tails;",
            'run': "38 v 01 run 0 000 | move fast by using one's feet; \"Don't run!\"",
        },
        [
            ('bank', ['bank']),
            ('cat', ['cat']),
            ('run', ['run']),
        ],
        pos_letter='v',
        header_lines=2
    )
    (wordnet_builder.directory / "index.sense").write_text(
        "bank%1:17:01:: 09213565 1 0\n", encoding='utf-8'
    )
    return wordnet_builder


class CountingResolver:
    """DefinitionResolver wrapper that records every offset it resolves."""

    instances: List['CountingResolver'] = []

    def __init__(self, data_file, part_of_speech):
        from wndict.definitions import DefinitionResolver
        self.inner = DefinitionResolver(data_file, part_of_speech)
        self.part_of_speech = part_of_speech
        self.seen: List[int] = []
        CountingResolver.instances.append(self)

    def resolve(self, offset):
        self.seen.append(offset)
        return self.inner.resolve(offset)


@pytest.fixture
def counting_resolver():
    """Resolver factory that records calls; reset for every test."""
    CountingResolver.instances = []
    return CountingResolver
