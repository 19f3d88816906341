"""
index_parser.py — Parse lines of WordNet index files.

An index line looks like:

    cat n 8 5 @ ~ #m #p %p 8 1 02121620 02127808 10153594 ...

The headword is everything before the first space. Every 8-digit run that
follows a whitespace character is a byte offset into the paired data file.
"""

from dataclasses import dataclass
import re
from typing import FrozenSet, Optional

from wndict.filters import is_header_line


OFFSET_PATTERN = re.compile(r'\s(?P<offset>\d{8})')


@dataclass(frozen=True)
class IndexEntry:
    """A headword and the data-file offsets listed for it on one line."""

    word: str
    offsets: FrozenSet[int]


def parse_offsets(text: str) -> FrozenSet[int]:
    """Collect every 8-digit byte offset in text."""
    return frozenset(int(m.group('offset')) for m in OFFSET_PATTERN.finditer(text))


def parse_index_line(line: str) -> Optional[IndexEntry]:
    """
    Parse one index line.

    Returns None for header lines and blank lines. The word is kept literally;
    any escaping is left to the exporters.
    """
    if is_header_line(line):
        return None

    line = line.rstrip('\r\n')
    if not line:
        return None

    word, _, rest = line.partition(' ')
    if not word:
        return None

    return IndexEntry(word=word, offsets=parse_offsets(' ' + rest if rest else ''))
