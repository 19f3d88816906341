"""
definitions.py — Resolve glosses from WordNet data files by byte offset.

A data line carries its gloss after a vertical bar:

    02121620 05 n 03 cat 0 true_cat 0 ... | feline mammal usually having thick soft fur; "..."

Only the text between "| " and the first semicolon is kept. Lines without the
marker yield an empty gloss rather than an error.
"""

from dataclasses import dataclass
import re
from typing import BinaryIO


GLOSS_PATTERN = re.compile(r'\|\s(?P<gloss>[^;]+[^\s;]+)')


@dataclass(frozen=True)
class Definition:
    """Gloss text plus the part of speech of the file it came from."""

    text: str
    part_of_speech: str


def extract_gloss(line: str) -> str:
    """Return the gloss of a data line, or '' when there is none."""
    match = GLOSS_PATTERN.search(line)
    if match is None:
        return ''
    return match.group('gloss')


class DefinitionResolver:
    """
    Reads definitions out of one open data file.

    The part of speech comes from the file pair, not from the data line.
    `calls` counts how many times the file was actually seeked and read.
    """

    def __init__(self, data_file: BinaryIO, part_of_speech: str):
        self.data_file = data_file
        self.part_of_speech = part_of_speech
        self.calls = 0

    def resolve(self, offset: int) -> Definition:
        self.calls += 1
        self.data_file.seek(offset)
        raw = self.data_file.readline()
        line = raw.decode('utf-8', errors='replace')
        return Definition(text=extract_gloss(line), part_of_speech=self.part_of_speech)
