"""
schema.py — Relational layout shared by the SQLite and SQL-dump exporters.

Row IDs start at 1. Words are numbered in word-table order; a definition gets
its ID the first time a word refers to it, so definitions no word refers to
are not written.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from wndict.aggregate import DefinitionKey, LexicalIndex


CREATE_DEFINITION_TABLE = """CREATE TABLE definition (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    data            TEXT,
    part_of_speech  TEXT NOT NULL
)"""

CREATE_WORD_TABLE = """CREATE TABLE word (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    data    TEXT NOT NULL
)"""

CREATE_WORD_DEFINITION_TABLE = """CREATE TABLE word_definition (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    definition_id   INTEGER,
    word_id         INTEGER,
    FOREIGN KEY (definition_id) REFERENCES definition(id),
    FOREIGN KEY (word_id) REFERENCES word(id)
)"""

CREATE_TABLES = [CREATE_DEFINITION_TABLE, CREATE_WORD_TABLE, CREATE_WORD_DEFINITION_TABLE]


@dataclass
class SchemaRows:
    """Rows ready for insertion, each a tuple in column order."""

    words: List[Tuple[int, str]] = field(default_factory=list)
    definitions: List[Tuple[int, str, str]] = field(default_factory=list)
    word_definitions: List[Tuple[int, int, int]] = field(default_factory=list)


def assign_rows(index: LexicalIndex) -> SchemaRows:
    rows = SchemaRows()
    definition_ids: Dict[DefinitionKey, int] = {}

    for word_id, (word, keys) in enumerate(index.words.items(), 1):
        rows.words.append((word_id, word))

        for key in sorted(keys):
            if key not in definition_ids:
                definition = index.definitions.get(key)
                if definition is None:
                    continue
                definition_ids[key] = len(definition_ids) + 1
                rows.definitions.append(
                    (definition_ids[key], definition.text, definition.part_of_speech)
                )

            rows.word_definitions.append(
                (len(rows.word_definitions) + 1, definition_ids[key], word_id)
            )

    return rows
