#!/usr/bin/env python3
"""
export_sqlite.py — Write the lexical index to an SQLite database.

Outputs:
  - {output_dir}/dictionary.sqlite3

Tables: word(id, data), definition(id, data, part_of_speech),
word_definition(id, definition_id, word_id). Everything is inserted inside a
single transaction into a temporary file that replaces the target only on
success; a failure leaves no partial database behind.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Dict, List

from wndict.aggregate import LexicalIndex
from wndict.definitions import Definition
from wndict.errors import OutputWriteError
from wndict.schema import CREATE_TABLES, SchemaRows, assign_rows


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


DATABASE_FILENAME = 'dictionary.sqlite3'


def create_word_database(output_dir: Path, index: LexicalIndex) -> Path:
    """Create dictionary.sqlite3 in output_dir, replacing any existing file."""
    logger.info("Creating database...")

    db_path = Path(output_dir) / DATABASE_FILENAME
    tmp_path = db_path.with_name(db_path.name + '.tmp')
    rows = assign_rows(index)

    try:
        tmp_path.unlink(missing_ok=True)
        write_rows(tmp_path, rows)
        tmp_path.replace(db_path)
    except (sqlite3.Error, OSError) as e:
        tmp_path.unlink(missing_ok=True)
        raise OutputWriteError(db_path, e) from e

    logger.info(f"  Words: {len(rows.words):,}")
    logger.info(f"  Definitions: {len(rows.definitions):,}")
    logger.info(f"  Links: {len(rows.word_definitions):,}")
    logger.info(f"  -> {db_path}")
    return db_path


def write_rows(db_path: Path, rows: SchemaRows):
    conn = sqlite3.connect(db_path)
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        with conn:
            conn.execute("BEGIN")
            for statement in CREATE_TABLES:
                conn.execute(statement)

            conn.executemany(
                "INSERT INTO definition (id, data, part_of_speech) VALUES (?, ?, ?)",
                rows.definitions
            )
            conn.executemany("INSERT INTO word (id, data) VALUES (?, ?)", rows.words)
            conn.executemany(
                "INSERT INTO word_definition (id, definition_id, word_id) VALUES (?, ?, ?)",
                rows.word_definitions
            )
    finally:
        conn.close()


def read_word_database(db_path: Path) -> Dict[str, List[Definition]]:
    """
    Read a dictionary database back into word -> definitions.

    Definitions are listed in join-row order, which matches the order the
    exporter wrote them in.
    """
    result: Dict[str, List[Definition]] = {}

    conn = sqlite3.connect(db_path)
    try:
        for (word,) in conn.execute("SELECT data FROM word ORDER BY id"):
            result[word] = []

        query = """
            SELECT w.data, d.data, d.part_of_speech
            FROM word_definition wd
            JOIN word w ON w.id = wd.word_id
            JOIN definition d ON d.id = wd.definition_id
            ORDER BY wd.id
        """
        for word, text, pos in conn.execute(query):
            result[word].append(Definition(text=text, part_of_speech=pos))
    finally:
        conn.close()

    return result
