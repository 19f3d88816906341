#!/usr/bin/env python3
"""
export_sql.py — Render the lexical index as an SQLite script.

Outputs:
  - {output_dir}/dictionary_dump.sql

The script recreates the same three tables as export_sqlite.py with literal
INSERT statements, resets sqlite_sequence to the highest IDs used, and wraps
everything in one transaction.
"""

import logging
from pathlib import Path
from typing import List

from wndict.aggregate import LexicalIndex
from wndict.errors import OutputWriteError
from wndict.schema import CREATE_TABLES, assign_rows


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


DUMP_FILENAME = 'dictionary_dump.sql'


def sql_quote(value: str) -> str:
    """Quote a string literal for SQL, doubling embedded single quotes."""
    return "'" + value.replace("'", "''") + "'"


def render_sql(index: LexicalIndex) -> str:
    rows = assign_rows(index)
    lines: List[str] = ["PRAGMA defer_foreign_keys=ON;", "BEGIN TRANSACTION;"]

    lines.extend(statement + ";" for statement in CREATE_TABLES)

    # Rows grouped per word, in the same order the database exporter inserts them
    definitions = iter(rows.definitions)
    links = iter(rows.word_definitions)
    next_definition = next(definitions, None)
    next_link = next(links, None)

    for word_id, word in rows.words:
        lines.append(f"INSERT INTO word VALUES({word_id},{sql_quote(word)});")

        while next_link is not None and next_link[2] == word_id:
            link_id, definition_id, _ = next_link
            if next_definition is not None and next_definition[0] == definition_id:
                _, text, pos = next_definition
                lines.append(
                    f"INSERT INTO definition VALUES({definition_id},{sql_quote(text)},{sql_quote(pos)});"
                )
                next_definition = next(definitions, None)

            lines.append(f"INSERT INTO word_definition VALUES({link_id},{definition_id},{word_id});")
            next_link = next(links, None)

    lines.append("DELETE FROM sqlite_sequence;")
    lines.append(f"INSERT INTO sqlite_sequence VALUES('definition',{len(rows.definitions)});")
    lines.append(f"INSERT INTO sqlite_sequence VALUES('word',{len(rows.words)});")
    lines.append(f"INSERT INTO sqlite_sequence VALUES('word_definition',{len(rows.word_definitions)});")
    lines.append("COMMIT;")

    return "\n".join(lines)


def dump_sql(output_dir: Path, index: LexicalIndex) -> Path:
    """Write dictionary_dump.sql to output_dir."""
    logger.info("Creating SQL...")

    sql = render_sql(index)
    output_path = Path(output_dir) / DUMP_FILENAME
    tmp_path = output_path.with_name(output_path.name + '.tmp')

    try:
        tmp_path.write_text(sql, encoding='utf-8')
        tmp_path.replace(output_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise OutputWriteError(output_path, e) from e

    logger.info(f"  -> {output_path}")
    return output_path
