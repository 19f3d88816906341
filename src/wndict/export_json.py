#!/usr/bin/env python3
"""
export_json.py — Write the lexical index as a JSON document.

Outputs:
  - {output_dir}/dictionary.json

Format (one object per word, in word-table order):
    [
      {
        "word": "castle",
        "definitions": [
          {"data": "a large and stately mansion", "part_of_speech": "noun"}
        ]
      }
    ]
"""

import logging
from pathlib import Path
from typing import Dict, List

import orjson

from wndict.aggregate import LexicalIndex
from wndict.errors import OutputWriteError


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


JSON_FILENAME = 'dictionary.json'


def index_to_documents(index: LexicalIndex) -> List[Dict]:
    return [
        {
            'word': word,
            'definitions': [
                {'data': d.text, 'part_of_speech': d.part_of_speech}
                for d in index.definitions_for(word)
            ]
        }
        for word in index.words
    ]


def word_data_to_json(output_dir: Path, index: LexicalIndex) -> Path:
    """Write dictionary.json to output_dir."""
    logger.info("Creating JSON...")

    output_path = Path(output_dir) / JSON_FILENAME
    tmp_path = output_path.with_name(output_path.name + '.tmp')
    documents = index_to_documents(index)

    try:
        with open(tmp_path, 'wb') as f:
            f.write(orjson.dumps(documents, option=orjson.OPT_INDENT_2))
        tmp_path.replace(output_path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise OutputWriteError(output_path, e) from e

    logger.info(f"  Wrote {len(documents):,} words")
    logger.info(f"  -> {output_path}")
    return output_path
