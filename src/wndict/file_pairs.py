#!/usr/bin/env python3
"""
file_pairs.py — Locate WordNet index/data file pairs.

A WordNet dict directory holds one index file and one data file per part of
speech:

    index.noun  data.noun
    index.verb  data.verb
    index.adj   data.adj
    index.adv   data.adv

Files are paired by their shared suffix, which also names the part of speech.
index.sense has no data counterpart and is ignored.
"""

import logging
from pathlib import Path
from typing import List, NamedTuple

from wndict.errors import InvalidDirectoryError


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


INDEX_PREFIX = 'index.'
DATA_PREFIX = 'data.'
IGNORED_INDEX_FILES = {'index.sense'}


class IndexDataPair(NamedTuple):
    index_path: Path
    data_path: Path
    part_of_speech: str


def validate_directory(dir_path: Path) -> Path:
    """Raise InvalidDirectoryError unless dir_path is an existing directory."""
    dir_path = Path(dir_path)

    try:
        exists = dir_path.exists()
    except OSError as e:
        raise InvalidDirectoryError(f"Unable to check existence of {dir_path}: {e}") from e

    if not exists:
        raise InvalidDirectoryError(f"{dir_path} does not exist!")
    if not dir_path.is_dir():
        raise InvalidDirectoryError(f"{dir_path} is not a directory!")

    return dir_path


def find_index_data_pairs(dir_path: Path) -> List[IndexDataPair]:
    """
    Scan a directory for index.X / data.X files and pair them by suffix.

    Returns:
        Pairs sorted by part of speech. Unmatched files are logged and skipped.
    """
    dir_path = validate_directory(dir_path)
    logger.info(f"Searching for WordNet files in {dir_path}")

    index_files = {}
    data_files = {}

    for path in sorted(dir_path.iterdir()):
        if not path.is_file():
            continue

        name = path.name
        if name in IGNORED_INDEX_FILES:
            continue

        if name.startswith(INDEX_PREFIX):
            logger.info(f"  Found {name}")
            index_files[name[len(INDEX_PREFIX):]] = path
        elif name.startswith(DATA_PREFIX):
            logger.info(f"  Found {name}")
            data_files[name[len(DATA_PREFIX):]] = path

    pairs = []
    for suffix in sorted(index_files):
        if not suffix:
            continue
        if suffix not in data_files:
            logger.warning(f"  No data file for {index_files[suffix].name}, skipping")
            continue
        pairs.append(IndexDataPair(index_files[suffix], data_files[suffix], suffix))

    for suffix in sorted(set(data_files) - set(index_files)):
        logger.warning(f"  No index file for {data_files[suffix].name}, skipping")

    logger.info(f"  -> {len(pairs)} index/data pairs")
    return pairs
