#!/usr/bin/env python3
"""
filters.py — Word filter policy for WordNet index entries.

Decides which headwords survive into the lexical index. Rules are applied in
order and the first rejection wins:

  1. Header lines (two leading spaces) are skipped before parsing
  2. Words containing a digit are dropped unless keep_numbers is set
  3. Words containing punctuation or whitespace are dropped when
     whole_words_only is set
  4. Length: either membership in allowed_lengths, or the inclusive
     [min_chars, max_chars] range

The policy is a frozen dataclass so one instance can be shared by every file
pair of a run without any hidden state.
"""

import re
import string
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from wndict.errors import ConfigError


DEFAULT_MIN_CHARS = 0
DEFAULT_MAX_CHARS = 45

# License/header lines in index files start with two spaces
HEADER_PREFIX = '  '

NUMBER_PATTERN = re.compile(r'\d')
NON_WORD_PATTERN = re.compile('[' + re.escape(string.punctuation) + r']|\s')


def is_header_line(line: str) -> bool:
    """Check whether a raw index line is a license/header line."""
    return line.startswith(HEADER_PREFIX)


@dataclass(frozen=True)
class FilterPolicy:
    """
    Configuration for which candidate words are kept.

    Args:
        min_chars: Minimum word length (inclusive)
        max_chars: Maximum word length (inclusive)
        allowed_lengths: Explicit set of accepted lengths; overrides min/max
        keep_numbers: Keep words containing decimal digits
        whole_words_only: Drop words containing punctuation or whitespace
    """

    min_chars: int = DEFAULT_MIN_CHARS
    max_chars: int = DEFAULT_MAX_CHARS
    allowed_lengths: Optional[FrozenSet[int]] = None
    keep_numbers: bool = False
    whole_words_only: bool = False

    def __post_init__(self):
        if self.min_chars < 0 or self.max_chars < 0:
            raise ConfigError("Character counts must not be negative")
        if self.min_chars > self.max_chars:
            raise ConfigError(
                f"min_chars ({self.min_chars}) is greater than max_chars ({self.max_chars})"
            )

        if self.allowed_lengths is not None:
            lengths = frozenset(self.allowed_lengths)
            if any(length < 0 for length in lengths):
                raise ConfigError("Character counts must not be negative")
            # Empty collection means the option was not given
            object.__setattr__(self, 'allowed_lengths', lengths or None)

    @classmethod
    def from_options(
        cls,
        min_chars: Optional[int] = None,
        max_chars: Optional[int] = None,
        char_counts: Optional[Iterable[int]] = None,
        keep_numbers: bool = False,
        only_whole_words: bool = False,
    ) -> 'FilterPolicy':
        """
        Build a policy from CLI or config values.

        None means "not given". An explicit length list cannot be combined
        with min/max bounds.
        """
        lengths = frozenset(char_counts) if char_counts else None

        if lengths is not None and (min_chars is not None or max_chars is not None):
            raise ConfigError("char_counts cannot be combined with min_chars/max_chars")

        return cls(
            min_chars=DEFAULT_MIN_CHARS if min_chars is None else min_chars,
            max_chars=DEFAULT_MAX_CHARS if max_chars is None else max_chars,
            allowed_lengths=lengths,
            keep_numbers=keep_numbers,
            whole_words_only=only_whole_words,
        )

    def keeps(self, word: str) -> bool:
        """Return True if the word passes every rule of the policy."""
        if not self.keep_numbers and NUMBER_PATTERN.search(word):
            return False

        if self.whole_words_only and NON_WORD_PATTERN.search(word):
            return False

        length = len(word)
        if self.allowed_lengths is not None:
            return length in self.allowed_lengths

        return self.min_chars <= length <= self.max_chars

    def describe(self) -> str:
        """Short human-readable summary for logging."""
        if self.allowed_lengths is not None:
            parts = [f"lengths={','.join(str(n) for n in sorted(self.allowed_lengths))}"]
        else:
            parts = [f"length={self.min_chars}..{self.max_chars}"]

        parts.append("numbers kept" if self.keep_numbers else "numbers dropped")
        if self.whole_words_only:
            parts.append("whole words only")

        return ", ".join(parts)
