"""
Rich-based progress panel for the aggregation pass.

Shows one row per index/data pair with running counts of lines read, words
kept, definitions resolved and cache hits, refreshed in place so the terminal
does not scroll while large index files are read.
"""

import time
from typing import Dict, List, Optional

from rich import box
from rich.live import Live
from rich.panel import Panel
from rich.table import Table


COLUMNS = ["Lines", "Words", "Definitions", "Cache hits"]


class AggregationProgress:
    """
    Context manager tracking per-pair aggregation metrics.

    Usage:
        with AggregationProgress() as progress:
            progress.start_pair("noun")
            for line in index_file:
                ...
                progress.update(lines=n, words=w, definitions=d, cache_hits=h)
    """

    def __init__(self, title: str = "Reading WordNet", update_interval: int = 2000,
                 refresh_per_second: int = 8):
        self.title = title
        self.update_interval = update_interval
        self.refresh_per_second = refresh_per_second

        self.rows: Dict[str, List[int]] = {}
        self.current: Optional[str] = None
        self.live: Optional[Live] = None
        self.start_time = 0.0
        self._ticks = 0

    def __enter__(self):
        self.start_time = time.time()
        self.live = Live(self._render(), refresh_per_second=self.refresh_per_second)
        self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self.live.update(self._render())
            self.live.__exit__(exc_type, exc_val, exc_tb)
        return False

    def start_pair(self, part_of_speech: str):
        self.current = part_of_speech
        self.rows.setdefault(part_of_speech, [0] * len(COLUMNS))
        self._refresh()

    def update(self, lines: int, words: int, definitions: int, cache_hits: int, force: bool = False):
        """Record counts for the current pair; redraws every update_interval calls."""
        if self.current is None:
            return

        self.rows[self.current] = [lines, words, definitions, cache_hits]
        self._ticks += 1
        if force or self._ticks % self.update_interval == 0:
            self._refresh()

    def _refresh(self):
        if self.live:
            self.live.update(self._render())

    def _render(self) -> Panel:
        table = Table(box=box.SIMPLE, show_edge=False, pad_edge=False)
        table.add_column("POS", style="bold grey50", no_wrap=True)
        for name in COLUMNS:
            table.add_column(name, justify="right", style="bright_cyan", no_wrap=True)

        for pos, counts in self.rows.items():
            marker = "▶ " if pos == self.current else "  "
            table.add_row(marker + pos, *(f"{count:,}" for count in counts))

        elapsed = time.time() - self.start_time if self.start_time else 0.0
        minutes, seconds = divmod(int(elapsed), 60)

        return Panel(
            table,
            title=self.title,
            subtitle=f"{minutes:02d}:{seconds:02d}",
            box=box.SIMPLE,
            border_style="bright_black"
        )
