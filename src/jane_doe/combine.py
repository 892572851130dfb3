"""Summing name tallies across several CSV files."""

import csv
import logging
from collections import Counter
from collections.abc import Iterable
from typing import TextIO

from jane_doe.sources import read_counts

logger = logging.getLogger(__name__)


class CountCombiner:
    """Accumulate per-name counts and write them out, largest first."""

    def __init__(self) -> None:
        self.counts: Counter[str] = Counter()

    def add(self, name: str, count: int) -> None:
        self.counts[name] += count

    def add_rows(
        self,
        lines: Iterable[str],
        name_col: int = 0,
        count_col: int = 1,
        has_header: bool = False,
        origin: str = "<input>",
    ) -> int:
        """Add every row of a CSV file; returns the number of rows read.

        Columns are zero-based and must differ.
        """
        if name_col == count_col:
            raise ValueError("Name and count columns must differ")
        pairs = read_counts(lines, name_col, count_col, has_header, origin)
        for count, name in pairs:
            self.add(name, count)
        logger.debug("Read %d rows from %s", len(pairs), origin)
        return len(pairs)

    def __len__(self) -> int:
        return len(self.counts)

    def most_common(self) -> list[tuple[str, int]]:
        """All names with their totals, sorted by decreasing count."""
        return self.counts.most_common()

    def write_to(self, out: TextIO) -> None:
        writer = csv.writer(out, lineterminator="\n")
        for name, count in self.most_common():
            writer.writerow([name, count])
