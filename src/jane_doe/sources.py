"""Name frequency data and the samplers built from it.

Sources are headerless CSV files of ``name,count`` rows, ideally sorted by
decreasing count so that table lookups stay fast. The bundled files live in
``jane_doe/assets``.
"""

import csv
import enum
import logging
from collections.abc import Callable, Iterable
from functools import lru_cache
from importlib import resources

from jane_doe.errors import SourceFormatError, UnsupportedLocaleError
from jane_doe.sampler import PairCombiner, Sampler
from jane_doe.table import WeightedTable

logger = logging.getLogger(__name__)


class CsvSource(enum.Enum):
    """Bundled name frequency files."""

    US_GIVEN = "us-given.csv"
    US_SURNAMES = "us-surnames.csv"


def _field(row: list[str], column: int, what: str, line: int, origin: str) -> str:
    try:
        return row[column]
    except IndexError:
        raise SourceFormatError(f"Missing {what} on line {line} of {origin}") from None


def read_counts(
    lines: Iterable[str],
    name_col: int = 0,
    count_col: int = 1,
    has_header: bool = False,
    origin: str = "<input>",
) -> list[tuple[int, str]]:
    """Parse CSV rows into ``(count, name)`` pairs.

    Columns are zero-based. Blank lines are skipped. ``origin`` names the
    input in error messages.
    """
    reader = csv.reader(lines)
    if has_header:
        next(reader, None)
    pairs: list[tuple[int, str]] = []
    for row in reader:
        if not row:
            continue
        line = reader.line_num
        name = _field(row, name_col, "name", line, origin)
        raw_count = _field(row, count_col, "count", line, origin)
        try:
            count = int(raw_count)
        except ValueError:
            raise SourceFormatError(
                f"Invalid count {raw_count!r} on line {line} of {origin}"
            ) from None
        if count < 0:
            raise SourceFormatError(
                f"Invalid count {raw_count!r} on line {line} of {origin}: "
                "counts must not be negative"
            )
        pairs.append((count, name))
    return pairs


def load_asset(name: str) -> list[tuple[int, str]]:
    """Read one of the bundled CSV files."""
    path = resources.files("jane_doe") / "assets" / name
    if not path.is_file():
        raise SourceFormatError(f"Missing asset file {name!r}")
    with path.open("r", encoding="utf-8", newline="") as f:
        return read_counts(f, origin=name)


@lru_cache(maxsize=None)
def source_table(source: CsvSource) -> WeightedTable[int, str]:
    """Build (once) the weighted table for a bundled source."""
    table = WeightedTable.build(load_asset(source.value))
    logger.debug("Loaded %s: %d names", source.name, len(table))
    return table


def _join_names(first: str, last: str) -> str:
    return f"{first} {last}"


def us_names() -> Sampler[str]:
    """Sampler of American full names, given name then surname."""
    return PairCombiner(
        source_table(CsvSource.US_GIVEN),
        source_table(CsvSource.US_SURNAMES),
        _join_names,
    )


LOCALES: dict[str, Callable[[], Sampler[str]]] = {
    "us": us_names,
}


def names_for_locale(locale: str) -> Sampler[str]:
    """Return the full-name sampler for a locale code such as ``"us"``."""
    try:
        factory = LOCALES[locale.lower()]
    except KeyError:
        supported = ", ".join(sorted(LOCALES))
        raise UnsupportedLocaleError(
            f"Unsupported locale {locale!r} (supported: {supported})"
        ) from None
    return factory()
