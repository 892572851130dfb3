"""Command line entry points: ``jane-doe`` and ``combine-counts``."""

import argparse
import logging
import random
import sys
from collections.abc import Sequence

from jane_doe.combine import CountCombiner
from jane_doe.errors import JaneDoeError, PopulationExhaustedError, UnsupportedLocaleError
from jane_doe.sources import LOCALES, names_for_locale
from jane_doe.unique import UniqueStream

logger = logging.getLogger(__name__)

# Rejected draws in a row before jane-doe decides the names have run out.
DEFAULT_MAX_ATTEMPTS = 10_000


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _non_negative(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value!r} must not be negative")
    return number


def _positive(value: str) -> int:
    number = _non_negative(value)
    if number == 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be positive")
    return number


def _column(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number < 1:
        raise argparse.ArgumentTypeError("Columns are numbered from 1")
    return number


def names_main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="jane-doe",
        description="Generates random names according to population statistics.",
    )
    parser.add_argument(
        "-n", "--count", type=_non_negative, default=1,
        help="How many distinct names to print (default 1)",
    )
    parser.add_argument(
        "-l", "--locale", default="us",
        help="Which locale to get names from (default us)",
    )
    parser.add_argument(
        "-s", "--show-locales", action="store_true",
        help="List the supported locales and exit",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    parser.add_argument(
        "--max-attempts", type=_positive, default=DEFAULT_MAX_ATTEMPTS, metavar="N",
        help="Give up after N repeated draws in a row (default %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.show_locales:
        for code in sorted(LOCALES):
            sys.stdout.write(f"{code}\n")
        return 0

    try:
        sampler = names_for_locale(args.locale)
    except UnsupportedLocaleError as e:
        parser.error(str(e))

    rng = random.Random(args.seed)
    logger.debug("Drawing %d names for locale %s", args.count, args.locale)
    stream = UniqueStream(sampler, args.count, rng, max_attempts=args.max_attempts)
    try:
        for name in stream:
            sys.stdout.write(f"{name}\n")
    except PopulationExhaustedError as e:
        logger.error("Stopped after %d names: %s", args.count - stream.remaining, e)
        return 1
    return 0


def combine_main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="combine-counts",
        description="Sums up tallies from multiple csv files and writes the totals.",
    )
    parser.add_argument(
        "-n", "--namecol", type=_column, default=1, metavar="INDEX",
        help="Which column to use for the name (default 1 = first column)",
    )
    parser.add_argument(
        "-c", "--countcol", type=_column, default=2, metavar="INDEX",
        help="Which column to use for the count (default 2)",
    )
    parser.add_argument(
        "-o", "--outfile", default=None, metavar="OUTPUT",
        help="CSV file to write combined output (default stdout)",
    )
    parser.add_argument(
        "-r", "--header-row", action="store_true",
        help="Input files have a header row to skip",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("inputs", nargs="+", metavar="INPUT", help="Input file(s) in csv format")
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.namecol == args.countcol:
        parser.error("--namecol and --countcol must differ")

    combiner = CountCombiner()
    try:
        for path in args.inputs:
            with open(path, encoding="utf-8", newline="") as f:
                combiner.add_rows(
                    f, args.namecol - 1, args.countcol - 1, args.header_row, origin=path
                )
    except (OSError, JaneDoeError) as e:
        logger.error("%s", e)
        return 1

    logger.debug("Combined %d distinct names from %d files", len(combiner), len(args.inputs))
    if args.outfile is None:
        combiner.write_to(sys.stdout)
    else:
        with open(args.outfile, "w", encoding="utf-8", newline="") as out:
            combiner.write_to(out)
    return 0


def run_names() -> None:
    sys.exit(names_main())


def run_combine() -> None:
    sys.exit(combine_main())
