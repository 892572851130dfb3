"""Package initialization for jane-doe.

Weighted random sampling from cumulative frequency tables, and streams of
distinct samples filtered through a Bloom filter. Ships name frequency data
for generating realistic random full names.
"""

from jane_doe.bloom import BloomFilter
from jane_doe.combine import CountCombiner
from jane_doe.errors import (
    ConstructionError,
    EmptyOrNonPositiveError,
    JaneDoeError,
    NegativeWeightError,
    NonFiniteWeightError,
    PopulationExhaustedError,
    SourceFormatError,
    UnsupportedLocaleError,
    WeightTypeError,
)
from jane_doe.sampler import PairCombiner, Sampler
from jane_doe.sources import names_for_locale, read_counts, us_names
from jane_doe.table import WeightedTable
from jane_doe.unique import UniqueStream

__version__ = "0.1.0"
__all__ = [
    "BloomFilter",
    "ConstructionError",
    "CountCombiner",
    "EmptyOrNonPositiveError",
    "JaneDoeError",
    "NegativeWeightError",
    "NonFiniteWeightError",
    "PairCombiner",
    "PopulationExhaustedError",
    "Sampler",
    "SourceFormatError",
    "UniqueStream",
    "UnsupportedLocaleError",
    "WeightTypeError",
    "WeightedTable",
    "names_for_locale",
    "read_counts",
    "us_names",
]
