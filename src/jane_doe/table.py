"""Cumulative frequency tables for weighted random choice.

A :class:`WeightedTable` stores each item alongside the running sum of the
weights up to and including it. Picking a uniform offset in ``[0, total)``
and finding the first entry whose cumulative weight exceeds it selects
items with probability proportional to their weight.

Lookup starts with an exponential probe from the front of the table before
falling back to binary search, so it runs in time logarithmic in the rank
of the answer rather than in the size of the table. Tables built from
pairs sorted by decreasing weight therefore answer most queries after only
a handful of comparisons.
"""

import logging
import math
from bisect import bisect_right
from collections.abc import Iterable, Iterator
from numbers import Integral, Real
from typing import Generic, TypeVar

from jane_doe.errors import (
    EmptyOrNonPositiveError,
    NegativeWeightError,
    NonFiniteWeightError,
    WeightTypeError,
)
from jane_doe.sampler import RandomSource, Sampler

logger = logging.getLogger(__name__)

N = TypeVar("N", int, float)
T = TypeVar("T")


class WeightedTable(Sampler[T], Generic[N, T]):
    """An immutable collection of items with selection weights.

    Build instances with :meth:`build`; the constructor takes the already
    validated cumulative representation and is not meant to be called
    directly.
    """

    def __init__(self, cumulative: list[N], items: list[T], total: N) -> None:
        self._cumulative = cumulative
        self._items = items
        self._total = total

    @classmethod
    def build(cls, pairs: Iterable[tuple[N, T]]) -> "WeightedTable[N, T]":
        """Create a table from ``(weight, item)`` pairs.

        Raises:
            WeightTypeError: If a weight is not a real number, e.g. a
                ``Decimal``.
            NonFiniteWeightError: If a weight is NaN or infinite.
            NegativeWeightError: If a weight is below zero.
            EmptyOrNonPositiveError: If no pairs were given or the weights
                sum to zero.

        Sampling is fastest when pairs come in decreasing order of weight
        and items are not repeated, but any order is correct.
        """
        cumulative: list[N] = []
        items: list[T] = []
        running = 0
        for index, (weight, item) in enumerate(pairs):
            if not isinstance(weight, Real):
                raise WeightTypeError(index, weight)
            if not isinstance(weight, Integral) and not math.isfinite(weight):
                raise NonFiniteWeightError(index, weight)
            if weight < 0:
                raise NegativeWeightError(index, weight)
            running += weight
            cumulative.append(running)
            items.append(item)
        if running <= 0:
            raise EmptyOrNonPositiveError(
                f"Need at least one positive weight, got {len(items)} item(s) "
                f"with total weight {running!r}"
            )
        logger.debug("Built weighted table of %d items, total %r", len(items), running)
        return cls(cumulative, items, running)

    @property
    def total(self) -> N:
        """Sum of all weights in the table."""
        return self._total

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[tuple[N, T]]:
        """Yield the original ``(weight, item)`` pairs in insertion order."""
        previous = 0
        for cumulative, item in zip(self._cumulative, self._items):
            yield cumulative - previous, item
            previous = cumulative

    def __repr__(self) -> str:
        return f"WeightedTable(<{len(self)} items>, total={self._total!r})"

    def sample_at(self, offset: N) -> T:
        """Return the item owning ``offset``, which must be in ``[0, total)``."""
        if not 0 <= offset < self._total:
            raise ValueError(f"Offset {offset!r} outside [0, {self._total!r})")
        cumulative = self._cumulative
        if offset < cumulative[0]:
            return self._items[0]

        # A table with a single entry always returns above, since its only
        # cumulative weight is the total.
        last = len(cumulative) - 1
        lb = ub = 1
        # invariant: ub <= last and offset >= cumulative[lb - 1]
        while offset >= cumulative[ub]:
            lb = ub + 1
            ub *= 2
            if ub >= last:
                ub = last
                break
        # offset >= cumulative[lb - 1] and offset < cumulative[ub]
        return self._items[bisect_right(cumulative, offset, lb, ub)]

    def sample_using(self, rng: RandomSource) -> T:
        return self.sample_at(self._draw_offset(rng))

    def _draw_offset(self, rng: RandomSource) -> N:
        total = self._total
        if isinstance(total, Integral):
            return rng.randrange(total)
        offset = rng.random() * total
        # Rounding in the multiplication can land exactly on the total.
        if offset >= total:
            offset = math.nextafter(total, 0.0)
        return offset
