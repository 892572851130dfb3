"""Streams of distinct random samples."""

import logging
from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

from jane_doe.bloom import BloomFilter
from jane_doe.errors import PopulationExhaustedError
from jane_doe.sampler import RandomSource, Sampler, default_rng

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)

DEFAULT_FP_RATE = 0.1


class UniqueStream(Iterator[T], Generic[T]):
    """Yield ``count`` pairwise distinct items drawn from ``source``.

    Previously yielded items are remembered in a Bloom filter, so a small
    fraction of never-seen values may be mistaken for repeats and skipped.
    A repeat is never yielded.

    Draws are retried until an unseen item turns up. If the source has
    too few distinct values this never happens; keep the population at
    least twice ``count``, or pass ``max_attempts`` to fail with
    :class:`PopulationExhaustedError` after that many rejected draws in a
    row.

    The stream borrows ``source`` and ``rng``. It is single-use and must not
    be shared between threads.
    """

    def __init__(
        self,
        source: Sampler[T],
        count: int,
        rng: RandomSource | None = None,
        *,
        fp_rate: float = DEFAULT_FP_RATE,
        max_attempts: int | None = None,
    ) -> None:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self.source = source
        self.rng = rng if rng is not None else default_rng()
        self.max_attempts = max_attempts
        self._seen = BloomFilter.for_fp_rate(count, fp_rate)
        self._remaining = count
        self._rejected = 0

    @property
    def remaining(self) -> int:
        """Number of items still to be yielded."""
        return self._remaining

    @property
    def rejected(self) -> int:
        """Total draws discarded as (probable) repeats so far."""
        return self._rejected

    def __iter__(self) -> "UniqueStream[T]":
        return self

    def __length_hint__(self) -> int:
        return self._remaining

    def __next__(self) -> T:
        if self._remaining == 0:
            raise StopIteration
        attempts = 0
        while True:
            item = self.source.sample_using(self.rng)
            if not self._seen.check_and_set(item):
                break
            attempts += 1
            self._rejected += 1
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise PopulationExhaustedError(
                    f"No unseen item after {attempts} draws with "
                    f"{self._remaining} still to produce; the source has too "
                    "few distinct values"
                )
        self._remaining -= 1
        if self._remaining == 0:
            logger.debug("Unique stream exhausted after %d rejected draws", self._rejected)
        return item
