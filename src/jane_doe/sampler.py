"""The sampler abstraction and a combinator over pairs of samplers.

A sampler is anything that can produce one random item when handed a
source of randomness. Samplers hold no random state of their own: the
generator is passed in on every call, so one sampler can be shared between
any number of independently seeded streams.
"""

import random
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")


class RandomSource(Protocol):
    """The subset of :class:`random.Random` that samplers rely on."""

    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


_default_rng = random.Random()


def default_rng() -> random.Random:
    """Return the generator used by :meth:`Sampler.sample`."""
    return _default_rng


class Sampler(ABC, Generic[T]):
    """Something that can produce one random item."""

    @abstractmethod
    def sample_using(self, rng: RandomSource) -> T:
        """Randomly sample one item using the given generator."""

    def sample(self) -> T:
        """Randomly sample one item using the default generator."""
        return self.sample_using(_default_rng)


class PairCombiner(Sampler[T], Generic[A, B, T]):
    """Draw from two samplers and merge the results.

    The first sampler is always consulted before the second, so a seeded
    generator gives reproducible pairs.
    """

    def __init__(
        self,
        first: Sampler[A],
        second: Sampler[B],
        combiner: Callable[[A, B], T],
    ) -> None:
        self.first = first
        self.second = second
        self.combiner = combiner

    def sample_using(self, rng: RandomSource) -> T:
        a = self.first.sample_using(rng)
        b = self.second.sample_using(rng)
        return self.combiner(a, b)

    def __repr__(self) -> str:
        return f"PairCombiner({self.first!r}, {self.second!r})"
