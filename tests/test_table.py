"""Tests for building weighted tables and looking up offsets."""

import math
import random
from collections import Counter
from decimal import Decimal
from fractions import Fraction

import pytest

from jane_doe import (
    ConstructionError,
    EmptyOrNonPositiveError,
    NegativeWeightError,
    NonFiniteWeightError,
    WeightedTable,
    WeightTypeError,
)

# =============================================================================
# Construction
# =============================================================================


def test_basic_construction() -> None:
    """Verify basic table construction works."""
    table = WeightedTable.build([(3, "a"), (1, "b")])
    assert len(table) == 2
    assert table.total == 4


def test_build_accepts_generators() -> None:
    """Pairs may come from any iterable, consumed once."""
    table = WeightedTable.build((w, str(w)) for w in range(5))
    assert table.total == 10
    assert len(table) == 5


def test_float_weights() -> None:
    """Floating point weights accumulate into a float total."""
    table = WeightedTable.build([(0.5, "a"), (1.25, "b")])
    assert abs(table.total - 1.75) < 1e-12


def test_iteration_recovers_weights() -> None:
    """Iterating a table yields the original pairs."""
    pairs = [(5, "x"), (0, "y"), (2, "z")]
    assert list(WeightedTable.build(pairs)) == pairs


def test_empty_pairs_rejected() -> None:
    """Verify an empty pair list is rejected."""
    with pytest.raises(EmptyOrNonPositiveError):
        WeightedTable.build([])


def test_all_zero_weights_rejected() -> None:
    """Verify a table with no positive weight is rejected."""
    with pytest.raises(EmptyOrNonPositiveError):
        WeightedTable.build([(0, "x")])
    with pytest.raises(EmptyOrNonPositiveError):
        WeightedTable.build([(0.0, "x"), (0.0, "y")])


def test_negative_weight_rejected() -> None:
    """Verify negative weights are rejected even when the total is positive."""
    with pytest.raises(NegativeWeightError) as info:
        WeightedTable.build([(-1, "x"), (5, "y")])
    assert info.value.index == 0
    assert info.value.weight == -1


def test_negative_weight_after_positive_rejected() -> None:
    """A negative weight anywhere in the input fails construction."""
    with pytest.raises(NegativeWeightError) as info:
        WeightedTable.build([(5, "y"), (2, "z"), (-0.5, "x")])
    assert info.value.index == 2


def test_non_finite_weights_rejected() -> None:
    """Verify NaN and infinite weights are rejected."""
    with pytest.raises(NonFiniteWeightError):
        WeightedTable.build([(1.0, "a"), (math.nan, "b")])
    with pytest.raises(NonFiniteWeightError):
        WeightedTable.build([(math.inf, "a")])


def test_construction_errors_are_value_errors() -> None:
    """Construction failures can be caught as ValueError."""
    with pytest.raises(ValueError):
        WeightedTable.build([])
    assert issubclass(NegativeWeightError, ConstructionError)


# =============================================================================
# Lookup
# =============================================================================


def test_sample_at_scenario() -> None:
    """Offsets map onto the item whose weight range contains them."""
    table = WeightedTable.build([(3, "a"), (1, "b")])
    assert table.sample_at(0) == "a"
    assert table.sample_at(2) == "a"
    assert table.sample_at(3) == "b"


def test_sample_at_single_item() -> None:
    """A one-item table returns that item for every valid offset."""
    table = WeightedTable.build([(4, "only")])
    assert [table.sample_at(i) for i in range(4)] == ["only"] * 4


def test_sample_at_skips_zero_weights() -> None:
    """Items with zero weight own no offsets."""
    table = WeightedTable.build([(0, "never"), (2, "a"), (0, "nope"), (1, "b")])
    assert [table.sample_at(i) for i in range(3)] == ["a", "a", "b"]


def test_sample_at_long_table() -> None:
    """Galloping reaches the tail of a long unit-weight table."""
    table = WeightedTable.build([(1, i) for i in range(1000)])
    for offset in (0, 1, 2, 3, 7, 8, 511, 512, 998, 999):
        assert table.sample_at(offset) == offset


def test_sample_at_float_offsets() -> None:
    """Fractional offsets fall into the right bucket."""
    table = WeightedTable.build([(0.5, "a"), (0.25, "b"), (0.25, "c")])
    assert table.sample_at(0.49) == "a"
    assert table.sample_at(0.5) == "b"
    assert table.sample_at(0.74) == "b"
    assert table.sample_at(0.99) == "c"


def test_sample_at_out_of_range() -> None:
    """Offsets outside [0, total) are rejected."""
    table = WeightedTable.build([(3, "a"), (1, "b")])
    with pytest.raises(ValueError):
        table.sample_at(4)
    with pytest.raises(ValueError):
        table.sample_at(-1)


# =============================================================================
# Sampling
# =============================================================================


def test_sample_returns_known_item() -> None:
    """Verify sample returns one of the table's items."""
    table = WeightedTable.build([(1, "a"), (2, "b"), (3, "c")])
    for _ in range(100):
        assert table.sample() in {"a", "b", "c"}


def test_seeded_sampling_is_reproducible() -> None:
    """Identical seeds give identical draws."""
    table = WeightedTable.build([(5, "a"), (3, "b"), (1, "c"), (1, "d")])
    first = [table.sample_using(random.Random(42)) for _ in range(10)]
    second = [table.sample_using(random.Random(42)) for _ in range(10)]
    assert first == second


def test_float_table_never_returns_zero_weight_tail() -> None:
    """Float offsets stay below the total, so a zero-weight tail is unreachable."""
    table = WeightedTable.build([(0.1, "a"), (0.2, "b"), (0.0, "never")])
    rng = random.Random(7)
    assert all(table.sample_using(rng) != "never" for _ in range(2000))


def test_empirical_frequencies() -> None:
    """Draw frequencies converge on weight / total."""
    table = WeightedTable.build([(7, "c"), (2, "b"), (1, "a")])
    rng = random.Random(12345)
    num_samples = 20000
    counts = Counter(table.sample_using(rng) for _ in range(num_samples))
    for weight, item in table:
        expected = weight / table.total
        assert abs(counts[item] / num_samples - expected) < 0.02, (
            f"{item}: observed {counts[item] / num_samples:.3f}, expected {expected:.3f}"
        )


def test_non_real_weights_rejected() -> None:
    """Weights outside numbers.Real fail at build time, not at sampling."""
    with pytest.raises(WeightTypeError) as info:
        WeightedTable.build([(Decimal(3), "a"), (Decimal(1), "b")])
    assert info.value.index == 0
    with pytest.raises(WeightTypeError):
        WeightedTable.build([(1, "a"), ("2", "b")])  # type: ignore[list-item]


def test_fraction_weights_can_be_sampled() -> None:
    """Any numbers.Real weight builds a table that samples successfully."""
    table = WeightedTable.build([(Fraction(3, 4), "a"), (Fraction(1, 4), "b")])
    assert table.total == 1
    rng = random.Random(4)
    assert {table.sample_using(rng) for _ in range(200)} == {"a", "b"}
