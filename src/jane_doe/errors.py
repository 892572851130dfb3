"""Exception hierarchy for jane-doe."""


class JaneDoeError(Exception):
    """Base class for every error raised by this package."""


class ConstructionError(JaneDoeError, ValueError):
    """A weighted table could not be built from the supplied pairs."""


class NegativeWeightError(ConstructionError):
    """A supplied weight was negative."""

    def __init__(self, index: int, weight: object) -> None:
        super().__init__(f"Weight at position {index} is negative: {weight!r}")
        self.index = index
        self.weight = weight


class NonFiniteWeightError(ConstructionError):
    """A supplied weight was NaN or infinite."""

    def __init__(self, index: int, weight: object) -> None:
        super().__init__(f"Weight at position {index} is not finite: {weight!r}")
        self.index = index
        self.weight = weight


class WeightTypeError(ConstructionError):
    """A supplied weight was not a real number."""

    def __init__(self, index: int, weight: object) -> None:
        super().__init__(
            f"Weight at position {index} is not a real number: {weight!r} "
            f"({type(weight).__name__})"
        )
        self.index = index
        self.weight = weight


class EmptyOrNonPositiveError(ConstructionError):
    """No items were supplied, or the weights summed to zero or less."""


class PopulationExhaustedError(JaneDoeError, RuntimeError):
    """A unique stream gave up after too many repeated draws."""


class SourceFormatError(JaneDoeError, ValueError):
    """A CSV source of name counts could not be parsed."""


class UnsupportedLocaleError(JaneDoeError, KeyError):
    """No name data is bundled for the requested locale."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""
