"""A plain Bloom filter for approximate "have I seen this?" checks.

Positions are derived by double hashing, ``pos_i = (h1 + i * h2) % m``,
where ``h1`` and ``h2`` come from a keyed BLAKE2 digest of the item.

Strings and bytes are digested from their own bytes, so their positions
are the same in every process whatever ``PYTHONHASHSEED`` is. Any other
hashable is digested from its built-in ``hash()``. That is stable across
runs for numbers, but not for types whose hash mixes in a string, such as
a tuple of strings. Either way, objects that compare equal map to the
same positions, so an item that was added is always reported as present:
the filter can produce false positives but never false negatives.
"""

import hashlib
import math
from collections.abc import Hashable

_MASK64 = (1 << 64) - 1


def _encode(item: Hashable) -> bytes:
    # str and bytes hashes are salted per process; numeric hashes are not,
    # and equal numbers of different types share one.
    if isinstance(item, str):
        return b"s" + item.encode("utf-8", "surrogatepass")
    if isinstance(item, bytes):
        return b"b" + item
    return b"h" + (hash(item) & _MASK64).to_bytes(8, "little")


class BloomFilter:
    """Fixed-size bit array with ``num_hashes`` positions per item."""

    def __init__(self, num_bits: int, num_hashes: int, seed: int = 0) -> None:
        if num_bits < 1:
            raise ValueError(f"num_bits must be positive, got {num_bits}")
        if num_hashes < 1:
            raise ValueError(f"num_hashes must be positive, got {num_hashes}")
        self.num_bits = num_bits
        self.num_hashes = num_hashes
        self.seed = seed
        self._key = seed.to_bytes(8, "little", signed=False)
        self._bits = bytearray((num_bits + 7) // 8)
        self._count = 0

    @classmethod
    def for_fp_rate(cls, capacity: int, fp_rate: float, seed: int = 0) -> "BloomFilter":
        """Size a filter to hold ``capacity`` items at roughly ``fp_rate``.

        Uses the usual optimum ``m = -n ln p / (ln 2)^2`` bits and
        ``k = (m / n) ln 2`` hash functions.
        """
        if not 0.0 < fp_rate < 1.0:
            raise ValueError(f"fp_rate must be in (0, 1), got {fp_rate}")
        capacity = max(capacity, 1)
        num_bits = math.ceil(-capacity * math.log(fp_rate) / (math.log(2) ** 2))
        num_hashes = max(1, round(num_bits / capacity * math.log(2)))
        return cls(num_bits, num_hashes, seed)

    def _positions(self, item: Hashable) -> list[int]:
        data = _encode(item)
        digest = hashlib.blake2b(data, digest_size=16, key=self._key).digest()
        h1 = int.from_bytes(digest[:8], "big")
        # An odd step is never zero.
        h2 = int.from_bytes(digest[8:], "big") | 1
        m = self.num_bits
        return [(h1 + i * h2) % m for i in range(self.num_hashes)]

    def _test(self, position: int) -> bool:
        return bool(self._bits[position >> 3] & (1 << (position & 7)))

    def _set(self, position: int) -> None:
        self._bits[position >> 3] |= 1 << (position & 7)

    def add(self, item: Hashable) -> None:
        self.check_and_set(item)

    def __contains__(self, item: Hashable) -> bool:
        return all(self._test(p) for p in self._positions(item))

    def check_and_set(self, item: Hashable) -> bool:
        """Add ``item`` and report whether it was (probably) present before."""
        present = True
        for position in self._positions(item):
            if not self._test(position):
                present = False
                self._set(position)
        if not present:
            self._count += 1
        return present

    def __len__(self) -> int:
        """Number of insertions that set at least one new bit."""
        return self._count

    def saturation(self) -> float:
        """Fraction of bits currently set."""
        set_bits = sum(bin(byte).count("1") for byte in self._bits)
        return set_bits / self.num_bits

    def __repr__(self) -> str:
        return f"BloomFilter(num_bits={self.num_bits}, num_hashes={self.num_hashes})"
