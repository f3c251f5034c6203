from typing import List, Any

MASK_32 = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0


def _imul(a: int, b: int) -> int:
    # Low 32 bits of the product, same as a 32-bit hardware multiply
    return (a * b) & MASK_32


class RandomSource:
    """
    Mulberry32 generator.
    32 bits of state, advanced by a fixed odd increment and scrambled with
    multiply / xor-shift. Every operation is masked to 32 bits so the same
    seed produces the same sequence on every platform.
    """

    __slots__ = ('seed', '_state')

    def __init__(self, seed: int = 42):
        self.seed = seed & MASK_32
        self._state = self.seed

    def next(self) -> float:
        """Returns a float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & MASK_32
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r = (r ^ ((r + _imul(r ^ (r >> 7), 61 | r)) & MASK_32)) & MASK_32
        return ((r ^ (r >> 14)) & MASK_32) / UINT32_SCALE

    def next_int(self, lo: int, hi: int) -> int:
        """Returns an integer in [lo, hi], both ends inclusive."""
        return lo + int(self.next() * (hi - lo + 1))

    def shuffle(self, items: List[Any]):
        """In-place Fisher-Yates, walking from the last index down."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]
