"""Park-Miller minimal standard pseudo-random number generator."""

from __future__ import annotations

from typing import Iterator

_STATE_MASK = 0xFFFFFFFFFFFFFFFF
MODULUS = 0x7FFFFFFF
MULTIPLIER = 16807
_Q = 127773
_R = 2836
MAX_VALUE = 0x7FFFFFFD


class ParkMiller:
    """Generator of values in [0, 0x7ffffffd]; the state is the last value."""

    def __init__(self, seed: int = 1) -> None:
        self.state = seed & _STATE_MASK

    def next(self) -> int:
        """Advance the generator and return the new value."""
        x = (self.state % (MODULUS - 1)) + 1
        hi, lo = divmod(x, _Q)
        x = MULTIPLIER * lo - _R * hi
        if x < 0:
            x += MODULUS
        x -= 1
        self.state = x
        return x

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        return self.next()