"""Linear congruential pseudo-random number generator."""

from __future__ import annotations

_MULTIPLIER = 1103515245
_INCREMENT = 12345
_MASK32 = 0xFFFFFFFF

RAND_MAX = 0x7FFF


class Rand:
    """Generator yielding 15-bit values from a 32-bit LCG state."""

    def __init__(self, seed: int = 1) -> None:
        self._state = 0
        self.srand(seed)

    def srand(self, seed: int) -> None:
        """Reset the generator state to ``seed``."""
        self._state = seed & _MASK32

    def rand(self) -> int:
        """Advance the state and return a value in 0..RAND_MAX."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) & _MASK32
        return (self._state >> 16) & RAND_MAX