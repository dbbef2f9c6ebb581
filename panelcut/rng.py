"""Seeded pseudo-random stream shared by every pattern generator."""

from __future__ import annotations

_MODULUS_MASK = 0x7FFFFFFF
_MULTIPLIER = 1664525
_INCREMENT = 1013904223
# Largest double below 1.0; the full-mask state would otherwise yield exactly 1.0.
_BELOW_ONE = 1.0 - 2.0 ** -53


def _normalize_seed(seed: int) -> int:
    # Wrap to a signed 32-bit value first so huge or negative seeds land on
    # the same state as their 32-bit counterpart.
    wrapped = ((int(seed) + 0x80000000) & 0xFFFFFFFF) - 0x80000000
    return abs(wrapped) or 1


class RandomStream:
    """Linear-congruential float stream.

    The state is a 31-bit integer.  Every call to :meth:`next` advances it once
    and returns ``state / (2**31 - 1)`` kept inside ``[0, 1)``; the output is a
    pure function of the seed and the number of draws taken so far.
    """

    __slots__ = ("seed", "_state", "_draws")

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._state = _normalize_seed(seed)
        self._draws = 0

    @property
    def draws(self) -> int:
        return self._draws

    def next(self) -> float:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) & _MODULUS_MASK
        self._draws += 1
        return min(self._state / _MODULUS_MASK, _BELOW_ONE)

    def randint(self, low: int, count: int) -> int:
        """Return ``low + floor(next() * count)``."""

        return low + int(self.next() * count)

    def choice(self, options):
        return options[int(self.next() * len(options)) % len(options)]

    def __repr__(self) -> str:
        return f"RandomStream(seed={self.seed!r}, draws={self._draws})"


def create_stream(seed: int) -> RandomStream:
    return RandomStream(seed)


__all__ = ["RandomStream", "create_stream"]
