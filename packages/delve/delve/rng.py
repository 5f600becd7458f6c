"""DeterministicRandom - reseedable, replayable pseudo-random sequence.

The step function is Mulberry32 evaluated in unsigned 32-bit arithmetic, so a
given seed yields the same float sequence on every platform and interpreter.
String seeds are folded into an integer with a 31-multiplier rolling hash.
"""
from __future__ import annotations

import os
import secrets
from typing import Sequence, TypeVar

from delve.types import InvalidRange

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_GOLDEN = 0x6D2B79F5
_TWO_32 = 4294967296.0

SEED_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def hash_seed(text: str) -> int:
    """Fold a string into a non-zero seed.

    Iterates UTF-16 code units so astral characters hash the same way a
    browser-side seed field would. Collisions are acceptable.
    """
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return abs(h or 1)


def generate_seed_string(length: int = 8) -> str:
    """Return a fresh, shareable alphanumeric seed."""
    return "".join(secrets.choice(SEED_ALPHABET) for _ in range(length))


class DeterministicRandom:
    def __init__(self, seed: int | str | None = None) -> None:
        if seed is None:
            seed = int.from_bytes(os.urandom(4)) % 1_000_000_000
        self._seed = 0
        self._state = 0
        self.set_seed(seed)

    @property
    def seed(self) -> int:
        """The numeric seed the sequence started from."""
        return self._seed

    @property
    def seed_string(self) -> str:
        return str(self._seed)

    def set_seed(self, seed: int | str) -> None:
        if isinstance(seed, str):
            seed = hash_seed(seed)
        self._seed = int(seed)
        self._state = self._seed & _MASK32

    def reset(self) -> None:
        """Rewind to the state right after construction (or the last set_seed)."""
        self._state = self._seed & _MASK32

    def getstate(self) -> int:
        return self._state

    def setstate(self, state: int) -> None:
        self._state = state & _MASK32

    def next(self) -> float:
        """Return a float in [0, 1) and advance the state by one step."""
        self._state = (self._state + _GOLDEN) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_32

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]`` (both inclusive)."""
        if low > high:
            raise InvalidRange(low, high)
        return int(self.next() * (high - low + 1)) + low

    def next_bool(self, probability: float = 0.5) -> bool:
        return self.next() < probability

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy; *items* is not modified."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result
