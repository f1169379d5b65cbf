"""Shared random number helpers used by the game and the evolution code."""

from __future__ import annotations

import random as _random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_generator = _random.Random()


def seed(value: int | float | str | bytes | None) -> None:
    """Reseed the shared generator so that later draws are reproducible."""
    _generator.seed(value)


def random() -> float:
    """Return a uniform float in [0, 1)."""
    return _generator.random()


def choose(p: float, a: T, b: T) -> T:
    """Return ``a`` with probability ``p``, otherwise ``b``."""
    return a if random() <= p else b


def choose_3(first_p: float, second_p: float) -> int:
    """Pick one of three outcomes: 0 with ``first_p``, 1 with ``second_p``, else 2."""
    p = random()
    if p <= first_p:
        return 0
    if p <= first_p + second_p:
        return 1
    return 2


def choice(items: Sequence[T]) -> T:
    """Return a uniformly chosen element of ``items``."""
    if not items:
        raise IndexError("cannot choose from an empty sequence")
    return items[int(random() * len(items))]


def coin_flip(p: float) -> bool:
    """Return True with probability ``p``."""
    return random() < p


def gaussian(mean: float, stddev: float) -> float:
    """Draw from a normal distribution."""
    return _generator.gauss(mean, stddev)