from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")

DICE_FACES = 100


class RandomSource(Protocol):
    """Random integer/choice provider; ``random.Random`` satisfies it."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return a fresh generator, reproducible when ``seed`` is given."""

    return random.Random(seed)


def roll_dice(rng: RandomSource, faces: int = DICE_FACES) -> int:
    return rng.randint(1, faces)
