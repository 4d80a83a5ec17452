from typing import Iterable, List, Sequence, TypeVar

import pytest

from fatelock.services.progression import ProgressionEngine
from fatelock.services.snapshot import default_snapshot

T = TypeVar("T")


class ScriptedRandom:
    """Random source replaying fixed dice rolls and pool draws."""

    def __init__(self, ints: Iterable[int] = (), choices: Iterable[str] = ()) -> None:
        self.ints: List[int] = list(ints)
        self.choices: List[str] = list(choices)

    def randint(self, a: int, b: int) -> int:
        if not self.ints:
            raise AssertionError("unexpected dice roll")
        value = self.ints.pop(0)
        assert a <= value <= b
        return value

    def choice(self, seq: Sequence[T]) -> T:
        if not self.choices:
            raise AssertionError("unexpected pool draw")
        value = self.choices.pop(0)
        assert value in seq
        return value  # type: ignore[return-value]


@pytest.fixture
def snapshot():
    return default_snapshot()


def make_engine(ints: Iterable[int] = (), choices: Iterable[str] = ()) -> ProgressionEngine:
    return ProgressionEngine(rng=ScriptedRandom(ints, choices))
