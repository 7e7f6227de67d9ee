from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Union
import random


class Algorithm(IntEnum):
    """Carving policy. The integer value is what gets persisted."""

    PRIM = 0
    KRUSKAL = 1
    CUSTOM = 2

    @property
    def is_perfect(self) -> bool:
        # CUSTOM opens every interior wall, so its output has cycles
        return self is not Algorithm.CUSTOM

    @classmethod
    def parse(cls, value: Union[str, int, "Algorithm"]) -> "Algorithm":
        """Accept an Algorithm, its ordinal, or its case-insensitive name."""
        if isinstance(value, Algorithm):
            return value
        if isinstance(value, str):
            key = value.strip()
            if key.isdigit():
                return cls(int(key))
            try:
                return cls[key.upper()]
            except KeyError:
                raise ValueError(f"unknown algorithm {value!r}") from None
        # reject True/False and fractional or non-finite ordinals such as 1.5
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not float(value).is_integer():
            raise ValueError(f"unknown algorithm {value!r}")
        return cls(int(value))


@dataclass(frozen=True)
class GenerationConfig:
    width: int = 16
    height: int = 16
    # 0 draws a fresh nondeterministic seed on every generation
    seed: int = 0
    algorithm: Algorithm = Algorithm.PRIM
    goal_in_center: bool = False

    @property
    def deterministic(self) -> bool:
        return self.seed != 0

    def with_changes(self, **changes) -> "GenerationConfig":
        return replace(self, **changes)


def make_rng(seed: int) -> random.Random:
    """RNG for one generation call: OS entropy for seed 0, else seeded."""
    if seed == 0:
        return random.Random()
    return random.Random(seed)
