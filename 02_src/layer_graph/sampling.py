"""Random draws shared by the generation passes."""

from typing import List, Optional, Sequence, TypeVar, Union

import numpy as np
from numpy.random import Generator, SeedSequence

from .errors import PreconditionViolation

T = TypeVar("T")

SeedLike = Union[int, SeedSequence, None]


def make_rng(seed: SeedLike = None) -> Generator:
    return np.random.default_rng(seed)


def draw_percent(rng: Generator) -> float:
    """Uniform draw in [0, 100)."""
    return float(rng.random()) * 100.0


def pick(rng: Generator, bucket: Sequence[T]) -> T:
    if not bucket:
        raise PreconditionViolation("Cannot pick from an empty depth bucket")
    return bucket[int(rng.integers(0, len(bucket)))]


def spawn_seeds(seed: Optional[int], count: int) -> List[SeedSequence]:
    """Independent child seeds, one per graph of a batch."""
    return SeedSequence(seed).spawn(count)
