"""
Pass the Pigs - Outcome Sampler

Draws a pose from a weighted distribution with a cumulative-weight scan.
Only a uniform [0, 1) source is needed, so any object exposing ``random()``
(the ``random`` module, a seeded ``random.Random``, a scripted test double)
can drive it.
"""

import math
import random
from typing import Mapping, Protocol

from pass_the_pigs.engine.base import Pose


class RandomSource(Protocol):
    """Anything with a ``random()`` method returning a float in [0, 1)."""

    def random(self) -> float: ...


def _clamp(weight: float) -> float:
    if not math.isfinite(weight) or weight < 0:
        return 0.0
    return float(weight)


def normalized_weights(weights: Mapping[Pose, float]) -> dict[Pose, float]:
    """Weights for every pose in fixed order; missing or negative entries become 0."""
    return {pose: _clamp(weights.get(pose, 0.0)) for pose in Pose}


def sample(weights: Mapping[Pose, float], rng: RandomSource | None = None) -> Pose:
    """Draw one pose.

    Walks the poses in declaration order, subtracting each weight from a
    uniform draw in [0, total) until the remainder drops to zero or below.
    Zero-weight poses are never returned. When every weight is zero the
    last pose is returned.

    Args:
        weights: Pose -> non-negative weight
        rng: Uniform source (defaults to the ``random`` module)

    Returns:
        The sampled pose
    """
    source = rng if rng is not None else random
    clamped = normalized_weights(weights)
    total = sum(clamped.values())

    remainder = source.random() * total
    for pose, weight in clamped.items():
        # A plain scan would return a zero-weight pose on a draw of exactly 0.0
        if weight <= 0:
            continue
        remainder -= weight
        if remainder <= 0:
            return pose

    return list(Pose)[-1]


def sample_pair(
    weights: Mapping[Pose, float],
    rng: RandomSource | None = None,
) -> tuple[Pose, Pose]:
    """Throw both pigs independently."""
    return sample(weights, rng), sample(weights, rng)
