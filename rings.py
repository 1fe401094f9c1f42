"""
Ring simulation core.

Rings spawn at a point, grow until they touch another ring, then shrink,
and bounce back to growing once their radius drops below zero.
"""
import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
from numba import jit

from config import BLUE_RANGE, GREEN_RANGE, RED_RANGE, RING_GROWTH_RATE, RING_WEIGHT, SEED

logger = logging.getLogger("ringlife.rings")

RGB = Tuple[int, int, int]

# lowest corner of the color ranges; RingSet.spawn draws the real color
UNDRAWN_COLOR: RGB = (RED_RANGE[0], GREEN_RANGE[0], BLUE_RANGE[0])


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: "Point") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)


class RingDirection(Enum):
    GROWING = "Growing"
    SHRINKING = "Shrinking"

    def reversed(self) -> "RingDirection":
        if self is RingDirection.GROWING:
            return RingDirection.SHRINKING
        return RingDirection.GROWING


def random_color(rng: np.random.Generator) -> RGB:
    """Draw a ring color, biased towards blue."""
    red = int(rng.integers(*RED_RANGE))
    green = int(rng.integers(*GREEN_RANGE))
    blue = int(rng.integers(*BLUE_RANGE))
    return red, green, blue


def log_intersection(ring: "Ring", other: "Ring") -> None:
    logger.info(
        "[%s, rad=%s, direction=%s] and [%s, rad=%s, direction=%s] intersect!",
        ring.origin, ring.radius, ring.direction.value,
        other.origin, other.radius, other.direction.value,
    )


@dataclass
class Ring:
    """
    One expanding/contracting circle.

    Equality covers every field except ``color``; a ring never tests
    against anything equal to itself.
    """

    origin: Point
    radius: float = 0.0
    weight: float = RING_WEIGHT
    growth_rate: float = RING_GROWTH_RATE
    direction: RingDirection = RingDirection.GROWING
    color: RGB = field(default=UNDRAWN_COLOR, compare=False)

    def __post_init__(self):
        if not self.growth_rate > 0:
            raise ValueError(f"growth_rate must be positive, got {self.growth_rate}")

    def intersects(self, other: "Ring") -> bool:
        """
        True when the two outlines touch, give or take one growth step.

        The band width is this ring's growth rate, so the test is not
        symmetric when the two rates differ.
        """
        if self == other:
            return False
        if self.direction is RingDirection.SHRINKING and other.direction is RingDirection.SHRINKING:
            return False

        distance = self.origin.distance_to(other.origin)
        total = self.radius + other.radius
        gap = abs(self.radius - other.radius)
        band = self.growth_rate

        intersecting = (total - band < distance < total + band) or (gap - band < distance < gap + band)
        if intersecting:
            log_intersection(self, other)
        return intersecting

    def advance(self, intersecting: bool) -> None:
        if intersecting:
            self.direction = self.direction.reversed()

        if self.direction is RingDirection.GROWING:
            self.radius += self.growth_rate
        else:
            self.radius -= self.growth_rate

        # bounce off zero; the negative radius is kept for this tick
        if self.radius < 0.0 and self.direction is RingDirection.SHRINKING:
            self.direction = RingDirection.GROWING


def rings_to_arrays(rings: Sequence[Ring]):
    """Convert rings to numpy arrays for Numba processing."""
    n = len(rings)
    origins = np.zeros((n, 2), dtype=np.float64)
    radii = np.zeros(n, dtype=np.float64)
    weights = np.zeros(n, dtype=np.float64)
    growth_rates = np.zeros(n, dtype=np.float64)
    shrinking = np.zeros(n, dtype=np.bool_)

    for i, ring in enumerate(rings):
        origins[i] = [ring.origin.x, ring.origin.y]
        radii[i] = ring.radius
        weights[i] = ring.weight
        growth_rates[i] = ring.growth_rate
        shrinking[i] = ring.direction is RingDirection.SHRINKING

    return origins, radii, weights, growth_rates, shrinking


# No fastmath: results must match Ring.intersects exactly.
@jit(nopython=True)
def first_intersections(origins, radii, weights, growth_rates, shrinking):
    """
    For every ring, the index of the first ring it intersects, or -1.

    Mirrors Ring.intersects over array columns.
    """
    n = radii.shape[0]
    hits = np.full(n, -1, dtype=np.int64)

    for i in range(n):
        for j in range(n):
            if (
                origins[i, 0] == origins[j, 0]
                and origins[i, 1] == origins[j, 1]
                and radii[i] == radii[j]
                and weights[i] == weights[j]
                and growth_rates[i] == growth_rates[j]
                and shrinking[i] == shrinking[j]
            ):
                continue
            if shrinking[i] and shrinking[j]:
                continue

            dx = origins[i, 0] - origins[j, 0]
            dy = origins[i, 1] - origins[j, 1]
            distance = np.sqrt(dx * dx + dy * dy)

            total = radii[i] + radii[j]
            gap = abs(radii[i] - radii[j])
            band = growth_rates[i]

            if (total - band < distance and distance < total + band) or (
                gap - band < distance and distance < gap + band
            ):
                hits[i] = j
                break

    return hits


class RingSet:
    """Owns every ring and advances them one tick at a time."""

    def __init__(
        self,
        rings: Optional[Sequence[Ring]] = None,
        rng: Optional[np.random.Generator] = None,
        growth_rate: float = RING_GROWTH_RATE,
        weight: float = RING_WEIGHT,
    ):
        self._rings: List[Ring] = [replace(ring) for ring in rings or ()]
        self.rng = rng if rng is not None else np.random.default_rng(SEED)
        self.growth_rate = growth_rate
        self.weight = weight

    def __len__(self) -> int:
        return len(self._rings)

    def __iter__(self) -> Iterator[Ring]:
        return iter(self.snapshot())

    def spawn(self, origin: Point) -> int:
        ring = Ring(
            origin=origin,
            weight=self.weight,
            growth_rate=self.growth_rate,
            color=random_color(self.rng),
        )
        self._rings.append(ring)
        logger.debug("Spawned ring %d at %s", len(self._rings) - 1, origin)
        return len(self._rings) - 1

    def snapshot(self) -> Tuple[Ring, ...]:
        return tuple(replace(ring) for ring in self._rings)

    def intersects(self, ring_id: int, other_id: int) -> bool:
        return self._rings[ring_id].intersects(self._rings[other_id])

    def step(self) -> None:
        if not self._rings:
            return

        # every test in this tick reads the state from before the tick
        before = self.snapshot()
        hits = first_intersections(*rings_to_arrays(before))

        for idx, ring in enumerate(self._rings):
            hit = int(hits[idx])
            if hit >= 0:
                log_intersection(before[idx], before[hit])
            ring.advance(hit >= 0)
