"""Normalize a CSS z-index to a float32 value in ``[0.0, 1.0]``.

A z-index is turned into a count of float32 steps below the global maximum,
that count is split across three octaves anchored at 1.0, 0.5 and 0.25, and
the result is produced by decrementing the anchor's raw bit pattern.

    >>> from normalize_css_z import normalize
    >>> normalize(2_147_483_647)
    1.0
    >>> normalize(0)
    0.5
"""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from normalize_css_z.floatbits import nth_below, octave_anchor
from normalize_css_z.ranges import PartitionConfig, default_partition


@dataclass(frozen=True, slots=True)
class Normalizer:
    """Pure mapping from z-index to float32 under a fixed partition."""

    config: PartitionConfig = field(default_factory=default_partition)

    @classmethod
    def new(cls, config: PartitionConfig | None = None) -> Normalizer:
        """Create a normalizer; ``None`` selects the default partition."""
        return cls(config if config is not None else default_partition())

    def calc(self, z: int) -> float | None:
        """Return the normalized value of *z*, or None if *z* is unsupported."""
        config = self.config
        if z == config.first:
            return 0.0
        if z == config.last:
            return 1.0

        found = config.locate(z)
        if found is None:
            return None
        index, r = found

        ordinal = config.offsets[index] + (z - r.start)
        steps = config.total - 1 - ordinal

        octave = 0
        for divisor in config.divisors[:-1]:
            if steps < divisor:
                break
            steps -= divisor
            octave += 1

        return nth_below(octave_anchor(octave), steps)

    def calc_many(self, zs: list[int]) -> list[float | None]:
        return [self.calc(z) for z in zs]


@lru_cache(maxsize=1)
def _default_normalizer() -> Normalizer:
    return Normalizer()


def normalize(z: int) -> float | None:
    """Normalize *z* under the default partition."""
    return _default_normalizer().calc(z)
