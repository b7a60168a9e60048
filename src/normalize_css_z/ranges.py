"""Range partitioning for the z-index normalizer.

Three closed integer ranges (lower, middle, upper) make up the supported
domain. ``RangesBuilder`` turns caller-supplied ranges into a frozen
``PartitionConfig`` carrying the derived step table consumed by
``Normalizer``:

* ``offsets`` — cumulative length of the ranges before each range, so a
  z-index maps to one ordinal in ``[0, total)``.
* ``divisors`` — number of float32 steps taken from each octave, top octave
  first. They sum exactly to ``total``.

The builder sorts the six boundary values and reassigns them pairwise, so the
caller's lower/middle/upper labels only matter through their bounds.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Any

from normalize_css_z.constants import (
    MAX_CSS_Z,
    NUM_OF_OCTAVES,
    NUM_OF_SUPPORTED_Z,
    RANGE_LOWER,
    RANGE_MIDDLE,
    RANGE_UPPER,
)

logger = logging.getLogger(__name__)

_SLOTS = ("lower", "middle", "upper")


class PartitionCapacityError(RuntimeError):
    """Raised when a partition covers more z-indexes than float32 can order."""


# ---------------------------------------------------------------------------
# IntegerRange
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class IntegerRange:
    """Closed interval ``[start, end]`` of CSS z-index values.

    Invariants (enforced in __post_init__):
        - -MAX_CSS_Z <= start < end <= MAX_CSS_Z
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(
                f"IntegerRange.start ({self.start}) must be < end ({self.end})"
            )
        if self.start < -MAX_CSS_Z or self.end > MAX_CSS_Z:
            raise ValueError(
                f"IntegerRange [{self.start}, {self.end}] exceeds the CSS "
                f"z-index domain [{-MAX_CSS_Z}, {MAX_CSS_Z}]"
            )

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, z: object) -> bool:
        return isinstance(z, int) and self.start <= z <= self.end

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


RangeLike = IntegerRange | tuple[int, int]


def to_range(value: RangeLike) -> IntegerRange:
    """Coerce an ``IntegerRange`` or ``(start, end)`` pair."""
    if isinstance(value, IntegerRange):
        return value
    try:
        start, end = value
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Expected IntegerRange or (start, end) pair, got {value!r}"
        ) from exc
    if any(not isinstance(b, int) or isinstance(b, bool) for b in (start, end)):
        raise ValueError(f"Range bounds must be integers, got {value!r}")
    return IntegerRange(start, end)


# ---------------------------------------------------------------------------
# PartitionConfig
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PartitionConfig:
    """Validated, immutable partition plus its derived step table."""

    lower: IntegerRange
    middle: IntegerRange
    upper: IntegerRange
    offsets: tuple[int, int, int]
    divisors: tuple[int, int, int]
    first: int
    last: int
    total: int

    def __iter__(self) -> Iterator[IntegerRange]:
        return iter((self.lower, self.middle, self.upper))

    def locate(self, z: int) -> tuple[int, IntegerRange] | None:
        """Return ``(index, range)`` of the first range containing *z*."""
        for index, r in enumerate(self):
            if z in r:
                return index, r
        return None


def _derive(lower: IntegerRange, middle: IntegerRange, upper: IntegerRange) -> PartitionConfig:
    ranges = (lower, middle, upper)
    total = sum(len(r) for r in ranges)
    if total > NUM_OF_SUPPORTED_Z:
        raise PartitionCapacityError(
            "OUT OF RANGE: The maximum number of supported z-indexes is "
            f"{NUM_OF_SUPPORTED_Z}; your current counter is {total}."
        )

    div, rem = divmod(total, NUM_OF_OCTAVES)
    # remainder goes to the lowest octave: its `first` is exact 0.0, not a step
    divisors = (div, div, div + rem)
    offsets = (0, len(lower), len(lower) + len(middle))

    return PartitionConfig(
        lower=lower,
        middle=middle,
        upper=upper,
        offsets=offsets,
        divisors=divisors,
        first=min(r.start for r in ranges),
        last=max(r.end for r in ranges),
        total=total,
    )


@lru_cache(maxsize=1)
def default_partition() -> PartitionConfig:
    """Return the built-in partition covering the full CSS z-index domain."""
    return _derive(
        IntegerRange(*RANGE_LOWER),
        IntegerRange(*RANGE_MIDDLE),
        IntegerRange(*RANGE_UPPER),
    )


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RangesBuilder:
    """Immutable builder for ``PartitionConfig``.

    Unset slots keep their default span, so ``RangesBuilder().build()``
    returns the default partition.
    """

    lower: IntegerRange = field(default_factory=lambda: IntegerRange(*RANGE_LOWER))
    middle: IntegerRange = field(default_factory=lambda: IntegerRange(*RANGE_MIDDLE))
    upper: IntegerRange = field(default_factory=lambda: IntegerRange(*RANGE_UPPER))

    def with_lower(self, r: RangeLike) -> RangesBuilder:
        return replace(self, lower=to_range(r))

    def with_middle(self, r: RangeLike) -> RangesBuilder:
        return replace(self, middle=to_range(r))

    def with_upper(self, r: RangeLike) -> RangesBuilder:
        return replace(self, upper=to_range(r))

    def build(self) -> PartitionConfig:
        """Sort the six boundaries, reassign them pairwise and derive steps.

        Raises ValueError if a reassigned pair is not strictly increasing,
        and PartitionCapacityError if the ranges hold more than
        ``NUM_OF_SUPPORTED_Z`` values in total.
        """
        supplied = (self.lower, self.middle, self.upper)
        bounds = sorted(b for r in supplied for b in r.as_tuple())
        lower, middle, upper = (
            IntegerRange(bounds[i], bounds[i + 1]) for i in range(0, 6, 2)
        )
        if (lower, middle, upper) != supplied:
            logger.debug(
                "Reassigned ranges by boundary order: %s -> %s",
                [r.as_tuple() for r in supplied],
                [lower.as_tuple(), middle.as_tuple(), upper.as_tuple()],
            )
        config = _derive(lower, middle, upper)
        logger.debug(
            "Built partition: total=%d divisors=%s offsets=%s",
            config.total, config.divisors, config.offsets,
        )
        return config


# ---------------------------------------------------------------------------
# Dict (JSON) conversion
# ---------------------------------------------------------------------------

def partition_from_dict(data: Mapping[str, Any]) -> PartitionConfig:
    """Build a partition from ``{"lower": [s, e], "middle": ..., "upper": ...}``.

    Every key is optional; missing slots keep their default span.
    """
    unknown = sorted(set(data) - set(_SLOTS))
    if unknown:
        raise ValueError(f"Unknown partition keys: {', '.join(unknown)}")

    builder = RangesBuilder()
    for slot in _SLOTS:
        value = data.get(slot)
        if value is None:
            continue
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"{slot} must be a [start, end] pair, got {value!r}")
        builder = replace(builder, **{slot: to_range(tuple(value))})
    return builder.build()


def partition_to_dict(config: PartitionConfig) -> dict[str, Any]:
    """Summarize a partition as JSON-ready primitives."""
    return {
        "lower": list(config.lower.as_tuple()),
        "middle": list(config.middle.as_tuple()),
        "upper": list(config.upper.as_tuple()),
        "first": config.first,
        "last": config.last,
        "total": config.total,
        "offsets": list(config.offsets),
        "divisors": list(config.divisors),
    }
