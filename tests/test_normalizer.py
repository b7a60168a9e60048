"""Tests for normalize_css_z.normalizer — order-preserving z-index normalization."""
from __future__ import annotations

import math

import pytest

from normalize_css_z.constants import MANTISSA, MAX_CSS_Z
from normalize_css_z.floatbits import bits_to_f32, f32_to_bits, nth_below
from normalize_css_z.normalizer import Normalizer, normalize
from normalize_css_z.ranges import PartitionConfig, RangesBuilder, default_partition


def _assert_strictly_increasing(norm: Normalizer, zs: list[int]) -> list[float]:
    values: list[float] = []
    prev = -1.0
    for z in sorted(zs):
        curr = norm.calc(z)
        assert curr is not None, f"{z}: unsupported"
        assert curr > prev, f"{z}: {curr} <= {prev}"
        values.append(curr)
        prev = curr
    return values


def _custom(lower: tuple[int, int], middle: tuple[int, int], upper: tuple[int, int]) -> PartitionConfig:
    return (
        RangesBuilder()
        .with_lower(lower)
        .with_middle(middle)
        .with_upper(upper)
        .build()
    )


# ───────────────────── default partition ─────────────────────────────


class TestDefaultPartition:
    def test_endpoints(self) -> None:
        norm = Normalizer()
        assert norm.calc(-2_147_483_647) == 0.0
        assert norm.calc(2_147_483_647) == 1.0

    def test_zero_is_half(self) -> None:
        assert Normalizer().calc(0) == 0.5

    def test_octave_anchors(self) -> None:
        norm = Normalizer()
        assert norm.calc(-MANTISSA) == 0.25
        assert norm.calc(-1) == 0.5 - math.ldexp(1.0, -25)
        assert norm.calc(1) == 0.5 + math.ldexp(1.0, -24)

    def test_next_to_endpoints(self) -> None:
        norm = Normalizer()
        assert norm.calc(MAX_CSS_Z - 1) == 1.0 - math.ldexp(1.0, -24)
        assert norm.calc(-MAX_CSS_Z + 1) == 0.125 + math.ldexp(1.0, -26)

    @pytest.mark.parametrize(
        "z",
        [
            -MAX_CSS_Z - 1,
            MAX_CSS_Z + 1,
            -147_483_647,
            -MANTISSA - 1,
            MANTISSA // 2 + 1,
            1_000_000_000,
        ],
    )
    def test_unsupported(self, z: int) -> None:
        assert Normalizer().calc(z) is None

    def test_partition_seams(self) -> None:
        config = default_partition()
        zs: set[int] = set()
        for r in config:
            zs.update(range(r.start, r.start + 16))
            zs.update(range(r.end - 15, r.end + 1))
        zs.update(range(-16, 17))
        _assert_strictly_increasing(Normalizer(config), sorted(zs))

    def test_strided_sample(self) -> None:
        config = default_partition()
        zs: set[int] = set()
        for r in config:
            zs.update(range(r.start, r.end + 1, 4099))
            zs.add(r.end)
        values = _assert_strictly_increasing(Normalizer(config), sorted(zs))
        assert values[0] == 0.0
        assert values[-1] == 1.0

    def test_outputs_are_single_precision(self) -> None:
        norm = Normalizer()
        for z in (-MAX_CSS_Z + 12345, -3_000_000, 17, MAX_CSS_Z - 999):
            value = norm.calc(z)
            assert value is not None
            assert bits_to_f32(f32_to_bits(value)) == value

    def test_normalize_uses_default(self) -> None:
        assert normalize(-MAX_CSS_Z) == 0.0
        assert normalize(MAX_CSS_Z) == 1.0
        assert normalize(0) == 0.5
        assert normalize(-147_483_647) is None


# ───────────────────── custom partitions ─────────────────────────────


class TestCustomPartition:
    def test_contiguous_ranges(self) -> None:
        norm = Normalizer(_custom((0, 100), (101, 200), (201, 300)))
        assert norm.calc(0) == 0.0
        assert norm.calc(300) == 1.0
        values = _assert_strictly_increasing(norm, list(range(0, 301)))
        assert len(values) == 301
        assert all(0.0 < v < 1.0 for v in values[1:-1])

    def test_small_uneven_ranges(self) -> None:
        norm = Normalizer(_custom((1, 10), (11, 15), (16, 30)))
        assert norm.calc(1) == 0.0
        assert norm.calc(30) == 1.0
        _assert_strictly_increasing(norm, list(range(1, 31)))
        assert norm.calc(0) is None
        assert norm.calc(31) is None

    def test_shared_boundaries(self) -> None:
        norm = Normalizer(_custom((0, 100), (100, 200), (200, 300)))
        _assert_strictly_increasing(norm, list(range(0, 301)))
        assert norm.calc(150) is not None
        assert norm.calc(-MAX_CSS_Z) is None

    def test_gaps_between_ranges(self) -> None:
        norm = Normalizer(_custom((-50, -10), (0, 10), (40, 90)))
        for z in (-9, -1, 11, 39):
            assert norm.calc(z) is None
        supported = [z for r in norm.config for z in r]
        _assert_strictly_increasing(norm, supported)

    def test_mislabelled_ranges_same_output(self) -> None:
        ordered = Normalizer(_custom((0, 100), (101, 200), (201, 300)))
        shuffled = Normalizer(_custom((101, 200), (201, 300), (0, 100)))
        for z in range(-5, 306):
            assert shuffled.calc(z) == ordered.calc(z)

    def test_middle_only(self) -> None:
        norm = Normalizer(RangesBuilder().with_middle((0, 100)).build())
        config = norm.config
        zs = list(range(0, 101))
        zs += [config.lower.end - 1, config.lower.end, config.upper.start, config.upper.start + 1]
        zs += [config.first, config.last]
        _assert_strictly_increasing(norm, zs)
        assert norm.calc(101) is None

    def test_full_capacity_custom(self) -> None:
        lower = (-3 * MANTISSA, -2 * MANTISSA - 1)
        middle = (-2 * MANTISSA, -MANTISSA - 1)
        upper = (-MANTISSA, 0)
        config = _custom(lower, middle, upper)
        assert config.divisors == (MANTISSA, MANTISSA, MANTISSA + 1)
        zs: set[int] = set()
        for r in config:
            zs.update(range(r.start, r.start + 8))
            zs.update(range(r.end - 7, r.end + 1))
        values = _assert_strictly_increasing(Normalizer(config), sorted(zs))
        assert values[-1] == 1.0
        # octave seams land exactly on the anchors
        assert Normalizer(config).calc(-MANTISSA) == 0.5
        assert Normalizer(config).calc(-2 * MANTISSA) == 0.25

    def test_octaves_stay_inside_their_band(self) -> None:
        norm = Normalizer(_custom((0, 100), (101, 200), (201, 300)))
        bands = [(0.125, 0.25), (0.25, 0.5), (0.5, 1.0)]
        for z in range(1, 300):
            value = norm.calc(z)
            assert value is not None
            assert any(lo < value <= hi for lo, hi in bands)


# ───────────────────── construction ──────────────────────────────────


class TestNormalizer:
    def test_new_defaults(self) -> None:
        assert Normalizer.new(None) == Normalizer()
        assert Normalizer().config is default_partition()

    def test_new_with_config(self) -> None:
        config = _custom((0, 100), (101, 200), (201, 300))
        assert Normalizer.new(config).config is config

    def test_calc_many(self) -> None:
        norm = Normalizer(_custom((0, 100), (101, 200), (201, 300)))
        assert norm.calc_many([0, 300, 301]) == [0.0, 1.0, None]

    def test_frozen(self) -> None:
        norm = Normalizer()
        with pytest.raises(AttributeError):
            norm.config = default_partition()  # type: ignore[misc]

    def test_calc_matches_bit_stepping(self) -> None:
        norm = Normalizer(_custom((0, 100), (101, 200), (201, 300)))
        # total 301, divisors (100, 100, 101); z=299 is one step below 1.0
        assert norm.calc(299) == nth_below(1.0, 1)
        assert norm.calc(201) == nth_below(1.0, 99)
        assert norm.calc(200) == 0.5
        assert norm.calc(100) == 0.25
        assert norm.calc(1) == nth_below(0.25, 99)
