"""Order-preserving normalization of CSS z-index values to float32 in [0, 1]."""

from normalize_css_z.constants import (
    MANTISSA,
    MAX_CSS_Z,
    NUM_OF_OCTAVES,
    NUM_OF_SUPPORTED_Z,
    RANGE_LOWER,
    RANGE_MIDDLE,
    RANGE_UPPER,
)
from normalize_css_z.floatbits import (
    bits_to_f32,
    f32_to_bits,
    nth_below,
    octave_anchor,
)
from normalize_css_z.normalizer import Normalizer, normalize
from normalize_css_z.ranges import (
    IntegerRange,
    PartitionCapacityError,
    PartitionConfig,
    RangesBuilder,
    default_partition,
    partition_from_dict,
    partition_to_dict,
    to_range,
)

__all__ = [
    "IntegerRange",
    "MANTISSA",
    "MAX_CSS_Z",
    "NUM_OF_OCTAVES",
    "NUM_OF_SUPPORTED_Z",
    "Normalizer",
    "PartitionCapacityError",
    "PartitionConfig",
    "RANGE_LOWER",
    "RANGE_MIDDLE",
    "RANGE_UPPER",
    "RangesBuilder",
    "bits_to_f32",
    "default_partition",
    "f32_to_bits",
    "normalize",
    "nth_below",
    "octave_anchor",
    "partition_from_dict",
    "partition_to_dict",
    "to_range",
]
