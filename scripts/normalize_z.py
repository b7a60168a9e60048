#!/usr/bin/env python3
"""Normalize CSS z-index values to float32 depths in [0.0, 1.0].

Uses the built-in partition unless custom ranges are given, either on the
command line or in a JSON config file of the form
``{"lower": [s, e], "middle": [s, e], "upper": [s, e]}`` (every key optional).
Command-line ranges override the file.

Usage:
    python3 scripts/normalize_z.py -- -2147483647 0 2147483647
    python3 scripts/normalize_z.py --lower 0 100 --middle 101 200 --upper 201 300 150
    python3 scripts/normalize_z.py --config ranges.json 42

Structured JSON output goes to stdout; human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from normalize_css_z.floatbits import f32_to_bits
from normalize_css_z.io_utils import dump_json, load_partition_file
from normalize_css_z.normalizer import Normalizer
from normalize_css_z.ranges import (
    PartitionCapacityError,
    PartitionConfig,
    partition_from_dict,
    partition_to_dict,
)

log = logging.getLogger("normalize_z")


def resolve_partition(
    *,
    config_path: Path | None = None,
    overrides: dict[str, list[int]] | None = None,
) -> PartitionConfig:
    """Merge the config file (if any) with command-line range overrides."""
    data: dict[str, Any] = {}
    if config_path is not None:
        data.update(load_partition_file(config_path))
        log.debug("Loaded partition config from %s", config_path)
    for slot, pair in (overrides or {}).items():
        if pair is not None:
            data[slot] = pair
    return partition_from_dict(data)


def describe(normalizer: Normalizer, zs: list[int]) -> dict[str, Any]:
    """Normalize *zs* and package the results with the partition summary."""
    results: list[dict[str, Any]] = []
    for z in zs:
        value = normalizer.calc(z)
        results.append({
            "z": z,
            "value": value,
            "bits": f"0x{f32_to_bits(value):08x}" if value is not None else None,
        })
    return {
        "partition": partition_to_dict(normalizer.config),
        "results": results,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Normalize CSS z-index values to float32 in [0.0, 1.0]."
    )
    parser.add_argument(
        "z", type=int, nargs="*",
        help="z-index values to normalize",
    )
    for slot in ("lower", "middle", "upper"):
        parser.add_argument(
            f"--{slot}", type=int, nargs=2, metavar=("START", "END"),
            help=f"Custom {slot} range (inclusive)",
        )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="JSON partition config file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    if args.config is not None and not args.config.exists():
        log.error("Partition config not found: %s", args.config)
        return 1

    try:
        config = resolve_partition(
            config_path=args.config,
            overrides={
                "lower": args.lower,
                "middle": args.middle,
                "upper": args.upper,
            },
        )
    except (ValueError, PartitionCapacityError) as exc:
        log.error("Invalid partition: %s", exc)
        return 1

    normalizer = Normalizer(config)
    output = describe(normalizer, args.z)
    unsupported = sum(1 for r in output["results"] if r["value"] is None)
    if unsupported:
        log.info("%d of %d z-index values are outside the partition", unsupported, len(args.z))

    dump_json(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
