#!/usr/bin/env python3
"""Census of float32 bit-decrement stepping below power-of-two anchors.

For each octave ``p`` the anchor ``2^-p`` is walked downward one raw bit
pattern at a time. Every step must produce a strictly smaller value that stays
inside ``(0.0, 1.0]``. The distinct-value count (``octaves * MANTISSA``) is
the theoretical ceiling on how many z-indexes could ever be ordered in
``(0.0, 1.0]``.

Usage:
    python3 scripts/subnormal_census.py
    python3 scripts/subnormal_census.py --octaves 3 --full

Walking every step of all 127 octaves is over a billion float32 values; the
default walks the first --steps of each octave.

Structured JSON output goes to stdout; human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from normalize_css_z.constants import MANTISSA
from normalize_css_z.floatbits import f32_to_bits, nth_below, octave_anchor
from normalize_css_z.io_utils import dump_json

log = logging.getLogger("subnormal_census")

MAX_OCTAVES = 127


def walk_octave(octave: int, steps: int) -> list[dict[str, Any]]:
    """Step *steps* times below ``2^-octave``; return any ordering violations."""
    anchor = octave_anchor(octave)
    violations: list[dict[str, Any]] = []
    curr = anchor
    for i in range(1, steps + 1):
        new = nth_below(anchor, i)
        if not (new < curr and 0.0 < curr <= 1.0):
            violations.append({
                "octave": octave,
                "step": i,
                "prev": curr,
                "value": new,
                "bits": f"0x{f32_to_bits(new):08x}",
            })
        curr = new
    return violations


def run_census(octaves: int, steps: int) -> dict[str, Any]:
    """Walk every octave in ``[0, octaves)`` and summarize."""
    if not 1 <= octaves <= MAX_OCTAVES:
        raise ValueError(f"octaves must be in [1, {MAX_OCTAVES}], got {octaves}")
    if not 1 <= steps <= MANTISSA:
        raise ValueError(f"steps must be in [1, {MANTISSA}], got {steps}")

    violations: list[dict[str, Any]] = []
    for p in range(octaves):
        found = walk_octave(p, steps)
        if found:
            log.warning("Octave %d: %d ordering violations", p, len(found))
        violations.extend(found)

    return {
        "octaves": octaves,
        "steps_per_octave": steps,
        "steps_checked": octaves * steps,
        "distinct_values": octaves * MANTISSA,
        "violations": violations,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Verify float32 bit-decrement stepping below 2^-p anchors."
    )
    parser.add_argument(
        "--octaves", type=int, default=MAX_OCTAVES,
        help=f"Number of octaves to walk, starting at 1.0 (default: {MAX_OCTAVES})",
    )
    parser.add_argument(
        "--steps", type=int, default=4096,
        help="Steps to walk below each anchor (default: 4096)",
    )
    parser.add_argument(
        "--full", action="store_true",
        help=f"Walk all {MANTISSA} steps of each octave",
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

    steps = MANTISSA if args.full else args.steps
    try:
        report = run_census(args.octaves, steps)
    except ValueError as exc:
        log.error("%s", exc)
        return 1

    log.info(
        "Checked %d steps across %d octaves: %d distinct values, %d violations",
        report["steps_checked"],
        report["octaves"],
        report["distinct_values"],
        len(report["violations"]),
    )
    dump_json(report)
    return 1 if report["violations"] else 0


if __name__ == "__main__":
    sys.exit(main())
