"""
Command line tool for inspecting runs.

Examples:
    neon-heights seed --seed hello
    neon-heights terrain --seed hello --start 2048 --count 16
    neon-heights upgrades --seed hello --draws 30
    neon-heights upgrades --seed hello --seconds 120
    neon-heights survey --seed hello --chunks 64 --output survey.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
from tqdm import tqdm

from .config import RunConfig, load_config
from .errors import NeonHeightsError
from .procgen.terrain import CHUNK_SIZE
from .session import GenerationContext


def build_context(args: argparse.Namespace) -> GenerationContext:
    config = load_config(args.config) if args.config else RunConfig()
    if args.seed is None:
        return GenerationContext.from_entropy(config=config)
    return GenerationContext.from_text(args.seed, config=config)


def cmd_seed(context: GenerationContext, args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "seed": context.seed_text(),
        "hex": context.seed_bytes().hex(),
    }


def cmd_terrain(context: GenerationContext, args: argparse.Namespace) -> Dict[str, Any]:
    xs = range(args.start, args.start + args.count)
    return {
        "seed": context.seed_text(),
        "cells": [
            {"x": x, "height": context.height(x), "hole": context.is_hole(x)}
            for x in xs
        ],
    }


def cmd_upgrades(context: GenerationContext, args: argparse.Namespace) -> Dict[str, Any]:
    rewards: List[Optional[str]] = []
    if args.seconds is not None:
        cadence = context.reward_cadence()
        rewards = [entry.payload.label for entry in cadence.tick(args.seconds)]
    else:
        for _ in range(args.draws):
            entry = context.draw()
            rewards.append(None if entry is None else entry.payload.label)

    return {
        "seed": context.seed_text(),
        "rewards": rewards,
        "held": {category.value: tier.label for category, tier in context.pool.held_tiers().items()},
        "exhausted": context.pool.exhausted,
    }


def cmd_survey(context: GenerationContext, args: argparse.Namespace) -> Dict[str, Any]:
    streamer = context.level_streamer()

    lows, highs, means = [], [], []
    raw_holes = 0
    solid = 0
    for _ in tqdm(range(args.chunks), desc="Surveying"):
        start = streamer.right
        heights = context.oracle.heights(start)
        lows.append(float(heights.min()))
        highs.append(float(heights.max()))
        means.append(float(heights.mean()))
        raw_holes += int(context.oracle.holes(start).sum())
        # player reaches the lookahead margin of the generated floor
        solid += len(streamer.update(streamer.right - streamer.lookahead))

    total = args.chunks * CHUNK_SIZE
    return {
        "seed": context.seed_text(),
        "cells": total,
        "height_min": min(lows) if lows else None,
        "height_max": max(highs) if highs else None,
        "height_mean": float(np.mean(means)) if means else None,
        "hole_ratio": raw_holes / total if total else 0.0,
        "floor_ratio": solid / total if total else 0.0,
    }


COMMANDS = {
    "seed": cmd_seed,
    "terrain": cmd_terrain,
    "upgrades": cmd_upgrades,
    "survey": cmd_survey,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Neon Heights run inspector")
    parser.add_argument("--config", type=str, default=None, help="JSON run configuration")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", type=str, default=None, help="Seed text (random when omitted)")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seed", parents=[common], help="Show the run seed")

    terrain = sub.add_parser("terrain", parents=[common], help="Print terrain cells")
    terrain.add_argument("--start", type=int, default=0, help="First cell")
    terrain.add_argument("--count", type=int, default=32, help="Number of cells")

    upgrades = sub.add_parser("upgrades", parents=[common], help="Simulate reward draws")
    upgrades.add_argument("--draws", type=int, default=20, help="Number of draws")
    upgrades.add_argument("--seconds", type=float, default=None,
                          help="Simulate this much play time on the reward timer instead")

    survey = sub.add_parser("survey", parents=[common], help="Summarise generated chunks")
    survey.add_argument("--chunks", type=int, default=16, help="Number of chunks to scan")
    survey.add_argument("--output", type=str, default=None, help="Write the report to this file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    for name in ("start", "count", "draws", "chunks", "seconds"):
        if (getattr(args, name, 0) or 0) < 0:
            parser.error(f"--{name} must be non-negative")

    try:
        context = build_context(args)
        report = COMMANDS[args.command](context, args)
    except NeonHeightsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    text = json.dumps(report, indent=2)
    output = getattr(args, "output", None)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print(f"Report saved to: {output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
