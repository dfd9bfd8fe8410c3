# Copyright 2024, Gurobi Optimization, LLC

# Command line front end: read the coordinate file, sample the vertices,
# solve both tours and print the report.

import argparse
import logging
import os
import random
import sys
import threading
import time
from dataclasses import dataclass
from functools import partial
from typing import Optional

from .engine import GurobiEngine
from .errors import BitourError, EngineError, InvalidSolution
from .pipeline import solve_pair
from .report import format_report, format_subtour
from .vertex import VertexSet, read_records, sample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    filename: str
    seed: int
    nodes: int = 100
    similarity: int = 0
    timeout: Optional[float] = 30.0
    show_tours: bool = False
    threads: Optional[int] = None
    verbose: bool = False

    @classmethod
    def from_args(cls, args):
        seed = args.seed if args.seed is not None else random.SystemRandom().getrandbits(32)
        timeout = args.timeout if args.timeout > 0 else None
        return cls(
            filename=args.filename,
            seed=seed,
            nodes=args.nodes,
            similarity=args.similarity,
            timeout=timeout,
            show_tours=args.tour,
            threads=args.threads,
            verbose=args.verbose,
        )


def setup_logging(level=logging.WARNING):
    """Configure the package logger once, writing to stderr so that the
    report on stdout stays clean."""
    root = logging.getLogger("bitour")
    root.setLevel(level)
    if root.hasHandlers():
        root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
        )
    )
    root.addHandler(handler)


def _hex(value):
    return int(value, 16)


def _non_negative(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is negative")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog="bitour",
        description="Optimal tours under two metrics with a minimum number of shared edges.",
    )
    parser.add_argument("filename", help="file with coordinates: <x1> <y1> <x2> <y2>")
    parser.add_argument(
        "-s", "--seed", type=_hex, default=None,
        help="hexadecimal seed for the sampling method (if empty, a random seed is generated)",
    )
    parser.add_argument(
        "-n", "--nodes", type=_non_negative, default=100, help="sample size for the subgraph"
    )
    parser.add_argument(
        "-k", "--similarity", type=_non_negative, default=0,
        help="minimum number of shared edges between tours",
    )
    parser.add_argument(
        "--timeout", type=float, default=30.0,
        help="execution timeout (in minutes), disabled if zero or negative",
    )
    parser.add_argument(
        "-t", "--tour", action="store_true", help="show vertices present on each solution"
    )
    parser.add_argument("--threads", type=_non_negative, default=None, help="solver threads")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="debug logging and solver output"
    )
    return parser


def start_timeout(minutes):
    """Abort the whole process once `minutes` have passed. Nothing is
    salvaged from a run that is cut short."""
    start = time.monotonic()

    def on_timeout():
        elapsed = (time.monotonic() - start) / 60
        logger.error("Timeout after %.2f minutes", elapsed)
        print("Timeout: stopping execution for taking too long.", file=sys.stderr)
        print(f"Instance has been running for {elapsed:.2f} minutes.", file=sys.stderr)
        sys.stderr.flush()
        os._exit(1)

    timer = threading.Timer(minutes * 60, on_timeout)
    timer.daemon = True
    timer.start()
    return timer


def run(config):
    records = read_records(config.filename)
    vertices = VertexSet.from_records(sample(records, config.nodes, config.seed))
    logger.info("Sampled %d of %d vertices with seed 0x%x", len(vertices), len(records), config.seed)

    engine_factory = partial(
        GurobiEngine, seed=config.seed, threads=config.threads, output=config.verbose
    )
    result = solve_pair(vertices, config.similarity, engine_factory)
    return format_report(result, seed=config.seed, show_tours=config.show_tours)


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = RunConfig.from_args(args)
    setup_logging(logging.DEBUG if config.verbose else logging.WARNING)

    timer = start_timeout(config.timeout) if config.timeout else None
    try:
        print(run(config))

    except InvalidSolution as err:
        print(f"{type(err).__name__}: {err}", file=sys.stderr)
        print(f"seed used: 0x{config.seed:x}", file=sys.stderr)
        if err.subtour:
            print(f"subtour({len(err.subtour)}): {format_subtour(err.subtour)}", file=sys.stderr)
        print("vertices:", file=sys.stderr)
        print("\n".join(str(v) for v in err.vertices), file=sys.stderr)
        return 1

    except EngineError as err:
        print(f"EngineError: {err}", file=sys.stderr)
        return 1

    except BitourError as err:
        print(f"{type(err).__name__}: {err}", file=sys.stderr)
        return 1

    finally:
        if timer is not None:
            timer.cancel()
    return 0


if __name__ == "__main__":
    sys.exit(main())
