"""CLI entrypoint for batch graph generation."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .batch import run_batch
from .config import load_settings


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate random layered graphs as JSON files.")
    parser.add_argument("--max-depth", type=int, default=None, help="Requested depth of every graph.")
    parser.add_argument(
        "--branch-factor",
        type=int,
        default=None,
        help="Child trials per vertex and level (new_vertices_num).",
    )
    parser.add_argument("--count", type=int, default=None, help="Number of graphs to create.")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory receiving graph1.json ... graphN.json (default ./temp).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible batches.")
    parser.add_argument("--workers", type=int, default=None, help="Graphs generated in parallel.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--no-prompt",
        action="store_true",
        help="Fail instead of asking for missing parameters.",
    )
    return parser.parse_args(argv)


def main(argv: List[str] | None = None, prompt: Optional[Callable[[str], str]] = input) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    overrides: Dict[str, Any] = {
        "max_depth": args.max_depth,
        "branch_factor": args.branch_factor,
        "graph_count": args.count,
        "output_dir": args.output_dir,
        "seed": args.seed,
        "workers": args.workers,
    }
    try:
        settings = load_settings(overrides, prompt=None if args.no_prompt else prompt)
    except (ValueError, EOFError) as error:
        print(f"Invalid parameters: {error}", file=sys.stderr)
        return 2

    try:
        summary = run_batch(settings)
    except OSError as error:
        print(f"Error writing graphs to {settings.output_dir}: {error}", file=sys.stderr)
        return 1

    print(f"Graphs saved to: {Path(summary['output_dir']).resolve()}")
    for path, report in zip(summary["paths"], summary["reports"]):
        print(
            f"{Path(path).name}:",
            f"vertices={report['vertex_count']}",
            f"edges={report['edge_count']}",
            f"depth={report['realized_depth']}",
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
