"""Batch settings with ``.env`` backed defaults."""

import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv

DEFAULT_OUTPUT_DIR = "./temp"

ENV_VARS = {
    "max_depth": "LAYER_GRAPH_MAX_DEPTH",
    "branch_factor": "LAYER_GRAPH_BRANCH_FACTOR",
    "graph_count": "LAYER_GRAPH_COUNT",
    "output_dir": "LAYER_GRAPH_OUTPUT_DIR",
    "seed": "LAYER_GRAPH_SEED",
    "workers": "LAYER_GRAPH_WORKERS",
}

PROMPTS = {
    "max_depth": "Enter max_depth: ",
    "branch_factor": "Enter new_vertices_num: ",
    "graph_count": "Enter the number of graphs to be created: ",
}


@dataclass
class BatchSettings:
    max_depth: int
    branch_factor: int
    graph_count: int
    output_dir: str = DEFAULT_OUTPUT_DIR
    seed: Optional[int] = None
    workers: int = 1

    def validate(self) -> "BatchSettings":
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.branch_factor < 0:
            raise ValueError(f"branch_factor must not be negative, got {self.branch_factor}")
        if self.graph_count < 0:
            raise ValueError(f"graph_count must not be negative, got {self.graph_count}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must not be negative, got {self.seed}")
        return self


def read_env_defaults() -> Dict[str, Any]:
    load_dotenv()
    values: Dict[str, Any] = {}
    for key, env_name in ENV_VARS.items():
        raw = os.getenv(env_name)
        if key == "output_dir":
            values[key] = raw or DEFAULT_OUTPUT_DIR
        else:
            values[key] = _parse_int(raw, env_name) if raw else None
    if values["workers"] is None:
        values["workers"] = 1
    return values


def load_settings(
    overrides: Optional[Dict[str, Any]] = None,
    prompt: Optional[Callable[[str], str]] = None,
) -> BatchSettings:
    """Merge environment defaults, explicit overrides and interactive answers.

    Required values still missing after the first two sources are asked for
    through ``prompt``; without one a ``ValueError`` is raised instead.
    """
    values = read_env_defaults()
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    for key, question in PROMPTS.items():
        if values.get(key) is not None:
            continue
        if prompt is None:
            raise ValueError(f"{key} is not set; pass it explicitly or set {ENV_VARS[key]}")
        values[key] = _parse_int(prompt(question).strip(), key)

    return BatchSettings(**values).validate()


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
