"""Graph synthesis entry point."""

from typing import Any, Dict, List, Optional, Tuple

from numpy.random import Generator

from .graph_model import Graph
from .graph_orchestrator import GraphOrchestrator
from .phases import (
    ForwardSkip1Phase,
    ForwardSkip2Phase,
    LateralPhase,
    LayerTreePhase,
    LoopPhase,
    ValidationPhase,
)
from .pipeline import PipelinePhase, PipelineRunner
from .sampling import SeedLike, make_rng


def build_default_phases() -> List[PipelinePhase]:
    return [
        LayerTreePhase(),
        LoopPhase(),
        LateralPhase(),
        ForwardSkip1Phase(),
        ForwardSkip2Phase(),
        ValidationPhase(),
    ]


def run_generation(
    max_depth: int,
    branch_factor: int,
    seed: SeedLike = None,
    rng: Optional[Generator] = None,
) -> Tuple[Graph, Dict[str, Any]]:
    """Generate one graph and return it sealed together with its QA report."""
    _check_parameters(max_depth, branch_factor)
    if seed is not None and rng is not None:
        raise ValueError("Pass either seed or rng, not both")
    orchestrator = GraphOrchestrator(max_depth=max_depth, branch_factor=branch_factor)
    initial_context: Dict[str, Any] = {
        "orchestrator": orchestrator,
        "rng": rng if rng is not None else make_rng(seed),
    }
    runner = PipelineRunner(phases=build_default_phases())
    final_context = runner.run(initial_context)
    return orchestrator.seal(), final_context["validation_report"]


def generate(
    max_depth: int,
    branch_factor: int,
    seed: SeedLike = None,
    rng: Optional[Generator] = None,
) -> Graph:
    """Synthesize a layered graph.

    The same ``seed`` always yields the same graph. Passing ``rng`` instead
    threads an existing generator through every phase; giving both is an
    error. The result is immutable and answers the depth and connectivity
    queries of :class:`GraphQueries`.
    """
    graph, _ = run_generation(max_depth, branch_factor, seed=seed, rng=rng)
    return graph


def _check_parameters(max_depth: int, branch_factor: int) -> None:
    for name, value in (("max_depth", max_depth), ("branch_factor", branch_factor)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"{name} must be an integer, got {value!r}")
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")
    if branch_factor < 0:
        raise ValueError(f"branch_factor must not be negative, got {branch_factor}")
