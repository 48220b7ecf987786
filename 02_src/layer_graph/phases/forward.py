"""Forward phases: edges reaching one or two levels deeper."""

import logging
from typing import Any, Dict, Optional, Sequence

from numpy.random import Generator

from ..graph_model import EdgeCategory
from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase
from ..sampling import draw_percent, pick

logger = logging.getLogger(__name__)

FORWARD_SKIP_2_THRESHOLD = 67.0


def forward_skip_1_threshold(depth: int, max_depth: int) -> float:
    """Falls linearly from 100 towards 0 as ``depth`` approaches ``max_depth - 1``."""
    return 100.0 - depth * (100.0 / (max_depth - 1))


class ForwardSkip1Phase(PipelinePhase):
    """One edge attempt per vertex towards the next level.

    Destinations are drawn uniformly from the next level, rejecting the
    source's own tree children. A source whose children fill the whole next
    level is abandoned.
    """

    phase_name = "forward_skip_1"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        rng: Generator = context["rng"]
        max_depth = orchestrator.state.max_depth
        added = 0
        abandoned = 0
        skipped = 0

        for depth in range(1, max_depth):
            threshold = forward_skip_1_threshold(depth, max_depth)
            targets = orchestrator.vertices_at_depth(depth + 1)
            for source in orchestrator.vertices_at_depth(depth):
                if draw_percent(rng) < threshold:
                    continue
                destination = self._pick_destination(orchestrator, rng, source, targets)
                if destination is None:
                    logger.debug("Vertex %d only reaches its own children", source)
                    abandoned += 1
                    continue
                if orchestrator.are_connected(source, destination):
                    skipped += 1
                    continue
                orchestrator.insert_edge(source, destination, EdgeCategory.FORWARD_SKIP_1)
                added += 1

        return {
            "forward_skip_1_output": {
                "added": added,
                "abandoned": abandoned,
                "skipped": skipped,
            }
        }

    @staticmethod
    def _pick_destination(
        orchestrator: GraphOrchestrator,
        rng: Generator,
        source: int,
        targets: Sequence[int],
    ) -> Optional[int]:
        if orchestrator.count_created_by(source) == len(targets):
            return None
        while True:
            candidate = pick(rng, targets)
            if orchestrator.creator_of(candidate) != source:
                return candidate


class ForwardSkip2Phase(PipelinePhase):
    """One edge attempt per vertex towards the level two below.

    Unlike :class:`ForwardSkip1Phase` there is no creator filter, so a vertex
    may be joined to one of its grandchildren.
    """

    phase_name = "forward_skip_2"

    def __init__(self, threshold: float = FORWARD_SKIP_2_THRESHOLD) -> None:
        self._threshold = threshold

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        rng: Generator = context["rng"]
        max_depth = orchestrator.state.max_depth
        added = 0
        skipped = 0

        for depth in range(max_depth - 1):
            targets = orchestrator.vertices_at_depth(depth + 2)
            for source in orchestrator.vertices_at_depth(depth):
                if draw_percent(rng) < self._threshold:
                    continue
                destination = pick(rng, targets)
                if orchestrator.are_connected(source, destination):
                    skipped += 1
                    continue
                orchestrator.insert_edge(source, destination, EdgeCategory.FORWARD_SKIP_2)
                added += 1

        return {"forward_skip_2_output": {"added": added, "skipped": skipped}}
