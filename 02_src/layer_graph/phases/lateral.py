"""Lateral phase: edges between neighbours created one after another on a level."""

import logging
from typing import Any, Dict

from numpy.random import Generator

from ..graph_model import EdgeCategory
from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase
from ..sampling import draw_percent

logger = logging.getLogger(__name__)

LATERAL_THRESHOLD = 75.0


class LateralPhase(PipelinePhase):
    phase_name = "lateral"

    def __init__(self, threshold: float = LATERAL_THRESHOLD) -> None:
        self._threshold = threshold

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        rng: Generator = context["rng"]
        added = 0
        skipped = 0

        # Consecutive ids over the whole graph; only same-depth pairs qualify.
        for first in range(len(orchestrator.state.vertices) - 1):
            second = first + 1
            if orchestrator.depth_of(first) != orchestrator.depth_of(second):
                continue
            if draw_percent(rng) < self._threshold:
                continue
            if orchestrator.are_connected(first, second):
                logger.debug("Skipping lateral %d-%d: already connected", first, second)
                skipped += 1
                continue
            orchestrator.insert_edge(first, second, EdgeCategory.LATERAL)
            added += 1

        return {"lateral_output": {"added": added, "skipped": skipped}}
