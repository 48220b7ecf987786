"""Loop phase: self-referencing edges."""

import logging
from typing import Any, Dict

from numpy.random import Generator

from ..graph_model import EdgeCategory
from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase
from ..sampling import draw_percent

logger = logging.getLogger(__name__)

LOOP_THRESHOLD = 90.0


class LoopPhase(PipelinePhase):
    phase_name = "loop"

    def __init__(self, threshold: float = LOOP_THRESHOLD) -> None:
        self._threshold = threshold

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        rng: Generator = context["rng"]
        added = 0

        for vertex_id in range(len(orchestrator.state.vertices)):
            if draw_percent(rng) < self._threshold:
                continue
            if orchestrator.has_loop(vertex_id):
                logger.debug("Vertex %d already has a loop", vertex_id)
                continue
            orchestrator.insert_edge(vertex_id, vertex_id, EdgeCategory.LOOP)
            added += 1

        return {"loop_output": {"added": added}}
