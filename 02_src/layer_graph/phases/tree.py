"""Layer/tree phase: grows vertices level by level from the root."""

import logging
from typing import Any, Dict

from numpy.random import Generator

from ..graph_model import EdgeCategory
from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase
from ..sampling import draw_percent

logger = logging.getLogger(__name__)


class LayerTreePhase(PipelinePhase):
    """Creates every vertex of the graph together with its tree edge.

    Each vertex at depth ``d`` gets ``branch_factor`` child trials. A trial
    succeeds when a draw in [0, 100) reaches the level threshold, which starts
    at 0 and grows by ``100 / max_depth`` per level, so deeper levels branch
    less. When growth stops early ``max_depth`` is lowered to the realized
    depth for the phases that follow.
    """

    phase_name = "tree"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        rng: Generator = context["rng"]
        state = orchestrator.state
        requested = state.max_depth

        orchestrator.insert_root()
        step = 100.0 / requested
        threshold = 0.0
        tree_edges = 0

        for depth in range(requested):
            if depth > state.depth:
                break
            parents = orchestrator.vertices_at_depth(depth)
            for index in range(len(parents)):
                parent = parents[index]
                for _ in range(state.branch_factor):
                    if draw_percent(rng) < threshold:
                        continue
                    child = orchestrator.insert_vertex(creator=parent, depth=depth + 1)
                    orchestrator.insert_edge(parent, child, EdgeCategory.TREE)
                    tree_edges += 1
            threshold += step

        realized = orchestrator.clamp_max_depth()
        if realized < requested:
            logger.warning(
                "Max depth %d couldn't be reached. Depth of final vertex: %d",
                requested,
                realized,
            )

        return {
            "tree_output": {
                "vertex_count": len(state.vertices),
                "tree_edge_count": tree_edges,
                "requested_depth": requested,
                "realized_depth": realized,
            }
        }
