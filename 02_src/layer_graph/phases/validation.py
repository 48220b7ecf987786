"""Validation and QA phase."""

from typing import Any, Dict, List

from ..graph_model import EdgeCategory
from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase


class ValidationPhase(PipelinePhase):
    phase_name = "validation"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        state = orchestrator.state
        warnings: List[str] = []
        if state.max_depth < state.requested_depth:
            warnings.append(
                f"max depth {state.requested_depth} not reached, realized {state.max_depth}"
            )

        qa_report = {
            "vertex_count": len(state.vertices),
            "edge_count": len(state.edges),
            "edges_by_category": {
                category.name.lower(): orchestrator.count_edges(category)
                for category in EdgeCategory
            },
            "requested_depth": state.requested_depth,
            "realized_depth": state.max_depth,
            "branch_factor": state.branch_factor,
            "warnings": warnings,
        }
        return {"validation_report": qa_report}
