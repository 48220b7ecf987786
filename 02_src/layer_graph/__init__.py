"""Random layered graph synthesis."""

from .batch import GraphBatch, run_batch
from .config import BatchSettings, load_settings
from .errors import AlreadyConnectedError, GraphSynthesisError, PreconditionViolation
from .generator import build_default_phases, generate, run_generation
from .graph_model import Edge, EdgeCategory, Graph, GraphQueries, GraphState, Vertex
from .graph_orchestrator import GraphOrchestrator
from .pipeline import PipelinePhase, PipelineRunner
from .serializer import serialize, to_payload

__all__ = [
    "Vertex",
    "Edge",
    "EdgeCategory",
    "Graph",
    "GraphQueries",
    "GraphState",
    "GraphOrchestrator",
    "PipelinePhase",
    "PipelineRunner",
    "GraphSynthesisError",
    "PreconditionViolation",
    "AlreadyConnectedError",
    "build_default_phases",
    "generate",
    "run_generation",
    "serialize",
    "to_payload",
    "BatchSettings",
    "load_settings",
    "GraphBatch",
    "run_batch",
]
