"""Text rendering of a finished graph.

The layout is fixed: one object per line, tab indented, with the field order
``id, edge_ids, depth`` for vertices and ``id, vertex_ids, color`` for edges.
"""

from typing import Any, Dict, List, Union

from .graph_model import Edge, Graph, GraphState, Vertex
from .graph_orchestrator import GraphOrchestrator

GraphLike = Union[Graph, GraphState, GraphOrchestrator]


def to_payload(graph: GraphLike) -> Dict[str, List[Dict[str, Any]]]:
    state = _state_of(graph)
    return {
        "vertices": [
            {"id": vertex.id, "edge_ids": list(vertex.edge_ids), "depth": vertex.depth}
            for vertex in state.vertices
        ],
        "edges": [
            {"id": edge.id, "vertex_ids": edge.vertex_ids, "color": edge.category.value}
            for edge in state.edges
        ],
    }


def serialize(graph: GraphLike) -> str:
    state = _state_of(graph)
    parts = ["{\n", '"vertices": [\n']
    parts.append(_block([_vertex_line(vertex) for vertex in state.vertices]))
    parts.append("  ],\n")
    parts.append('"edges": [\n')
    parts.append(_block([_edge_line(edge) for edge in state.edges]))
    parts.append("  ]\n}\n")
    return "".join(parts)


def _block(lines: List[str]) -> str:
    if not lines:
        return ""
    return ",\n".join(lines) + "\n"


def _vertex_line(vertex: Vertex) -> str:
    edge_ids = ", ".join(str(edge_id) for edge_id in vertex.edge_ids)
    return f'\t{{ "id": {vertex.id}, "edge_ids": [{edge_ids}], "depth": {vertex.depth}}}'


def _edge_line(edge: Edge) -> str:
    return (
        f'\t{{ "id": {edge.id}, "vertex_ids": [{edge.source}, {edge.destination}], '
        f'"color": "{edge.category.value}" }}'
    )


def _state_of(graph: GraphLike) -> Union[Graph, GraphState]:
    if isinstance(graph, GraphOrchestrator):
        return graph.state
    return graph
