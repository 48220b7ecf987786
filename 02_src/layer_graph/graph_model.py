"""Layered graph data model primitives."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from .errors import PreconditionViolation


class EdgeCategory(str, Enum):
    """Edge kinds, valued by the colour name used in the text format."""

    TREE = "gray"
    LOOP = "green"
    LATERAL = "blue"
    FORWARD_SKIP_1 = "yellow"
    FORWARD_SKIP_2 = "red"


@dataclass(frozen=True)
class Vertex:
    id: int
    depth: int
    creator: Optional[int] = None
    edge_ids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Edge:
    id: int
    source: int
    destination: int
    category: EdgeCategory

    @property
    def vertex_ids(self) -> List[int]:
        return [self.source, self.destination]


class GraphQueries:
    """Read-only lookups shared by the build state and the finished graph."""

    vertices: Sequence[Vertex]
    edges: Sequence[Edge]
    depth_index: Sequence[Sequence[int]]

    @property
    def depth(self) -> int:
        """Deepest level that actually holds vertices."""
        return len(self.depth_index) - 1

    def vertex(self, vertex_id: int) -> Vertex:
        if not isinstance(vertex_id, int) or isinstance(vertex_id, bool):
            raise PreconditionViolation(f"Vertex id must be an int, got {vertex_id!r}")
        if vertex_id < 0:
            raise PreconditionViolation(f"Vertex id {vertex_id} is negative")
        if vertex_id >= len(self.vertices):
            raise PreconditionViolation(f"Unknown vertex: {vertex_id}")
        return self.vertices[vertex_id]

    def depth_of(self, vertex_id: int) -> int:
        return self.vertex(vertex_id).depth

    def creator_of(self, vertex_id: int) -> Optional[int]:
        return self.vertex(vertex_id).creator

    def vertices_at_depth(self, depth: int) -> Tuple[int, ...]:
        if depth < 0 or depth > self.depth:
            raise PreconditionViolation(
                f"Depth {depth} is outside the recorded range 0..{self.depth}"
            )
        return tuple(self.depth_index[depth])

    def are_connected(self, first: int, second: int) -> bool:
        self.vertex(first)
        self.vertex(second)
        return self.shared_edge(first, second) is not None

    def has_loop(self, vertex_id: int) -> bool:
        return self.are_connected(vertex_id, vertex_id)

    def count_created_by(self, vertex_id: int) -> int:
        self.vertex(vertex_id)
        return sum(1 for vertex in self.vertices if vertex.creator == vertex_id)

    def count_edges(self, category: Union[EdgeCategory, str]) -> int:
        wanted = EdgeCategory(category)
        return sum(1 for edge in self.edges if edge.category is wanted)

    def shared_edge(self, first: int, second: int) -> Optional[int]:
        """Id of an edge recorded on both vertices (a loop when they are equal)."""
        first_edges = self.vertices[first].edge_ids
        if first == second:
            for edge_id in first_edges:
                if self.edges[edge_id].category is EdgeCategory.LOOP:
                    return edge_id
            return None

        second_edges = set(self.vertices[second].edge_ids)
        for edge_id in first_edges:
            if edge_id in second_edges:
                return edge_id
        return None


@dataclass
class GraphState(GraphQueries):
    """Graph under construction; only the orchestrator mutates it."""

    max_depth: int
    branch_factor: int
    requested_depth: int = 0
    vertices: List[Vertex] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    depth_index: List[List[int]] = field(default_factory=list)

    def freeze(self) -> "Graph":
        return Graph(
            max_depth=self.max_depth,
            branch_factor=self.branch_factor,
            requested_depth=self.requested_depth,
            vertices=tuple(self.vertices),
            edges=tuple(self.edges),
            depth_index=tuple(tuple(bucket) for bucket in self.depth_index),
        )


@dataclass(frozen=True)
class Graph(GraphQueries):
    """Finished, immutable graph handed out by generation."""

    max_depth: int
    branch_factor: int
    requested_depth: int
    vertices: Tuple[Vertex, ...]
    edges: Tuple[Edge, ...]
    depth_index: Tuple[Tuple[int, ...], ...]
