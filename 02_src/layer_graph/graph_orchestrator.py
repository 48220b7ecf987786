"""Orchestrator that owns identifiers and every mutation of a layered graph."""

from dataclasses import replace
from typing import Dict, Optional, Tuple, Union

from .errors import AlreadyConnectedError, PreconditionViolation
from .graph_model import Edge, EdgeCategory, Graph, GraphState, Vertex


class GraphOrchestrator:
    """Owns identifiers and safe updates of graph state.

    Vertex and edge identifiers are list positions, so ``state.vertices[i].id``
    is always ``i``. Edge categories are never chosen by callers: they are
    derived from where the endpoints sit in the depth index.
    """

    def __init__(self, max_depth: int, branch_factor: int) -> None:
        self.state = GraphState(
            max_depth=max_depth,
            branch_factor=branch_factor,
            requested_depth=max_depth,
        )
        self._next_vertex_id = 0
        self._next_edge_id = 0
        self._bucket_position: Dict[int, int] = {}
        self._sealed = False

    def seal(self) -> Graph:
        """Finish generation and return the immutable graph."""
        self._sealed = True
        return self.state.freeze()

    def insert_root(self) -> int:
        return self.insert_vertex(creator=None, depth=0)

    def insert_vertex(self, creator: Optional[int], depth: int) -> int:
        self._ensure_open()
        vertex_id = self._next_vertex_id
        if len(self.state.vertices) != vertex_id:
            raise PreconditionViolation(
                f"Vertex id {vertex_id} collides with {len(self.state.vertices)} stored vertices"
            )

        if vertex_id == 0:
            if creator is not None or depth != 0:
                raise PreconditionViolation("The root must sit at depth 0 without a creator")
        else:
            if creator is None:
                raise PreconditionViolation("Only the root vertex may lack a creator")
            expected = self.state.depth_of(creator) + 1
            if depth != expected:
                raise PreconditionViolation(
                    f"Vertex created by {creator} must sit at depth {expected}, got {depth}"
                )

        if depth == len(self.state.depth_index):
            self.state.depth_index.append([])
        bucket = self.state.depth_index[depth]
        self._bucket_position[vertex_id] = len(bucket)
        bucket.append(vertex_id)
        self.state.vertices.append(Vertex(id=vertex_id, depth=depth, creator=creator))
        self._next_vertex_id += 1
        return vertex_id

    def insert_edge(
        self,
        source: int,
        destination: int,
        category: Union[EdgeCategory, str, None] = None,
    ) -> int:
        """Append an edge and register it on its endpoints.

        ``category`` is optional: when given it must agree with the category
        derived from the endpoints.
        """
        self._ensure_open()
        derived = self.classify_edge(source, destination)
        if category is not None and EdgeCategory(category) is not derived:
            raise PreconditionViolation(
                f"Edge {source}->{destination} is {derived.name}, not {EdgeCategory(category).name}"
            )

        shared = self.state.shared_edge(source, destination)
        if shared is not None:
            raise AlreadyConnectedError(source, destination, shared)

        edge_id = self._next_edge_id
        if len(self.state.edges) != edge_id:
            raise PreconditionViolation(
                f"Edge id {edge_id} collides with {len(self.state.edges)} stored edges"
            )
        self.state.edges.append(
            Edge(id=edge_id, source=source, destination=destination, category=derived)
        )
        self._next_edge_id += 1
        self._attach(source, edge_id)
        if derived is not EdgeCategory.LOOP:
            self._attach(destination, edge_id)
        return edge_id

    def classify_edge(self, source: int, destination: int) -> EdgeCategory:
        src = self.state.vertex(source)
        dst = self.state.vertex(destination)

        if source == destination:
            return EdgeCategory.LOOP
        if not dst.edge_ids and dst.creator == source and dst.depth == src.depth + 1:
            return EdgeCategory.TREE
        if src.depth == dst.depth:
            gap = abs(self._bucket_position[source] - self._bucket_position[destination])
            if gap == 1:
                return EdgeCategory.LATERAL
        elif dst.depth == src.depth + 1:
            return EdgeCategory.FORWARD_SKIP_1
        elif dst.depth == src.depth + 2:
            return EdgeCategory.FORWARD_SKIP_2

        raise PreconditionViolation(
            f"No edge category joins vertex {source} (depth {src.depth}) "
            f"to vertex {destination} (depth {dst.depth})"
        )

    def are_connected(self, first: int, second: int) -> bool:
        return self.state.are_connected(first, second)

    def has_loop(self, vertex_id: int) -> bool:
        return self.state.has_loop(vertex_id)

    def vertices_at_depth(self, depth: int) -> Tuple[int, ...]:
        return self.state.vertices_at_depth(depth)

    def count_created_by(self, vertex_id: int) -> int:
        return self.state.count_created_by(vertex_id)

    def count_edges(self, category: Union[EdgeCategory, str]) -> int:
        return self.state.count_edges(category)

    def depth_of(self, vertex_id: int) -> int:
        return self.state.depth_of(vertex_id)

    def creator_of(self, vertex_id: int) -> Optional[int]:
        return self.state.creator_of(vertex_id)

    def clamp_max_depth(self) -> int:
        """Lower ``max_depth`` to the deepest level that was actually reached."""
        self._ensure_open()
        realized = self.state.depth
        if realized < self.state.max_depth:
            self.state.max_depth = realized
        return self.state.max_depth

    def _attach(self, vertex_id: int, edge_id: int) -> None:
        vertex = self.state.vertices[vertex_id]
        if edge_id in vertex.edge_ids:
            raise PreconditionViolation(f"Edge {edge_id} already recorded on vertex {vertex_id}")
        self.state.vertices[vertex_id] = replace(vertex, edge_ids=vertex.edge_ids + (edge_id,))

    def _ensure_open(self) -> None:
        if self._sealed:
            raise PreconditionViolation("Graph is sealed; generation already finished")
