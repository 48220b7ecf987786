"""Exceptions raised while synthesizing a graph."""


class GraphSynthesisError(RuntimeError):
    """Base class for generation failures."""


class PreconditionViolation(GraphSynthesisError, ValueError):
    """A pass asked the graph for something it cannot do.

    Always a bug in pass logic: the generation that raised it is abandoned.
    """


class AlreadyConnectedError(PreconditionViolation):
    def __init__(self, source: int, destination: int, edge_id: int) -> None:
        super().__init__(
            f"Vertices {source} and {destination} are already connected by edge {edge_id}"
        )
        self.source = source
        self.destination = destination
        self.edge_id = edge_id
