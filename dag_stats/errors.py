"""Errors raised while loading or querying a graph."""

from __future__ import annotations


class GraphError(ValueError):
    """Structural failure in the graph. Fatal, never retried."""

    def __init__(self, message: str, vertex_id: int | None = None):
        super().__init__(message)
        self.vertex_id = vertex_id


class DuplicateVertex(GraphError):
    """The same vertex id was declared as a source more than once."""

    def __init__(self, vertex_id: int):
        super().__init__(f"vertex with ID {vertex_id} is declared more than once", vertex_id)


class MissingRoot(GraphError):
    """The root vertex is absent from the vertex set."""

    def __init__(self, root_id: int):
        super().__init__(f"the graph has no root vertex with ID {root_id}", root_id)


class UnknownVertex(GraphError):
    """A query named a vertex id that is not in the graph."""

    def __init__(self, vertex_id: int):
        super().__init__(f"vertex with ID {vertex_id} doesn't exist", vertex_id)


class InvalidVertexId(GraphError):
    """A vertex id is not a positive integer."""

    def __init__(self, vertex_id: int):
        super().__init__(
            f"the graph cannot have the vertex with ID {vertex_id}. The minimum is 1",
            vertex_id,
        )


class DatabaseError(ValueError):
    """The ledger file could not be turned into edge records."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
