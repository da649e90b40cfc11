"""Graph structure consumed by graph manifolds."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

import networkx as nx


@runtime_checkable
class GraphLike(Protocol):
    """
    Minimal graph interface used by :class:`~manifoldwrap.graphs.GraphManifold`.

    Vertices and edges are addressed by their canonical indices
    ``0 .. vertex_count() - 1`` and ``0 .. edge_count() - 1``.
    """

    @property
    def is_directed(self) -> bool: ...

    @property
    def is_weighted(self) -> bool: ...

    def vertex_count(self) -> int: ...

    def edge_count(self) -> int: ...

    def edges(self) -> Sequence[tuple[int, int]]: ...

    def weight(self, source: int, target: int) -> float: ...


class IndexedGraph:
    """
    Snapshot of a :mod:`networkx` graph with canonical vertex and edge indices.

    Vertices are numbered in ``graph.nodes`` order and edges in
    ``graph.edges`` order, so the i-th component of a graph-manifold point
    belongs to the i-th vertex (or edge) as networkx iterates them. The
    snapshot is taken at construction; later changes to ``graph`` are not
    seen.

    Parameters
    ----------
    graph:
        A ``networkx.Graph`` or ``networkx.DiGraph``. Multigraphs are not
        supported.
    weight:
        Name of the edge attribute holding weights, or ``None`` to treat the
        graph as unweighted.
    """

    def __init__(self, graph: nx.Graph, *, weight: str | None = "weight") -> None:
        if not isinstance(graph, nx.Graph):
            raise TypeError(f"Expected a networkx graph; got {type(graph)!r}")
        if graph.is_multigraph():
            raise TypeError("Multigraphs are not supported")
        self._graph = graph
        self._weight = weight
        self._nodes: list[Hashable] = list(graph.nodes)
        self._index: dict[Hashable, int] = {
            node: position for position, node in enumerate(self._nodes)
        }
        self._edges: list[tuple[int, int]] = [
            (self._index[source], self._index[target])
            for source, target in graph.edges()
        ]
        self._directed = bool(graph.is_directed())
        self._weighted = weight is not None and any(
            weight in data for _, _, data in graph.edges(data=True)
        )

    @classmethod
    def from_edges(
        cls,
        vertex_count: int,
        edges: Iterable[tuple[int, int]],
        *,
        directed: bool = False,
        weights: Sequence[float] | Mapping[tuple[int, int], float] | None = None,
    ) -> IndexedGraph:
        """
        Build a graph on vertices ``0 .. vertex_count - 1`` from an edge list.

        Parameters
        ----------
        vertex_count:
            Number of vertices.
        edges:
            Pairs of vertex indices.
        directed:
            Build a ``DiGraph`` instead of a ``Graph``.
        weights:
            Optional weights, either aligned with ``edges`` or keyed by the
            edge pair.
        """

        graph: nx.Graph = nx.DiGraph() if directed else nx.Graph()
        graph.add_nodes_from(range(vertex_count))
        edge_list = list(edges)
        for position, (source, target) in enumerate(edge_list):
            if not (0 <= source < vertex_count and 0 <= target < vertex_count):
                raise ValueError(
                    f"Edge ({source}, {target}) references a vertex outside "
                    f"0..{vertex_count - 1}"
                )
            attributes: dict[str, Any] = {}
            if weights is not None:
                if isinstance(weights, Mapping):
                    attributes["weight"] = float(weights[(source, target)])
                else:
                    attributes["weight"] = float(weights[position])
            graph.add_edge(source, target, **attributes)
        return cls(graph)

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        kind = "directed" if self._directed else "undirected"
        return (
            f"IndexedGraph({kind}, vertices={self.vertex_count()}, "
            f"edges={self.edge_count()})"
        )

    @property
    def graph(self) -> nx.Graph:
        return self._graph

    @property
    def is_directed(self) -> bool:
        return self._directed

    @property
    def is_weighted(self) -> bool:
        return self._weighted

    @property
    def nodes(self) -> list[Hashable]:
        """Vertex labels in canonical index order."""

        return list(self._nodes)

    def vertex_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def edges(self) -> list[tuple[int, int]]:
        return list(self._edges)

    def index_of(self, node: Hashable) -> int:
        return self._index[node]

    def weight(self, source: int, target: int) -> float:
        """Weight of the edge ``source -> target`` (1.0 if unweighted)."""

        if self._weight is None:
            return 1.0
        data = self._graph.get_edge_data(self._nodes[source], self._nodes[target])
        if data is None:
            raise KeyError(f"No edge between vertices {source} and {target}")
        return float(data.get(self._weight, 1.0))


def as_graph(graph: Any) -> GraphLike:
    """Return ``graph`` as a :class:`GraphLike`, wrapping networkx graphs."""

    if isinstance(graph, nx.Graph):
        return IndexedGraph(graph)
    if isinstance(graph, GraphLike):
        return graph
    raise TypeError(f"Expected a networkx graph or a GraphLike; got {type(graph)!r}")


__all__ = ["GraphLike", "IndexedGraph", "as_graph"]
