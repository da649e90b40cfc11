"""Power manifolds indexed by the vertices or edges of a graph."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ..errors import ManifoldDomainError, OperationNotImplementedError
from ..geometry.manifold import MANIFOLD_OPERATIONS, Manifold
from ..geometry.power import PowerManifold
from ..utils.numeric import write_into
from .graph import GraphLike, as_graph

logger = logging.getLogger(__name__)


class GraphManifoldType(Enum):
    """Which graph elements carry a manifold point."""

    VERTEX = "vertex"
    EDGE = "edge"


class GraphManifold(PowerManifold):
    """
    A power manifold with one copy of ``manifold`` per vertex (or edge).

    Parameters
    ----------
    manifold:
        The manifold attached to every vertex or edge.
    graph:
        A ``networkx`` graph or any :class:`~manifoldwrap.graphs.GraphLike`.
        Networkx graphs are indexed through
        :class:`~manifoldwrap.graphs.IndexedGraph`.
    graph_type:
        ``VERTEX`` to index by vertices, ``EDGE`` to index by edges.

    Examples
    --------
    >>> import networkx as nx
    >>> from pymanopt.manifolds import Euclidean
    >>> M = GraphManifold(Manifold.from_pymanopt(Euclidean(2)), nx.path_graph(3))
    >>> M.index_count()
    3
    """

    operations = MANIFOLD_OPERATIONS + ("neighbor_aggregate", "incident_log")

    def __init__(
        self,
        manifold: Manifold,
        graph: Any,
        graph_type: GraphManifoldType = GraphManifoldType.VERTEX,
    ) -> None:
        indexed = as_graph(graph)
        if not isinstance(graph_type, GraphManifoldType):
            raise TypeError(f"Expected a GraphManifoldType; got {type(graph_type)!r}")
        if graph_type is GraphManifoldType.VERTEX:
            count = indexed.vertex_count()
        else:
            count = indexed.edge_count()
        super().__init__(manifold, count)
        self._graph = indexed
        self._graph_type = graph_type

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return (
            f"GraphManifold({self.manifold!r}, {self._graph!r}, "
            f"{self._graph_type.name})"
        )

    @property
    def kind(self) -> str:
        return f"GraphManifold({self.manifold.kind}, {self._graph_type.value})"

    @property
    def graph(self) -> GraphLike:
        return self._graph

    @property
    def graph_type(self) -> GraphManifoldType:
        return self._graph_type

    def _length_error(self, label: str, found: int) -> ManifoldDomainError:
        if self._graph_type is GraphManifoldType.VERTEX:
            elements = f"vertices ({self._graph.vertex_count()})"
        else:
            elements = f"edges ({self._graph.edge_count()})"
        return ManifoldDomainError(
            f"The number of elements in {label} ({found}) does not match "
            f"the number of {elements}",
            context=self.kind,
        )

    def neighbor_aggregate(self, x: Any, *, out: Any | None = None) -> Any:
        """
        Sum the logarithmic maps from every vertex towards its neighbors.

        For each edge ``(u, w)`` the tangent at ``x[u]`` receives
        ``log(x[u], x[w])``; undirected graphs also add ``log(x[w], x[u])``
        to the tangent at ``x[w]``. On weighted graphs each term is scaled by
        the weight of the edge it comes from. The result is the discrete
        Laplacian-like direction used for diffusion on the graph.

        Parameters
        ----------
        x:
            A point with one inner point per vertex.
        out:
            Optional tangent buffer receiving the result.

        Raises
        ------
        OperationNotImplementedError
            For edge-indexed graph manifolds.
        ManifoldDomainError
            If ``x`` does not hold one point per vertex.
        """

        if self._graph_type is not GraphManifoldType.VERTEX:
            raise OperationNotImplementedError("neighbor_aggregate", self.kind)
        points = self._checked_components(x, "x")
        totals = [self.manifold.zero_tangent(point) for point in points]
        edges = self._graph.edges()
        weighted = self._graph.is_weighted
        symmetric = not self._graph.is_directed
        logger.debug(
            "Aggregating over %d vertices and %d edges (weighted=%s, symmetric=%s)",
            len(points),
            len(edges),
            weighted,
            symmetric,
        )
        for source, target in edges:
            term = self.manifold.log(points[source], points[target])
            if weighted:
                term = self._graph.weight(source, target) * term
            totals[source] = totals[source] + term
            if symmetric:
                term = self.manifold.log(points[target], points[source])
                if weighted:
                    term = self._graph.weight(target, source) * term
                totals[target] = totals[target] + term
        if out is None:
            return totals
        write_into(self._checked_components(out, "out"), totals)
        return out

    incident_log = neighbor_aggregate


__all__ = ["GraphManifold", "GraphManifoldType"]
