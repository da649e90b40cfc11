"""Power manifolds: an indexed array of copies of one manifold."""

from __future__ import annotations

from typing import Any

import numpy as np

from ..config import Tolerance
from ..errors import ManifoldDomainError
from ..utils.numeric import split_components, stack_components, write_into
from .decorator import DecoratorManifold
from .manifold import Manifold
from .types import InverseRetractionMethod, RetractionMethod, VectorTransportMethod


class PowerManifold(DecoratorManifold):
    """
    The product of ``count`` copies of ``manifold``.

    A point is a sequence of ``count`` points of the inner manifold, or an
    array of shape ``representation_shape()`` stacking them along its last
    axis (see :meth:`stack`). Arrays in any other layout are rejected with a
    :class:`~manifoldwrap.errors.ManifoldDomainError`. Operations
    act component-wise and return lists of inner values in index order.

    Parameters
    ----------
    manifold:
        The manifold replicated once per index.
    count:
        Number of indices.
    """

    forwards_unknown_operations = False

    def __init__(self, manifold: Manifold, count: int) -> None:
        super().__init__(manifold)
        if count < 0:
            raise ValueError("count must be non-negative")
        self._count = int(count)

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"PowerManifold({self.manifold!r}, {self.index_count()})"

    @property
    def kind(self) -> str:
        return f"PowerManifold({self.manifold.kind}, {self.index_count()})"

    def index_count(self) -> int:
        """Number of copies of the inner manifold."""

        return self._count

    # ------------------------------------------------------------------
    # Component access
    # ------------------------------------------------------------------
    def components(self, x: Any) -> list[Any]:
        """
        Split a power-manifold value into its per-index components.

        Sequences are taken as they are. Arrays must have exactly the shape
        ``representation_shape()``, with the index on the last axis.

        Raises
        ------
        ManifoldDomainError
            If ``x`` is an array (or scalar) in any other layout.
        """

        try:
            return split_components(x, self.representation_shape())
        except ValueError as exc:
            raise ManifoldDomainError(str(exc), context=self.kind) from exc

    def stack(self, x: Any) -> np.ndarray:
        """Stack components into an array of shape ``representation_shape()``."""

        return stack_components(self.components(x))

    def _length_error(self, label: str, found: int) -> ManifoldDomainError:
        return ManifoldDomainError(
            f"The number of elements in {label} ({found}) does not match "
            f"the number of indices ({self.index_count()})",
            context=self.kind,
        )

    def _checked_components(self, x: Any, label: str) -> list[Any]:
        components = self.components(x)
        if len(components) != self.index_count():
            raise self._length_error(label, len(components))
        return components

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------
    def dimension(self) -> int:
        return self.manifold.dimension() * self.index_count()

    def representation_shape(self) -> tuple[int, ...]:
        return (*self.manifold.representation_shape(), self.index_count())

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def check_point(
        self, x: Any, *, tolerance: Tolerance | None = None
    ) -> ManifoldDomainError | None:
        try:
            components = self.components(x)
        except ManifoldDomainError as error:
            return error
        if len(components) != self.index_count():
            return self._length_error("x", len(components))
        for index, component in enumerate(components):
            error = self.manifold.check_point(component, tolerance=tolerance)
            if error is not None:
                return ManifoldDomainError(str(error), context=f"component {index}")
        return None

    def check_tangent(
        self,
        x: Any,
        v: Any,
        *,
        check_base_point: bool = True,
        tolerance: Tolerance | None = None,
    ) -> ManifoldDomainError | None:
        try:
            points = self.components(x)
            vectors = self.components(v)
        except ManifoldDomainError as error:
            return error
        if len(points) != self.index_count():
            return self._length_error("x", len(points))
        if len(vectors) != self.index_count():
            return self._length_error("v", len(vectors))
        for index, (point, vector) in enumerate(zip(points, vectors, strict=True)):
            error = self.manifold.check_tangent(
                point,
                vector,
                check_base_point=check_base_point,
                tolerance=tolerance,
            )
            if error is not None:
                return ManifoldDomainError(str(error), context=f"component {index}")
        return None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def _pairwise(self, operation: str, x: Any, y: Any, *args: Any) -> list[Any]:
        method = getattr(self.manifold, operation)
        return [
            method(a, b, *args)
            for a, b in zip(
                self._checked_components(x, "x"),
                self._checked_components(y, "y"),
                strict=True,
            )
        ]

    def exp(self, x: Any, v: Any) -> list[Any]:
        return self._pairwise("exp", x, v)

    def log(self, x: Any, y: Any) -> list[Any]:
        return self._pairwise("log", x, y)

    def inner(self, x: Any, v: Any, w: Any) -> float:
        return float(
            sum(
                self.manifold.inner(a, b, c)
                for a, b, c in zip(
                    self._checked_components(x, "x"),
                    self._checked_components(v, "v"),
                    self._checked_components(w, "w"),
                    strict=True,
                )
            )
        )

    def norm(self, x: Any, v: Any) -> float:
        norms = np.asarray(
            [
                self.manifold.norm(a, b)
                for a, b in zip(
                    self._checked_components(x, "x"),
                    self._checked_components(v, "v"),
                    strict=True,
                )
            ]
        )
        return float(np.linalg.norm(norms))

    def distance(self, x: Any, y: Any) -> float:
        distances = np.asarray(self._pairwise("distance", x, y), dtype=float)
        return float(np.linalg.norm(distances))

    def retract(
        self,
        x: Any,
        v: Any,
        method: RetractionMethod = RetractionMethod.EXPONENTIAL,
    ) -> list[Any]:
        return self._pairwise("retract", x, v, method)

    def inverse_retract(
        self,
        x: Any,
        y: Any,
        method: InverseRetractionMethod = InverseRetractionMethod.LOGARITHMIC,
    ) -> list[Any]:
        return self._pairwise("inverse_retract", x, y, method)

    def zero_tangent(self, x: Any, *, out: Any | None = None) -> list[Any]:
        """Zero tangent vector at ``x``; written into ``out`` when given."""

        zeros = [
            self.manifold.zero_tangent(point)
            for point in self._checked_components(x, "x")
        ]
        if out is None:
            return zeros
        write_into(self._checked_components(out, "out"), zeros)
        return out

    def vector_transport(
        self,
        x: Any,
        v: Any,
        y: Any,
        method: VectorTransportMethod | None = None,
    ) -> list[Any]:
        extra = () if method is None else (method,)
        return [
            self.manifold.vector_transport(a, b, c, *extra)
            for a, b, c in zip(
                self._checked_components(x, "x"),
                self._checked_components(v, "v"),
                self._checked_components(y, "y"),
                strict=True,
            )
        ]

    def random_point(self) -> list[Any]:
        return [self.manifold.random_point() for _ in range(self.index_count())]

    def random_tangent(self, x: Any) -> list[Any]:
        return [
            self.manifold.random_tangent(point)
            for point in self._checked_components(x, "x")
        ]

    def project_point(self, x: Any) -> list[Any]:
        return [
            self.manifold.project_point(point)
            for point in self._checked_components(x, "x")
        ]

    def project_tangent(self, x: Any, v: Any) -> list[Any]:
        return self._pairwise("project_tangent", x, v)

    def is_close(
        self, x: Any, y: Any, *, tolerance: Tolerance | None = None
    ) -> bool:
        try:
            first = self.components(x)
            second = self.components(y)
        except ManifoldDomainError:
            return False
        if len(first) != len(second):
            return False
        return all(
            self.manifold.is_close(a, b, tolerance=tolerance)
            for a, b in zip(first, second, strict=True)
        )


__all__ = ["PowerManifold"]
