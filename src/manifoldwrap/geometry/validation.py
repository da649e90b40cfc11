"""Decorator validating every input and output of a manifold's operations."""

from __future__ import annotations

from typing import Any

from ..config import Tolerance
from .decorator import DecoratorManifold
from .manifold import Manifold
from .types import InverseRetractionMethod, RetractionMethod, VectorTransportMethod


class ValidationManifold(DecoratorManifold):
    """
    Wrap ``manifold`` so that points and tangent vectors are checked.

    Each checked operation validates its arguments before calling the inner
    manifold and validates the result afterwards, raising
    :class:`~manifoldwrap.errors.ManifoldDomainError` on the first failure.
    Operations that are not listed here, including operations added by inner
    decorators, pass through unchecked.
    """

    def __init__(self, manifold: Manifold, *, tolerance: Tolerance | None = None):
        super().__init__(manifold)
        self._tolerance = tolerance

    def _point(self, x: Any) -> None:
        self.manifold.is_point(x, True, tolerance=self._tolerance)

    def _tangent(self, x: Any, v: Any) -> None:
        self.manifold.is_tangent(
            x, v, True, check_base_point=False, tolerance=self._tolerance
        )

    def exp(self, x: Any, v: Any) -> Any:
        self._point(x)
        self._tangent(x, v)
        y = self.manifold.exp(x, v)
        self._point(y)
        return y

    def log(self, x: Any, y: Any) -> Any:
        self._point(x)
        self._point(y)
        v = self.manifold.log(x, y)
        self._tangent(x, v)
        return v

    def inner(self, x: Any, v: Any, w: Any) -> float:
        self._point(x)
        self._tangent(x, v)
        self._tangent(x, w)
        return self.manifold.inner(x, v, w)

    def norm(self, x: Any, v: Any) -> float:
        self._point(x)
        self._tangent(x, v)
        return self.manifold.norm(x, v)

    def distance(self, x: Any, y: Any) -> float:
        self._point(x)
        self._point(y)
        return self.manifold.distance(x, y)

    def retract(
        self,
        x: Any,
        v: Any,
        method: RetractionMethod = RetractionMethod.EXPONENTIAL,
    ) -> Any:
        self._point(x)
        self._tangent(x, v)
        y = self.manifold.retract(x, v, method)
        self._point(y)
        return y

    def inverse_retract(
        self,
        x: Any,
        y: Any,
        method: InverseRetractionMethod = InverseRetractionMethod.LOGARITHMIC,
    ) -> Any:
        self._point(x)
        self._point(y)
        v = self.manifold.inverse_retract(x, y, method)
        self._tangent(x, v)
        return v

    def zero_tangent(self, x: Any) -> Any:
        self._point(x)
        v = self.manifold.zero_tangent(x)
        self._tangent(x, v)
        return v

    def vector_transport(
        self,
        x: Any,
        v: Any,
        y: Any,
        method: VectorTransportMethod | None = None,
    ) -> Any:
        self._point(x)
        self._tangent(x, v)
        self._point(y)
        w = super().vector_transport(x, v, y, method)
        self._tangent(y, w)
        return w

    def random_point(self) -> Any:
        x = self.manifold.random_point()
        self._point(x)
        return x

    def random_tangent(self, x: Any) -> Any:
        self._point(x)
        v = self.manifold.random_tangent(x)
        self._tangent(x, v)
        return v

    def project_tangent(self, x: Any, v: Any) -> Any:
        self._point(x)
        w = self.manifold.project_tangent(x, v)
        self._tangent(x, w)
        return w


__all__ = ["ValidationManifold"]
