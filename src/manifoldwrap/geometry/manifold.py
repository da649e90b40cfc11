"""Capability interface shared by concrete and decorated manifolds."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, TypeVar

import numpy as np

from ..config import Tolerance, resolve_tolerance
from ..errors import ManifoldDomainError, OperationNotImplementedError
from .types import (
    CANONICAL_METRIC,
    InverseRetractionMethod,
    Metric,
    RetractionMethod,
    VectorTransportMethod,
)

if TYPE_CHECKING:  # pragma: no cover - used only for type checking
    from pymanopt.manifolds.manifold import Manifold as PymanoptManifold

    from .adapter import PymanoptManifold as PymanoptAdapter


class TangentProjectionFn(Protocol):
    """Protocol for projecting an ambient vector onto the tangent space."""

    def __call__(self, point_value: Any, ambient_vector: Any) -> Any: ...


class PointProjectionFn(Protocol):
    """Protocol for projecting an ambient point back onto the manifold."""

    def __call__(self, ambient_point: Any) -> Any: ...


MANIFOLD_OPERATIONS: tuple[str, ...] = (
    "dimension",
    "representation_shape",
    "check_point",
    "check_tangent",
    "exp",
    "log",
    "inner",
    "norm",
    "distance",
    "retract",
    "inverse_retract",
    "zero_tangent",
    "vector_transport",
    "random_point",
    "random_tangent",
    "project_point",
    "project_tangent",
    "is_close",
)

_F = TypeVar("_F", bound=Callable[..., Any])


def unimplemented(method: _F) -> _F:
    """Turn ``method`` into a stub raising :class:`OperationNotImplementedError`."""

    @functools.wraps(method)
    def stub(self: Manifold, *args: Any, **kwargs: Any) -> Any:
        raise OperationNotImplementedError(method.__name__, self.kind)

    stub.__not_implemented__ = True  # type: ignore[attr-defined]
    return stub  # type: ignore[return-value]


def implements(manifold: Manifold, operation: str) -> bool:
    """Whether ``manifold``'s class provides more than the unimplemented stub."""

    method = getattr(type(manifold), operation, None)
    if method is None:
        return False
    return not getattr(method, "__not_implemented__", False)


class Manifold:
    """
    Riemannian manifold capability interface.

    Every operation named in :data:`MANIFOLD_OPERATIONS` is available on every
    manifold. Concrete manifolds implement the subset their geometry supports;
    the rest raise :class:`~manifoldwrap.errors.OperationNotImplementedError`.

    Points and tangent vectors are plain ambient values (``numpy`` arrays or
    sequences of them); manifolds carry no mutable state.
    """

    operations: ClassVar[tuple[str, ...]] = MANIFOLD_OPERATIONS

    @property
    def kind(self) -> str:
        """Name used in error messages."""

        return type(self).__name__

    def default_metric(self) -> Metric:
        """Metric the manifold's ``inner``/``exp``/``log`` were written for."""

        return CANONICAL_METRIC

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------
    @unimplemented
    def dimension(self) -> int:
        """Intrinsic dimension."""

    @unimplemented
    def representation_shape(self) -> tuple[int, ...]:
        """Shape of the ambient array representing a point."""

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @unimplemented
    def check_point(
        self, x: Any, *, tolerance: Tolerance | None = None
    ) -> ManifoldDomainError | None:
        """Return ``None`` if ``x`` is a point, else the domain error."""

    @unimplemented
    def check_tangent(
        self,
        x: Any,
        v: Any,
        *,
        check_base_point: bool = True,
        tolerance: Tolerance | None = None,
    ) -> ManifoldDomainError | None:
        """Return ``None`` if ``v`` is tangent at ``x``, else the domain error."""

    def is_point(
        self,
        x: Any,
        raise_error: bool = False,
        *,
        tolerance: Tolerance | None = None,
    ) -> bool:
        """
        Check whether ``x`` is a point of the manifold.

        Parameters
        ----------
        x:
            Candidate point.
        raise_error:
            Raise the :class:`ManifoldDomainError` instead of returning
            ``False``.
        tolerance:
            Tolerance for the geometric part of the check.
        """

        error = self.check_point(x, tolerance=tolerance)
        if error is None:
            return True
        if raise_error:
            raise error
        return False

    def is_tangent(
        self,
        x: Any,
        v: Any,
        raise_error: bool = False,
        *,
        check_base_point: bool = True,
        tolerance: Tolerance | None = None,
    ) -> bool:
        """Check whether ``v`` is a tangent vector at ``x``."""

        error = self.check_tangent(
            x, v, check_base_point=check_base_point, tolerance=tolerance
        )
        if error is None:
            return True
        if raise_error:
            raise error
        return False

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @unimplemented
    def exp(self, x: Any, v: Any) -> Any:
        """Exponential map at ``x`` applied to ``v``."""

    @unimplemented
    def log(self, x: Any, y: Any) -> Any:
        """Logarithmic map at ``x`` of ``y``."""

    @unimplemented
    def inner(self, x: Any, v: Any, w: Any) -> float:
        """Inner product of ``v`` and ``w`` in the tangent space at ``x``."""

    def norm(self, x: Any, v: Any) -> float:
        return float(np.sqrt(self.inner(x, v, v)))

    def distance(self, x: Any, y: Any) -> float:
        return self.norm(x, self.log(x, y))

    def retract(
        self,
        x: Any,
        v: Any,
        method: RetractionMethod = RetractionMethod.EXPONENTIAL,
    ) -> Any:
        """Retract ``v`` at ``x`` with the given recipe."""

        if method is RetractionMethod.EXPONENTIAL:
            return self.exp(x, v)
        raise OperationNotImplementedError(f"retract[{method.value}]", self.kind)

    def inverse_retract(
        self,
        x: Any,
        y: Any,
        method: InverseRetractionMethod = InverseRetractionMethod.LOGARITHMIC,
    ) -> Any:
        """Inverse of :meth:`retract` for the matching recipe."""

        if method is InverseRetractionMethod.LOGARITHMIC:
            return self.log(x, y)
        raise OperationNotImplementedError(
            f"inverse_retract[{method.value}]", self.kind
        )

    @unimplemented
    def zero_tangent(self, x: Any) -> Any:
        """Zero vector of the tangent space at ``x``."""

    def vector_transport(
        self,
        x: Any,
        v: Any,
        y: Any,
        method: VectorTransportMethod = VectorTransportMethod.PROJECTION,
    ) -> Any:
        """Move ``v`` from the tangent space at ``x`` to the one at ``y``."""

        if method is VectorTransportMethod.PROJECTION:
            return self.project_tangent(y, v)
        raise OperationNotImplementedError(
            f"vector_transport[{method.value}]", self.kind
        )

    @unimplemented
    def random_point(self) -> Any:
        """Draw a random point."""

    @unimplemented
    def random_tangent(self, x: Any) -> Any:
        """Draw a random tangent vector at ``x``."""

    @unimplemented
    def project_point(self, x: Any) -> Any:
        """Project an ambient point onto the manifold."""

    @unimplemented
    def project_tangent(self, x: Any, v: Any) -> Any:
        """Project an ambient vector onto the tangent space at ``x``."""

    def is_close(
        self, x: Any, y: Any, *, tolerance: Tolerance | None = None
    ) -> bool:
        """Approximate equality of two points (or two tangent vectors)."""

        return resolve_tolerance(tolerance).allclose(x, y)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_pymanopt(
        cls,
        manifold: PymanoptManifold,
        *,
        project_point: PointProjectionFn | None = None,
        projection: TangentProjectionFn | None = None,
        shape: tuple[int, ...] | None = None,
    ) -> PymanoptAdapter:
        """
        Wrap a ``pymanopt`` manifold as a concrete :class:`Manifold`.

        Parameters
        ----------
        manifold:
            Instance of :class:`pymanopt.manifolds.manifold.Manifold`.
        project_point:
            Optional callable that projects ambient points onto ``manifold``.
            Defaults to the known recipe for the manifold's family, if any.
        projection:
            Optional tangent projection. Defaults to the family recipe, then
            to ``manifold.projection``.
        shape:
            Representation shape of a point. Inferred from a random point
            when omitted.
        """

        from .adapter import PymanoptManifold as PymanoptAdapter

        return PymanoptAdapter.wrap(
            manifold, project_point=project_point, projection=projection, shape=shape
        )


__all__ = [
    "MANIFOLD_OPERATIONS",
    "Manifold",
    "PointProjectionFn",
    "TangentProjectionFn",
    "implements",
    "unimplemented",
]
