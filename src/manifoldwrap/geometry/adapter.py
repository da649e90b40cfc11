"""Concrete manifolds backed by pymanopt."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from ..config import DEFAULT_TOLERANCE, Tolerance
from ..errors import ManifoldDomainError, OperationNotImplementedError
from ..utils.numeric import difference_norm
from .manifold import Manifold, PointProjectionFn, TangentProjectionFn
from .recipes import InverseRetractFn, RetractFn, recipes_for
from .types import InverseRetractionMethod, RetractionMethod, VectorTransportMethod

if TYPE_CHECKING:  # pragma: no cover - used only for type checking
    from pymanopt.manifolds.manifold import Manifold as PymanoptManifoldType
else:  # pragma: no cover - runtime fallback when type hints are unavailable
    PymanoptManifoldType = object

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PymanoptManifold(Manifold):
    """
    Concrete :class:`Manifold` forwarding to a ``pymanopt`` manifold.

    Parameters
    ----------
    data:
        The wrapped :class:`pymanopt.manifolds.manifold.Manifold` instance.
    name:
        Human-readable identifier used in error messages.
    projection:
        Tangent projection Π_x(v). Used by :meth:`project_tangent` and by
        tangent validation.
    project_point:
        Projection of ambient points onto the manifold. When present, point
        validation compares a value against its projection; without it only
        shape and finiteness are checked.
    shape:
        Representation shape of a point; inferred from a random point when
        omitted.
    retractions, inverse_retractions:
        Recipes for the retraction methods beyond ``EXPONENTIAL`` and
        ``MANIFOLD``.
    tolerance:
        Default tolerance for validation.
    """

    data: PymanoptManifoldType
    name: str
    projection: TangentProjectionFn | None = None
    project_point_fn: PointProjectionFn | None = None
    shape: tuple[int, ...] | None = None
    retractions: Mapping[RetractionMethod, RetractFn] = field(default_factory=dict)
    inverse_retractions: Mapping[InverseRetractionMethod, InverseRetractFn] = field(
        default_factory=dict
    )
    tolerance: Tolerance = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        if self.shape is None:
            sample = self._call("random_point", "random_point")
            object.__setattr__(self, "shape", tuple(np.shape(sample)))
        else:
            object.__setattr__(self, "shape", tuple(self.shape))

    @classmethod
    def wrap(
        cls,
        manifold: PymanoptManifoldType,
        *,
        project_point: PointProjectionFn | None = None,
        projection: TangentProjectionFn | None = None,
        shape: tuple[int, ...] | None = None,
    ) -> PymanoptManifold:
        from pymanopt.manifolds.manifold import Manifold as _PymanoptManifoldRuntime

        if not isinstance(manifold, _PymanoptManifoldRuntime):
            raise TypeError(
                "Expected a pymanopt.manifolds.manifold.Manifold instance; "
                f"got {type(manifold)!r}"
            )
        recipes = recipes_for(manifold)
        tangent_projection = projection or recipes.projection
        if tangent_projection is None:
            tangent_projection = getattr(manifold, "projection", None)
        return cls(
            data=manifold,
            name=str(manifold),
            projection=tangent_projection,
            project_point_fn=project_point or recipes.project_point,
            shape=shape,
            retractions=dict(recipes.retractions),
            inverse_retractions=dict(recipes.inverse_retractions),
        )

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"PymanoptManifold({self.name!r})"

    @property
    def kind(self) -> str:
        return self.name

    def _call(self, operation: str, method_name: str, *args: Any) -> Any:
        method = getattr(self.data, method_name, None)
        if not callable(method):
            raise OperationNotImplementedError(operation, self.kind)
        try:
            return method(*args)
        except OperationNotImplementedError:
            raise
        except NotImplementedError as exc:
            logger.debug(
                "pymanopt %s does not implement %s", type(self.data).__name__, method_name
            )
            raise OperationNotImplementedError(operation, self.kind) from exc

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------
    def dimension(self) -> int:
        return int(self.data.dim)

    def representation_shape(self) -> tuple[int, ...]:
        return self.shape  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def _check_array(self, value: Any, label: str) -> ManifoldDomainError | None:
        try:
            array = np.asarray(value, dtype=float)
        except (TypeError, ValueError):
            return ManifoldDomainError(
                f"{label} is not a numeric array", context=self.kind
            )
        if array.shape != self.shape:
            return ManifoldDomainError(
                f"{label} has shape {array.shape}, expected {self.shape}",
                context=self.kind,
            )
        if not np.all(np.isfinite(array)):
            return ManifoldDomainError(f"{label} has non-finite entries", context=self.kind)
        return None

    @property
    def checks_membership(self) -> bool:
        """Whether :meth:`check_point` tests more than shape and finiteness."""

        return self.project_point_fn is not None

    def check_point(
        self, x: Any, *, tolerance: Tolerance | None = None
    ) -> ManifoldDomainError | None:
        """
        Validate a point by shape, finiteness and, when the family has a
        point projection, distance to that projection.

        Families without a point projection (``checks_membership`` is
        ``False``) accept any finite array of the right shape.
        """

        error = self._check_array(x, "point")
        if error is not None or self.project_point_fn is None:
            return error
        tol = tolerance or self.tolerance
        value = np.asarray(x, dtype=float)
        projected = self.project_point_fn(value)
        if not tol.allclose(projected, value):
            return ManifoldDomainError(
                "point does not lie on the manifold "
                f"(distance to projection {difference_norm(projected, value):.3g})",
                context=self.kind,
            )
        return None

    def check_tangent(
        self,
        x: Any,
        v: Any,
        *,
        check_base_point: bool = True,
        tolerance: Tolerance | None = None,
    ) -> ManifoldDomainError | None:
        if check_base_point:
            error = self.check_point(x, tolerance=tolerance)
            if error is not None:
                return error
        error = self._check_array(v, "tangent vector")
        if error is not None or self.projection is None:
            return error
        tol = tolerance or self.tolerance
        vector = np.asarray(v, dtype=float)
        projected = self.projection(np.asarray(x, dtype=float), vector)
        if not tol.allclose(projected, vector):
            return ManifoldDomainError(
                "vector is not in the tangent space "
                f"(distance to projection {difference_norm(projected, vector):.3g})",
                context=self.kind,
            )
        return None

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def exp(self, x: Any, v: Any) -> Any:
        return self._call("exp", "exp", np.asarray(x), np.asarray(v))

    def log(self, x: Any, y: Any) -> Any:
        return self._call("log", "log", np.asarray(x), np.asarray(y))

    def inner(self, x: Any, v: Any, w: Any) -> float:
        return float(
            self._call(
                "inner", "inner_product", np.asarray(x), np.asarray(v), np.asarray(w)
            )
        )

    def norm(self, x: Any, v: Any) -> float:
        return float(self._call("norm", "norm", np.asarray(x), np.asarray(v)))

    def distance(self, x: Any, y: Any) -> float:
        return float(self._call("distance", "dist", np.asarray(x), np.asarray(y)))

    def retract(
        self,
        x: Any,
        v: Any,
        method: RetractionMethod = RetractionMethod.EXPONENTIAL,
    ) -> Any:
        if method is RetractionMethod.EXPONENTIAL:
            return self.exp(x, v)
        if method is RetractionMethod.MANIFOLD:
            return self._call("retract", "retraction", np.asarray(x), np.asarray(v))
        recipe = self.retractions.get(method)
        if recipe is None:
            raise OperationNotImplementedError(f"retract[{method.value}]", self.kind)
        return recipe(np.asarray(x), np.asarray(v))

    def inverse_retract(
        self,
        x: Any,
        y: Any,
        method: InverseRetractionMethod = InverseRetractionMethod.LOGARITHMIC,
    ) -> Any:
        if method is InverseRetractionMethod.LOGARITHMIC:
            return self.log(x, y)
        recipe = self.inverse_retractions.get(method)
        if recipe is None:
            raise OperationNotImplementedError(
                f"inverse_retract[{method.value}]", self.kind
            )
        return recipe(np.asarray(x), np.asarray(y))

    def zero_tangent(self, x: Any) -> Any:
        return self._call("zero_tangent", "zero_vector", np.asarray(x))

    def vector_transport(
        self,
        x: Any,
        v: Any,
        y: Any,
        method: VectorTransportMethod = VectorTransportMethod.MANIFOLD,
    ) -> Any:
        if method is VectorTransportMethod.MANIFOLD:
            return self._call(
                "vector_transport",
                "transport",
                np.asarray(x),
                np.asarray(y),
                np.asarray(v),
            )
        return super().vector_transport(x, v, y, method)

    def random_point(self) -> Any:
        return self._call("random_point", "random_point")

    def random_tangent(self, x: Any) -> Any:
        return self._call("random_tangent", "random_tangent_vector", np.asarray(x))

    def project_point(self, x: Any) -> Any:
        if self.project_point_fn is None:
            return np.asarray(x)
        return self.project_point_fn(np.asarray(x))

    def project_tangent(self, x: Any, v: Any) -> Any:
        if self.projection is None:
            raise OperationNotImplementedError("project_tangent", self.kind)
        return self.projection(np.asarray(x), np.asarray(v))


__all__ = ["PymanoptManifold"]
