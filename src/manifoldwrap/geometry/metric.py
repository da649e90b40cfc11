"""Decorator equipping a manifold with a (possibly different) Riemannian metric."""

from __future__ import annotations

from typing import Any

import numpy as np

from ..errors import OperationNotImplementedError
from .decorator import DecoratorManifold, default_fallback
from .manifold import Manifold
from .types import InverseRetractionMethod, Metric, RetractionMethod


class MetricManifold(DecoratorManifold):
    """
    Manifold ``manifold`` equipped with ``metric``.

    When ``metric`` is the metric the inner manifold was written for, every
    metric-dependent operation defers to the inner manifold. Otherwise the
    inner product is evaluated through ``metric.local_metric`` and the
    geodesic operations are unavailable.
    """

    def __init__(self, manifold: Manifold, metric: Metric) -> None:
        super().__init__(manifold)
        self._metric = metric

    @property
    def metric(self) -> Metric:
        return self._metric

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"MetricManifold({self.manifold!r}, {self._metric.name!r})"

    def is_default_metric(self) -> bool:
        return self._metric == self.manifold.default_metric()

    def uses_inner_operation_by_default(self, operation: str) -> bool:
        return self.is_default_metric()

    def default_metric(self) -> Metric:
        return self._metric

    def local_metric(self, x: Any) -> np.ndarray:
        """Gram matrix of the metric at ``x`` over flattened coordinates."""

        if self._metric.local_metric is None:
            raise OperationNotImplementedError("local_metric", self.kind)
        return np.asarray(self._metric.local_metric(x), dtype=float)

    @default_fallback
    def inner(self, x: Any, v: Any, w: Any) -> float:
        gram = self.local_metric(x)
        return float(np.ravel(v) @ gram @ np.ravel(w))

    @default_fallback
    def norm(self, x: Any, v: Any) -> float:
        return float(np.sqrt(self.inner(x, v, v)))

    @default_fallback
    def distance(self, x: Any, y: Any) -> float:
        raise OperationNotImplementedError("distance", self.kind)

    @default_fallback
    def exp(self, x: Any, v: Any) -> Any:
        raise OperationNotImplementedError("exp", self.kind)

    @default_fallback
    def log(self, x: Any, y: Any) -> Any:
        raise OperationNotImplementedError("log", self.kind)

    @default_fallback
    def retract(
        self,
        x: Any,
        v: Any,
        method: RetractionMethod = RetractionMethod.EXPONENTIAL,
    ) -> Any:
        if method is RetractionMethod.EXPONENTIAL:
            return self.exp(x, v)
        return self.manifold.retract(x, v, method)

    @default_fallback
    def inverse_retract(
        self,
        x: Any,
        y: Any,
        method: InverseRetractionMethod = InverseRetractionMethod.LOGARITHMIC,
    ) -> Any:
        if method is InverseRetractionMethod.LOGARITHMIC:
            return self.log(x, y)
        return self.manifold.inverse_retract(x, y, method)


__all__ = ["MetricManifold"]
