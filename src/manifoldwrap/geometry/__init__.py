"""Geometry primitives and manifold decorators for manifoldwrap."""

from .adapter import PymanoptManifold
from .decorator import (
    DecoratorManifold,
    DispatchKind,
    base_manifold,
    decorator_chain,
    default_fallback,
    resolve_operation,
)
from .manifold import (
    MANIFOLD_OPERATIONS,
    Manifold,
    PointProjectionFn,
    TangentProjectionFn,
    implements,
)
from .metric import MetricManifold
from .power import PowerManifold
from .types import (
    CANONICAL_METRIC,
    InverseRetractionMethod,
    Metric,
    RetractionMethod,
    VectorTransportMethod,
)
from .validation import ValidationManifold

__all__ = [
    "CANONICAL_METRIC",
    "DecoratorManifold",
    "DispatchKind",
    "InverseRetractionMethod",
    "MANIFOLD_OPERATIONS",
    "Manifold",
    "Metric",
    "MetricManifold",
    "PointProjectionFn",
    "PowerManifold",
    "PymanoptManifold",
    "RetractionMethod",
    "TangentProjectionFn",
    "ValidationManifold",
    "VectorTransportMethod",
    "base_manifold",
    "decorator_chain",
    "default_fallback",
    "implements",
    "resolve_operation",
]
