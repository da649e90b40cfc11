"""
manifoldwrap: decorator-based dispatch for Riemannian manifolds.

The package wraps pymanopt manifolds behind a uniform operation vocabulary,
lets decorators (metrics, validation, group structure) override or forward
each operation, and provides Lie groups and graph-indexed power manifolds on
top of that engine.
"""

from .config import DEFAULT_TOLERANCE, Tolerance
from .errors import ManifoldDomainError, OperationNotImplementedError
from .geometry import (
    DecoratorManifold,
    Manifold,
    Metric,
    MetricManifold,
    PowerManifold,
    ValidationManifold,
    base_manifold,
    default_fallback,
    resolve_operation,
)
from .graphs import GraphManifold, GraphManifoldType, IndexedGraph
from .groups import (
    ADDITION,
    MULTIPLICATION,
    ActionDirection,
    GroupManifold,
    GroupOperation,
    Identity,
    SpecialOrthogonal,
    TranslationGroup,
)

__all__ = [
    "ADDITION",
    "ActionDirection",
    "DEFAULT_TOLERANCE",
    "DecoratorManifold",
    "GraphManifold",
    "GraphManifoldType",
    "GroupManifold",
    "GroupOperation",
    "Identity",
    "IndexedGraph",
    "MULTIPLICATION",
    "Manifold",
    "ManifoldDomainError",
    "Metric",
    "MetricManifold",
    "OperationNotImplementedError",
    "PowerManifold",
    "SpecialOrthogonal",
    "Tolerance",
    "TranslationGroup",
    "ValidationManifold",
    "base_manifold",
    "default_fallback",
    "resolve_operation",
]
