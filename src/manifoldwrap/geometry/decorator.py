"""
Decorator manifolds: wrappers that selectively change a manifold's behaviour.

A decorator wraps exactly one inner manifold. For every operation it either

- implements the operation itself (``OVERRIDE``),
- implements it but defers to the inner manifold while a condition over the
  inner manifold holds (``DEFAULT_FALLBACK``, see :func:`default_fallback`),
- or forwards the call unchanged (``PASS_THROUGH``).

Which of the three applies is a property of the decorator class and the
operation, fixed when the class is created and recorded in
``dispatch_table``. Nested decorators resolve layer by layer until a concrete
manifold is reached; :func:`resolve_operation` performs that walk without
calling anything.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar

from ..config import Tolerance
from ..errors import ManifoldDomainError, OperationNotImplementedError
from .manifold import MANIFOLD_OPERATIONS, Manifold, implements
from .types import (
    InverseRetractionMethod,
    Metric,
    RetractionMethod,
    VectorTransportMethod,
)

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])


class DispatchKind(Enum):
    """How a decorator class handles one operation."""

    OVERRIDE = "override"
    DEFAULT_FALLBACK = "default_fallback"
    PASS_THROUGH = "pass_through"


def default_fallback(method: _F) -> _F:
    """
    Mark a decorator method as deferring to the inner manifold by default.

    The wrapped method first asks
    :meth:`DecoratorManifold.uses_inner_operation_by_default`; when that holds
    the call goes to the inner manifold's operation of the same name,
    otherwise the decorator's own body runs.
    """

    operation = method.__name__

    @functools.wraps(method)
    def dispatch(self: DecoratorManifold, *args: Any, **kwargs: Any) -> Any:
        if self.uses_inner_operation_by_default(operation):
            return getattr(self.manifold, operation)(*args, **kwargs)
        return method(self, *args, **kwargs)

    dispatch.__dispatch_kind__ = DispatchKind.DEFAULT_FALLBACK  # type: ignore[attr-defined]
    return dispatch  # type: ignore[return-value]


class DecoratorManifold(Manifold):
    """
    Base class of all decorator manifolds.

    Every operation of the capability interface is forwarded to the wrapped
    manifold. Subclasses override the operations they change, mark
    conditionally delegating ones with :func:`default_fallback`, and list any
    operations they add in ``operations``. Attributes not defined on the
    decorator (operations added by an inner decorator, for instance) are
    looked up on the inner manifold unless ``forwards_unknown_operations`` is
    ``False``.
    """

    dispatch_table: ClassVar[Mapping[str, DispatchKind]] = MappingProxyType(
        {operation: DispatchKind.PASS_THROUGH for operation in MANIFOLD_OPERATIONS}
    )
    forwards_unknown_operations: ClassVar[bool] = True

    def __init__(self, manifold: Manifold) -> None:
        if not isinstance(manifold, Manifold):
            raise TypeError(
                f"Decorators wrap Manifold instances; got {type(manifold)!r}"
            )
        self._manifold = manifold

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        table: dict[str, DispatchKind] = {}
        for operation in cls.operations:
            owner = next(
                (klass for klass in cls.__mro__ if operation in vars(klass)), None
            )
            if owner is None or owner is DecoratorManifold or owner is Manifold:
                table[operation] = DispatchKind.PASS_THROUGH
                continue
            method = vars(owner)[operation]
            table[operation] = getattr(
                method, "__dispatch_kind__", DispatchKind.OVERRIDE
            )
        cls.dispatch_table = MappingProxyType(table)
        logger.debug(
            "%s dispatch: %s",
            cls.__name__,
            {op: kind.value for op, kind in table.items() if kind is not DispatchKind.PASS_THROUGH},
        )

    @property
    def manifold(self) -> Manifold:
        """The wrapped manifold."""

        return self._manifold

    @property
    def kind(self) -> str:
        return f"{type(self).__name__}({self._manifold.kind})"

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"{type(self).__name__}({self._manifold!r})"

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or not type(self).forwards_unknown_operations:
            raise AttributeError(
                f"{type(self).__name__} object has no attribute {name!r}"
            )
        return getattr(self._manifold, name)

    @classmethod
    def dispatch_kind(cls, operation: str) -> DispatchKind:
        """Return how this decorator class handles ``operation``."""

        try:
            return cls.dispatch_table[operation]
        except KeyError:
            if cls.forwards_unknown_operations:
                return DispatchKind.PASS_THROUGH
            raise OperationNotImplementedError(operation, cls.__name__) from None

    def uses_inner_operation_by_default(self, operation: str) -> bool:
        """Condition under which a ``default_fallback`` operation defers inward."""

        return False

    def default_metric(self) -> Metric:
        return self._manifold.default_metric()

    # ------------------------------------------------------------------
    # Transparent forwarding of the capability interface
    # ------------------------------------------------------------------
    def dimension(self) -> int:
        return self._manifold.dimension()

    def representation_shape(self) -> tuple[int, ...]:
        return self._manifold.representation_shape()

    def check_point(
        self, x: Any, *, tolerance: Tolerance | None = None
    ) -> ManifoldDomainError | None:
        return self._manifold.check_point(x, tolerance=tolerance)

    def check_tangent(
        self,
        x: Any,
        v: Any,
        *,
        check_base_point: bool = True,
        tolerance: Tolerance | None = None,
    ) -> ManifoldDomainError | None:
        return self._manifold.check_tangent(
            x, v, check_base_point=check_base_point, tolerance=tolerance
        )

    def exp(self, x: Any, v: Any) -> Any:
        return self._manifold.exp(x, v)

    def log(self, x: Any, y: Any) -> Any:
        return self._manifold.log(x, y)

    def inner(self, x: Any, v: Any, w: Any) -> float:
        return self._manifold.inner(x, v, w)

    def norm(self, x: Any, v: Any) -> float:
        return self._manifold.norm(x, v)

    def distance(self, x: Any, y: Any) -> float:
        return self._manifold.distance(x, y)

    def retract(
        self,
        x: Any,
        v: Any,
        method: RetractionMethod = RetractionMethod.EXPONENTIAL,
    ) -> Any:
        return self._manifold.retract(x, v, method)

    def inverse_retract(
        self,
        x: Any,
        y: Any,
        method: InverseRetractionMethod = InverseRetractionMethod.LOGARITHMIC,
    ) -> Any:
        return self._manifold.inverse_retract(x, y, method)

    def zero_tangent(self, x: Any) -> Any:
        return self._manifold.zero_tangent(x)

    def vector_transport(
        self,
        x: Any,
        v: Any,
        y: Any,
        method: VectorTransportMethod | None = None,
    ) -> Any:
        if method is None:
            return self._manifold.vector_transport(x, v, y)
        return self._manifold.vector_transport(x, v, y, method)

    def random_point(self) -> Any:
        return self._manifold.random_point()

    def random_tangent(self, x: Any) -> Any:
        return self._manifold.random_tangent(x)

    def project_point(self, x: Any) -> Any:
        return self._manifold.project_point(x)

    def project_tangent(self, x: Any, v: Any) -> Any:
        return self._manifold.project_tangent(x, v)

    def is_close(
        self, x: Any, y: Any, *, tolerance: Tolerance | None = None
    ) -> bool:
        return self._manifold.is_close(x, y, tolerance=tolerance)


def base_manifold(manifold: Manifold) -> Manifold:
    """Strip every decorator layer and return the concrete manifold."""

    while isinstance(manifold, DecoratorManifold):
        manifold = manifold.manifold
    return manifold


def decorator_chain(manifold: Manifold) -> list[Manifold]:
    """Return all layers of ``manifold``, outermost first."""

    layers = [manifold]
    while isinstance(manifold, DecoratorManifold):
        manifold = manifold.manifold
        layers.append(manifold)
    return layers


def resolve_operation(manifold: Manifold, operation: str) -> Manifold:
    """
    Return the layer of ``manifold`` whose implementation of ``operation`` runs.

    Raises
    ------
    OperationNotImplementedError
        If the walk ends at a concrete manifold that does not implement the
        operation.
    """

    layer = manifold
    while isinstance(layer, DecoratorManifold):
        kind = type(layer).dispatch_kind(operation)
        if kind is DispatchKind.OVERRIDE:
            return layer
        if kind is DispatchKind.DEFAULT_FALLBACK and not (
            layer.uses_inner_operation_by_default(operation)
        ):
            return layer
        layer = layer.manifold
    if not implements(layer, operation):
        raise OperationNotImplementedError(operation, layer.kind)
    return layer


__all__ = [
    "DecoratorManifold",
    "DispatchKind",
    "base_manifold",
    "decorator_chain",
    "default_fallback",
    "resolve_operation",
]
