"""Group operations: the {identity, inverse, compose} table of a Lie group."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - used only for type checking
    from .identity import ActionDirection

IdentityFn = Callable[[Any], Any]
InverseFn = Callable[[Any], Any]
ComposeFn = Callable[[Any, Any], Any]
TranslateDiffFn = Callable[[Any, Any, Any, "ActionDirection"], Any]


class OperationKind(Enum):
    """Family of a group operation."""

    ADDITION = "addition"
    MULTIPLICATION = "multiplication"
    CUSTOM = "custom"


@dataclass(frozen=True)
class GroupOperation:
    """
    Smooth binary operation turning a manifold into a Lie group.

    Attributes
    ----------
    kind:
        Family of the operation. Addition groups have an identity translation
        differential.
    identity:
        ``x -> e`` returning the identity element shaped like ``x``.
    inverse:
        ``x -> x^{-1}``.
    compose:
        ``(x, y) -> x ∘ y``.
    translate_diff:
        Optional ``(x, y, v, direction) -> w``, the differential of the
        translation by ``x`` at ``y`` applied to ``v``.
    name:
        Label used in ``repr``.
    """

    kind: OperationKind
    identity: IdentityFn
    inverse: InverseFn
    compose: ComposeFn
    translate_diff: TranslateDiffFn | None = None
    name: str = ""

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"GroupOperation({self.name or self.kind.value})"

    @classmethod
    def custom(
        cls,
        *,
        identity: IdentityFn,
        inverse: InverseFn,
        compose: ComposeFn,
        translate_diff: TranslateDiffFn | None = None,
        name: str = "custom",
    ) -> GroupOperation:
        """Build a user-supplied group operation."""

        return cls(
            kind=OperationKind.CUSTOM,
            identity=identity,
            inverse=inverse,
            compose=compose,
            translate_diff=translate_diff,
            name=name,
        )

    def with_translate_diff(self, translate_diff: TranslateDiffFn) -> GroupOperation:
        """Return a copy of the operation with a translation differential."""

        return dataclasses.replace(self, translate_diff=translate_diff)


def _is_matrix(value: np.ndarray) -> bool:
    return value.ndim >= 2


def _additive_identity(x: Any) -> np.ndarray:
    return np.zeros_like(np.asarray(x))


def _additive_inverse(x: Any) -> np.ndarray:
    return -np.asarray(x)


def _add(x: Any, y: Any) -> np.ndarray:
    return np.asarray(x) + np.asarray(y)


def _multiplicative_identity(x: Any) -> np.ndarray:
    value = np.asarray(x)
    if _is_matrix(value):
        eye = np.eye(value.shape[-2], value.shape[-1], dtype=value.dtype)
        return np.broadcast_to(eye, value.shape).copy()
    return np.ones_like(value)


def _multiplicative_inverse(x: Any) -> np.ndarray:
    value = np.asarray(x)
    if _is_matrix(value):
        return np.linalg.inv(value)
    return 1.0 / value


def _multiply(x: Any, y: Any) -> np.ndarray:
    lhs = np.asarray(x)
    rhs = np.asarray(y)
    if _is_matrix(lhs) and _is_matrix(rhs):
        return lhs @ rhs
    return lhs * rhs


ADDITION = GroupOperation(
    kind=OperationKind.ADDITION,
    identity=_additive_identity,
    inverse=_additive_inverse,
    compose=_add,
    name="addition",
)

MULTIPLICATION = GroupOperation(
    kind=OperationKind.MULTIPLICATION,
    identity=_multiplicative_identity,
    inverse=_multiplicative_inverse,
    compose=_multiply,
    name="multiplication",
)


__all__ = ["ADDITION", "MULTIPLICATION", "GroupOperation", "OperationKind"]
