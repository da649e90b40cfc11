"""Lie groups: manifolds decorated with a smooth group operation."""

from __future__ import annotations

from typing import Any

from ..config import Tolerance
from ..errors import OperationNotImplementedError
from ..geometry.decorator import DecoratorManifold
from ..geometry.manifold import MANIFOLD_OPERATIONS, Manifold
from ..utils.numeric import write_into
from .identity import ActionDirection, Identity
from .operation import GroupOperation, OperationKind

GROUP_OPERATIONS: tuple[str, ...] = (
    "identity",
    "inverse",
    "compose",
    "translate",
    "inverse_translate",
    "translate_diff",
    "inverse_translate_diff",
)


class GroupManifold(DecoratorManifold):
    """
    Decorator equipping ``manifold`` with a group ``operation``.

    Geometry (dimension, validation, exponential and logarithmic maps, ...)
    is forwarded to the wrapped manifold; the decorator adds the group
    algebra. Every group operation accepts an optional ``out`` buffer which
    receives the result and is returned.

    The identity element is available as :attr:`identity_element`; passing
    it to :meth:`compose`, :meth:`inverse` or :meth:`identity` short-circuits
    without evaluating the operation.

    Parameters
    ----------
    manifold:
        The manifold whose points are the group elements.
    operation:
        The operation table, e.g. :data:`~manifoldwrap.groups.ADDITION`.
    """

    operations = MANIFOLD_OPERATIONS + GROUP_OPERATIONS

    def __init__(self, manifold: Manifold, operation: GroupOperation) -> None:
        super().__init__(manifold)
        if not isinstance(operation, GroupOperation):
            raise TypeError(f"Expected a GroupOperation; got {type(operation)!r}")
        self._operation = operation
        self._identity_element = Identity(self)

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"{type(self).__name__}({self.manifold!r}, {self._operation!r})"

    @property
    def operation(self) -> GroupOperation:
        return self._operation

    @property
    def identity_element(self) -> Identity:
        """The :class:`Identity` sentinel of this group."""

        return self._identity_element

    def is_identity(self, x: Any) -> bool:
        """
        Whether ``x`` is this group's identity sentinel.

        Raises
        ------
        ValueError
            If ``x`` is the identity sentinel of another group.
        """

        if not isinstance(x, Identity):
            return False
        if x.group is not self:
            raise ValueError("Identity belongs to a different group")
        return True

    # ------------------------------------------------------------------
    # Group algebra
    # ------------------------------------------------------------------
    def identity(self, x: Any, *, out: Any | None = None) -> Any:
        """Identity element shaped like ``x``; ``identity(e)`` is ``e``."""

        if self.is_identity(x):
            if out is None:
                return x
            return write_into(out, self._operation.identity(out))
        return write_into(out, self._operation.identity(x))

    def inverse(self, x: Any, *, out: Any | None = None) -> Any:
        """Inverse ``x^{-1}`` with ``x ∘ x^{-1} = x^{-1} ∘ x = e``."""

        if self.is_identity(x):
            return x if out is None else self.identity(x, out=out)
        return write_into(out, self._operation.inverse(x))

    def compose(self, x: Any, y: Any, *, out: Any | None = None) -> Any:
        """Group product ``x ∘ y``."""

        x_is_identity = self.is_identity(x)
        y_is_identity = self.is_identity(y)
        if x_is_identity and y_is_identity:
            return x if out is None else self.identity(x, out=out)
        if x_is_identity:
            return write_into(out, y)
        if y_is_identity:
            return write_into(out, x)
        return write_into(out, self._operation.compose(x, y))

    def translate(
        self,
        x: Any,
        y: Any,
        direction: ActionDirection = ActionDirection.LEFT,
        *,
        out: Any | None = None,
    ) -> Any:
        """
        Translate ``y`` by ``x``.

        ``LEFT`` gives ``L_x(y) = x ∘ y`` and ``RIGHT`` gives
        ``R_x(y) = y ∘ x``.
        """

        if direction is ActionDirection.LEFT:
            return self.compose(x, y, out=out)
        return self.compose(y, x, out=out)

    def inverse_translate(
        self,
        x: Any,
        y: Any,
        direction: ActionDirection = ActionDirection.LEFT,
        *,
        out: Any | None = None,
    ) -> Any:
        """Translate ``y`` by ``x^{-1}``."""

        return self.translate(self.inverse(x), y, direction, out=out)

    def translate_diff(
        self,
        x: Any,
        y: Any,
        v: Any,
        direction: ActionDirection = ActionDirection.LEFT,
        *,
        out: Any | None = None,
    ) -> Any:
        """
        Push ``v`` in the tangent space at ``y`` through the translation by ``x``.

        The result lies in the tangent space at ``x ∘ y`` (``LEFT``) or
        ``y ∘ x`` (``RIGHT``). Addition groups translate affinely, so ``v`` is
        returned unchanged; other groups need a differential supplied with the
        operation or by the wrapped manifold.

        Raises
        ------
        OperationNotImplementedError
            If no differential is known for this group.
        ValueError
            If ``x`` or ``y`` is the identity sentinel of another group.
        """

        x_is_identity = self.is_identity(x)
        y_is_identity = self.is_identity(y)
        if x_is_identity or self._operation.kind is OperationKind.ADDITION:
            return write_into(out, v)
        if y_is_identity:
            y = self.identity(x)
        differential = self._operation.translate_diff
        if differential is not None:
            return write_into(out, differential(x, y, v, direction))
        inner = getattr(self.manifold, "translate_diff", None)
        if callable(inner):
            return write_into(out, inner(x, y, v, direction))
        raise OperationNotImplementedError("translate_diff", self.kind)

    def inverse_translate_diff(
        self,
        x: Any,
        y: Any,
        v: Any,
        direction: ActionDirection = ActionDirection.LEFT,
        *,
        out: Any | None = None,
    ) -> Any:
        """Differential of the translation by ``x^{-1}`` applied to ``v``."""

        return self.translate_diff(self.inverse(x), y, v, direction, out=out)

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------
    def is_close(
        self, x: Any, y: Any, *, tolerance: Tolerance | None = None
    ) -> bool:
        x_is_identity = self.is_identity(x)
        y_is_identity = self.is_identity(y)
        if x_is_identity and y_is_identity:
            return True
        if x_is_identity:
            return self.manifold.is_close(self.identity(y), y, tolerance=tolerance)
        if y_is_identity:
            return self.manifold.is_close(x, self.identity(x), tolerance=tolerance)
        return self.manifold.is_close(x, y, tolerance=tolerance)


__all__ = ["GROUP_OPERATIONS", "GroupManifold"]
