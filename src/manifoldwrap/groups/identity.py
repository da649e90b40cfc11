"""Identity sentinel and action directions."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - used only for type checking
    from .group import GroupManifold


class ActionDirection(Enum):
    """Translation convention: ``LEFT`` is ``x ∘ y``, ``RIGHT`` is ``y ∘ x``."""

    LEFT = "left"
    RIGHT = "right"

    def switch(self) -> ActionDirection:
        """Return the opposite direction."""

        if self is ActionDirection.LEFT:
            return ActionDirection.RIGHT
        return ActionDirection.LEFT


class Identity:
    """
    Identity element of a specific group manifold.

    The sentinel carries no coordinates. Group operations recognise it and
    short-circuit (``compose(e, y)`` returns ``y`` untouched); call it with an
    element to obtain concrete identity coordinates shaped like that element.
    Two identities are equal only when they belong to the same group.
    """

    __slots__ = ("group",)

    group: GroupManifold

    def __init__(self, group: GroupManifold) -> None:
        object.__setattr__(self, "group", group)

    def __call__(self, x: Any) -> Any:
        return self.group.identity(x)

    def __setattr__(self, key: str, value: Any) -> None:  # pragma: no cover
        raise AttributeError("Identity is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identity):
            return False
        return other.group is self.group

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash((Identity, id(self.group)))

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"Identity({self.group!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (Identity, (self.group,))


__all__ = ["ActionDirection", "Identity"]
