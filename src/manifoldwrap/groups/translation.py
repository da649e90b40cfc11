"""Translation group: Euclidean space under addition."""

from __future__ import annotations

from ..geometry.manifold import Manifold
from .group import GroupManifold
from .operation import ADDITION


class TranslationGroup(GroupManifold):
    """
    The group of translations of ℝ^shape, i.e. ``Euclidean(*shape)`` with
    :data:`~manifoldwrap.groups.ADDITION`.
    """

    def __init__(self, *shape: int) -> None:
        from pymanopt.manifolds import Euclidean

        if not shape:
            raise ValueError("TranslationGroup needs at least one dimension")
        self._shape = tuple(int(size) for size in shape)
        super().__init__(Manifold.from_pymanopt(Euclidean(*self._shape)), ADDITION)

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"TranslationGroup{self._shape}"


__all__ = ["TranslationGroup"]
