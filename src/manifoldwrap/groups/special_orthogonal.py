"""Special orthogonal group SO(n) under matrix multiplication."""

from __future__ import annotations

from typing import Any

import numpy as np

from ..geometry.manifold import Manifold
from .group import GroupManifold
from .identity import ActionDirection
from .operation import MULTIPLICATION


def _translate_diff(x: Any, y: Any, v: Any, direction: ActionDirection) -> np.ndarray:
    # Tangent vectors are Lie algebra elements in the left-invariant frame.
    v = np.asarray(v)
    if direction is ActionDirection.LEFT:
        return v.copy()
    x = np.asarray(x)
    return x.T @ v @ x


class SpecialOrthogonal(GroupManifold):
    """
    Rotation group SO(n) backed by ``pymanopt``'s ``SpecialOrthogonalGroup``.

    Points are ``n x n`` rotation matrices; tangent vectors at ``x`` are
    skew-symmetric matrices ``v`` representing ``x v``. Left translation
    therefore leaves tangent vectors unchanged and right translation by ``x``
    maps ``v`` to ``x^T v x``.
    """

    def __init__(self, n: int) -> None:
        from pymanopt.manifolds import SpecialOrthogonalGroup

        if n < 1:
            raise ValueError("SpecialOrthogonal requires n >= 1")
        self._n = int(n)
        super().__init__(
            Manifold.from_pymanopt(SpecialOrthogonalGroup(self._n)),
            MULTIPLICATION.with_translate_diff(_translate_diff),
        )

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"SpecialOrthogonal({self._n})"


__all__ = ["SpecialOrthogonal"]
