"""Numerical tolerances shared by validation and approximate equality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .utils.numeric import as_array


@dataclass(frozen=True)
class Tolerance:
    """
    Absolute and relative tolerance used when comparing ambient values.

    Attributes
    ----------
    atol:
        Absolute tolerance passed to :func:`numpy.allclose`.
    rtol:
        Relative tolerance passed to :func:`numpy.allclose`.
    """

    atol: float = 1e-8
    rtol: float = 1e-5

    def __post_init__(self) -> None:
        if self.atol < 0.0 or self.rtol < 0.0:
            raise ValueError("Tolerances must be non-negative")

    def allclose(self, a: Any, b: Any) -> bool:
        """Return ``True`` when ``a`` and ``b`` agree within the tolerance."""

        lhs = as_array(a)
        rhs = as_array(b)
        if lhs.shape != rhs.shape:
            return False
        return bool(np.allclose(lhs, rhs, atol=self.atol, rtol=self.rtol))


DEFAULT_TOLERANCE = Tolerance()


def resolve_tolerance(tolerance: Tolerance | None) -> Tolerance:
    return DEFAULT_TOLERANCE if tolerance is None else tolerance


__all__ = ["DEFAULT_TOLERANCE", "Tolerance", "resolve_tolerance"]
