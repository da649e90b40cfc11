"""
Projections and retraction recipes for pymanopt manifold families.

pymanopt ships one retraction per manifold and no inverse retractions. The
recipes below provide the polar, QR and projection retractions together with
their inverses for the families where they have closed forms:

``Euclidean``
    projection retraction ``x + v`` and its inverse ``y - x``.
``Sphere``
    projection retraction ``(x + v) / |x + v|`` and its inverse
    ``y / <x, y> - x``.
``SpecialOrthogonalGroup``
    tangent vectors live in the Lie algebra (``y = x expm(v)``); polar and QR
    retractions of ``x (I + v)`` and their inverses.
``Symmetric``, ``SkewSymmetric``
    the symmetric (skew) part as point projection; Euclidean retractions.
``Stiefel``
    the polar factor as point projection and as retraction of ``x + v``.

Every other family has no point projection, so membership checks reduce to
shape and finiteness.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from scipy.linalg import solve_sylvester

from .types import InverseRetractionMethod, RetractionMethod

RetractFn = Callable[[Any, Any], Any]
InverseRetractFn = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class Recipes:
    """Numerical recipes known for one manifold family."""

    project_point: Callable[[Any], Any] | None = None
    projection: Callable[[Any, Any], Any] | None = None
    retractions: Mapping[RetractionMethod, RetractFn] = field(default_factory=dict)
    inverse_retractions: Mapping[InverseRetractionMethod, InverseRetractFn] = field(
        default_factory=dict
    )


def skew(matrix: np.ndarray) -> np.ndarray:
    return 0.5 * (matrix - matrix.T)


# ----------------------------------------------------------------------
# Euclidean
# ----------------------------------------------------------------------
def _euclidean_retract(x: Any, v: Any) -> np.ndarray:
    return np.asarray(x) + np.asarray(v)


def _euclidean_inverse_retract(x: Any, y: Any) -> np.ndarray:
    return np.asarray(y) - np.asarray(x)


# ----------------------------------------------------------------------
# Sphere
# ----------------------------------------------------------------------
def sphere_project_point(x: Any) -> np.ndarray:
    value = np.asarray(x, dtype=float)
    return value / np.linalg.norm(value)


def _sphere_retract(x: Any, v: Any) -> np.ndarray:
    return sphere_project_point(np.asarray(x) + np.asarray(v))


def _sphere_inverse_retract(x: Any, y: Any) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    return y / np.sum(x * y) - x


# ----------------------------------------------------------------------
# Special orthogonal group
# ----------------------------------------------------------------------
def rotation_project_point(x: Any) -> np.ndarray:
    """Closest rotation to ``x`` in Frobenius norm."""

    u, _, vh = np.linalg.svd(np.asarray(x, dtype=float))
    if np.linalg.det(u @ vh) < 0:
        u[:, -1] = -u[:, -1]
    return u @ vh


def rotation_projection(x: Any, v: Any) -> np.ndarray:
    return skew(np.asarray(v, dtype=float))


def polar_retract(x: Any, v: Any) -> np.ndarray:
    """Orthogonal polar factor of ``x (I + v)`` computed by an SVD."""

    x = np.asarray(x, dtype=float)
    u, _, vh = np.linalg.svd(x + x @ np.asarray(v, dtype=float))
    return u @ vh


def polar_inverse_retract(x: Any, y: Any) -> np.ndarray:
    """
    Inverse of :func:`polar_retract`.

    With ``A = x^T y`` the polar factor of ``I + v`` the matrix ``B`` solving
    ``A B + B A^T = -2 I`` equals ``-(I - v^2)^{1/2}``, so ``v`` is the skew
    part of ``-A B``.
    """

    a = np.asarray(x, dtype=float).T @ np.asarray(y, dtype=float)
    n = a.shape[0]
    b = solve_sylvester(a, a.T, -2.0 * np.eye(n))
    c = a @ b
    return 0.5 * (c.T - c)


def qr_retract(x: Any, v: Any) -> np.ndarray:
    """Q factor of ``x (I + v)`` with the sign fixed by a positive diagonal of R."""

    x = np.asarray(x, dtype=float)
    q, r = np.linalg.qr(x + x @ np.asarray(v, dtype=float))
    signs = np.sign(np.diag(r) + 0.5)
    return q * signs


def qr_inverse_retract(x: Any, y: Any) -> np.ndarray:
    """
    Inverse of :func:`qr_retract`.

    Solves column by column for the upper triangular ``R`` such that
    ``x^T y R`` is the identity plus a skew-symmetric matrix.
    """

    a = np.asarray(x, dtype=float).T @ np.asarray(y, dtype=float)
    n = a.shape[0]
    r = np.zeros((n, n))
    for i in range(n):
        b = np.zeros(i + 1)
        b[-1] = 1.0
        b[:-1] = -r[:i, :i].T @ a[i, :i]
        r[: i + 1, i] = np.linalg.solve(a[: i + 1, : i + 1], b)
    c = a @ r
    return 0.5 * (c - c.T)


def _rotation_retract_projection(x: Any, v: Any) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    return rotation_project_point(x + x @ np.asarray(v, dtype=float))


# ----------------------------------------------------------------------
# Symmetric, skew-symmetric and Stiefel matrices
# ----------------------------------------------------------------------
def _transpose(matrix: np.ndarray) -> np.ndarray:
    return np.swapaxes(matrix, -1, -2)


def symmetric_project_point(x: Any) -> np.ndarray:
    value = np.asarray(x, dtype=float)
    return 0.5 * (value + _transpose(value))


def skew_project_point(x: Any) -> np.ndarray:
    value = np.asarray(x, dtype=float)
    return 0.5 * (value - _transpose(value))


def stiefel_project_point(x: Any) -> np.ndarray:
    """Closest matrix with orthonormal columns, the polar factor of ``x``."""

    u, _, vh = np.linalg.svd(np.asarray(x, dtype=float), full_matrices=False)
    return u @ vh


def _stiefel_retract_polar(x: Any, v: Any) -> np.ndarray:
    return stiefel_project_point(np.asarray(x) + np.asarray(v))


_EUCLIDEAN = Recipes(
    retractions={RetractionMethod.PROJECTION: _euclidean_retract},
    inverse_retractions={InverseRetractionMethod.PROJECTION: _euclidean_inverse_retract},
)

_SPHERE = Recipes(
    project_point=sphere_project_point,
    retractions={RetractionMethod.PROJECTION: _sphere_retract},
    inverse_retractions={InverseRetractionMethod.PROJECTION: _sphere_inverse_retract},
)

_SPECIAL_ORTHOGONAL = Recipes(
    project_point=rotation_project_point,
    projection=rotation_projection,
    retractions={
        RetractionMethod.POLAR: polar_retract,
        RetractionMethod.QR: qr_retract,
        RetractionMethod.PROJECTION: _rotation_retract_projection,
    },
    inverse_retractions={
        InverseRetractionMethod.POLAR: polar_inverse_retract,
        InverseRetractionMethod.QR: qr_inverse_retract,
    },
)

_SYMMETRIC = Recipes(
    project_point=symmetric_project_point,
    retractions=_EUCLIDEAN.retractions,
    inverse_retractions=_EUCLIDEAN.inverse_retractions,
)

_SKEW_SYMMETRIC = Recipes(
    project_point=skew_project_point,
    retractions=_EUCLIDEAN.retractions,
    inverse_retractions=_EUCLIDEAN.inverse_retractions,
)

_STIEFEL = Recipes(
    project_point=stiefel_project_point,
    retractions={
        RetractionMethod.POLAR: _stiefel_retract_polar,
        RetractionMethod.PROJECTION: _stiefel_retract_polar,
    },
)

_NO_RECIPES = Recipes()


def recipes_for(manifold: Any) -> Recipes:
    """
    Return the recipes registered for the family of a pymanopt manifold.

    Families without an entry get :data:`_NO_RECIPES`; their points are then
    validated by shape and finiteness only.
    """

    from pymanopt.manifolds import (
        Euclidean,
        SkewSymmetric,
        SpecialOrthogonalGroup,
        Sphere,
        Stiefel,
        Symmetric,
    )

    if isinstance(manifold, SpecialOrthogonalGroup):
        if getattr(manifold, "_k", 1) != 1:
            return _NO_RECIPES
        return _SPECIAL_ORTHOGONAL
    if isinstance(manifold, Sphere):
        return _SPHERE
    if isinstance(manifold, Stiefel):
        return _STIEFEL
    if isinstance(manifold, SkewSymmetric):
        return _SKEW_SYMMETRIC
    if isinstance(manifold, Symmetric):
        return _SYMMETRIC
    if isinstance(manifold, Euclidean):
        return _EUCLIDEAN
    return _NO_RECIPES


__all__ = [
    "Recipes",
    "polar_inverse_retract",
    "polar_retract",
    "qr_inverse_retract",
    "qr_retract",
    "recipes_for",
    "rotation_project_point",
    "rotation_projection",
    "skew",
    "skew_project_point",
    "sphere_project_point",
    "stiefel_project_point",
    "symmetric_project_point",
]
