from __future__ import annotations

import numpy as np
import pytest
from manifoldwrap.errors import ManifoldDomainError, OperationNotImplementedError
from manifoldwrap.geometry import (
    Manifold,
    PymanoptManifold,
    RetractionMethod,
    VectorTransportMethod,
)
from pymanopt.manifolds import (
    Euclidean,
    Grassmann,
    SkewSymmetric,
    SpecialOrthogonalGroup,
    Sphere,
    Stiefel,
    Symmetric,
)


@pytest.fixture(params=["euclidean", "sphere", "rotations"])
def wrapped(request):
    if request.param == "euclidean":
        return Manifold.from_pymanopt(Euclidean(4)), (4,), 4
    if request.param == "sphere":
        return Manifold.from_pymanopt(Sphere(3)), (3,), 2
    if request.param == "rotations":
        return Manifold.from_pymanopt(SpecialOrthogonalGroup(3)), (3, 3), 3
    raise RuntimeError("Unsupported manifold fixture")  # pragma: no cover


def test_from_pymanopt_returns_adapter(wrapped):
    manifold, shape, dim = wrapped
    assert isinstance(manifold, PymanoptManifold)
    assert manifold.representation_shape() == shape
    assert manifold.dimension() == dim


def test_from_pymanopt_rejects_non_manifold():
    with pytest.raises(TypeError):
        Manifold.from_pymanopt(object())


def test_random_point_is_point(wrapped):
    manifold, _, _ = wrapped
    x = manifold.random_point()
    assert manifold.is_point(x)
    v = manifold.random_tangent(x)
    assert manifold.is_tangent(x, v)


def test_exp_log_round_trip(wrapped):
    manifold, _, _ = wrapped
    x = manifold.random_point()
    v = 0.3 * manifold.random_tangent(x)
    y = manifold.exp(x, v)
    assert manifold.is_point(y)
    assert np.allclose(manifold.log(x, y), v, atol=1e-6)
    assert np.isclose(manifold.distance(x, y), manifold.norm(x, v), atol=1e-6)


def test_norm_matches_inner(wrapped):
    manifold, _, _ = wrapped
    x = manifold.random_point()
    v = manifold.random_tangent(x)
    assert np.isclose(manifold.norm(x, v) ** 2, manifold.inner(x, v, v))


def test_zero_tangent_has_zero_norm(wrapped):
    manifold, _, _ = wrapped
    x = manifold.random_point()
    assert np.isclose(manifold.norm(x, manifold.zero_tangent(x)), 0.0)


def test_check_point_reports_shape_mismatch():
    manifold = Manifold.from_pymanopt(Sphere(3))
    error = manifold.check_point(np.ones(4))
    assert isinstance(error, ManifoldDomainError)
    assert "shape" in error.reason
    assert error.context == manifold.kind


def test_check_point_reports_off_manifold_value():
    manifold = Manifold.from_pymanopt(Sphere(3))
    assert manifold.check_point(np.array([1.0, 0.0, 0.0])) is None
    error = manifold.check_point(np.array([2.0, 0.0, 0.0]))
    assert isinstance(error, ManifoldDomainError)
    with pytest.raises(ManifoldDomainError):
        manifold.is_point(np.array([2.0, 0.0, 0.0]), True)


def test_check_point_rejects_non_finite_entries():
    manifold = Manifold.from_pymanopt(Euclidean(2))
    assert not manifold.is_point(np.array([np.nan, 0.0]))


def test_check_tangent_uses_projection():
    manifold = Manifold.from_pymanopt(Sphere(3))
    x = np.array([1.0, 0.0, 0.0])
    assert manifold.is_tangent(x, np.array([0.0, 1.0, -2.0]))
    assert not manifold.is_tangent(x, np.array([1.0, 1.0, 0.0]))


def test_check_tangent_validates_base_point_on_request():
    manifold = Manifold.from_pymanopt(Sphere(3))
    x = np.array([2.0, 0.0, 0.0])
    v = np.array([0.0, 1.0, 0.0])
    assert not manifold.is_tangent(x, v)
    assert manifold.is_tangent(x, v, check_base_point=False)


def test_vector_transport_methods_agree_on_sphere():
    manifold = Manifold.from_pymanopt(Sphere(3))
    x = manifold.random_point()
    y = manifold.random_point()
    v = manifold.random_tangent(x)
    native = manifold.vector_transport(x, v, y)
    projected = manifold.vector_transport(x, v, y, VectorTransportMethod.PROJECTION)
    assert np.allclose(native, projected)
    assert manifold.is_tangent(y, native)


def test_missing_pymanopt_operation_raises_operation_error():
    manifold = Manifold.from_pymanopt(Stiefel(4, 2))
    x = manifold.random_point()
    with pytest.raises(OperationNotImplementedError) as excinfo:
        manifold.log(x, x)
    assert excinfo.value.operation == "log"
    assert isinstance(excinfo.value, NotImplementedError)


def test_project_point_defaults_to_identity_without_recipe():
    manifold = Manifold.from_pymanopt(Grassmann(4, 2))
    assert not manifold.checks_membership
    value = np.arange(8.0).reshape(4, 2)
    assert np.array_equal(manifold.project_point(value), value)
    assert manifold.is_point(value)


@pytest.mark.parametrize(
    ("family", "value"),
    [
        (SkewSymmetric(3), np.arange(9.0).reshape(3, 3)),
        (Symmetric(3), np.arange(9.0).reshape(3, 3)),
        (Stiefel(4, 2), np.ones((4, 2))),
    ],
)
def test_matrix_families_reject_off_manifold_points(family, value):
    manifold = Manifold.from_pymanopt(family)
    assert manifold.checks_membership
    error = manifold.check_point(value)
    assert isinstance(error, ManifoldDomainError)
    assert "does not lie on the manifold" in error.reason
    with pytest.raises(ManifoldDomainError):
        manifold.is_point(value, True)
    assert manifold.is_point(manifold.project_point(value))
    assert manifold.is_point(manifold.random_point())


def test_stiefel_polar_retraction_keeps_orthonormal_columns():
    manifold = Manifold.from_pymanopt(Stiefel(4, 2))
    x = manifold.random_point()
    v = manifold.random_tangent(x)
    y = manifold.retract(x, v, RetractionMethod.POLAR)
    assert np.allclose(y.T @ y, np.eye(2))
    assert manifold.is_point(y)


def test_explicit_shape_is_kept():
    manifold = Manifold.from_pymanopt(Euclidean(2, 3), shape=(2, 3))
    assert manifold.representation_shape() == (2, 3)
