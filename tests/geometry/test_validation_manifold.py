from __future__ import annotations

import numpy as np
import pytest
from manifoldwrap.config import Tolerance
from manifoldwrap.errors import ManifoldDomainError
from manifoldwrap.geometry import Manifold, ValidationManifold
from pymanopt.manifolds import SpecialOrthogonalGroup, Sphere


@pytest.fixture
def validated_sphere():
    return ValidationManifold(Manifold.from_pymanopt(Sphere(3)))


def test_valid_inputs_pass_through(validated_sphere):
    x = validated_sphere.random_point()
    v = 0.3 * validated_sphere.random_tangent(x)
    y = validated_sphere.exp(x, v)
    assert np.allclose(validated_sphere.log(x, y), v, atol=1e-6)
    assert validated_sphere.norm(x, v) > 0.0
    assert validated_sphere.is_point(y)


def test_exp_rejects_off_manifold_base_point(validated_sphere):
    with pytest.raises(ManifoldDomainError):
        validated_sphere.exp(np.array([2.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0]))


def test_exp_rejects_non_tangent_vector(validated_sphere):
    with pytest.raises(ManifoldDomainError) as excinfo:
        validated_sphere.exp(np.array([1.0, 0.0, 0.0]), np.array([1.0, 0.0, 0.0]))
    assert "tangent" in excinfo.value.reason


def test_log_rejects_wrong_shape(validated_sphere):
    x = validated_sphere.random_point()
    with pytest.raises(ManifoldDomainError):
        validated_sphere.log(x, np.ones(4))


def test_inner_checks_both_vectors(validated_sphere):
    x = np.array([0.0, 0.0, 1.0])
    v = np.array([1.0, 0.0, 0.0])
    with pytest.raises(ManifoldDomainError):
        validated_sphere.inner(x, v, np.array([0.0, 0.0, 1.0]))


def test_vector_transport_validates_target(validated_sphere):
    x = np.array([1.0, 0.0, 0.0])
    v = np.array([0.0, 1.0, 0.0])
    y = np.array([0.0, 0.0, 1.0])
    w = validated_sphere.vector_transport(x, v, y)
    assert np.allclose(w, v)
    with pytest.raises(ManifoldDomainError):
        validated_sphere.vector_transport(x, v, 2.0 * y)


def test_tolerance_controls_acceptance():
    loose = ValidationManifold(
        Manifold.from_pymanopt(Sphere(3)), tolerance=Tolerance(atol=1e-2)
    )
    almost = np.array([1.001, 0.0, 0.0])
    assert np.allclose(loose.zero_tangent(almost), 0.0)
    strict = ValidationManifold(Manifold.from_pymanopt(Sphere(3)))
    with pytest.raises(ManifoldDomainError):
        strict.zero_tangent(almost)


def test_rotations_reject_symmetric_tangent():
    validated = ValidationManifold(Manifold.from_pymanopt(SpecialOrthogonalGroup(3)))
    x = np.eye(3)
    skew = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
    assert np.allclose(validated.exp(x, 0.5 * skew)[2, 2], 1.0)
    with pytest.raises(ManifoldDomainError):
        validated.exp(x, np.eye(3))
