from __future__ import annotations

import numpy as np
import pytest
from manifoldwrap.errors import OperationNotImplementedError
from manifoldwrap.geometry import DispatchKind, Manifold, resolve_operation
from manifoldwrap.groups import (
    ADDITION,
    MULTIPLICATION,
    ActionDirection,
    GroupManifold,
    GroupOperation,
    Identity,
    OperationKind,
    SpecialOrthogonal,
    TranslationGroup,
)
from pymanopt.manifolds import Euclidean, Sphere


def _refuse(*args):
    raise AssertionError("operation must not be evaluated")


REFUSING = GroupOperation.custom(
    identity=lambda x: np.zeros_like(np.asarray(x)),
    inverse=_refuse,
    compose=_refuse,
    name="refusing",
)


# Affine maps t -> a t + b of the line, stored as (a, b).
def _affine_compose(x, y):
    return np.array([x[0] * y[0], x[0] * y[1] + x[1]])


def _affine_inverse(x):
    return np.array([1.0 / x[0], -x[1] / x[0]])


def _affine_translate_diff(x, y, v, direction):
    if direction is ActionDirection.LEFT:
        return x[0] * np.asarray(v)
    return np.array([x[0] * v[0], x[1] * v[0] + v[1]])


AFFINE = GroupOperation.custom(
    identity=lambda x: np.array([1.0, 0.0]),
    inverse=_affine_inverse,
    compose=_affine_compose,
    translate_diff=_affine_translate_diff,
    name="affine",
)


@pytest.fixture(params=["translation", "rotation"])
def group(request):
    if request.param == "translation":
        return TranslationGroup(3)
    if request.param == "rotation":
        return SpecialOrthogonal(3)
    raise RuntimeError("Unsupported group fixture")  # pragma: no cover


def test_compose_with_inverse_is_identity(group):
    x = group.random_point()
    e = group.identity(x)
    assert group.is_close(group.compose(x, group.inverse(x)), e)
    assert group.is_close(group.compose(group.inverse(x), x), e)
    assert group.is_close(group.compose(x, group.identity_element), x)


def test_compose_is_associative(group):
    x, y, z = (group.random_point() for _ in range(3))
    left = group.compose(group.compose(x, y), z)
    right = group.compose(x, group.compose(y, z))
    assert group.is_close(left, right)


def test_translate_directions(group):
    x = group.random_point()
    y = group.random_point()
    assert group.is_close(group.translate(x, y), group.compose(x, y))
    assert group.is_close(
        group.translate(x, y, ActionDirection.RIGHT), group.compose(y, x)
    )
    for direction in ActionDirection:
        moved = group.translate(x, y, direction)
        assert group.is_close(group.inverse_translate(x, moved, direction), y)


def test_group_points_stay_on_manifold(group):
    x = group.random_point()
    y = group.random_point()
    assert group.is_point(group.compose(x, y))
    assert group.is_point(group.inverse(x))
    assert group.is_point(group.identity(x))


def test_geometry_passes_through(group):
    x = group.random_point()
    assert group.dimension() == group.manifold.dimension()
    assert group.dispatch_kind("exp") is DispatchKind.PASS_THROUGH
    assert group.dispatch_kind("compose") is DispatchKind.OVERRIDE
    assert resolve_operation(group, "exp") is group.manifold
    v = 0.1 * group.random_tangent(x)
    assert np.allclose(group.exp(x, v), group.manifold.exp(x, v))


def test_identity_short_circuits_without_evaluating():
    refusing = GroupManifold(Manifold.from_pymanopt(Euclidean(2)), REFUSING)
    e = refusing.identity_element
    y = np.array([1.0, 2.0])
    assert refusing.compose(e, y) is y
    assert refusing.compose(y, e) is y
    assert refusing.compose(e, e) is e
    assert refusing.inverse(e) is e
    assert refusing.identity(e) is e
    assert refusing.translate(e, y) is y


def test_identity_sentinel_materializes(group):
    x = group.random_point()
    e = group.identity_element
    assert isinstance(e, Identity)
    assert np.allclose(e(x), group.identity(x))
    assert group.is_identity(e)
    assert not group.is_identity(x)


def test_foreign_identity_is_rejected():
    first = TranslationGroup(2)
    second = TranslationGroup(2)
    with pytest.raises(ValueError):
        first.compose(second.identity_element, np.zeros(2))
    assert first.identity_element != second.identity_element


def test_out_buffers_receive_results():
    group = TranslationGroup(3)
    x = np.array([1.0, 2.0, 3.0])
    y = np.array([0.5, 0.5, 0.5])
    out = np.empty(3)
    assert group.compose(x, y, out=out) is out
    assert np.allclose(out, x + y)
    assert group.inverse(x, out=out) is out
    assert np.allclose(out, -x)
    assert group.identity(group.identity_element, out=out) is out
    assert np.allclose(out, 0.0)
    assert group.compose(group.identity_element, y, out=out) is out
    assert np.allclose(out, y)


def test_rotation_out_buffer():
    group = SpecialOrthogonal(3)
    x = group.random_point()
    out = np.zeros((3, 3))
    group.identity(x, out=out)
    assert np.allclose(out, np.eye(3))
    group.inverse(x, out=out)
    assert np.allclose(out, x.T)


def test_addition_translate_diff_is_identity_map():
    group = TranslationGroup(3)
    x = np.array([1.0, 0.0, 0.0])
    y = np.array([0.0, 1.0, 0.0])
    v = np.array([0.3, -0.2, 0.1])
    for direction in ActionDirection:
        assert np.allclose(group.translate_diff(x, y, v, direction), v)
        assert np.allclose(group.inverse_translate_diff(x, y, v, direction), v)


def test_missing_translate_diff_raises():
    group = GroupManifold(Manifold.from_pymanopt(Sphere(3)), MULTIPLICATION)
    x = group.random_point()
    v = group.random_tangent(x)
    with pytest.raises(OperationNotImplementedError):
        group.translate_diff(x, x, v)
    assert np.allclose(group.translate_diff(group.identity_element, x, v), v)


def test_group_requires_operation():
    with pytest.raises(TypeError):
        GroupManifold(Manifold.from_pymanopt(Euclidean(2)), "addition")  # type: ignore[arg-type]


def test_is_close_with_identity():
    group = TranslationGroup(2)
    e = group.identity_element
    assert group.is_close(e, np.zeros(2))
    assert group.is_close(np.zeros(2), e)
    assert group.is_close(e, e)
    assert not group.is_close(e, np.ones(2))


def test_custom_operation_kind():
    assert REFUSING.kind.value == "custom"
    assert ADDITION.kind.value == "addition"


def test_custom_operation_forms_a_group():
    affine = GroupManifold(Manifold.from_pymanopt(Euclidean(2)), AFFINE)
    assert affine.operation.kind is OperationKind.CUSTOM
    x = np.array([2.0, 1.0])
    y = np.array([-0.5, 3.0])
    z = np.array([4.0, -2.0])
    e = affine.identity(x)
    assert np.allclose(e, [1.0, 0.0])
    assert np.allclose(affine.compose(x, y), [-1.0, 7.0])
    assert np.allclose(affine.compose(x, affine.inverse(x)), e)
    assert np.allclose(affine.compose(affine.inverse(x), x), e)
    assert np.allclose(
        affine.compose(affine.compose(x, y), z),
        affine.compose(x, affine.compose(y, z)),
    )
    assert affine.is_close(affine.compose(x, affine.identity_element), x)
    moved = affine.translate(x, y, ActionDirection.RIGHT)
    assert np.allclose(moved, affine.compose(y, x))


def test_custom_operation_translate_diff():
    affine = GroupManifold(Manifold.from_pymanopt(Euclidean(2)), AFFINE)
    x = np.array([2.0, 1.0])
    y = np.array([-0.5, 3.0])
    v = np.array([0.5, 0.25])
    assert np.allclose(affine.translate_diff(x, y, v), [1.0, 0.5])
    assert np.allclose(
        affine.translate_diff(x, y, v, ActionDirection.RIGHT), [1.0, 0.75]
    )
    out = np.empty(2)
    assert affine.translate_diff(x, affine.identity_element, v, out=out) is out
    assert np.allclose(out, [1.0, 0.5])


@pytest.mark.parametrize("position", ["x", "y"])
def test_translate_diff_rejects_foreign_identity(position):
    first = TranslationGroup(2)
    second = TranslationGroup(2)
    point = np.zeros(2)
    v = np.ones(2)
    foreign = second.identity_element
    x, y = (foreign, point) if position == "x" else (point, foreign)
    with pytest.raises(ValueError):
        first.translate_diff(x, y, v)
