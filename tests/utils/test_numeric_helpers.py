from __future__ import annotations

import numpy as np
import pytest
from manifoldwrap.config import DEFAULT_TOLERANCE, Tolerance, resolve_tolerance
from manifoldwrap.errors import ManifoldDomainError, OperationNotImplementedError
from manifoldwrap.utils import as_array, split_components, stack_components, write_into


def test_tolerance_validation():
    with pytest.raises(ValueError):
        Tolerance(atol=-1.0)
    assert resolve_tolerance(None) is DEFAULT_TOLERANCE
    custom = Tolerance(atol=0.1)
    assert resolve_tolerance(custom) is custom


def test_allclose_handles_sequences_and_shapes():
    tol = Tolerance(atol=1e-3)
    assert tol.allclose([np.ones(2), np.zeros(1)], np.array([1.0, 1.0, 0.0005]))
    assert not tol.allclose(np.ones(2), np.ones(3))


def test_as_array_flattens_components():
    flat = as_array([np.ones((2, 2)), np.zeros(1)])
    assert flat.shape == (5,)
    assert as_array([]).shape == (0,)


def test_split_components_layouts():
    stacked = np.arange(6.0).reshape(2, 3)
    parts = split_components(stacked, (2, 3))
    assert len(parts) == 3
    assert np.allclose(parts[1], [1.0, 4.0])
    assert split_components((1, 2), (2,)) == [1, 2]
    assert split_components([np.zeros(3)], (2, 3))[0].shape == (3,)


@pytest.mark.parametrize("value", [3.0, np.arange(6.0).reshape(3, 2), np.zeros(2)])
def test_split_components_rejects_other_layouts(value):
    with pytest.raises(ValueError, match=r"\(2, 3\)"):
        split_components(value, (2, 3))


def test_stack_round_trip():
    parts = [np.array([1.0, 2.0]), np.array([3.0, 4.0])]
    stacked = stack_components(parts)
    assert stacked.shape == (2, 2)
    assert np.allclose(split_components(stacked, (2, 2))[1], parts[1])


def test_write_into_buffers():
    value = np.array([1.0, 2.0])
    assert write_into(None, value) is value
    out = np.zeros(2)
    assert write_into(out, value) is out
    assert np.allclose(out, value)
    buffers = [np.zeros(2), np.zeros(2)]
    write_into(buffers, [value, 2 * value])
    assert np.allclose(buffers[1], 2 * value)
    with pytest.raises(ValueError):
        write_into(buffers, [value])


def test_error_types():
    error = ManifoldDomainError("bad", context="Sphere")
    assert isinstance(error, ValueError)
    assert str(error) == "Sphere: bad"
    assert error.reason == "bad"
    missing = OperationNotImplementedError("exp", "Sphere")
    assert isinstance(missing, NotImplementedError)
    assert missing.operation == "exp"
    assert missing.manifold_kind == "Sphere"
