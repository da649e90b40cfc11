"""Array helpers shared by manifolds, decorators and groups."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np


def is_sequence(value: Any) -> bool:
    return isinstance(value, tuple | list)


def as_array(value: Any) -> np.ndarray:
    """Flatten a value, or a sequence of component values, into one array."""

    if is_sequence(value):
        flattened = [np.asarray(component).ravel() for component in value]
        if not flattened:
            return np.zeros(0)
        return np.concatenate(flattened)
    return np.asarray(value).ravel()


def difference_norm(a: Any, b: Any) -> float:
    return float(np.linalg.norm(as_array(a) - as_array(b)))


def split_components(value: Any, stacked_shape: tuple[int, ...]) -> list[Any]:
    """
    Return the per-index components of a power-manifold value.

    Parameters
    ----------
    value:
        Either a sequence of component values, or an array stacking the
        components along its last axis.
    stacked_shape:
        Shape an array ``value`` must have, index axis last. Arrays of any
        other shape are rejected rather than split along a guessed axis.

    Raises
    ------
    ValueError
        If ``value`` is an array (or scalar) whose shape is not
        ``stacked_shape``.
    """

    if is_sequence(value):
        return list(value)
    array = np.asarray(value)
    expected = tuple(stacked_shape)
    if array.shape != expected:
        raise ValueError(
            f"Expected a sequence of components or an array of shape {expected} "
            f"with the index on the last axis; got shape {array.shape}"
        )
    return [array[..., index] for index in range(array.shape[-1])]


def write_into(out: Any, value: Any) -> Any:
    """
    Copy ``value`` into the caller-owned buffer ``out`` and return ``out``.

    When ``out`` is ``None`` the value is returned unchanged, so callers can
    use one code path for the allocating and the in-place variants.
    """

    if out is None:
        return value
    if is_sequence(out):
        components = value if is_sequence(value) else list(np.asarray(value))
        if len(components) != len(out):
            raise ValueError(
                f"Output buffer holds {len(out)} components, value has {len(components)}"
            )
        for buffer, component in zip(out, components, strict=True):
            write_into(buffer, component)
        return out
    np.copyto(out, np.asarray(value), casting="unsafe")
    return out


def stack_components(components: Sequence[Any]) -> np.ndarray:
    """Stack components along a new trailing axis."""

    return np.stack([np.asarray(component) for component in components], axis=-1)


__all__ = [
    "as_array",
    "difference_norm",
    "is_sequence",
    "split_components",
    "stack_components",
    "write_into",
]
