"""Shared numerical helpers."""

from .numeric import (
    as_array,
    difference_norm,
    is_sequence,
    split_components,
    stack_components,
    write_into,
)

__all__ = [
    "as_array",
    "difference_norm",
    "is_sequence",
    "split_components",
    "stack_components",
    "write_into",
]
