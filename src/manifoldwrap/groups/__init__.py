"""Lie group algebra layered on manifolds through the decorator mechanism."""

from .group import GROUP_OPERATIONS, GroupManifold
from .identity import ActionDirection, Identity
from .operation import ADDITION, MULTIPLICATION, GroupOperation, OperationKind
from .special_orthogonal import SpecialOrthogonal
from .translation import TranslationGroup

__all__ = [
    "ADDITION",
    "GROUP_OPERATIONS",
    "MULTIPLICATION",
    "ActionDirection",
    "GroupManifold",
    "GroupOperation",
    "Identity",
    "OperationKind",
    "SpecialOrthogonal",
    "TranslationGroup",
]
