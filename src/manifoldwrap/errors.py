"""Exceptions raised by manifold operations."""

from __future__ import annotations


class ManifoldDomainError(ValueError):
    """
    A value failed a structural or geometric validity check.

    Parameters
    ----------
    reason:
        Human-readable description of the failed check.
    context:
        Where the check failed, e.g. the manifold name or ``"component 2"``
        for a power manifold element.
    """

    def __init__(self, reason: str, *, context: str | None = None) -> None:
        self.reason = reason
        self.context = context
        message = reason if context is None else f"{context}: {reason}"
        super().__init__(message)


class OperationNotImplementedError(NotImplementedError):
    """No layer of a manifold provides an implementation of ``operation``."""

    def __init__(self, operation: str, manifold_kind: str) -> None:
        self.operation = operation
        self.manifold_kind = manifold_kind
        super().__init__(
            f"Operation {operation!r} is not implemented for {manifold_kind}"
        )


__all__ = ["ManifoldDomainError", "OperationNotImplementedError"]
