"""Method tags and metric descriptors used across the manifold interface."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RetractionMethod(Enum):
    """Numerical recipe used by :meth:`Manifold.retract`."""

    EXPONENTIAL = "exponential"
    MANIFOLD = "manifold"
    POLAR = "polar"
    PROJECTION = "projection"
    QR = "qr"


class InverseRetractionMethod(Enum):
    """Numerical recipe used by :meth:`Manifold.inverse_retract`."""

    LOGARITHMIC = "logarithmic"
    POLAR = "polar"
    PROJECTION = "projection"
    QR = "qr"


class VectorTransportMethod(Enum):
    """Recipe used by :meth:`Manifold.vector_transport`.

    ``MANIFOLD`` uses the transport the concrete manifold ships with,
    ``PROJECTION`` projects the vector onto the target tangent space.
    """

    MANIFOLD = "manifold"
    PROJECTION = "projection"


LocalMetricFn = Callable[[Any], Any]


@dataclass(frozen=True)
class Metric:
    """
    Riemannian metric descriptor.

    Parameters
    ----------
    name:
        Identifier of the metric. Two metrics are equal when their names are.
    local_metric:
        Optional callable returning the Gram matrix of the metric at a point,
        acting on flattened tangent coordinates.
    """

    name: str
    local_metric: LocalMetricFn | None = field(default=None, compare=False)


CANONICAL_METRIC = Metric("canonical")


__all__ = [
    "CANONICAL_METRIC",
    "InverseRetractionMethod",
    "LocalMetricFn",
    "Metric",
    "RetractionMethod",
    "VectorTransportMethod",
]
