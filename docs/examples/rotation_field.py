"""Diffusing a field of rotations over a cycle graph."""

from __future__ import annotations

import logging

import networkx as nx
import numpy as np
from manifoldwrap import GraphManifold, SpecialOrthogonal, ValidationManifold

logger = logging.getLogger(__name__)


def field_energy(manifold: GraphManifold, x: list[np.ndarray]) -> float:
    """Sum of squared geodesic distances across the edges of the graph."""

    rotations = manifold.manifold
    return float(
        sum(
            rotations.distance(x[source], x[target]) ** 2
            for source, target in manifold.graph.edges()
        )
    )


def diffuse(
    manifold: GraphManifold,
    x: list[np.ndarray],
    *,
    step: float = 0.2,
    iterations: int = 25,
) -> list[np.ndarray]:
    """Move every vertex towards its neighbors along ``neighbor_aggregate``."""

    for iteration in range(iterations):
        direction = manifold.neighbor_aggregate(x)
        x = manifold.exp(x, [step * v for v in direction])
        logger.debug("iteration %d: energy %.6g", iteration, field_energy(manifold, x))
    return x


def noisy_field(
    group: SpecialOrthogonal, count: int, *, scale: float = 0.3, seed: int = 0
) -> list[np.ndarray]:
    """Rotations scattered around a common random rotation."""

    rng = np.random.default_rng(seed)
    center = group.random_point()
    field = []
    for _ in range(count):
        a = scale * rng.standard_normal((3, 3))
        field.append(group.exp(center, 0.5 * (a - a.T)))
    return field


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    so3 = SpecialOrthogonal(3)
    manifold = GraphManifold(ValidationManifold(so3), nx.cycle_graph(8))
    x = noisy_field(so3, manifold.index_count())
    logger.info("initial energy %.4f", field_energy(manifold, x))
    x = diffuse(manifold, x)
    logger.info("final energy %.4f", field_energy(manifold, x))
    # Group structure is still available on each vertex.
    spread = [so3.compose(so3.inverse(x[0]), point) for point in x]
    deviation = max(so3.distance(np.eye(3), r) for r in spread)
    logger.info("max deviation from vertex 0: %.4f", deviation)


if __name__ == "__main__":
    main()
