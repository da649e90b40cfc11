from __future__ import annotations

import importlib.util
from pathlib import Path

import networkx as nx
import numpy as np
from manifoldwrap import GraphManifold, SpecialOrthogonal

EXAMPLE = Path(__file__).resolve().parents[2] / "docs" / "examples" / "rotation_field.py"


def _load_example():
    spec = importlib.util.spec_from_file_location("rotation_field", EXAMPLE)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_diffusion_reduces_field_energy():
    example = _load_example()
    so3 = SpecialOrthogonal(3)
    manifold = GraphManifold(so3, nx.cycle_graph(6))
    x = example.noisy_field(so3, manifold.index_count(), seed=7)
    before = example.field_energy(manifold, x)
    smoothed = example.diffuse(manifold, x, iterations=10)
    after = example.field_energy(manifold, smoothed)
    assert after < 0.5 * before
    assert manifold.is_point(smoothed)


def test_constant_field_is_stationary():
    example = _load_example()
    so3 = SpecialOrthogonal(3)
    manifold = GraphManifold(so3, nx.path_graph(4))
    center = so3.random_point()
    x = [center.copy() for _ in range(4)]
    direction = manifold.neighbor_aggregate(x)
    assert all(np.allclose(v, 0.0, atol=1e-10) for v in direction)
    assert example.field_energy(manifold, x) < 1e-12


def test_main_runs():
    _load_example().main()
