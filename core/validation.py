# Polychora: 4D Geometric Algebra and Polytope Meshes (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Lightweight input validation for Polychora.

All checks use ``assert`` so they are free under ``python -O``.
Set ``VALIDATE = False`` to disable even without the -O flag.
"""

import torch

VALIDATE = True


def check_multivector(x: torch.Tensor, algebra, name: str = "x") -> None:
    """Assert *x* looks like a multivector for *algebra*.

    Checks ``x.ndim >= 1`` and ``x.shape[-1] == algebra.dim``.
    """
    if not VALIDATE:
        return
    assert x.ndim >= 1, (
        f"{name}: expected ndim >= 1, got shape {tuple(x.shape)}"
    )
    assert x.shape[-1] == algebra.dim, (
        f"{name}: last dim should be {algebra.dim} (algebra dim), "
        f"got {x.shape[-1]} (shape {tuple(x.shape)})"
    )


def check_points(x: torch.Tensor, name: str = "points") -> None:
    """Assert *x* is a batch of 4D points, shape ``[N, 4]``."""
    if not VALIDATE:
        return
    assert x.ndim == 2 and x.shape[-1] == 4, (
        f"{name}: expected shape [N, 4], got {tuple(x.shape)}"
    )


def check_facets(facets, n_verts: int, name: str = "facets") -> None:
    """Assert every facet only references existing vertices.

    Arity is not checked here; edge/face derivation rejects bad arities with
    :class:`mesh.geometry.FacetArityError`.
    """
    if not VALIDATE:
        return
    for i, facet in enumerate(facets):
        for index in facet:
            assert 0 <= index < n_verts, (
                f"{name}[{i}]: vertex index {index} out of range for {n_verts} vertices"
            )
