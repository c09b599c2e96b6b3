# Polychora: 4D Geometric Algebra and Polytope Meshes (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Polytope meshes: storage, derived topology and the construction catalog."""

from .geometry import Geometry4, FacetArityError, facet_key
from . import construction
from .construction import CATALOG, build

__all__ = [
    "Geometry4",
    "FacetArityError",
    "facet_key",
    "construction",
    "CATALOG",
    "build",
]
