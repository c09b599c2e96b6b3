# Polychora: 4D Geometric Algebra and Polytope Meshes (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Placed objects, cameras, and 4D-to-3D projection."""

from .objects import Object4, Camera4, Mesh4
from .projection import project_tensor, project_vector4, unproject_vector4

__all__ = [
    "Object4",
    "Camera4",
    "Mesh4",
    "project_tensor",
    "project_vector4",
    "unproject_vector4",
]
