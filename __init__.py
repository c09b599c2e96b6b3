"""Polychora: 4D geometric algebra and polytope meshes."""

__version__ = "0.1.0"

from core.rotor import Rotor4
from core.vector import Vector4
from mesh.geometry import Geometry4
from scene.projection import project_vector4

__all__ = [
    "__version__",
    "Rotor4",
    "Vector4",
    "Geometry4",
    "project_vector4",
]
