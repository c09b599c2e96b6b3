# Polychora: 4D Geometric Algebra and Polytope Meshes (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0

"""Geometric algebra of 4-space.

Provides the multivector base type, vectors, bivectors, rotors, affine
helpers, and the table-driven reference product.
"""

from .multivector import Multivector, ieee_divide
from .vector import Vector4, Bivector4
from .rotor import Rotor4
from .affine import Matrix5, Line4, Space3_4
from .algebra import EuclideanAlgebra4
from .validation import check_multivector, check_points, check_facets

__all__ = [
    # algebra types
    "Multivector",
    "Vector4",
    "Bivector4",
    "Rotor4",
    "ieee_divide",
    # affine
    "Matrix5",
    "Line4",
    "Space3_4",
    # reference kernel
    "EuclideanAlgebra4",
    # validation
    "check_multivector",
    "check_points",
    "check_facets",
]
