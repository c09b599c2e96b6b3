# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Rank-1 and rank-2 multivectors of 4-space.

Vectors are stored as ``[x, y, z, w]`` and bivectors as
``[xy, xz, xw, yz, yw, zw]``. Apart from ``scale``/``normalize`` (inherited,
in place), every operation allocates a new object.
"""

import torch

from core.multivector import Multivector


class Bivector4(Multivector):
    """Rank-2 vector, given by the outer product of two 4D vectors.

    Its components are oriented areas rather than lengths. Added to a scalar it
    describes a rotation across the plane; the plane itself is never stored as
    a separate object.
    """

    __slots__ = ()

    LENGTH = 6

    def __init__(self, xy=0.0, xz=0.0, xw=0.0, yz=0.0, yw=0.0, zw=0.0):
        super().__init__((xy, xz, xw, yz, yw, zw))

    def opposite(self) -> "Bivector4":
        """Additive inverse; the same as swapping the operands of the outer product."""
        return Bivector4(*(-c for c in self))

    def clone(self) -> "Bivector4":
        return Bivector4(*self)


class Vector4(Multivector):
    """Rank-1 vector with one component per axis of 4-space."""

    __slots__ = ()

    LENGTH = 4

    def __init__(self, x=0.0, y=0.0, z=0.0, w=0.0):
        super().__init__((x, y, z, w))

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> "Vector4":
        """Builds a vector from a tensor of shape ``[4]``."""
        return cls(*tensor.tolist())

    def to_tensor(self, dtype=torch.float64) -> torch.Tensor:
        return torch.tensor(self.tolist(), dtype=dtype)

    def dot(self, vector) -> float:
        return (self[0] * vector[0]
                + self[1] * vector[1]
                + self[2] * vector[2]
                + self[3] * vector[3])

    def outer(self, vector) -> Bivector4:
        """Wedge product ``self ^ vector``."""
        return Bivector4(
            self[0] * vector[1] - vector[0] * self[1],  # XY
            self[0] * vector[2] - vector[0] * self[2],  # XZ
            self[0] * vector[3] - vector[0] * self[3],  # XW
            self[1] * vector[2] - vector[1] * self[2],  # YZ
            self[1] * vector[3] - vector[1] * self[3],  # YW
            self[2] * vector[3] - vector[2] * self[3],  # ZW
        )

    def cross(self, vector0, vector1) -> "Vector4":
        """Ternary cross product, orthogonal to ``self``, ``vector0`` and ``vector1``.

        The outer product of the two operands supplies every 2x2 determinant
        the 3x3 minors need.
        """
        b = vector0.outer(vector1)

        return Vector4(
            + (self[1] * b[5]) - (self[2] * b[4]) + (self[3] * b[3]),
            - (self[0] * b[5]) + (self[2] * b[2]) - (self[3] * b[1]),
            + (self[0] * b[4]) - (self[1] * b[2]) + (self[3] * b[0]),
            - (self[0] * b[3]) + (self[1] * b[1]) - (self[2] * b[0]),
        )

    def add(self, vector) -> "Vector4":
        return Vector4(
            self[0] + vector[0],
            self[1] + vector[1],
            self[2] + vector[2],
            self[3] + vector[3],
        )

    def subtract(self, vector) -> "Vector4":
        return Vector4(
            self[0] - vector[0],
            self[1] - vector[1],
            self[2] - vector[2],
            self[3] - vector[3],
        )

    def mult_scalar(self, scalar: float) -> "Vector4":
        return Vector4(
            self[0] * scalar,
            self[1] * scalar,
            self[2] * scalar,
            self[3] * scalar,
        )

    def mult_components(self, vector) -> "Vector4":
        return Vector4(
            self[0] * vector[0],
            self[1] * vector[1],
            self[2] * vector[2],
            self[3] * vector[3],
        )

    def mult_rotor(self, rotor) -> "Vector4":
        return rotor.rotate_vector(self)

    def clone(self) -> "Vector4":
        return Vector4(*self)

    def __add__(self, other):
        if isinstance(other, Vector4):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector4):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return self.mult_scalar(other)
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self):
        return self.mult_scalar(-1.0)

    @property
    def x(self) -> float:
        return self[0]

    @property
    def y(self) -> float:
        return self[1]

    @property
    def z(self) -> float:
        return self[2]

    @property
    def w(self) -> float:
        return self[3]
