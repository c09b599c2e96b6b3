# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""4D rotors.

A rotor is the even-graded part of the 4D geometric algebra,
``[1, xy, xz, xw, yz, yw, zw, xyzw]``. It is the 4D analogue of a quaternion
and is equivalent to a pair of them. A unit rotor applied with the sandwich
product ``~R v R`` performs a rotation.

The products below are written out in closed form. They are the Cl(4,0)
Cayley table restricted to the grades involved; :mod:`core.algebra` holds the
generic table they are checked against.

Reference:
    Marc ten Bosch, "Let's remove Quaternions from every 3D Engine".
    https://marctenbosch.com/quaternions/
"""

import math

import torch

from core.multivector import Multivector, ieee_divide
from core.vector import Vector4


class Rotor4(Multivector):
    """Even-graded versor of 4-space.

    Attributes:
        [0]: Scalar part, cosine of half the rotation angle for simple rotors.
        [1:7]: Bivector part (``xy, xz, xw, yz, yw, zw``), the rotation plane.
        [7]: Pseudoscalar ``xyzw``. Only appears when rotors are composed
            (double rotations), never from a single geometric product of
            two vectors.
    """

    __slots__ = ()

    LENGTH = 8

    def __init__(self, scalar=1.0, xy=0.0, xz=0.0, xw=0.0, yz=0.0, yw=0.0, zw=0.0, xyzw=0.0):
        super().__init__((scalar, xy, xz, xw, yz, yw, zw, xyzw))

    @classmethod
    def identity(cls) -> "Rotor4":
        return cls()

    @classmethod
    def scalar_bivector(cls, scalar: float, bivector, xyzw: float = 0.0) -> "Rotor4":
        return cls(scalar, *bivector, xyzw)

    @classmethod
    def between(cls, vector0: Vector4, vector1: Vector4) -> "Rotor4":
        """Computes the rotor that rotates ``vector0`` towards ``vector1``.

        Both vectors are expected to be unit length. The rotor is
        ``normalize(1 + v0.v1 + v0^v1)``, which halves the angle between them.

        Anti-parallel vectors are a degenerate case: the candidate rotor is
        zero and normalizing it yields NaNs, because any plane containing
        the vectors would do.
        """
        return cls.scalar_bivector(1 + vector0.dot(vector1), vector0.outer(vector1)).normalize()

    @classmethod
    def plane_angle(cls, axis_components, angle: float) -> "Rotor4":
        """Builds the rotor turning ``angle`` radians across a plane.

        Args:
            axis_components: ``[xy, xz, xw, yz, yw, zw]`` plus an optional
                ``xyzw`` coefficient describing the plane. They are normalized
                on a copy; the passed sequence is not modified.
            angle: Rotation angle in radians.

        Returns:
            Rotor4: Unit rotor, or the identity when every plane component
            is zero.
        """
        axis = Multivector(axis_components)
        # A zero plane would normalize to NaNs; it means "no rotation"
        if axis.is_zero():
            return cls()
        axis.normalize().scale(math.sin(angle / 2))

        return cls(math.cos(angle / 2), *axis).normalize()

    def inverse(self) -> "Rotor4":
        """Reverse of this rotor: the bivector grade is negated.

        Equals the inverse for unit rotors. Callers normalize separately.
        """
        return Rotor4(self[0], -self[1], -self[2], -self[3], -self[4], -self[5], -self[6], self[7])

    def mult(self, rotor: "Rotor4") -> "Rotor4":
        """Geometric product ``self * rotor``.

        Composes rotations: rotating by the product applies ``self`` first
        and ``rotor`` second.
        """
        r0 = self
        r1 = rotor

        return Rotor4(
            + r0[0]*r1[0] - r0[1]*r1[1] - r0[2]*r1[2] - r0[3]*r1[3] - r0[4]*r1[4] - r0[5]*r1[5] - r0[6]*r1[6] + r0[7]*r1[7],  # 1
            + r0[0]*r1[1] + r0[1]*r1[0] - r0[2]*r1[4] - r0[3]*r1[5] + r0[4]*r1[2] + r0[5]*r1[3] - r0[6]*r1[7] - r0[7]*r1[6],  # XY
            + r0[0]*r1[2] + r0[1]*r1[4] + r0[2]*r1[0] - r0[3]*r1[6] - r0[4]*r1[1] + r0[5]*r1[7] + r0[6]*r1[3] + r0[7]*r1[5],  # XZ
            + r0[0]*r1[3] + r0[1]*r1[5] + r0[2]*r1[6] + r0[3]*r1[0] - r0[4]*r1[7] - r0[5]*r1[1] - r0[6]*r1[2] - r0[7]*r1[4],  # XW
            + r0[0]*r1[4] - r0[1]*r1[2] + r0[2]*r1[1] - r0[3]*r1[7] + r0[4]*r1[0] - r0[5]*r1[6] + r0[6]*r1[5] - r0[7]*r1[3],  # YZ
            + r0[0]*r1[5] - r0[1]*r1[3] + r0[2]*r1[7] + r0[3]*r1[1] + r0[4]*r1[6] + r0[5]*r1[0] - r0[6]*r1[4] + r0[7]*r1[2],  # YW
            + r0[0]*r1[6] - r0[1]*r1[7] - r0[2]*r1[3] + r0[3]*r1[2] - r0[4]*r1[5] + r0[5]*r1[4] + r0[6]*r1[0] - r0[7]*r1[1],  # ZW
            + r0[0]*r1[7] + r0[1]*r1[6] - r0[2]*r1[5] + r0[3]*r1[4] + r0[4]*r1[3] - r0[5]*r1[2] + r0[6]*r1[1] + r0[7]*r1[0],  # XYZW
        )

    def sandwich_partial(self, vector) -> list:
        """First pass of the sandwich product, ``~R * v``.

        Returns the 8 coefficients ``[x, y, z, w, xyz, xyw, xzw, yzw]`` of the
        rank-1 plus rank-3 intermediate.
        """
        r0 = self.inverse()
        v0 = vector

        return [
            + r0[0]*v0[0] + r0[1]*v0[1] + r0[2]*v0[2] + r0[3]*v0[3],  # X
            + r0[0]*v0[1] - r0[1]*v0[0] + r0[4]*v0[2] + r0[5]*v0[3],  # Y
            + r0[0]*v0[2] - r0[2]*v0[0] - r0[4]*v0[1] + r0[6]*v0[3],  # Z
            + r0[0]*v0[3] - r0[3]*v0[0] - r0[5]*v0[1] - r0[6]*v0[2],  # W

            + r0[1]*v0[2] - r0[2]*v0[1] + r0[4]*v0[0] + r0[7]*v0[3],  # XYZ
            + r0[1]*v0[3] - r0[3]*v0[1] + r0[5]*v0[0] - r0[7]*v0[2],  # XYW
            + r0[2]*v0[3] - r0[3]*v0[2] + r0[6]*v0[0] + r0[7]*v0[1],  # XZW
            + r0[4]*v0[3] - r0[5]*v0[2] + r0[6]*v0[1] - r0[7]*v0[0],  # YZW
        ]

    def rotate_vector(self, vector) -> Vector4:
        """Applies this rotor onto a 4D vector.

        Computes ``~R v R`` in two passes. The first leaves a rank-1 plus
        rank-3 object; multiplying it by ``R`` cancels every rank-3 term for
        a unit rotor, so only the vector part is evaluated.

        Args:
            vector: The starting vector, which will not be modified.

        Returns:
            Vector4: A new vector with the rotation applied.
        """
        v1 = self.sandwich_partial(vector)
        r1 = self

        return Vector4(
            + v1[0]*r1[0] - v1[1]*r1[1] - v1[2]*r1[2] - v1[3]*r1[3] - v1[4]*r1[4] - v1[5]*r1[5] - v1[6]*r1[6] + v1[7]*r1[7],  # X
            + v1[0]*r1[1] + v1[1]*r1[0] - v1[2]*r1[4] - v1[3]*r1[5] + v1[4]*r1[2] + v1[5]*r1[3] - v1[6]*r1[7] - v1[7]*r1[6],  # Y
            + v1[0]*r1[2] + v1[1]*r1[4] + v1[2]*r1[0] - v1[3]*r1[6] - v1[4]*r1[1] + v1[5]*r1[7] + v1[6]*r1[3] + v1[7]*r1[5],  # Z
            + v1[0]*r1[3] + v1[1]*r1[5] + v1[2]*r1[6] + v1[3]*r1[0] - v1[4]*r1[7] - v1[5]*r1[1] - v1[6]*r1[2] - v1[7]*r1[4],  # W
        )

    def matrix(self, dtype=torch.float64) -> torch.Tensor:
        """4x4 rotation matrix whose column ``j`` is the rotated basis vector ``e_j``.

        Row vectors are rotated in batch with ``verts @ R.matrix().T``.
        """
        columns = [self.rotate_vector(basis).tolist() for basis in (
            Vector4(1, 0, 0, 0),
            Vector4(0, 1, 0, 0),
            Vector4(0, 0, 1, 0),
            Vector4(0, 0, 0, 1),
        )]
        return torch.tensor(columns, dtype=dtype).T

    def clone(self) -> "Rotor4":
        return Rotor4(*self)

    def as_angle_plane(self) -> list:
        return [self.angle, *self.plane]

    @property
    def angle(self) -> float:
        """Rotation angle, ``2 acos(scalar)``."""
        return 2 * math.acos(max(-1.0, min(1.0, self[0])))

    @property
    def plane(self) -> Multivector:
        """The 7 non-scalar components divided by ``sin(angle / 2)``.

        Not defined at angles 0 and 2π, where the components become NaN/inf.
        """
        return Multivector(self[1:8]).scale(ieee_divide(1.0, math.sin(self.angle / 2)))

    def __mul__(self, other):
        if isinstance(other, Rotor4):
            return self.mult(other)
        return NotImplemented

    def __invert__(self):
        return self.inverse()
