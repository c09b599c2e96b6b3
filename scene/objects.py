# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Placed 4D objects: transform holders for meshes and cameras.

Reference:
    Steven Hollasch, "Four-Space Visualization of 4D Objects" (1991).
    https://hollasch.github.io/ray4/Four-Space_Visualization_of_4D_Objects.html
"""

import math

import torch

from core.affine import Matrix5, Space3_4
from core.rotor import Rotor4
from core.vector import Vector4
from mesh.geometry import Geometry4

# World basis directions; they fix the absolute orientation of directional
# objects such as cameras
BASIS_FORWARD = Vector4(0, 0, 0, -1)
BASIS_UP = Vector4(0, 1, 0, 0)
BASIS_OVER = Vector4(0, 0, 1, 0)


class Object4:
    """Position, rotation and scale of something placed in 4-space.

    Attributes:
        pos (Vector4): Translation.
        rot (Rotor4): Orientation.
        rot2 (Rotor4): Secondary rotation applied after ``rot``.
        scl (Vector4): Per-axis scale.
    """

    name = "Object"

    def __init__(self, pos: Vector4 = None, rot: Rotor4 = None, scl: Vector4 = None):
        self.pos = pos if pos is not None else Vector4()
        self.rot = rot if rot is not None else Rotor4()
        self.rot2 = Rotor4()
        self.scl = scl if scl is not None else Vector4(1, 1, 1, 1)

    def local_forward(self) -> Vector4:
        return self.local_vector(BASIS_FORWARD)

    def local_up(self) -> Vector4:
        return self.local_vector(BASIS_UP)

    def local_over(self) -> Vector4:
        return self.local_vector(BASIS_OVER)

    def local_vector(self, vector: Vector4) -> Vector4:
        return self.rot.rotate_vector(vector)

    def projection_matrix(self) -> Matrix5:
        """Orthonormal view basis of this object, as the columns of a Matrix5.

        Column 3 is the forward direction; columns 0-2 come from ternary
        cross products with the local up and over directions so the view
        keeps its roll. Dotting a point with column ``n`` gives its ``n``-th
        view-space coordinate.
        """
        forward = self.local_forward().normalize()
        up = self.local_up()
        over = self.local_over()

        col0 = up.cross(over, forward).normalize()
        col1 = over.cross(forward, col0).normalize()
        col2 = forward.cross(col0, col1).normalize()

        return Matrix5([col0, col1, col2, forward])

    def local_space(self) -> Space3_4:
        return Space3_4(self.local_forward(), self.pos)

    def translate_forward(self, distance: float) -> "Object4":
        self.pos = self.pos.add(self.local_forward().mult_scalar(distance))
        return self

    def clone(self) -> "Object4":
        return Object4(self.pos.clone(), self.rot.clone(), self.scl.clone())

    def eq(self, other: "Object4") -> bool:
        return (self.pos.eq(other.pos)
                and self.rot.eq(other.rot)
                and self.scl.eq(other.scl))


class Camera4(Object4):
    """A 4D camera looking along its local forward direction.

    Attributes:
        using_perspective (bool): Perspective (True) or orthographic projection.
        focal_length (float): ``tan(fov_angle / 2)``.
        radius (float): Half-extent of the orthographic view; also the fixed
            depth reported for every point in orthographic mode.
    """

    name = "Camera"

    def __init__(self, pos: Vector4 = None, rot: Rotor4 = None,
                 using_perspective: bool = True, focal_length: float = 1.0, radius: float = 1.0):
        super().__init__(pos, rot)
        self.using_perspective = bool(using_perspective)
        self.focal_length = focal_length
        self.radius = radius

    @property
    def focal_length(self) -> float:
        return self._focal_length

    @focal_length.setter
    def focal_length(self, focal_length: float):
        if math.isnan(focal_length):
            raise TypeError(f"{focal_length} not a number")
        if focal_length <= 0:
            raise ValueError(f"Focal length {focal_length} not positive")
        self._focal_length = float(focal_length)

    @property
    def fov_angle(self) -> float:
        return 2 * math.atan(self.focal_length)

    @fov_angle.setter
    def fov_angle(self, angle: float):
        if math.isnan(angle):
            raise TypeError(f"{angle} not a number")
        if angle <= 0 or angle >= math.pi:
            raise ValueError(f"FOV angle {angle} out of range (0, pi)")
        self.focal_length = math.tan(angle / 2)

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, radius: float):
        if math.isnan(radius):
            raise TypeError(f"{radius} not a number")
        if radius <= 0:
            raise ValueError(f"Radius {radius} not positive")
        self._radius = float(radius)

    def viewbox_distance_from(self, vector: Vector4) -> float:
        """Depth of ``vector`` in front of this camera."""
        if self.using_perspective:
            return self.local_forward().dot(vector.subtract(self.pos))
        return self.radius

    def clone(self) -> "Camera4":
        return Camera4(self.pos.clone(), self.rot.clone(),
                       using_perspective=self.using_perspective,
                       focal_length=self.focal_length,
                       radius=self.radius)

    def eq(self, other: "Camera4") -> bool:
        return (self.pos.eq(other.pos)
                and self.rot.eq(other.rot)
                and self.using_perspective == other.using_perspective
                and self.focal_length == other.focal_length
                and self.radius == other.radius)


class Mesh4(Object4):
    """A :class:`Geometry4` placed in the scene."""

    name = "Mesh"

    def __init__(self, geometry: Geometry4, pos: Vector4 = None, rot: Rotor4 = None, scl: Vector4 = None):
        super().__init__(pos, rot, scl)
        self.geometry = geometry

    def transformed_vert_tensor(self) -> torch.Tensor:
        """World-space vertices ``[N, 4]``: scaled, rotated by ``rot`` then ``rot2``, translated."""
        verts = self.geometry.vert_tensor() * self.scl.to_tensor()
        rotation = self.rot.mult(self.rot2).matrix()
        return verts @ rotation.T + self.pos.to_tensor()

    def transformed_verts(self) -> list:
        return [Vector4.from_tensor(row) for row in self.transformed_vert_tensor()]

    def transformed_geometry(self) -> Geometry4:
        return self.geometry.with_verts(self.transformed_verts())
