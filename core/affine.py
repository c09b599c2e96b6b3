# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Homogeneous 5x5 transforms and flat subspaces of 4-space."""

import numpy as np

from core.multivector import ieee_divide
from core.vector import Vector4


class Matrix5:
    """A 5x5 matrix stored column by column.

    A point is transformed by dotting it (with an implicit homogeneous 1 as
    its fifth component) with each column, so column ``i`` produces output
    component ``i``.
    """

    SIZE = 5

    def __init__(self, columns=None):
        self._m = np.zeros((self.SIZE, self.SIZE), dtype=np.float64)
        self.copy(columns)

    @classmethod
    def from_translation(cls, offset) -> "Matrix5":
        return cls([
            [1, 0, 0, 0, offset[0]],
            [0, 1, 0, 0, offset[1]],
            [0, 0, 1, 0, offset[2]],
            [0, 0, 0, 1, offset[3]],
            [0, 0, 0, 0, 1],
        ])

    @classmethod
    def _from_array(cls, array: np.ndarray) -> "Matrix5":
        matrix = cls()
        matrix._m[:] = array
        return matrix

    def copy(self, columns):
        """Copies ``columns`` in, zero-filling short columns.

        Column ``i`` gets a 1 on the diagonal whenever it does not reach
        entry ``i`` itself, so missing columns become identity columns.
        """
        for i in range(self.SIZE):
            column = list(columns[i]) if columns is not None and i < len(columns) else []
            for j in range(self.SIZE):
                self._m[j, i] = column[j] if j < len(column) else 0.0
            if len(column) <= i:
                self._m[i, i] = 1.0
        return self

    def column(self, index: int) -> list:
        return self._m[:, index].tolist()

    def to_numpy(self) -> np.ndarray:
        return self._m.copy()

    def clone(self) -> "Matrix5":
        return Matrix5._from_array(self._m)

    def determinant(self) -> float:
        return float(np.linalg.det(self._m))

    def inverse(self) -> "Matrix5":
        """Inverse matrix. Raises ``numpy.linalg.LinAlgError`` when singular."""
        return Matrix5._from_array(np.linalg.inv(self._m))

    def mult(self, matrix: "Matrix5") -> "Matrix5":
        """Composes transforms: the result applies ``self`` first, then ``matrix``."""
        return Matrix5._from_array(self._m @ matrix._m)

    def dot4_with_column(self, vector, column_index: int) -> float:
        """Dots a homogeneous ``Vector4`` with one column of this matrix.

        Components missing from ``vector`` count as 1.
        """
        column = self._m[:, column_index]
        total = 0.0
        for i in range(self.SIZE):
            total += (vector[i] if i < len(vector) else 1.0) * column[i]
        return total

    def transform(self, vector) -> Vector4:
        return Vector4(*(self.dot4_with_column(vector, i) for i in range(4)))

    def __getitem__(self, index):
        return self.column(index)

    def __eq__(self, other):
        if not isinstance(other, Matrix5):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None

    def __repr__(self):
        return f"Matrix5({self._m.T.tolist()})"


class Line4:
    """A line in 4-space, the points ``offset + direction * t``."""

    def __init__(self, direction: Vector4, offset: Vector4 = None):
        self.direction = direction
        self.offset = offset if offset is not None else Vector4()

    def evaluate(self, scalar: float) -> Vector4:
        return self.offset.add(self.direction.mult_scalar(scalar))


class Space3_4:
    """A 3-space in 4-space, given by a normal and a point lying in it."""

    def __init__(self, normal: Vector4, offset: Vector4 = None):
        self.normal = normal
        self.offset = offset if offset is not None else Vector4()

    def intersect_with_line(self, line: Line4) -> float:
        """Line parameter at which ``line`` crosses this 3-space.

        Returns ``±inf`` when the line is parallel to the space and ``nan``
        when it lies inside it.

        Reference:
            https://en.wikipedia.org/wiki/Line%E2%80%93plane_intersection#Algebraic_form
        """
        return ieee_divide(
            self.offset.subtract(line.offset).dot(self.normal),
            line.direction.dot(self.normal),
        )

    def intersection_with_line(self, line: Line4) -> Vector4:
        return line.evaluate(self.intersect_with_line(line))
