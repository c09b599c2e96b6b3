# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Multivector Container Class.

Fixed-length sequence of real coefficients shared by every 4D algebra type
(vectors, bivectors, rotors). Arithmetic that the concrete types have in
common lives here; the types themselves only add their own products.
"""

import math


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divides with IEEE-754 semantics instead of raising.

    ``x / 0`` gives ``±inf`` and ``0 / 0`` gives ``nan``, so degenerate
    algebraic input propagates as non-finite numbers.
    """
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


class Multivector:
    """Ordered, fixed-length coefficient container.

    The length is fixed at construction. Missing coefficients are filled with
    zeros and extra ones are dropped.

    Attributes:
        LENGTH (int): Number of coefficients for subclasses with a fixed
            layout. ``None`` means the length is taken from the input.
    """

    __slots__ = ("_components",)

    LENGTH = None

    def __init__(self, components=(), length: int = None):
        if length is None:
            length = self.LENGTH if self.LENGTH is not None else len(components)
        self._components = [0.0] * length
        self.copy(components)

    def set(self, *components):
        """Overwrites the coefficients in place."""
        return self.copy(components)

    def copy(self, components):
        """Copies ``components`` into this multivector, zero-filling the rest."""
        components = list(components)
        for i in range(len(self._components)):
            self._components[i] = float(components[i]) if i < len(components) else 0.0
        return self

    def scale(self, scalar: float):
        """Multiplies all components by a real number *in place*."""
        for i, value in enumerate(self._components):
            self._components[i] = value * scalar
        return self

    def normalize(self):
        """Divides by the magnitude in place.

        A zero multivector is not guarded against and turns into NaNs.
        """
        return self.scale(ieee_divide(1.0, self.mag))

    def eq(self, other) -> bool:
        """Determines whether two multivectors have the same values."""
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    def is_zero(self) -> bool:
        """Determines whether this multivector consists of only zeros."""
        return all(component == 0 for component in self._components)

    def dot(self, other) -> float:
        return sum(a * b for a, b in zip(self._components, other))

    def clone(self):
        return Multivector(self._components)

    @property
    def mag_sq(self) -> float:
        """Sum of all components squared. Cheaper than ``mag`` for comparisons."""
        return sum(component * component for component in self._components)

    @property
    def mag(self) -> float:
        return math.sqrt(self.mag_sq)

    def tolist(self):
        return list(self._components)

    def __len__(self):
        return len(self._components)

    def __iter__(self):
        return iter(self._components)

    def __getitem__(self, index):
        return self._components[index]

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            raise TypeError("Multivector components cannot be resized")
        self._components[index] = float(value)

    def __eq__(self, other):
        if not isinstance(other, Multivector):
            return NotImplemented
        return self.eq(other)

    __hash__ = None

    def __repr__(self):
        values = ", ".join(f"{c:g}" for c in self._components)
        return f"{type(self).__name__}({values})"
