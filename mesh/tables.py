# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Read-only constants shared by the construction routines."""

import math

PHI = (1 + math.sqrt(5)) / 2
IPHI = PHI - 1  # == 1 / PHI

# Two-valued sign table indexed by a single bit
SIGNS = (1, -1)

# Icosahedron: cyclic permutations of (0, ±1, ±φ)
# http://blog.andreaskahler.com/2009/06/creating-icosphere-mesh-in-code.html
ICOSAHEDRON_VERTS = (
    (-1, PHI, 0),
    (1, PHI, 0),
    (-1, -PHI, 0),
    (1, -PHI, 0),
    (0, -1, PHI),
    (0, 1, PHI),
    (0, -1, -PHI),
    (0, 1, -PHI),
    (PHI, 0, -1),
    (PHI, 0, 1),
    (-PHI, 0, -1),
    (-PHI, 0, 1),
)

ICOSAHEDRON_FACES = (
    (0, 11, 5),
    (0, 5, 1),
    (0, 1, 7),
    (0, 7, 10),
    (0, 10, 11),
    (1, 5, 9),
    (5, 11, 4),
    (11, 10, 2),
    (10, 7, 6),
    (7, 1, 8),
    (3, 9, 4),
    (3, 4, 2),
    (3, 2, 6),
    (3, 6, 8),
    (3, 8, 9),
    (4, 9, 5),
    (2, 4, 11),
    (6, 2, 10),
    (8, 6, 7),
    (9, 8, 1),
)

# Dodecahedron, each pentagon split into 3 triangles
# https://github.com/thinks/platonic-solids
DODECAHEDRON_VERTS = (
    (-1, 1, -1),
    (-PHI, 0, IPHI),
    (-PHI, 0, -IPHI),
    (-1, 1, 1),
    (-IPHI, PHI, 0),
    (1, 1, 1),
    (IPHI, PHI, 0),
    (0, IPHI, PHI),
    (-1, -1, 1),
    (0, -IPHI, PHI),
    (-1, -1, -1),
    (-IPHI, -PHI, 0),
    (0, -IPHI, -PHI),
    (0, IPHI, -PHI),
    (1, 1, -1),
    (PHI, 0, -IPHI),
    (PHI, 0, IPHI),
    (1, -1, 1),
    (IPHI, -PHI, 0),
    (1, -1, -1),
)

DODECAHEDRON_FACES = (
    (1, 0, 2),
    (0, 1, 3),
    (0, 3, 4),
    (4, 5, 6),
    (5, 4, 3),
    (5, 3, 7),
    (8, 3, 1),
    (3, 8, 7),
    (7, 8, 9),
    (8, 10, 11),
    (10, 8, 2),
    (2, 8, 1),
    (0, 10, 2),
    (10, 0, 12),
    (12, 0, 13),
    (0, 14, 13),
    (14, 0, 6),
    (6, 0, 4),
    (15, 5, 16),
    (5, 15, 14),
    (5, 14, 6),
    (9, 5, 7),
    (5, 9, 17),
    (5, 17, 16),
    (18, 8, 11),
    (8, 18, 17),
    (8, 17, 9),
    (19, 10, 12),
    (10, 19, 11),
    (11, 19, 18),
    (13, 19, 12),
    (19, 13, 14),
    (19, 14, 15),
    (19, 17, 18),
    (17, 19, 16),
    (16, 19, 15),
)

# The 8 cubic cells of the tesseract as vertex-index octets. Vertex i has a
# negative coordinate on axis k exactly when bit k of i is set.
TESSERACT_CELLS = (
    (0, 2, 4, 6, 8, 10, 12, 14),  # right
    (1, 3, 5, 7, 9, 11, 13, 15),  # left
    (0, 1, 4, 5, 8, 9, 12, 13),  # top
    (2, 3, 6, 7, 10, 11, 14, 15),  # bottom
    (0, 1, 2, 3, 8, 9, 10, 11),  # front
    (4, 5, 6, 7, 12, 13, 14, 15),  # back
    (0, 1, 2, 3, 4, 5, 6, 7),  # kata
    (8, 9, 10, 11, 12, 13, 14, 15),  # ana
)

# Positions within a cube octet forming its 5 tetrahedra: 4 corners, then the middle one
CUBE_TETRAHEDRA = (
    (0, 1, 2, 4),
    (1, 2, 3, 7),
    (1, 4, 5, 7),
    (2, 4, 6, 7),
    (1, 2, 4, 7),
)
