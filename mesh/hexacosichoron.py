# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""The 600-cell and its dual, the 120-cell.

The 600-cell with circumradius 1 has 120 vertices:

- the 8 "poles" ``(±1, 0, 0, 0)`` and permutations (16-cell vertices),
- the 16 points ``(±1/2, ±1/2, ±1/2, ±1/2)`` (tesseract vertices),
- 96 points forming one icosahedron around each pole: the 12 neighbours of a
  pole share its coordinate ``±φ/2`` and spread the icosahedron
  ``(0, ±1, ±φ) / 2φ`` over the other three axes.

Every vertex has 12 neighbours at the edge length ``1/φ``. They are found
through a *sign-primitive* index (the signs of a vertex's coordinates as a
base-3 string) so only vertices with compatible signs on every axis are
compared. Cells are the 4-cliques of that adjacency.
"""

import itertools

from core.vector import Vector4
from log import get_logger
from mesh.geometry import Geometry4, facet_key
from mesh.tables import ICOSAHEDRON_VERTS, IPHI, PHI, SIGNS

logger = get_logger(__name__)

EDGE_LENGTH = IPHI
# Smallest non-zero coordinate magnitude of any vertex
_MIN_COMPONENT = IPHI / 2
_EPS = 1e-9

# Sign digit -> base-3 digit
_SIGN_DIGITS = {-1: "0", 0: "1", 1: "2"}


def _sign(value: float) -> int:
    if value > _EPS:
        return 1
    if value < -_EPS:
        return -1
    return 0


def sign_primitive(vector) -> str:
    """Encodes the component signs of ``vector`` as a base-3 digit string.

    ``-1 -> '0'``, ``0 -> '1'``, ``+1 -> '2'``, one digit per axis in x, y, z,
    w order.
    """
    return "".join(_SIGN_DIGITS[_sign(c)] for c in vector)


def _neighbour_digits(value: float) -> str:
    """Sign digits a neighbour may have on an axis where this vertex has ``value``."""
    digits = ""
    if value - EDGE_LENGTH <= -_MIN_COMPONENT + _EPS:
        digits += "0"
    if abs(value) <= EDGE_LENGTH + _EPS:
        digits += "1"
    if value + EDGE_LENGTH >= _MIN_COMPONENT - _EPS:
        digits += "2"
    return digits


def _pole_icosahedron(axis: int, sign: int) -> list:
    """The 12 vertices surrounding the pole ``sign * e_axis``.

    The icosahedron is mirrored for even axes so that its coordinates land
    on even permutations of ``(φ, 1, 1/φ, 0) / 2``.
    """
    others = [a for a in range(4) if a != axis]
    verts = []
    for coords in ICOSAHEDRON_VERTS:
        if axis % 2 == 0:
            coords = coords[::-1]
        vert = Vector4()
        vert[axis] = sign * PHI / 2
        for other, value in zip(others, coords):
            vert[other] = value * IPHI / 2
        verts.append(vert)
    return verts


def hexacosichoron_verts() -> list:
    verts = []

    # Poles, in the same order as the 16-cell
    for axis in range(4):
        for sign in (-1, 1):
            vert = Vector4()
            vert[axis] = sign
            verts.append(vert)

    # Half-unit tesseract
    for i in range(0b10000):
        verts.append(Vector4(*(SIGNS[(i >> axis) & 1] / 2 for axis in range(4))))

    for axis in range(4):
        for sign in (-1, 1):
            verts.extend(_pole_icosahedron(axis, sign))

    return verts


def sign_primitive_index(verts) -> dict:
    """Maps each sign primitive to the indexes of the vertices that have it."""
    index = {}
    for i, vert in enumerate(verts):
        index.setdefault(sign_primitive(vert), []).append(i)
    return index


def neighbours(verts, index: dict = None) -> list:
    """For every vertex, the set of vertices exactly one edge length away.

    Candidate keys are built axis by axis from the signs a neighbour could
    have there, then every candidate is checked against the edge length.
    """
    if index is None:
        index = sign_primitive_index(verts)
    edge_sq = EDGE_LENGTH ** 2

    adjacency = []
    for i, vert in enumerate(verts):
        found = set()
        for digits in itertools.product(*(_neighbour_digits(c) for c in vert)):
            for j in index.get("".join(digits), ()):
                if j != i and abs(vert.subtract(verts[j]).mag_sq - edge_sq) < _EPS:
                    found.add(j)
        adjacency.append(found)
    return adjacency


def tetrahedral_cells(adjacency) -> list:
    """Every 4-clique of ``adjacency`` as an ascending index tuple."""
    cells = []
    for a in range(len(adjacency)):
        for b in sorted(j for j in adjacency[a] if j > a):
            common_ab = adjacency[a] & adjacency[b]
            for c in sorted(k for k in common_ab if k > b):
                for d in sorted(m for m in common_ab & adjacency[c] if m > c):
                    cells.append((a, b, c, d))
    return cells


def hexacosichoron() -> Geometry4:
    """The 600-cell: 120 vertices, 720 edges, 1200 faces, 600 tetrahedral cells."""
    verts = hexacosichoron_verts()
    adjacency = neighbours(verts)
    cells = tetrahedral_cells(adjacency)
    logger.debug("600-cell: %d vertices, %d cells", len(verts), len(cells))
    return Geometry4(verts, cells)


def _ring_around_edge(edge, cells, cell_indexes) -> list:
    """Orders the cells around a 600-cell edge so consecutive ones share a face."""
    links = {}
    for ci in cell_indexes:
        links[ci] = [v for v in cells[ci] if v not in edge]

    ordered = [cell_indexes[0]]
    current = links[cell_indexes[0]][1]
    while len(ordered) < len(cell_indexes):
        nxt = next(ci for ci in cell_indexes if ci not in ordered and current in links[ci])
        ordered.append(nxt)
        x, y = links[nxt]
        current = y if x == current else x
    return ordered


def hecatonicosachoron() -> Geometry4:
    """The 120-cell, built as the dual of the 600-cell.

    Each 600-cell tetrahedron becomes a vertex (its centroid pushed out to
    the unit sphere), each pair of tetrahedra sharing a face becomes an
    edge, and the 5 tetrahedra around each 600-cell edge become a pentagon,
    split into a fan of 3 triangles. Facets list the 1200 edges first, then
    the triangles. Dodecahedral cells are not emitted.
    """
    source = hexacosichoron()
    cells = source.facets

    verts = []
    for cell in cells:
        centroid = Vector4()
        for vi in cell:
            centroid = centroid.add(source.verts[vi])
        verts.append(centroid.normalize())

    face_to_cells = {}
    edge_to_cells = {}
    for ci, cell in enumerate(cells):
        for face in itertools.combinations(cell, 3):
            face_to_cells.setdefault(facet_key(face), []).append(ci)
        for edge in itertools.combinations(cell, 2):
            edge_to_cells.setdefault(edge, []).append(ci)

    facets = [tuple(pair) for pair in face_to_cells.values()]
    for edge, cell_indexes in edge_to_cells.items():
        ring = _ring_around_edge(edge, cells, cell_indexes)
        for k in range(2, len(ring)):
            facets.append((ring[0], ring[k - 1], ring[k]))

    logger.debug("120-cell: %d vertices, %d facets", len(verts), len(facets))
    return Geometry4(verts, facets)
