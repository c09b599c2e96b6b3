# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Construction of the geometry of geometric figures.

Every function returns a fresh :class:`Geometry4`. 3D solids lie in the
``w = 0`` hyperplane. Polychora are centred on the origin.
"""

import itertools
import math

from core.rotor import Rotor4
from core.vector import Vector4
from log import get_logger, log_duration
from mesh.geometry import Geometry4
from mesh.hexacosichoron import hecatonicosachoron, hexacosichoron
from mesh.tables import (
    CUBE_TETRAHEDRA,
    DODECAHEDRON_FACES,
    DODECAHEDRON_VERTS,
    ICOSAHEDRON_FACES,
    ICOSAHEDRON_VERTS,
    SIGNS,
    TESSERACT_CELLS,
)

logger = get_logger(__name__)


def _bit_signed_verts(n_axes: int, magnitude: float = 1) -> list:
    """All ``2^n_axes`` sign combinations; bit k of the index negates axis k."""
    return [
        Vector4(*(magnitude * SIGNS[(i >> axis) & 1] for axis in range(n_axes)))
        for i in range(1 << n_axes)
    ]


def _axis_verts() -> list:
    """``(±1, 0, 0, 0)`` and permutations; vertex ``2 * axis + 1`` is the positive one."""
    verts = []
    for axis in range(4):
        for sign in (-1, 1):
            vert = Vector4()
            vert[axis] = sign
            verts.append(vert)
    return verts


def vert() -> Geometry4:
    return Geometry4([Vector4()])


def polygon(n_sides: int = 4) -> Geometry4:
    """Regular polygon in the xy-plane, triangulated as a fan from vertex 0.

    A 2-gon is a single edge.
    """
    if n_sides < 2:
        raise ValueError(f"A polygon needs at least 2 sides, got {n_sides}")

    verts = []
    facets = []

    angle_increment = 2 * math.pi / n_sides
    for i in range(n_sides):
        angle = angle_increment * i
        verts.append(Vector4(math.cos(angle), math.sin(angle)))

        if i >= 2:
            facets.append((0, i - 1, i))

    if n_sides == 2:
        facets.append((0, 1))

    return Geometry4(verts, facets)


def tetrahedron() -> Geometry4:
    return Geometry4([
        Vector4(2/3, 2/3, 2/3),
        Vector4(2/3, -2/3, -2/3),
        Vector4(-2/3, 2/3, -2/3),
        Vector4(-2/3, -2/3, 2/3),
    ], [
        (0, 1, 2, 3),
    ])


def hexahedron() -> Geometry4:
    return Geometry4(_bit_signed_verts(3), [
        # front face
        (0, 1, 2),
        (1, 2, 3),
        # back face
        (4, 5, 6),
        (5, 6, 7),
        # left face
        (1, 3, 5),
        (3, 5, 7),
        # right face
        (0, 2, 4),
        (2, 4, 6),
        # top face
        (0, 1, 4),
        (1, 4, 5),
        # bottom face
        (2, 3, 6),
        (3, 6, 7),
    ])


def octahedron() -> Geometry4:
    return Geometry4([
        Vector4(0, 1, 0),
        Vector4(0, -1, 0),
        Vector4(1, 0, 0),
        Vector4(0, 0, 1),
        Vector4(-1, 0, 0),
        Vector4(0, 0, -1),
    ], [
        (0, 2, 3),
        (0, 3, 4),
        (0, 4, 5),
        (0, 5, 2),
        (1, 2, 3),
        (1, 3, 4),
        (1, 4, 5),
        (1, 5, 2),
    ])


def dodecahedron() -> Geometry4:
    return Geometry4([Vector4(*v) for v in DODECAHEDRON_VERTS], DODECAHEDRON_FACES)


def icosahedron() -> Geometry4:
    return Geometry4([Vector4(*v) for v in ICOSAHEDRON_VERTS], ICOSAHEDRON_FACES)


def latlongsphere(n_lat_cuts: int = 6, n_long_cuts: int = 8) -> Geometry4:
    """Unit UV sphere around the y axis.

    Args:
        n_lat_cuts: Number of latitude rings, both poles included.
        n_long_cuts: Number of vertices per ring.
    """
    if n_lat_cuts < 3 or n_long_cuts < 3:
        raise ValueError(f"Need at least 3 latitude and longitude cuts, got {n_lat_cuts}x{n_long_cuts}")

    long_increment = 2 * math.pi / n_long_cuts

    verts = []
    faces = []

    for lat_cut in range(n_lat_cuts):
        if lat_cut == 0:
            # Bottom pole
            verts.append(Vector4(0, -1, 0))
            continue
        if lat_cut == n_lat_cuts - 1:
            # Top pole
            verts.append(Vector4(0, 1, 0))
            continue

        offset = len(verts)

        # Equal arc lengths between rings
        y = math.sin(math.pi * lat_cut / (n_lat_cuts - 1) - math.pi / 2)
        radius = math.sqrt(1 - y ** 2)

        for long_cut in range(n_long_cuts):
            angle = long_increment * long_cut
            verts.append(Vector4(radius * math.cos(angle), y, radius * math.sin(angle)))

            adjacent = (long_cut + 1) % n_long_cuts

            if lat_cut == 1:
                # Bottom triangle loop
                faces.append((0, offset + long_cut, offset + adjacent))

            if lat_cut == n_lat_cuts - 2:
                # Top triangle loop; the top pole follows the last ring
                faces.append((offset + long_cut, offset + adjacent, offset + n_long_cuts))
                continue

            # Triangle strip up to the next ring
            faces.append((offset + long_cut, offset + adjacent, offset + long_cut + n_long_cuts))
            faces.append((offset + adjacent, offset + adjacent + n_long_cuts, offset + long_cut + n_long_cuts))

    return Geometry4(verts, faces)


def mobius_strip(n_strips: int = 16, width: float = 1) -> Geometry4:
    """Möbius strip of unit radius in the xz-plane.

    Each rung is turned by half the angle travelled around the circle, so
    the last strip joins the first one flipped.
    """
    if n_strips < 2:
        raise ValueError(f"A Möbius strip needs at least 2 strips, got {n_strips}")

    verts = []
    faces = []

    angle_increment = 2 * math.pi / n_strips
    vert_top = Vector4(0, width / 2, 0)
    vert_bottom = Vector4(0, -width / 2, 0)

    for i in range(n_strips):
        angle = angle_increment * i
        rotor = Rotor4.plane_angle([math.cos(angle), 0, 0, -math.sin(angle), 0, 0], angle / 2)
        offset = Vector4(math.cos(angle), 0, math.sin(angle))

        verts.append(vert_top.mult_rotor(rotor).add(offset))
        verts.append(vert_bottom.mult_rotor(rotor).add(offset))

        if i == n_strips - 1:
            faces.append((2 * i, 2 * i + 1, 0))
            faces.append((2 * i, 0, 1))
        else:
            faces.append((2 * i, 2 * i + 1, 2 * i + 2))
            faces.append((2 * i + 1, 2 * i + 2, 2 * i + 3))

    return Geometry4(verts, faces)


def pentachoron() -> Geometry4:
    """The regular 5-cell (4-simplex) with edge length 2, centred on the origin.

    Reference:
        https://en.wikipedia.org/wiki/5-cell#Construction
    """
    s = math.sqrt(0.5)
    f = math.sqrt(1 / 5)

    return Geometry4([
        Vector4(s, s, s, -s * f),
        Vector4(-s, -s, s, -s * f),
        Vector4(-s, s, -s, -s * f),
        Vector4(s, -s, -s, -s * f),
        Vector4(0, 0, 0, s * (math.sqrt(5) - f)),
    ], [
        (0, 1, 2, 3),
        (0, 1, 2, 4),
        (0, 1, 3, 4),
        (0, 2, 3, 4),
        (1, 2, 3, 4),
    ])


def octachoron() -> Geometry4:
    """The tesseract: 16 vertices ``(±1, ±1, ±1, ±1)``, 8 cubes of 5 tetrahedra each."""
    cells = []
    for octet in TESSERACT_CELLS:
        for tetrahedron_positions in CUBE_TETRAHEDRA:
            cells.append(tuple(octet[p] for p in tetrahedron_positions))

    return Geometry4(_bit_signed_verts(4), cells)


def hexadecachoron() -> Geometry4:
    """The 16-cell: the 8 unit axis points and 16 tetrahedra.

    A cell takes one point per axis, so every cell avoids containing a
    point together with its opposite.
    """
    cells = [
        tuple(2 * axis + side for axis, side in enumerate(sides))
        for sides in itertools.product((0, 1), repeat=4)
    ]
    return Geometry4(_axis_verts(), cells)


def icositetrachoron() -> Geometry4:
    """The 24-cell with circumradius and edge length 1.

    Vertices are the 8 axis points of the 16-cell followed by the 16 points
    ``(±1/2, ±1/2, ±1/2, ±1/2)``. Each of the 24 octahedral cells has two
    non-opposite axis points as its poles and, as its equator, the 4
    half-unit points agreeing with both poles' signs. The octahedron is cut
    into 4 tetrahedra around its pole-to-pole diagonal.
    """
    verts = _axis_verts() + _bit_signed_verts(4, 0.5)

    def half_unit_index(signs):
        return 8 + sum(1 << axis for axis, sign in signs.items() if sign < 0)

    cells = []
    for axis0, axis1 in itertools.combinations(range(4), 2):
        rest0, rest1 = (a for a in range(4) if a not in (axis0, axis1))
        for sign0, sign1 in itertools.product((-1, 1), repeat=2):
            pole0 = 2 * axis0 + (sign0 > 0)
            pole1 = 2 * axis1 + (sign1 > 0)

            equator = [
                half_unit_index({axis0: sign0, axis1: sign1, rest0: s0, rest1: s1})
                for s0, s1 in ((1, 1), (1, -1), (-1, -1), (-1, 1))
            ]
            for k in range(4):
                cells.append((pole0, pole1, equator[k], equator[(k + 1) % 4]))

    return Geometry4(verts, cells)


def klein_bottle(n_strips: int = 16, n_long_cuts: int = 8, radius: float = 0.5) -> Geometry4:
    """Klein bottle embedded in 4-space without self-intersection.

    Parametrised as ``((1 + r cos v) cos u, (1 + r cos v) sin u,
    r sin v cos(u/2), r sin v sin(u/2))``. Going once around ``u`` maps
    ``v`` to ``-v``, so the last ring is stitched to the first ring in
    reverse.

    Args:
        n_strips: Number of rings along ``u``.
        n_long_cuts: Number of vertices per ring, along ``v``.
        radius: Tube radius ``r``; the central circle has radius 1.
    """
    if n_strips < 3 or n_long_cuts < 3:
        raise ValueError(f"Need at least 3 strips and 3 cuts, got {n_strips}x{n_long_cuts}")

    verts = []
    faces = []

    for i in range(n_strips):
        u = 2 * math.pi * i / n_strips
        for j in range(n_long_cuts):
            v = 2 * math.pi * j / n_long_cuts
            ring_radius = 1 + radius * math.cos(v)
            verts.append(Vector4(
                ring_radius * math.cos(u),
                ring_radius * math.sin(u),
                radius * math.sin(v) * math.cos(u / 2),
                radius * math.sin(v) * math.sin(u / 2),
            ))

    for i in range(n_strips):
        for j in range(n_long_cuts):
            j_next = (j + 1) % n_long_cuts
            a = i * n_long_cuts + j
            b = i * n_long_cuts + j_next
            if i < n_strips - 1:
                c = (i + 1) * n_long_cuts + j
                d = (i + 1) * n_long_cuts + j_next
            else:
                c = -j % n_long_cuts
                d = -j_next % n_long_cuts
            faces.append((a, b, c))
            faces.append((b, d, c))

    return Geometry4(verts, faces)


CATALOG = {
    'vert': vert,
    'polygon': polygon,
    'tetrahedron': tetrahedron,
    'hexahedron': hexahedron,
    'octahedron': octahedron,
    'dodecahedron': dodecahedron,
    'icosahedron': icosahedron,
    'latlongsphere': latlongsphere,
    'mobius_strip': mobius_strip,
    'pentachoron': pentachoron,
    'octachoron': octachoron,
    'hexadecachoron': hexadecachoron,
    'icositetrachoron': icositetrachoron,
    'hecatonicosachoron': hecatonicosachoron,
    'hexacosichoron': hexacosichoron,
    'klein_bottle': klein_bottle,
}


def build(name: str, **params) -> Geometry4:
    """Builds the catalog solid called ``name``.

    Raises:
        ValueError: ``name`` is not in :data:`CATALOG`.
    """
    if name not in CATALOG:
        raise ValueError(f"Unknown solid: {name}. Available: {list(CATALOG.keys())}")

    with log_duration(logger, f"Building {name}"):
        geometry = CATALOG[name](**params)
    logger.debug("Built %s: %d vertices, %d facets", name, len(geometry.verts), len(geometry.facets))
    return geometry
