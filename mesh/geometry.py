# Polychora: 4D Geometric Algebra and Polytope Meshes
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.

"""Storage and topology queries for 4D polytope meshes.

A mesh is a list of vertices plus a list of facets. Each facet is a list of
vertex indexes whose length gives its rank: 2 for an edge, 3 for a
triangular face, 4 for a tetrahedral cell. Lower-rank facets (the faces of
the cells, the edges of the faces) are derived on demand and deduplicated by
their vertex *set*, so a face shared by two cells appears once.
"""

import math

import torch

from core.validation import check_facets
from core.vector import Vector4
from log import get_logger

logger = get_logger(__name__)

BITS_PER_INDEX = 32
_MAX_INDEX = (1 << BITS_PER_INDEX) - 2


class FacetArityError(ValueError):
    """A facet has a vertex count other than 2, 3 or 4.

    Raised while deriving edges or faces; it means the code that built the
    facet list is broken, never that user input was bad.
    """


def facet_key(vert_indexes) -> int:
    """Canonical key of a facet, equal for every ordering of the same indexes.

    The indexes are sorted and packed into 32-bit fields of one integer. Each
    field holds ``index + 1``, so no field is ever zero and lists of
    different lengths can never pack to the same value.
    """
    key = 0
    for index in sorted(vert_indexes):
        if not 0 <= index <= _MAX_INDEX:
            raise ValueError(f"Vertex index {index} does not fit in a {BITS_PER_INDEX}-bit facet key")
        key = (key << BITS_PER_INDEX) | (index + 1)
    return key


def _push_facets(facet_map: dict, *vert_index_lists) -> None:
    """Adds facets to ``facet_map`` unless an equivalent one is already present."""
    for vert_indexes in vert_index_lists:
        facet_map.setdefault(facet_key(vert_indexes), tuple(vert_indexes))


def _edges_of(facet):
    if len(facet) == 2:  # Edge
        return (facet,)
    if len(facet) == 3:  # Face
        return (
            (facet[0], facet[1]),
            (facet[0], facet[2]),
            (facet[1], facet[2]),
        )
    if len(facet) == 4:  # Cell
        return (
            (facet[0], facet[1]),
            (facet[0], facet[2]),
            (facet[0], facet[3]),
            (facet[1], facet[2]),
            (facet[1], facet[3]),
            (facet[2], facet[3]),
        )
    raise FacetArityError(f"Facet has {len(facet)} vertices")


def _faces_of(facet):
    if len(facet) == 2:
        return ()
    if len(facet) == 3:
        return (facet,)
    if len(facet) == 4:
        # Each face leaves out one vertex of the tetrahedron
        return (
            (facet[0], facet[1], facet[2]),
            (facet[0], facet[2], facet[3]),
            (facet[0], facet[3], facet[1]),
            (facet[1], facet[2], facet[3]),
        )
    raise FacetArityError(f"Facet has {len(facet)} vertices")


class Geometry4:
    """A set of 4D points and how they are connected.

    Instances are immutable: the vertex and facet lists are copied on
    construction and exposed as tuples, so derived topology never goes
    stale. Build a new instance (for example with :meth:`with_verts`) to
    change a mesh.

    Attributes:
        verts (tuple[Vector4, ...]): Vertex positions.
        facets (tuple[tuple[int, ...], ...]): Vertex-index lists of edges,
            faces and cells, in any rotation or reflection.
    """

    def __init__(self, verts=(), facets=()):
        self._verts = tuple(Vector4(*vert) for vert in verts)
        self._facets = tuple(tuple(int(i) for i in facet) for facet in facets)
        check_facets(self._facets, len(self._verts))

        self._edges = None
        self._faces = None
        self._edges_merged = {}

    @property
    def verts(self):
        return self._verts

    @property
    def facets(self):
        return self._facets

    def with_verts(self, verts) -> "Geometry4":
        """Returns a mesh with the same facets laid over new vertex positions."""
        if len(verts) != len(self._verts):
            raise ValueError(f"Expected {len(self._verts)} vertices, got {len(verts)}")
        return Geometry4(verts, self._facets)

    def vert_tensor(self, dtype=torch.float64) -> torch.Tensor:
        """Vertices as a ``[N, 4]`` tensor."""
        if not self._verts:
            return torch.zeros(0, 4, dtype=dtype)
        return torch.tensor([vert.tolist() for vert in self._verts], dtype=dtype)

    def cells(self) -> list:
        return [facet for facet in self._facets if len(facet) == 4]

    def edges(self) -> list:
        """Every distinct edge of every facet.

        Cells contribute all 6 vertex pairs, faces their 3 sides and edge
        facets themselves.

        Raises:
            FacetArityError: A facet does not have 2, 3 or 4 vertices.
        """
        if self._edges is None:
            edge_map = {}
            for facet in self._facets:
                _push_facets(edge_map, *_edges_of(facet))
            self._edges = list(edge_map.values())
            logger.debug("Derived %d edges from %d facets", len(self._edges), len(self._facets))
        return self._edges

    def faces(self) -> list:
        """Every distinct triangle of every face and cell.

        Raises:
            FacetArityError: A facet does not have 2, 3 or 4 vertices.
        """
        if self._faces is None:
            face_map = {}
            for facet in self._facets:
                _push_facets(face_map, *_faces_of(facet))
            self._faces = list(face_map.values())
            logger.debug("Derived %d faces from %d facets", len(self._faces), len(self._facets))
        return self._faces

    def edges_merged(self, angle_threshold: float = 0.02) -> list:
        """Edges worth drawing in a wireframe, similar to Three.js ``EdgesGeometry``.

        Keeps explicit edge facets, face edges that border fewer or more
        than two faces, and edges between two faces whose planes differ by
        more than ``angle_threshold`` radians. Edges between coplanar faces
        (such as the diagonals of a triangulated square) are dropped.
        """
        if angle_threshold in self._edges_merged:
            return self._edges_merged[angle_threshold]

        edges_to_faces = {}
        for face in self.faces():
            for i in range(len(face)):
                edge = (face[i], face[(i + 1) % len(face)])
                edges_to_faces.setdefault(facet_key(edge), (edge, []))[1].append(face)

        edge_map = {}
        _push_facets(edge_map, *(facet for facet in self._facets if len(facet) == 2))
        for key, (edge, faces) in edges_to_faces.items():
            if len(faces) == 2:
                bivector0 = self._face_bivector(faces[0]).normalize()
                bivector1 = self._face_bivector(faces[1]).normalize()
                angle = math.acos(max(-1.0, min(1.0, bivector0.dot(bivector1))))
                if angle < angle_threshold or math.pi - angle < angle_threshold:
                    continue
            edge_map.setdefault(key, edge)

        edges = list(edge_map.values())
        self._edges_merged[angle_threshold] = edges
        return edges

    def _face_bivector(self, vert_indexes):
        origin = self._verts[vert_indexes[0]]
        dir0 = self._verts[vert_indexes[1]].subtract(origin)
        dir1 = self._verts[vert_indexes[2]].subtract(origin)
        return dir0.outer(dir1)

    def verts_to_facets(self, facets) -> dict:
        """Maps each vertex index to the set of positions in ``facets`` that use it."""
        mapping = {}
        for i, facet in enumerate(facets):
            for vert_index in facet:
                mapping.setdefault(vert_index, set()).add(i)
        return mapping

    def verts_to_edges(self) -> dict:
        return self.verts_to_facets(self.edges())

    def verts_to_faces(self) -> dict:
        return self.verts_to_facets(self.faces())

    def __repr__(self):
        return f"Geometry4(verts={len(self._verts)}, facets={len(self._facets)})"
