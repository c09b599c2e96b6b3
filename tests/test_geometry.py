"""Tests for mesh storage and topology derivation.

Tests cover:
- Canonical facet keys
- Edge/face derivation and deduplication
- Caching and immutability
- Vertex-to-facet adjacency
- Wireframe edge merging
"""

import itertools

import pytest
import torch

from core.vector import Vector4
from mesh.construction import hexahedron, tetrahedron
from mesh.geometry import FacetArityError, Geometry4, facet_key


def _square():
    # Unit square split along its 0-2 diagonal
    return Geometry4(
        [Vector4(0, 0), Vector4(1, 0), Vector4(1, 1), Vector4(0, 1)],
        [(0, 1, 2), (0, 2, 3)],
    )


class TestFacetKey:

    def test_order_independent(self):
        assert facet_key([0, 1, 2]) == facet_key([2, 0, 1]) == facet_key([1, 2, 0])

    def test_injective_over_small_facets(self):
        keys = {}
        for length in range(1, 5):
            for combo in itertools.combinations(range(6), length):
                key = facet_key(combo)
                assert key not in keys, f"{combo} collides with {keys[key]}"
                keys[key] = combo

    def test_different_lengths_never_collide(self):
        # A leading zero index must not vanish from the key
        assert facet_key([0, 1]) != facet_key([1])
        assert facet_key([0, 0, 3]) != facet_key([0, 3])

    def test_large_indexes(self):
        assert facet_key([40, 33]) != facet_key([8, 33])
        assert facet_key([70000, 5]) == facet_key([5, 70000])

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            facet_key([-1, 2])


class TestDerivation:

    def test_tetrahedron_counts(self):
        geometry = tetrahedron()
        assert len(geometry.verts) == 4
        assert len(geometry.cells()) == 1
        assert len(geometry.faces()) == 4
        assert len(geometry.edges()) == 6

    def test_rotated_duplicates_collapse(self):
        geometry = Geometry4([Vector4(), Vector4(1), Vector4(0, 1)], [(0, 1, 2), (2, 0, 1)])
        assert len(geometry.faces()) == 1
        assert len(geometry.edges()) == 3

    def test_shared_face_counted_once(self):
        geometry = Geometry4(
            [Vector4(), Vector4(1), Vector4(0, 1), Vector4(0, 0, 1), Vector4(0, 0, 0, 1)],
            [(0, 1, 2, 3), (0, 1, 2, 4)],
        )
        assert len(geometry.faces()) == 7
        assert len(geometry.edges()) == 9

    def test_edge_facets_contribute_no_faces(self):
        geometry = Geometry4([Vector4(), Vector4(1)], [(0, 1)])
        assert geometry.edges() == [(0, 1)]
        assert geometry.faces() == []

    @pytest.mark.parametrize("facet", [(0,), (0, 1, 2, 3, 4)])
    def test_bad_arity(self, facet):
        geometry = Geometry4([Vector4(i) for i in range(5)], [facet])
        with pytest.raises(FacetArityError):
            geometry.edges()
        with pytest.raises(FacetArityError):
            geometry.faces()

    def test_arity_error_is_value_error(self):
        assert issubclass(FacetArityError, ValueError)

    def test_out_of_range_facet_rejected(self):
        with pytest.raises(AssertionError):
            Geometry4([Vector4()], [(0, 1)])

    def test_empty(self):
        geometry = Geometry4()
        assert geometry.edges() == []
        assert geometry.faces() == []
        assert geometry.vert_tensor().shape == (0, 4)


class TestCachingAndImmutability:

    def test_edges_cached(self):
        geometry = tetrahedron()
        assert geometry.edges() is geometry.edges()
        assert geometry.faces() is geometry.faces()

    def test_input_lists_copied(self):
        verts = [Vector4(), Vector4(1), Vector4(0, 1)]
        facets = [[0, 1, 2]]
        geometry = Geometry4(verts, facets)

        verts[0].set(5, 5, 5, 5)
        facets[0][0] = 1
        assert geometry.verts[0].is_zero()
        assert geometry.facets == ((0, 1, 2),)
        assert isinstance(geometry.verts, tuple)

    def test_with_verts(self):
        geometry = tetrahedron()
        moved = geometry.with_verts([v.mult_scalar(2) for v in geometry.verts])

        assert moved is not geometry
        assert moved.facets == geometry.facets
        assert moved.verts[0].eq(geometry.verts[0].mult_scalar(2))

    def test_with_verts_count_mismatch(self):
        with pytest.raises(ValueError):
            tetrahedron().with_verts([Vector4()])

    def test_vert_tensor(self):
        geometry = tetrahedron()
        tensor = geometry.vert_tensor()
        assert tensor.shape == (4, 4)
        assert tensor.dtype == torch.float64
        assert tensor[0].tolist() == geometry.verts[0].tolist()


class TestAdjacency:

    def test_verts_to_edges(self):
        adjacency = tetrahedron().verts_to_edges()
        assert set(adjacency) == {0, 1, 2, 3}
        assert all(len(edges) == 3 for edges in adjacency.values())

    def test_verts_to_faces(self):
        adjacency = tetrahedron().verts_to_faces()
        assert all(len(faces) == 3 for faces in adjacency.values())

    def test_verts_to_facets_positions(self):
        geometry = _square()
        mapping = geometry.verts_to_facets(geometry.facets)
        assert mapping[0] == {0, 1}
        assert mapping[1] == {0}
        assert mapping[3] == {1}


class TestEdgesMerged:

    def test_square_drops_diagonal(self):
        geometry = _square()
        assert len(geometry.edges()) == 5
        merged = geometry.edges_merged()
        assert len(merged) == 4
        assert facet_key((0, 2)) not in {facet_key(e) for e in merged}

    def test_cube_keeps_only_cube_edges(self):
        geometry = hexahedron()
        assert len(geometry.edges()) == 18
        merged = geometry.edges_merged()
        assert len(merged) == 12
        for a, b in merged:
            assert geometry.verts[a].subtract(geometry.verts[b]).mag == pytest.approx(2.0)

    def test_explicit_edges_kept(self):
        geometry = Geometry4([Vector4(), Vector4(1)], [(0, 1)])
        assert geometry.edges_merged() == [(0, 1)]

    def test_threshold_cached(self):
        geometry = hexahedron()
        assert geometry.edges_merged(0.1) is geometry.edges_merged(0.1)
        # A huge threshold merges across the cube's right angles as well
        assert len(geometry.edges_merged(2.0)) == 0
