"""Tests for the scipy-backed tessellation source."""

import pytest
import numpy as np
from py_polymap.core.geometry import Point, Rect
from py_polymap.core.sampling import sample_sites
from py_polymap.core.tessellation import ScipyTessellation, make_reflections


BOUNDS = Rect(0, 0, 100, 100)


class TestSampling:
    """Test random site placement."""

    def test_sites_inside_bounds(self):
        sites = sample_sites(Rect(10, 20, 50, 30), 200, seed=1)

        assert len(sites) == 200
        assert all(Rect(10, 20, 50, 30).contains(p) for p in sites)

    def test_same_seed_same_sites(self):
        assert sample_sites(BOUNDS, 20, seed=7) == sample_sites(BOUNDS, 20, seed=7)

    def test_different_seeds(self):
        assert sample_sites(BOUNDS, 20, seed=1) != sample_sites(BOUNDS, 20, seed=2)

    def test_negative_count(self):
        with pytest.raises(ValueError):
            sample_sites(BOUNDS, -1)


class TestReflections:
    """Test ghost point generation."""

    def test_eight_ghosts_per_site(self):
        pts = np.array([[10.0, 20.0]])
        ghosts = make_reflections(pts, BOUNDS)

        assert ghosts.shape == (8, 2)
        assert [-10.0, 20.0] in ghosts.tolist()
        assert [190.0, -20.0] in ghosts.tolist()


class TestScipyTessellation:
    """Test cell polygons and dual edges."""

    def test_two_sites_split(self):
        v = ScipyTessellation([Point(30, 50), Point(70, 50)], BOUNDS)

        edges = v.dual_edges()
        assert len(edges) == 1

        vor = edges[0].voronoi_edge
        ends = sorted([(round(vor.p0.x, 6), round(vor.p0.y, 6)),
                       (round(vor.p1.x, 6), round(vor.p1.y, 6))])
        assert ends == [(50.0, 0.0), (50.0, 100.0)]
        assert set(edges[0].delaunay_line) == {Point(30, 50), Point(70, 50)}

        left = v.cell_polygon(Point(30, 50))
        assert max(p.x for p in left) == pytest.approx(50.0)
        assert v.cell_areas() == pytest.approx([5000.0, 5000.0])

    def test_single_site_covers_bounds(self):
        v = ScipyTessellation([Point(40, 60)], BOUNDS)

        assert v.dual_edges() == []
        assert v.cell_areas() == pytest.approx([10000.0])

    def test_cells_partition_bounds(self):
        sites = sample_sites(BOUNDS, 50, seed=3)
        v = ScipyTessellation(sites, BOUNDS)

        assert sum(v.cell_areas()) == pytest.approx(BOUNDS.width * BOUNDS.height, rel=1e-6)
        for site in sites:
            polygon = v.cell_polygon(site)
            assert len(polygon) >= 3
            assert all(BOUNDS.contains(p) for p in polygon)

    def test_dual_edges_join_known_sites(self):
        sites = sample_sites(BOUNDS, 30, seed=4)
        v = ScipyTessellation(sites, BOUNDS)
        known = set(sites)

        for edge in v.dual_edges():
            assert edge.delaunay_line.p0 in known
            assert edge.delaunay_line.p1 in known
            for p in edge.voronoi_edge:
                assert p is not None and BOUNDS.contains(p)

    def test_site_coords_is_a_copy(self):
        v = ScipyTessellation([Point(30, 50), Point(70, 50)], BOUNDS)
        coords = v.site_coords()
        coords[0] = Point(1, 1)

        assert v.site_coords()[0] == Point(30, 50)
        assert v.plot_bounds == BOUNDS

    def test_unknown_site(self):
        v = ScipyTessellation([Point(30, 50), Point(70, 50)], BOUNDS)
        with pytest.raises(KeyError):
            v.cell_polygon(Point(1, 1))

    @pytest.mark.parametrize("sites,bounds", [
        ([], BOUNDS),
        ([Point(150, 50)], BOUNDS),
        ([Point(0, 0)], Rect(0, 0, 0, 100)),
    ])
    def test_invalid_input(self, sites, bounds):
        with pytest.raises(ValueError):
            ScipyTessellation(sites, bounds)
