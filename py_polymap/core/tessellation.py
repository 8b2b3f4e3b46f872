"""
Bounded Voronoi/Delaunay tessellation backed by scipy.

scipy's Voronoi leaves hull cells unbounded. Mirroring every site across
the sides and corners of the plot rectangle makes the rectangle sides
bisectors between a site and its ghosts, so each original cell comes out
finite and already clipped at the rectangle.
"""

from typing import Dict, List, NamedTuple, Optional, Sequence

import numpy as np
import structlog
from scipy.spatial import Voronoi
from shapely.geometry import MultiPoint, box

from .geometry import LineSegment, Point, Rect, polygon_area, to_points

logger = structlog.get_logger()


class DualEdge(NamedTuple):
    """One Voronoi ridge paired with the Delaunay line between its two sites."""
    voronoi_edge: LineSegment
    delaunay_line: LineSegment


def make_reflections(points: np.ndarray, bounds: Rect) -> np.ndarray:
    """
    Create mirrored ghost points around the rectangle.

    Args:
        points: (N,2) site coordinates
        bounds: Plot rectangle

    Returns:
        (8N,2) ghost coordinates, reflected across every side and corner
    """
    fx = [
        lambda x: x,
        lambda x: 2 * bounds.min_x - x,
        lambda x: 2 * bounds.max_x - x,
    ]
    fy = [
        lambda y: y,
        lambda y: 2 * bounds.min_y - y,
        lambda y: 2 * bounds.max_y - y,
    ]

    ghosts = []
    for ix, fxi in enumerate(fx):
        for iy, fyi in enumerate(fy):
            if ix == 0 and iy == 0:
                continue
            ghosts.append(np.column_stack([fxi(points[:, 0]), fyi(points[:, 1])]))

    return np.vstack(ghosts)


class ScipyTessellation:
    """
    Voronoi diagram of a site set restricted to a rectangle.

    Cell polygons and dual edges are computed on first access and cached.
    """

    def __init__(self, sites: Sequence[Point], bounds: Rect):
        if bounds.width <= 0 or bounds.height <= 0:
            raise ValueError(f"Plot bounds must have a positive size, got {bounds}")
        if len(sites) == 0:
            raise ValueError("At least one site is required")

        self._sites = to_points(sites)
        for p in self._sites:
            if not bounds.contains(p):
                raise ValueError(f"Site {p} lies outside plot bounds {bounds}")

        self._bounds = bounds
        self._index: Dict[Point, int] = {p: i for i, p in enumerate(self._sites)}

        seeds = np.array(self._sites, dtype=np.float64)
        all_seeds = np.vstack([seeds, make_reflections(seeds, bounds)])
        self._vor = Voronoi(all_seeds)

        self._polygons: Dict[int, List[Point]] = {}
        self._edges: Optional[List[DualEdge]] = None

        logger.debug("Tessellation computed",
                     sites=len(self._sites), vertices=len(self._vor.vertices),
                     ridges=len(self._vor.ridge_points))

    @property
    def plot_bounds(self) -> Rect:
        return self._bounds

    def site_coords(self) -> List[Point]:
        """Return a fresh list of the sites, in input order."""
        return list(self._sites)

    def cell_polygon(self, site: Point) -> List[Point]:
        """
        Ordered vertices of the Voronoi cell of site.

        Raises:
            KeyError: if site is not one of the tessellated sites
        """
        i = self._index[Point(site.x, site.y)]
        if i not in self._polygons:
            self._polygons[i] = self._build_polygon(i)
        return list(self._polygons[i])

    def cell_areas(self) -> List[float]:
        return [polygon_area(self.cell_polygon(p)) for p in self._sites]

    def dual_edges(self) -> List[DualEdge]:
        """
        Ridges between two original sites.

        Ridges shared with a ghost lie on the rectangle and are left out.
        """
        if self._edges is None:
            self._edges = self._build_edges()
        return list(self._edges)

    def _vertex(self, idx: int) -> Optional[Point]:
        if idx == -1:
            return None
        x, y = self._vor.vertices[idx]
        b = self._bounds
        return Point(float(np.clip(x, b.min_x, b.max_x)),
                     float(np.clip(y, b.min_y, b.max_y)))

    def _build_polygon(self, i: int) -> List[Point]:
        region = self._vor.regions[self._vor.point_region[i]]
        vertices = self._vor.vertices[[v for v in region if v != -1]]

        b = self._bounds
        cell = MultiPoint(vertices).convex_hull.intersection(
            box(b.min_x, b.min_y, b.max_x, b.max_y))

        if cell.geom_type != "Polygon" or cell.is_empty:
            # degenerate hull, fall back to the raw region vertices
            return to_points(vertices)

        return to_points(cell.exterior.coords[:-1])

    def _build_edges(self) -> List[DualEdge]:
        n = len(self._sites)
        edges = []
        for (p1, p2), (v1, v2) in zip(self._vor.ridge_points, self._vor.ridge_vertices):
            if p1 >= n or p2 >= n:
                continue
            edges.append(DualEdge(
                voronoi_edge=LineSegment(self._vertex(v1), self._vertex(v2)),
                delaunay_line=LineSegment(self._sites[p1], self._sites[p2]),
            ))
        return edges
