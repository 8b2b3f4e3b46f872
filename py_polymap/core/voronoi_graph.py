"""
Region/Corner/Edge graph built from a bounded Voronoi tessellation.

The graph links both halves of the Voronoi/Delaunay dual:
- regions (Voronoi cells / Delaunay sites) know their neighbors, border
  edges and polygon corners
- corners (Voronoi vertices) know their adjacent corners, the regions
  they touch and the edges protruding from them
- edges join two corners and separate two regions

Construction runs Lloyd relaxation on the sites, builds the graph once and
then moves every inner corner to the centroid of the regions around it.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

import structlog

from ..config import settings
from .geometry import Point, Rect, close_enough, lies_on_axes, vertex_centroid
from .sampling import sample_sites
from .tessellation import ScipyTessellation

logger = structlog.get_logger()

# Distance from a rectangle side within which a corner counts as touching it
BORDER_TOLERANCE = 1.0


@dataclass(eq=False)
class Region:
    """One Voronoi cell, centered on its site.

    The flags and numbers below are storage for downstream classifiers;
    graph construction never writes them.
    """
    center: Point
    neighbors: List["Region"] = field(default_factory=list, repr=False)
    borders: List["Edge"] = field(default_factory=list, repr=False)
    corners: List["Corner"] = field(default_factory=list, repr=False)

    border: bool = False
    ocean: bool = False
    water: bool = False
    coast: bool = False
    elevation: float = 0.0
    moisture: float = 0.0
    biome: Optional[int] = None

    def add_neighbor(self, region: Optional["Region"]) -> None:
        if region is not None and region not in self.neighbors:
            self.neighbors.append(region)

    def add_border(self, edge: Optional["Edge"]) -> None:
        if edge is not None and edge not in self.borders:
            self.borders.append(edge)

    def add_corner(self, corner: Optional["Corner"]) -> None:
        if corner is not None and corner not in self.corners:
            self.corners.append(corner)


@dataclass(eq=False)
class Corner:
    """One Voronoi vertex, shared by every cell that meets at it."""
    location: Point
    border: bool = False
    adjacent: List["Corner"] = field(default_factory=list, repr=False)
    touches: List[Region] = field(default_factory=list, repr=False)
    protrudes: List["Edge"] = field(default_factory=list, repr=False)

    def add_adjacent(self, corner: Optional["Corner"]) -> None:
        if corner is not None and corner not in self.adjacent:
            self.adjacent.append(corner)

    def add_touches(self, region: Optional[Region]) -> None:
        if region is not None and region not in self.touches:
            self.touches.append(region)

    def add_protrudes(self, edge: Optional["Edge"]) -> None:
        if edge is not None and edge not in self.protrudes:
            self.protrudes.append(edge)


@dataclass(frozen=True, eq=False)
class Edge:
    """Voronoi edge between corner0 and corner1, dual to region0-region1.

    Any of the four references may be None for edges cut by the plot
    bounds or pointing at an unknown site.
    """
    corner0: Optional[Corner]
    corner1: Optional[Corner]
    region0: Optional[Region]
    region1: Optional[Region]

    @property
    def midpoint(self) -> Optional[Point]:
        if self.corner0 is None or self.corner1 is None:
            return None
        p0 = self.corner0.location
        p1 = self.corner1.location
        return Point((p0.x + p1.x) / 2, (p0.y + p1.y) / 2)

    @property
    def length(self) -> Optional[float]:
        if self.corner0 is None or self.corner1 is None:
            return None
        p0 = self.corner0.location
        p1 = self.corner1.location
        return math.hypot(p1.x - p0.x, p1.y - p0.y)


class VoronoiGraph:
    """Finished graph. The entity lists are exposed as read-only tuples."""

    def __init__(self, bounds: Rect, regions: List[Region],
                 corners: List[Corner], edges: List[Edge]):
        self._bounds = bounds
        self._regions = regions
        self._corners = corners
        self._edges = edges

    @property
    def bounds(self) -> Rect:
        return self._bounds

    @property
    def regions(self) -> Tuple[Region, ...]:
        return tuple(self._regions)

    @property
    def corners(self) -> Tuple[Corner, ...]:
        return tuple(self._corners)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    def lookup_edge_from_corner(self, corner: Corner, other: Corner) -> Optional[Edge]:
        """
        Find the edge joining corner and other.

        Args:
            corner: Corner whose protruding edges are scanned
            other: Neighboring corner, e.g. the downslope one

        Returns:
            The connecting edge, or None if the corners are not adjacent
        """
        for edge in corner.protrudes:
            if edge.corner0 is other or edge.corner1 is other:
                return edge
        return None


class GraphBuilder:
    """Turns one tessellation snapshot into a linked VoronoiGraph."""

    def __init__(self, tessellation):
        self.tessellation = tessellation
        self.bounds: Rect = tessellation.plot_bounds
        self.regions: List[Region] = []
        self.corners: List[Corner] = []
        self.edges: List[Edge] = []
        self._corner_map: Dict[int, Corner] = {}

    def corner_key(self, p: Point) -> int:
        """
        Discretize p to the integer that identifies its corner.

        Points falling in the same unit cell share a key and therefore a
        Corner. Assumes non-negative coordinates bounded by the plot width.
        """
        return int(math.floor(p.x) + math.floor(p.y) * self.bounds.width * 2)

    def make_corner(self, p: Optional[Point]) -> Optional[Corner]:
        """Return the unique corner for p, creating it on first sight."""
        if p is None:
            return None

        key = self.corner_key(p)
        corner = self._corner_map.get(key)
        if corner is None:
            corner = Corner(p, border=lies_on_axes(self.bounds, p, BORDER_TOLERANCE))
            self.corners.append(corner)
            self._corner_map[key] = corner
        return corner

    def build(self) -> VoronoiGraph:
        v = self.tessellation

        region_map: Dict[Point, Region] = {}
        for p in v.site_coords():
            region = Region(p)
            self.regions.append(region)
            region_map[p] = region

        # materialize every cell polygon before the dual edges are read
        for region in self.regions:
            v.cell_polygon(region.center)

        for dual in v.dual_edges():
            c0 = self.make_corner(dual.voronoi_edge.p0)
            c1 = self.make_corner(dual.voronoi_edge.p1)
            r0 = region_map.get(dual.delaunay_line.p0)
            r1 = region_map.get(dual.delaunay_line.p1)

            edge = Edge(c0, c1, r0, r1)
            self.edges.append(edge)
            self._link(edge)

        self._add_border_corners()

        logger.info("Graph built",
                    regions=len(self.regions), corners=len(self.corners),
                    edges=len(self.edges))

        return VoronoiGraph(self.bounds, self.regions, self.corners, self.edges)

    def _link(self, edge: Edge) -> None:
        r0, r1 = edge.region0, edge.region1
        c0, c1 = edge.corner0, edge.corner1

        # Regions point to edges. Corners point to edges.
        for r in (r0, r1):
            if r is not None:
                r.add_border(edge)
        for c in (c0, c1):
            if c is not None:
                c.add_protrudes(edge)

        # Regions point to regions
        if r0 is not None and r1 is not None:
            r0.add_neighbor(r1)
            r1.add_neighbor(r0)

        # Corners point to corners
        if c0 is not None and c1 is not None:
            c0.add_adjacent(c1)
            c1.add_adjacent(c0)

        # Regions point to corners
        for r in (r0, r1):
            if r is not None:
                r.add_corner(c0)
                r.add_corner(c1)

        # Corners point to regions
        for c in (c0, c1):
            if c is not None:
                c.add_touches(r0)
                c.add_touches(r1)

    def _add_border_corners(self) -> None:
        """
        Close the cells sitting in the corners of the plot rectangle.

        The tessellation never yields the four rectangle corners as
        vertices, so a region whose corners reach two adjacent sides gets a
        new border corner at the point where those sides meet.
        """
        b = self.bounds
        diff = BORDER_TOLERANCE
        top_left, bottom_left, top_right, bottom_right = b.corners()

        for region in self.regions:
            on_left = on_right = on_top = on_bottom = False
            for corner in region.corners:
                p = corner.location
                on_left |= close_enough(p.x, b.min_x, diff)
                on_top |= close_enough(p.y, b.min_y, diff)
                on_right |= close_enough(p.x, b.max_x, diff)
                on_bottom |= close_enough(p.y, b.max_y, diff)

            for touches, location in ((on_left and on_top, top_left),
                                      (on_left and on_bottom, bottom_left),
                                      (on_right and on_top, top_right),
                                      (on_right and on_bottom, bottom_right)):
                if touches:
                    corner = Corner(location, border=True)
                    self.corners.append(corner)
                    region.add_corner(corner)


def build_graph(tessellation) -> VoronoiGraph:
    """Build the linked graph for one tessellation, without smoothing."""
    return GraphBuilder(tessellation).build()


def improve_corners(graph: VoronoiGraph) -> None:
    """
    Move each inner corner to the average of the region centers it touches.

    This evens out edge lengths at the cost of the exact Voronoi property.
    All new locations are computed before any is assigned. Border corners
    and corners touching no region stay put.
    """
    corners = graph.corners
    new_locations = []
    for c in corners:
        if c.border or not c.touches:
            new_locations.append(c.location)
        else:
            new_locations.append(vertex_centroid([r.center for r in c.touches]))

    for c, p in zip(corners, new_locations):
        c.location = p


def relax_sites(tessellation, iterations: int,
                factory: Callable = ScipyTessellation):
    """
    Apply Lloyd's relaxation to the tessellation sites.

    Each pass moves every site to the vertex average of its cell and
    re-tessellates with the same bounds.

    Args:
        tessellation: Initial tessellation
        iterations: Number of passes, 0 returns the input as is
        factory: Callable (sites, bounds) -> tessellation

    Returns:
        Tessellation of the relaxed sites
    """
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")

    v = tessellation
    bounds = v.plot_bounds
    if iterations:
        logger.info("Starting Lloyd's relaxation", iterations=iterations)

    for iteration in range(iterations):
        points = v.site_coords()
        for i, p in enumerate(points):
            c = vertex_centroid(v.cell_polygon(p))
            # clamp to map bounds
            points[i] = Point(min(max(c.x, bounds.min_x), bounds.max_x),
                              min(max(c.y, bounds.min_y), bounds.max_y))
        v = factory(points, bounds)
        logger.debug("Relaxation iteration complete", iteration=iteration + 1)

    return v


def build_voronoi_graph(tessellation, lloyd_iterations: int = 0,
                        factory: Callable = ScipyTessellation) -> VoronoiGraph:
    """
    Relax, build and smooth.

    Args:
        tessellation: Initial tessellation
        lloyd_iterations: Number of Lloyd relaxation passes
        factory: Used to re-tessellate relaxed sites

    Returns:
        Finished graph
    """
    v = relax_sites(tessellation, lloyd_iterations, factory)
    graph = build_graph(v)
    improve_corners(graph)
    return graph


class MapConfig(NamedTuple):
    """Size and density of a generated map."""
    width: float
    height: float
    num_sites: int
    lloyd_iterations: int = 2


def default_map_config() -> MapConfig:
    return MapConfig(
        width=settings.default_map_width,
        height=settings.default_map_height,
        num_sites=settings.default_num_sites,
        lloyd_iterations=settings.default_lloyd_iterations,
    )


def generate_voronoi_graph(config: Optional[MapConfig] = None,
                           seed: Optional[int] = None) -> VoronoiGraph:
    """
    Generate a graph over uniformly random sites.

    Args:
        config: Map configuration, defaults come from settings
        seed: Random seed for reproducibility

    Returns:
        Finished graph
    """
    if config is None:
        config = default_map_config()

    logger.info("Generating Voronoi graph",
                width=config.width, height=config.height,
                num_sites=config.num_sites,
                lloyd_iterations=config.lloyd_iterations, seed=seed)

    bounds = Rect(0.0, 0.0, float(config.width), float(config.height))
    sites = sample_sites(bounds, config.num_sites, seed)
    tessellation = ScipyTessellation(sites, bounds)
    return build_voronoi_graph(tessellation, config.lloyd_iterations)
