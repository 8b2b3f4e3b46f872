"""Geometric value types shared by the tessellation and the graph."""

from typing import List, NamedTuple, Optional, Sequence, Tuple


class Point(NamedTuple):
    """2D point. Hashable, so it can key the site -> region lookup."""
    x: float
    y: float


class Rect(NamedTuple):
    """Axis-aligned rectangle. y grows downward, so min_y is the top side."""
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def contains(self, p: Point) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Return top-left, bottom-left, top-right, bottom-right."""
        return (
            Point(self.min_x, self.min_y),
            Point(self.min_x, self.max_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
        )


class LineSegment(NamedTuple):
    """Segment between two points; an endpoint is None when unbounded."""
    p0: Optional[Point]
    p1: Optional[Point]


def vertex_centroid(points: Sequence[Point]) -> Point:
    """
    Arithmetic mean of a polygon's vertices.

    This is not the area centroid; Lloyd relaxation here moves each site
    to the plain average of its cell corners.

    Args:
        points: Polygon vertices

    Returns:
        Mean point
    """
    if not points:
        raise ValueError("Cannot compute the centroid of an empty polygon")

    x = 0.0
    y = 0.0
    for p in points:
        x += p.x
        y += p.y
    return Point(x / len(points), y / len(points))


def polygon_area(points: Sequence[Point]) -> float:
    """Absolute polygon area using the shoelace formula."""
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y - points[j].x * points[i].y
    return abs(area) * 0.5


def close_enough(d1: float, d2: float, diff: float) -> bool:
    return abs(d1 - d2) <= diff


def lies_on_axes(r: Rect, p: Point, diff: float = 1.0) -> bool:
    """True if p is within diff of any side of r."""
    return (close_enough(p.x, r.min_x, diff)
            or close_enough(p.y, r.min_y, diff)
            or close_enough(p.x, r.max_x, diff)
            or close_enough(p.y, r.max_y, diff))


def to_points(coords) -> List[Point]:
    """Convert an (N,2) array or sequence of pairs into Points."""
    return [Point(float(c[0]), float(c[1])) for c in coords]
