"""
Geometry Operations Module
Point and polygon math for head placement and pipe routing.
Pure functions; all distances are in feet.
"""

import math
from typing import NamedTuple

from shapely.geometry import Polygon, Point as ShapelyPoint
from shapely.ops import unary_union

from .models import Point


class BoundingBox(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self):
        return self.max_x - self.min_x

    @property
    def height(self):
        return self.max_y - self.min_y


def distance(a, b):
    """Euclidean distance between two points"""
    return math.hypot(b.x - a.x, b.y - a.y)


def midpoint(a, b):
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def centroid(points):
    """
    Calculate the arithmetic mean of a list of points

    Args:
        points: Sequence of points

    Returns:
        Point at the mean position, or the origin for an empty sequence
    """
    n = len(points)
    if n == 0:
        return Point(0.0, 0.0)

    cx = sum(pt.x for pt in points) / n
    cy = sum(pt.y for pt in points) / n

    return Point(cx, cy)


def bounding_box(points):
    """
    Get the axis-aligned bounding box of a list of points

    Args:
        points: Non-empty sequence of points

    Returns:
        BoundingBox with min/max extents
    """
    xs = [pt.x for pt in points]
    ys = [pt.y for pt in points]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))


def rectangle_box(center, width, length):
    """Bounding box of a width x length rectangle centred on a point"""
    return BoundingBox(
        center.x - width / 2,
        center.y - length / 2,
        center.x + width / 2,
        center.y + length / 2
    )


def area_of_polygon(points):
    """
    Calculate polygon area with the shoelace formula

    Args:
        points: Ordered polygon vertices (simple polygon, open or closed)

    Returns:
        Area in square feet (always non-negative)
    """
    n = len(points)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y
    return abs(area) / 2


def is_point_in_polygon(point, polygon):
    """
    Ray-casting containment test (even-odd rule)

    Args:
        point: Point to test
        polygon: Ordered polygon vertices

    Returns:
        True if the point lies inside; False for degenerate polygons
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y):
            x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def generate_grid_points(origin_x, origin_y, width, height,
                         spacing_x, spacing_y, pattern='square'):
    """
    Generate a grid of candidate points over a rectangle

    Odd rows of a triangular pattern are shifted by half the column
    spacing. Points that land beyond the far edge are dropped.

    Args:
        origin_x, origin_y: Lower-left corner of the rectangle
        width, height: Rectangle extents
        spacing_x, spacing_y: Distance between columns and rows
        pattern: 'square' or 'triangular'

    Returns:
        List of Points, row by row
    """
    cols = math.ceil(width / spacing_x) + 1
    rows = math.ceil(height / spacing_y) + 1
    max_x = origin_x + width
    max_y = origin_y + height

    points = []
    for row in range(rows):
        offset_x = spacing_x / 2 if pattern == 'triangular' and row % 2 == 1 else 0
        for col in range(cols):
            x = origin_x + col * spacing_x + offset_x
            y = origin_y + row * spacing_y
            if x <= max_x and y <= max_y:
                points.append(Point(x, y))
    return points


def zone_polygon(points):
    """
    Build a Shapely polygon from boundary points

    Args:
        points: Ordered boundary points

    Returns:
        Shapely Polygon, or None when fewer than 3 points are given
    """
    if len(points) < 3:
        return None
    return Polygon([(pt.x, pt.y) for pt in points])


def validate_boundary(points, min_area=1.0):
    """
    Validate that a zone boundary is usable for head placement

    Args:
        points: Ordered boundary points
        min_area: Smallest acceptable area in square feet

    Returns:
        Tuple of (is_valid: bool, error_message: str or None)
    """
    polygon = zone_polygon(points)
    if polygon is None:
        return (False, "Boundary needs at least 3 points")

    if not polygon.is_valid:
        return (False, "Boundary polygon is not valid (self-intersecting or malformed)")

    if polygon.area < min_area:
        return (False, f"Boundary area is too small (< {min_area:g} sq ft)")

    return (True, None)


def coverage_ratio(points, heads):
    """
    Fraction of a polygon covered by the throw circles of a set of heads

    Args:
        points: Ordered boundary points of the area
        heads: Head placements (only heads with a positive radius count)

    Returns:
        Covered fraction between 0.0 and 1.0
    """
    polygon = zone_polygon(points)
    if polygon is None or polygon.area <= 0:
        return 0.0

    circles = [
        ShapelyPoint(head.x, head.y).buffer(head.radius_ft)
        for head in heads
        if head.radius_ft > 0
    ]
    if not circles:
        return 0.0

    covered = unary_union(circles).intersection(polygon)
    return min(covered.area / polygon.area, 1.0)
