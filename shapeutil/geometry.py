"""Pure shape primitives: bounding boxes, classification, orientation, and segment intersection.

A shape is an ordered list of (x, y) points read as a polygon boundary, with an
implicit edge from the last point back to the first. It is *explicitly* closed
when its first and last points coincide. Nothing here mutates its input.
"""
import math
from collections.abc import Mapping
from typing import Iterator

import numpy as np

from .constants import EPSILON
from .types import Point, Shape, ShapeLike, Rectangle, Crossing

# ============================================================
# Error Types
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible or malformed geometry operations."""

class EmptyShapeError(GeometryError):
    """Raised when an operation needs at least one point and got none."""

class DisjointShapesError(GeometryError):
    """Raised when two shapes neither cross nor contain one another."""

# ============================================================
# Input Coercion
# ============================================================
def as_shape(points: ShapeLike | None) -> Shape:
    """Copy *points* into a fresh list of float (x, y) tuples.

    Accepts (x, y) pairs, {"x": .., "y": ..} mappings (the UI's point format)
    or an Nx2 numpy array. Raises GeometryError for anything else, or for
    non-finite coordinates.
    """
    if points is None:
        return []
    try:
        if not isinstance(points, np.ndarray):
            points = [(p["x"], p["y"]) if isinstance(p, Mapping) else p for p in points]
        arr = np.asarray(points, dtype=float)
    except (KeyError, TypeError, ValueError) as exc:
        raise GeometryError(f"Cannot read points: {exc}") from exc
    if arr.size == 0:
        return []
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise GeometryError(f"Points must be Nx2, got shape {arr.shape}")
    if not np.isfinite(arr).all():
        raise GeometryError("Points must have finite coordinates")
    return [(float(x), float(y)) for x, y in arr]

def as_point(p: Point | Mapping[str, float]) -> Point:
    """A single (x, y) pair or {"x": .., "y": ..} mapping as a float tuple."""
    pts = as_shape([p])
    return pts[0]

def point_key(p: Point) -> tuple[float, float]:
    """Lexicographic sort key: x first, then y."""
    return (p[0], p[1])

def compare_points(a: Point, b: Point) -> int:
    """Three-way lexicographic comparison by (x, y); usable with functools.cmp_to_key."""
    if a[0] != b[0]:
        return -1 if a[0] < b[0] else 1
    if a[1] != b[1]:
        return -1 if a[1] < b[1] else 1
    return 0

def _edges(shape: Shape) -> Iterator[tuple[int, Point, Point]]:
    """(index, start, end) for every edge, including the wrap-around edge."""
    n = len(shape)
    for i in range(n):
        yield i, shape[i], shape[(i+1)%n]

# ============================================================
# Bounding Box & Rectangles
# ============================================================
def shape_to_rectangle(shape: ShapeLike) -> Rectangle:
    """Axis-aligned bounding box of *shape*. Raises EmptyShapeError for no points."""
    pts = as_shape(shape)
    if not pts:
        raise EmptyShapeError("Cannot compute the bounding box of an empty shape")
    min_x = max_x = pts[0][0]
    min_y = max_y = pts[0][1]
    for x, y in pts[1:]:
        min_x = min(min_x, x); max_x = max(max_x, x)
        min_y = min(min_y, y); max_y = max(max_y, y)
    return Rectangle(left=min_x, top=min_y, width=max_x-min_x, height=max_y-min_y)

def rectangle_to_shape(width: float, height: float, x: float = 0, y: float = 0) -> Shape:
    """Closed 5-point boundary of a rectangle, starting at its (x, y) corner."""
    return [(x, y), (x+width, y), (x+width, y+height), (x, y+height), (x, y)]

def is_shape_rectangular(shape: ShapeLike) -> bool:
    """True if *shape* has the canonical closed 5-point form of rectangle_to_shape().

    This is a syntactic check: a rectangle with extra collinear points, or one
    that starts at another corner, is reported as not rectangular.
    """
    pts = as_shape(shape)
    if len(pts) != 5:
        return False
    if pts[1][0] != pts[2][0] or pts[2][1] != pts[3][1]:
        return False
    return is_shape_closed(pts)

# ============================================================
# Closedness
# ============================================================
def is_shape_closed(shape: ShapeLike | None, tolerance: float = 0.0) -> bool:
    """True if the first and last points coincide (the smallest closable shape has 3 points).

    With the default tolerance of 0 the comparison is exact. Pass a positive
    *tolerance* (e.g. constants.CLOSE_TOLERANCE) for computed shapes.
    """
    pts = as_shape(shape)
    if len(pts) < 3:
        return False
    first = pts[0]; last = pts[-1]
    return abs(first[0]-last[0]) <= tolerance and abs(first[1]-last[1]) <= tolerance

def close_shape(shape: ShapeLike) -> Shape:
    """Copy of *shape* with the first point repeated at the end, unless already closed."""
    pts = as_shape(shape)
    if pts and not is_shape_closed(pts):
        pts.append(pts[0])
    return pts

def open_shape(shape: ShapeLike) -> Shape:
    """Copy of *shape* without its closing duplicate point, if it has one."""
    pts = as_shape(shape)
    if is_shape_closed(pts):
        pts.pop()
    return pts

def drop_repeated_points(shape: ShapeLike) -> Shape:
    """Copy of *shape* with consecutive duplicate points removed, wrap-around included."""
    result: Shape = []
    for p in as_shape(shape):
        if not result or p != result[-1]:
            result.append(p)
    while len(result) > 1 and result[0] == result[-1]:
        result.pop()
    return result

# ============================================================
# Orientation & Area
# ============================================================
def is_clockwise(points: ShapeLike) -> bool:
    """Orientation via the shoelace sum of (x2-x1)*(y2+y1) over all edges; positive is clockwise.

    The square (0,0) (0,1) (1,1) (1,0) gives a positive sum, so it is clockwise.
    """
    pts = as_shape(points)
    total = 0.0
    for _, (x1, y1), (x2, y2) in _edges(pts):
        total += (x2-x1)*(y2+y1)
    return total > 0

def orient_shape(shape: ShapeLike, clockwise: bool = True) -> Shape:
    """Copy of *shape*, reversed if needed so that is_clockwise() matches *clockwise*."""
    pts = as_shape(shape)
    if is_clockwise(pts) != clockwise:
        pts.reverse()
    return pts

def is_convex(shape: ShapeLike, eps: float = EPSILON) -> bool:
    """True if every turn along the (implicitly closed) boundary bends the same way.

    Straight-through vertices (|cross| <= eps) are ignored.
    """
    pts = drop_repeated_points(shape)
    n = len(pts)
    if n < 3:
        return False
    sign = 0
    for i in range(n):
        a = pts[i-1]; b = pts[i]; c = pts[(i+1)%n]
        cross = (b[0]-a[0])*(c[1]-b[1])-(b[1]-a[1])*(c[0]-b[0])
        if abs(cross) <= eps:
            continue
        turn = 1 if cross > 0 else -1
        if sign and turn != sign:
            return False
        sign = turn
    return sign != 0

def shape_area(shape: ShapeLike) -> float:
    """Polygon area via the shoelace formula. Works for either winding order."""
    pts = as_shape(shape)
    a = 0.0
    for _, p, q in _edges(pts):
        a += p[0]*q[1]-q[0]*p[1]
    return abs(a)/2

# ============================================================
# Segment Intersection
# ============================================================
def _intersection_params(a1: Point, a2: Point, b1: Point, b2: Point) -> tuple[float, float] | None:
    """Parameters (t, u) where a1 + t*(a2-a1) == b1 + u*(b2-b1), or None if parallel."""
    rx = a2[0]-a1[0]; ry = a2[1]-a1[1]
    sx = b2[0]-b1[0]; sy = b2[1]-b1[1]
    d = rx*sy-ry*sx
    if d == 0:
        return None
    qx = b1[0]-a1[0]; qy = b1[1]-a1[1]
    return (qx*sy-qy*sx)/d, (qx*ry-qy*rx)/d

def _point_along(a1: Point, a2: Point, t: float) -> Point:
    return (a1[0]+t*(a2[0]-a1[0]), a1[1]+t*(a2[1]-a1[1]))

def _crossing_point(a1: Point, a2: Point, b1: Point, b2: Point) -> Point | None:
    params = _intersection_params(a1, a2, b1, b2)
    if params is None:
        return None
    t, u = params
    if not (0 < t < 1 and 0 < u < 1):
        return None
    return _point_along(a1, a2, t)

def segment_intersection(a1, a2, b1, b2) -> Point | None:
    """Point where segments a1-a2 and b1-b2 properly cross, else None.

    Both parameters must lie strictly inside (0, 1): segments that only touch
    at an endpoint do not intersect. Parallel segments (including collinear
    overlapping ones) never intersect. Points may be (x, y) pairs or
    {"x": .., "y": ..} mappings.
    """
    return _crossing_point(as_point(a1), as_point(a2), as_point(b1), as_point(b2))

def line_intersection(a1, a2, b1, b2) -> Point | None:
    """Intersection of the infinite lines through a1-a2 and b1-b2. None if parallel.

    Points may be (x, y) pairs or {"x": .., "y": ..} mappings.
    """
    a1 = as_point(a1); a2 = as_point(a2)
    params = _intersection_params(a1, a2, as_point(b1), as_point(b2))
    if params is None:
        return None
    return _point_along(a1, a2, params[0])

def shape_crossings(shape_a: ShapeLike, shape_b: ShapeLike) -> list[Crossing]:
    """Every proper crossing between the edges of two implicitly closed shapes."""
    a = as_shape(shape_a); b = as_shape(shape_b)
    crossings = []
    for i, a1, a2 in _edges(a):
        for j, b1, b2 in _edges(b):
            params = _intersection_params(a1, a2, b1, b2)
            if params is None:
                continue
            t, u = params
            if 0 < t < 1 and 0 < u < 1:
                crossings.append(Crossing(_point_along(a1, a2, t), i, t, j, u))
    return crossings

def has_overlap(shape_a: ShapeLike, shape_b: ShapeLike) -> bool:
    """True if any edge of one shape properly crosses an edge of the other.

    Assumes neither shape self-intersects or has holes. A shape lying wholly
    inside the other, or touching it only at vertices or along edges, does
    not count as overlapping.
    """
    a = as_shape(shape_a); b = as_shape(shape_b)
    for _, a1, a2 in _edges(a):
        for _, b1, b2 in _edges(b):
            if _crossing_point(a1, a2, b1, b2) is not None:
                return True
    return False

# ============================================================
# Containment
# ============================================================
def point_on_segment(p: Point, a: Point, b: Point, eps: float = EPSILON) -> bool:
    """True if p lies on segment a-b, endpoints included, within *eps*."""
    dx = b[0]-a[0]; dy = b[1]-a[1]
    cross = dx*(p[1]-a[1])-dy*(p[0]-a[0])
    if abs(cross) > eps*max(1.0, math.hypot(dx, dy)):
        return False
    return (min(a[0], b[0])-eps <= p[0] <= max(a[0], b[0])+eps and
            min(a[1], b[1])-eps <= p[1] <= max(a[1], b[1])+eps)

def point_in_shape(p: Point, shape: ShapeLike, eps: float = EPSILON) -> bool:
    """Ray-casting point-in-polygon test. Points on the boundary (within *eps*) count as inside."""
    pts = as_shape(shape)
    if not pts:
        return False
    inside = False
    for _, (x1, y1), (x2, y2) in _edges(pts):
        if point_on_segment(p, (x1, y1), (x2, y2), eps):
            return True
        if (y1 <= p[1] < y2) or (y2 <= p[1] < y1):
            x = x1+(p[1]-y1)*(x2-x1)/(y2-y1)
            if x > p[0]:
                inside = not inside
    return inside
