"""Convex hull via Andrew's monotone chain."""
from .geometry import EmptyShapeError, as_shape, point_key
from .types import Point, Shape, ShapeLike


def _turns_right_or_straight(r: Point, q: Point, p: Point) -> bool:
    """True unless r -> q -> p is a strict counter-clockwise turn (y up)."""
    return (q[0]-r[0])*(p[1]-r[1]) >= (q[1]-r[1])*(p[0]-r[0])

def _chain(points: list[Point]) -> list[Point]:
    chain: list[Point] = []
    for p in points:
        while len(chain) >= 2 and _turns_right_or_straight(chain[-2], chain[-1], p):
            chain.pop()
        chain.append(p)
    chain.pop()  # first point of the opposite chain
    return chain

def hull_presorted(points: ShapeLike) -> Shape:
    """Convex hull of points already sorted by (x, y). O(n).

    Collinear points on a hull edge and repeated points are dropped. The hull
    is open (no repeated closing point) and clockwise per is_clockwise().
    Zero or one point is returned as a copy.
    """
    pts = as_shape(points)
    if len(pts) <= 1:
        return pts
    upper = _chain(pts)
    lower = _chain(pts[::-1])
    if len(upper) == 1 and len(lower) == 1 and upper[0] == lower[0]:
        return upper
    return upper+lower

def convex_hull(shape: ShapeLike) -> Shape:
    """Convex hull of the points of *shape*, O(n log n). Raises EmptyShapeError for no points.

    Works on a sorted copy; the caller's sequence is never reordered.
    """
    pts = as_shape(shape)
    if not pts:
        raise EmptyShapeError("Cannot compute the convex hull of an empty shape")
    return hull_presorted(sorted(pts, key=point_key))
