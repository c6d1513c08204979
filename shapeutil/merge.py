"""Union of two overlapping shapes.

merge_point_cloud() collects every boundary-relevant point (vertices plus
edge crossings) sorted by (x, y). It is not a traversal order, so
merge_shapes() only uses it to find a start point and then walks the two
boundaries. Wherever they meet it takes the leftmost outgoing edge.
"""
import logging
import math
from enum import Enum
from typing import NamedTuple

from .geometry import (
    GeometryError, DisjointShapesError,
    as_shape, drop_repeated_points, close_shape, orient_shape, point_key,
    point_in_shape, point_on_segment, segment_intersection, shape_crossings,
)
from .types import Point, Shape, ShapeLike, Crossing

log = logging.getLogger(__name__)


class _Walk(Enum):
    ON_A = "a"
    ON_B = "b"

    @property
    def other(self) -> "_Walk":
        return _Walk.ON_B if self is _Walk.ON_A else _Walk.ON_A

class _Node(NamedTuple):
    point: Point
    contact: bool  # also lies on the other shape's boundary


# ============================================================
# Candidate Points
# ============================================================
def merge_point_cloud(shape_a: ShapeLike, shape_b: ShapeLike) -> Shape:
    """Vertices of both shapes plus every crossing of their concatenation, deduplicated and sorted by (x, y).

    The concatenated points are oriented clockwise and treated as one polygon,
    so the two bridging edges between the shapes take part as well.
    """
    points = orient_shape(as_shape(shape_a)+as_shape(shape_b), clockwise=True)
    n = len(points)
    found = []
    for i in range(n):
        current = points[i]; nxt = points[(i+1)%n]
        for j in range(i+1, n):
            p = segment_intersection(current, nxt, points[j], points[(j+1)%n])
            if p is not None:
                found.append(p)
    unique = {point_key(p): p for p in points+found}
    return sorted(unique.values(), key=point_key)

# ============================================================
# Boundary Walk
# ============================================================
def _prepared(shape: ShapeLike, name: str) -> Shape:
    pts = drop_repeated_points(shape)
    if len(pts) < 3:
        raise GeometryError(f"Shape {name} needs at least 3 distinct points, got {len(pts)}")
    return orient_shape(pts, clockwise=True)

def _param(p: Point, a: Point, b: Point) -> float:
    dx = b[0]-a[0]; dy = b[1]-a[1]
    return ((p[0]-a[0])*dx+(p[1]-a[1])*dy)/(dx*dx+dy*dy)

def _touches(p: Point, other: Shape) -> bool:
    n = len(other)
    return any(point_on_segment(p, other[j], other[(j+1)%n]) for j in range(n))

def _ring(pts: Shape, other: Shape, crossings: list[Crossing], on_a: bool) -> list[_Node]:
    """Vertices of one shape with every contact with *other* inserted in order along each edge.

    Contacts are proper crossings, vertices of *other* resting inside one of
    our edges (T-junctions), and our own vertices lying on *other*'s boundary.
    """
    n = len(pts)
    per_edge: dict[int, list[tuple[float, Point]]] = {}
    for c in crossings:
        edge, param = (c.edge_a, c.t) if on_a else (c.edge_b, c.u)
        per_edge.setdefault(edge, []).append((param, c.point))
    for i in range(n):
        a = pts[i]; b = pts[(i+1)%n]
        for q in other:
            if q != a and q != b and point_on_segment(q, a, b):
                per_edge.setdefault(i, []).append((_param(q, a, b), q))
    ring = []
    for i, p in enumerate(pts):
        ring.append(_Node(p, _touches(p, other)))
        for _, q in sorted(per_edge.get(i, [])):
            ring.append(_Node(q, True))
    return ring

def _turn(heading: Point, src: Point, dst: Point) -> float:
    """Signed angle from *heading* to src -> dst; positive turns left (y up). Reversal is the sharpest right."""
    dx = dst[0]-src[0]; dy = dst[1]-src[1]
    cross = heading[0]*dy-heading[1]*dx
    dot = heading[0]*dx+heading[1]*dy
    if cross == 0 and dot < 0:
        return -math.pi
    return math.atan2(cross, dot)

def _merge_without_contacts(a: Shape, b: Shape) -> Shape:
    if all(point_in_shape(p, a) for p in b):
        log.debug("merge_shapes: second shape lies inside the first")
        return close_shape(a)
    if all(point_in_shape(p, b) for p in a):
        log.debug("merge_shapes: first shape lies inside the second")
        return close_shape(b)
    raise DisjointShapesError("Shapes neither cross nor contain one another; nothing to merge")

def merge_shapes(shape_a: ShapeLike, shape_b: ShapeLike) -> Shape:
    """Outer boundary of the union of two simple, hole-free shapes, as a closed clockwise shape.

    Shapes may cross, share vertices, rest a vertex on the other's edge or
    share edges; the result does not depend on argument order or winding.
    If one shape contains the other the container is returned. Raises
    DisjointShapesError if they neither overlap nor share an edge (touching
    at a single point included), and GeometryError for shapes with fewer
    than 3 distinct points. Holes enclosed by the union are not reported.
    """
    a = _prepared(shape_a, "A"); b = _prepared(shape_b, "B")
    crossings = shape_crossings(a, b)
    rings = {_Walk.ON_A: _ring(a, b, crossings, on_a=True), _Walk.ON_B: _ring(b, a, crossings, on_a=False)}
    if not any(node.contact for ring in rings.values() for node in ring):
        return _merge_without_contacts(a, b)
    log.debug("merge_shapes: %d crossings between %d and %d points", len(crossings), len(a), len(b))

    twins = {
        state: {point_key(node.point): i for i, node in enumerate(ring) if node.contact}
        for state, ring in rings.items()
    }

    # The smallest point by (x, y) is always a vertex on the outer boundary,
    # and every outer edge leaving it turns right of straight up.
    start = merge_point_cloud(a, b)[0]
    state = _Walk.ON_A if start in a else _Walk.ON_B
    idx = next(i for i, node in enumerate(rings[state]) if node.point == start)
    heading = (0.0, 1.0)

    outline = [start]
    seen = {point_key(start)}
    for _ in range(len(rings[_Walk.ON_A])+len(rings[_Walk.ON_B])):
        here = rings[state][idx]
        options = [(state, (idx+1)%len(rings[state]))]
        if here.contact:
            other = state.other
            j = twins[other].get(point_key(here.point))
            if j is not None:
                options.append((other, (j+1)%len(rings[other])))
        # Interior lies to the right, so the outer boundary takes the leftmost edge.
        state, idx = max(options, key=lambda o: _turn(heading, here.point, rings[o[0]][o[1]].point))
        nxt = rings[state][idx].point
        heading = (nxt[0]-here.point[0], nxt[1]-here.point[1])
        if nxt == start:
            outline.append(start)
            return outline
        if point_key(nxt) in seen:
            if not crossings:
                raise DisjointShapesError("Shapes touch at a single point; nothing to merge")
            raise GeometryError(f"Union outline passes through {nxt} twice; it is not a simple polygon")
        seen.add(point_key(nxt))
        outline.append(nxt)
    raise GeometryError("Boundary walk did not return to its start; are the shapes self-intersecting?")
