"""Sutherland-Hodgman polygon clipping against a convex clip polygon."""
import logging

from .constants import EPSILON
from .geometry import (
    GeometryError,
    as_shape, drop_repeated_points, open_shape,
    is_clockwise, is_convex, is_shape_closed, shape_area, line_intersection,
)
from .types import Point, Shape, ShapeLike

log = logging.getLogger(__name__)


def _is_inside(p: Point, cp1: Point, cp2: Point) -> bool:
    """True if p lies strictly left of the directed clip edge cp1 -> cp2 (y up)."""
    return (cp2[0]-cp1[0])*(p[1]-cp1[1])-(cp2[1]-cp1[1])*(p[0]-cp1[0]) > 0

def _validated_clip(clip: ShapeLike) -> Shape:
    """Clip polygon without its closing point. Raises GeometryError unless convex and counter-clockwise."""
    pts = drop_repeated_points(clip)
    if len(pts) < 3:
        raise GeometryError(f"Clip polygon needs at least 3 distinct points, got {len(pts)}")
    if shape_area(pts) <= EPSILON:
        raise GeometryError("Clip polygon has zero area")
    if not is_convex(pts):
        raise GeometryError("Clip polygon must be convex")
    if is_clockwise(pts):
        raise GeometryError(
            "Clip polygon is clockwise; reverse it (orient_shape(clip, clockwise=False))")
    return pts

def clip_polygon(subject: ShapeLike, clip: ShapeLike) -> Shape:
    """Part of *subject* inside the convex polygon *clip*.

    *clip* must be convex and counter-clockwise (is_clockwise(clip) is False);
    the opposite winding would select the outside of every edge, so it is
    rejected with GeometryError. Closing duplicate points on either input are
    ignored. The result is empty when the two do not overlap, and closed
    when *subject* was explicitly closed.
    """
    subject_pts = as_shape(subject)
    closed = is_shape_closed(subject_pts)
    clip_pts = _validated_clip(clip)

    output = open_shape(subject_pts)
    for i, cp1 in enumerate(clip_pts):
        if not output:
            break
        cp2 = clip_pts[(i+1)%len(clip_pts)]
        input_list = output; output = []
        s = input_list[-1]
        for e in input_list:
            if _is_inside(e, cp1, cp2):
                if not _is_inside(s, cp1, cp2):
                    output.append(line_intersection(s, e, cp1, cp2))
                output.append(e)
            elif _is_inside(s, cp1, cp2):
                output.append(line_intersection(s, e, cp1, cp2))
            s = e

    if not output:
        log.debug("clip_polygon: subject (%d points) lies outside the clip polygon", len(subject_pts))
        return []
    if closed:
        output.append(output[0])
    return output
