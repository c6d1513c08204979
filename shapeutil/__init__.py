"""Pure 2-D shape geometry: bounding boxes, classification, hulls, clipping, and merging."""

from .types import Point, Shape, ShapeLike, Rectangle, Crossing
from .geometry import (
    GeometryError, EmptyShapeError, DisjointShapesError,
    as_shape, as_point, point_key, compare_points,
    shape_to_rectangle, rectangle_to_shape, is_shape_rectangular,
    is_shape_closed, close_shape, open_shape, drop_repeated_points,
    is_clockwise, orient_shape, is_convex, shape_area,
    segment_intersection, line_intersection, shape_crossings, has_overlap,
    point_in_shape, point_on_segment,
)
from .hull import convex_hull, hull_presorted
from .clip import clip_polygon
from .merge import merge_shapes, merge_point_cloud
