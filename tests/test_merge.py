"""Tests for shapeutil/merge.py."""
import pytest
from shapeutil.clip import clip_polygon
from shapeutil.geometry import (
    GeometryError, DisjointShapesError,
    is_clockwise, is_shape_closed, orient_shape, rectangle_to_shape, shape_area,
)
from shapeutil.merge import merge_shapes, merge_point_cloud


def _approx_points(shape):
    return [pytest.approx(p, abs=1e-9) for p in shape]


class TestMergeShapes:
    def test_box_and_triangle(self, box, triangle):
        merged = merge_shapes(box, triangle)
        assert merged == _approx_points([
            (0, 0), (1, 2), (1, 6), (3, 6), (3.5, 7),
            (4, 6), (6, 6), (6, 2), (7, 0), (0, 0),
        ])

    def test_result_is_closed_and_clockwise(self, box, triangle):
        merged = merge_shapes(box, triangle)
        assert is_shape_closed(merged)
        assert is_clockwise(merged)

    def test_argument_order_and_winding_do_not_matter(self, box, triangle):
        expected = merge_shapes(box, triangle)
        assert merge_shapes(triangle, box) == _approx_points(expected)
        assert merge_shapes(box[::-1], triangle) == _approx_points(expected)

    def test_union_area(self, box, triangle):
        """area(A u B) == area(A) + area(B) - area(A n B), with the overlap from clipping."""
        overlap = clip_polygon(box, orient_shape(triangle, clockwise=False))
        expected = shape_area(box) + shape_area(triangle) - shape_area(overlap)
        assert abs(shape_area(merge_shapes(box, triangle)) - expected) < 1e-9

    def test_cross(self, bar_h, bar_v):
        merged = merge_shapes(bar_h, bar_v)
        assert len(merged) == 13
        assert merged[0] == (0, 2)
        assert abs(shape_area(merged) - 20.0) < 1e-9

    def test_closed_inputs(self, box, triangle):
        closed_box = box + [box[0]]
        assert merge_shapes(closed_box, triangle) == merge_shapes(box, triangle)

    def test_nested_returns_container(self):
        outer = [(0, 0), (10, 0), (10, 10), (0, 10)]
        inner = [(2, 2), (4, 2), (3, 5)]
        merged = merge_shapes(inner, outer)
        assert sorted(merged[:-1]) == sorted(outer)
        assert is_shape_closed(merged)
        assert is_clockwise(merged)

    def test_identical_shapes(self, box):
        merged = merge_shapes(box, list(box))
        assert sorted(merged[:-1]) == sorted(box)

    def test_disjoint_raises(self, box):
        far = [(20, 20), (25, 20), (25, 25)]
        with pytest.raises(DisjointShapesError, match="nothing to merge"):
            merge_shapes(box, far)

    def test_too_few_points_raises(self, box):
        with pytest.raises(GeometryError, match="at least 3"):
            merge_shapes(box, [(0, 0), (1, 1), (1, 1)])

    def test_inputs_not_mutated(self, box, triangle):
        a = list(box); b = list(triangle)
        merge_shapes(a, b)
        assert a == box and b == triangle


# --- shapes that share vertices or edges ---

_KITE = [(0, 0), (20, 5), (5, 20)]
_SQUARE_10 = [(0, 0), (10, 0), (10, 10), (0, 10)]


def _union_area(a, b):
    """area(A) + area(B) - area(A n B); b must be convex."""
    overlap = clip_polygon(a, orient_shape(b, clockwise=False))
    return shape_area(a) + shape_area(b) - shape_area(overlap)


class TestMergeTouchingShapes:
    def test_common_origin_rectangles(self):
        merged = merge_shapes(rectangle_to_shape(10, 5), rectangle_to_shape(5, 10))
        assert merged == _approx_points([
            (0, 0), (0, 5), (0, 10), (5, 10), (5, 5), (10, 5), (10, 0), (5, 0), (0, 0),
        ])
        assert abs(shape_area(merged) - 75.0) < 1e-9

    def test_common_origin_rectangles_swapped(self):
        expected = merge_shapes(rectangle_to_shape(10, 5), rectangle_to_shape(5, 10))
        assert merge_shapes(rectangle_to_shape(5, 10), rectangle_to_shape(10, 5)) == _approx_points(expected)

    @pytest.mark.parametrize("a,b", [(_KITE, _SQUARE_10), (_SQUARE_10, _KITE)])
    def test_shared_start_vertex(self, a, b):
        merged = merge_shapes(a, b)
        assert merged == _approx_points([
            (0, 0), (0, 10), (2.5, 10), (5, 20), (20, 5), (10, 2.5), (10, 0), (0, 0),
        ])
        assert abs(shape_area(merged) - 212.5) < 1e-9
        assert abs(shape_area(merged) - _union_area(_SQUARE_10, _KITE)) < 1e-9

    @pytest.mark.parametrize("swap", [False, True])
    def test_t_junction(self, swap):
        """A small block resting on a long bar's top edge."""
        bar = rectangle_to_shape(10, 4)
        block = rectangle_to_shape(2, 4, 4, 4)
        a, b = (block, bar) if swap else (bar, block)
        merged = merge_shapes(a, b)
        assert merged == _approx_points([
            (0, 0), (0, 4), (4, 4), (4, 8), (6, 8), (6, 4), (10, 4), (10, 0), (0, 0),
        ])
        assert abs(shape_area(merged) - 48.0) < 1e-9

    def test_shared_edge(self):
        left = [(0, 0), (4, 0), (4, 4), (0, 4)]
        right = [(4, 0), (8, 0), (8, 4), (4, 4)]
        merged = merge_shapes(left, right)
        assert is_shape_closed(merged)
        assert abs(shape_area(merged) - 32.0) < 1e-9
        assert sorted(set(merged)) == [(0, 0), (0, 4), (4, 0), (4, 4), (8, 0), (8, 4)]

    def test_nested_touching_corner(self):
        outer = [(0, 0), (10, 0), (10, 10), (0, 10)]
        inner = [(0, 0), (3, 0), (3, 3), (0, 3)]
        merged = merge_shapes(inner, outer)
        assert abs(shape_area(merged) - 100.0) < 1e-9
        assert is_clockwise(merged)

    def test_single_point_touch_raises(self):
        a = [(0, 0), (4, 0), (4, 4), (0, 4)]
        b = [(4, 4), (8, 4), (8, 8), (4, 8)]
        with pytest.raises(DisjointShapesError, match="single point"):
            merge_shapes(a, b)


# --- merge_point_cloud ---

def test_point_cloud_is_sorted_and_unique(box, triangle):
    cloud = merge_point_cloud(box, triangle)
    assert cloud == sorted(cloud)
    assert len(set(cloud)) == len(cloud)


def test_point_cloud_contains_vertices_and_crossings(box, triangle):
    """Only edges of the concatenated polygon are tested, so (1, 2) and (3, 6) are missed."""
    cloud = merge_point_cloud(box, triangle)
    for p in box + triangle:
        assert p in cloud
    for p in [(4, 6), (6, 2)]:
        assert any(abs(q[0] - p[0]) < 1e-9 and abs(q[1] - p[1]) < 1e-9 for q in cloud)


def test_point_cloud_dedupes_shared_vertices():
    a = [(0, 0), (2, 0), (2, 2)]
    b = [(0, 0), (2, 2), (0, 2)]
    cloud = merge_point_cloud(a, b)
    assert cloud == [(0, 0), (0, 2), (2, 0), (2, 2)]
