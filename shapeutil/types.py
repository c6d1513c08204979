"""Shared type definitions for the shape geometry library."""
from typing import Any, Mapping, NamedTuple, Sequence, Union

import numpy as np

Point = tuple[float, float]
Shape = list[Point]

# Anything as_shape() accepts: (x, y) pairs, {"x": .., "y": ..} mappings, or an Nx2 array.
ShapeLike = Union[Sequence[Sequence[float]], Sequence[Mapping[str, Any]], np.ndarray]

class Rectangle(NamedTuple):
    left: float; top: float
    width: float; height: float

class Crossing(NamedTuple):
    """Proper crossing of edge edge_a of one shape (at t) with edge edge_b of another (at u)."""
    point: Point
    edge_a: int; t: float
    edge_b: int; u: float
