"""Named tolerances for the shape geometry functions.

All values are in the caller's canvas units (pixels).
"""

EPSILON = 1e-9                # on-boundary / collinearity tolerance
CLOSE_TOLERANCE = 1e-6        # recommended is_shape_closed() tolerance for derived shapes
