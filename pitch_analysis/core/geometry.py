"""Coordinate normalization for pitch location input."""

from typing import Tuple

import numpy as np

from .types import InvalidCoordinate, NormalizedPoint, Point, Rect, SurfaceBounds


def fraction_within(point: Point, rect: Rect) -> Tuple[float, float]:
    """Unclamped position of a point relative to a rect, y flipped to grow up.

    (0, 0) is the bottom-left corner of the rect and (1, 1) the top-right.
    Values fall outside [0, 1] when the point lies outside the rect.
    """
    rect.validate("surface")
    x = (point.x - rect.left) / rect.width
    y = 1.0 - (point.y - rect.top) / rect.height
    return x, y


def normalize(point: Point, surface: SurfaceBounds) -> NormalizedPoint:
    """Map a raw point into the scoring area's unit square.

    Offsets are measured from the scoring area (the whole surface when no
    inset is given). Points beyond the scoring area clamp to its edge so that
    far-outside clicks still register as classifiable balls.
    """
    x, y = fraction_within(point, surface.scoring_rect)
    return NormalizedPoint(x, y)


def normalize_many(points, surface: SurfaceBounds) -> np.ndarray:
    """Vectorised normalize for an (N, 2) array of raw points."""
    rect = surface.scoring_rect.validate("surface")
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if not np.all(np.isfinite(pts)):
        raise InvalidCoordinate("Points must be finite")
    out = np.empty_like(pts)
    out[:, 0] = (pts[:, 0] - rect.left) / rect.width
    out[:, 1] = 1.0 - (pts[:, 1] - rect.top) / rect.height
    return np.clip(out, 0.0, 1.0)


def denormalize(point: NormalizedPoint, rect: Rect) -> Point:
    """Inverse of normalize for a point known to lie inside the rect."""
    rect.validate("surface")
    return Point(rect.left + point.x * rect.width,
                 rect.top + (1.0 - point.y) * rect.height)
