"""Random site placement."""

from typing import List, Optional

import numpy as np

from .geometry import Point, Rect


def sample_sites(bounds: Rect, n: int, seed: Optional[int] = None) -> List[Point]:
    """
    Uniform sampling of n sites inside bounds.

    Args:
        bounds: Rectangle to sample in
        n: Number of sites
        seed: Seed for numpy's generator; same seed gives same sites

    Returns:
        List of sites
    """
    if n < 0:
        raise ValueError("n must be >= 0")

    rng = np.random.default_rng(seed)
    pts = np.empty((n, 2), dtype=np.float64)
    pts[:, 0] = bounds.min_x + rng.random(n) * bounds.width
    pts[:, 1] = bounds.min_y + rng.random(n) * bounds.height
    return [Point(float(x), float(y)) for x, y in pts]
