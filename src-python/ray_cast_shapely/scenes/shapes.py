"""
Copyright 2026 ray-cast-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import List, Tuple

import numpy as np

Line = Tuple[Tuple[float, float], Tuple[float, float]]


def circle_lines(center: Tuple[float, float], radius: float, count: int = 32) -> List[Line]:
    """
    Approximate a circle by a closed regular polygon.

    Args:
        center: Circle center (x, y)
        radius: Circle radius
        count: Number of sides (at least 3)

    Returns:
        List of ((x1, y1), (x2, y2)) lines, consecutive lines sharing endpoints
    """
    if count < 3:
        raise ValueError(f"A circle needs at least 3 sides, got {count}")
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius}")
    angles = np.linspace(0.0, 2.0 * np.pi, count, endpoint=False)
    xs = center[0] + radius * np.cos(angles)
    ys = center[1] + radius * np.sin(angles)
    vertices = [(float(x), float(y)) for x, y in zip(xs, ys)]
    return [(vertices[i], vertices[(i + 1) % count]) for i in range(count)]


def box_lines(min_corner: Tuple[float, float], max_corner: Tuple[float, float]) -> List[Line]:
    """Outline of an axis-aligned rectangle, counter-clockwise from min_corner."""
    (x0, y0), (x1, y1) = min_corner, max_corner
    corners = [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]
    return [(corners[i], corners[(i + 1) % 4]) for i in range(4)]
