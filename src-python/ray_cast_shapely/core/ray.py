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

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .constants import UNIT_LENGTH_TOLERANCE
from .geometry import Point, geometry
from .materials import MaterialState


class RayDirectionError(ValueError):
    """Raised when a ray reaches the solver with a non-unit direction."""


@dataclass(frozen=True)
class Color:
    """
    RGBA color carried by a ray.

    The alpha channel doubles as the carried intensity: a fresh ray has
    a = 1.0 and every split scales all four channels, so the energy test
    and the rendering opacity read the same value.
    """
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @property
    def intensity(self) -> float:
        return self.a

    def scaled(self, factor: float) -> 'Color':
        """Return this color with every channel multiplied by factor."""
        return Color(self.r * factor, self.g * factor, self.b * factor, self.a * factor)

    def __add__(self, other: 'Color') -> 'Color':
        return Color(self.r + other.r, self.g + other.g, self.b + other.b, self.a + other.a)

    def is_close(self, other: 'Color', tol: float = 1e-9) -> bool:
        return all(abs(x - y) <= tol for x, y in zip(self.to_tuple(), other.to_tuple()))

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_rgb255(self) -> Tuple[int, int, int]:
        """
        Color channels scaled to 0-255, normalized by the intensity so a
        dimmed ray keeps its hue (the dimming is expressed as opacity).
        """
        a = self.a if self.a > 1e-12 else 1.0
        return tuple(int(round(255 * max(0.0, min(1.0, c / a)))) for c in (self.r, self.g, self.b))

    def to_css(self) -> str:
        r, g, b = self.to_rgb255()
        return f'rgb({r},{g},{b})'


WHITE = Color(1.0, 1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Ray:
    """
    Representation of a light ray for the propagation solver.

    A ray is a half-line: an origin, a unit direction and the color it
    carries. Rays are immutable; interactions produce new rays via child().

    Attributes:
        origin (Point): Starting point
        direction (Point): Unit direction vector
        color (Color): Carried color; color.a is the intensity
        generation (int): Number of interactions since the source ray
        interaction_type (str): How this ray was created:
            'source' = the initial ray
            'reflect' = mirror reflection or the reflected part of a split
            'transmit' = the transmitted part of a split
            'tir' = reflection at or beyond the critical angle
    """
    origin: Point
    direction: Point
    color: Color = WHITE
    generation: int = 0
    interaction_type: str = 'source'

    @classmethod
    def towards(cls, origin, target, color: Color = WHITE) -> 'Ray':
        """
        Build a source ray from origin pointing at target, normalizing the
        direction at construction.

        Raises:
            ValueError: If origin and target coincide.
        """
        origin = Point.of(origin)
        target = Point.of(target)
        return cls(origin, geometry.normalize_vec(target - origin), color)

    @classmethod
    def from_angle(cls, origin, angle: float, color: Color = WHITE) -> 'Ray':
        """Build a source ray from an angle in radians (0 = +x, counter-clockwise)."""
        return cls(Point.of(origin), Point(math.cos(angle), math.sin(angle)), color)

    @property
    def intensity(self) -> float:
        return self.color.intensity

    def is_normalized(self, tol: float = UNIT_LENGTH_TOLERANCE) -> bool:
        return abs(geometry.length_squared(self.direction) - 1.0) <= tol

    def check_normalized(self) -> None:
        """
        Raises:
            RayDirectionError: If the direction is not unit length.
        """
        if not self.is_normalized():
            length = math.sqrt(geometry.length_squared(self.direction))
            raise RayDirectionError(
                f"Ray direction must be unit length, got {self.direction.to_tuple()} "
                f"(length {length:.9f}). Normalize the direction when building the ray."
            )

    def point_at(self, t: float) -> Point:
        return self.origin + self.direction * t

    def child(self, origin: Point, direction: Point, color: Color, interaction_type: str) -> 'Ray':
        """
        Create the ray spawned by an interaction of this ray.

        Returns:
            Ray: A new ray one generation deeper.
        """
        return replace(self, origin=origin, direction=direction, color=color,
                       generation=self.generation + 1, interaction_type=interaction_type)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (f"Ray(origin=({self.origin.x:.4f}, {self.origin.y:.4f}), "
                f"direction=({self.direction.x:.4f}, {self.direction.y:.4f}), "
                f"intensity={self.intensity:.6f}, generation={self.generation}, "
                f"{self.interaction_type})")


@dataclass(frozen=True)
class DrawableSegment:
    """
    One piece of a ray path, as emitted by the solver for rendering.

    Attributes:
        start (Point): Where the ray piece starts
        end (Point): Hit point, or origin + direction * max_distance
        color (Color): Color the ray carried along this piece
        generation (int): Generation of the ray that produced this piece
        material (MaterialState or None): Material of the segment the piece
            ended on; None if the ray escaped the scene
    """
    start: Point
    end: Point
    color: Color
    generation: int = 0
    material: Optional[MaterialState] = None

    @property
    def length(self) -> float:
        return geometry.distance(self.start, self.end)

    @property
    def escaped(self) -> bool:
        return self.material is None
