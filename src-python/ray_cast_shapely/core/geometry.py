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
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from shapely.geometry import Point as ShapelyPoint, LineString

from .constants import PARALLEL_EPSILON, DEGENERATE_LENGTH_SQUARED
from .materials import MaterialState

if TYPE_CHECKING:
    from .ray import Ray


@dataclass(frozen=True)
class Point:
    """
    A point (or vector) in 2D space.
    Can be converted to/from Shapely Point objects.
    """
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> 'Point':
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> 'Point':
        return Point(-self.x, -self.y)

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        """Create Point from Shapely Point."""
        return cls(sp.x, sp.y)

    @classmethod
    def of(cls, value) -> 'Point':
        """Coerce a Point, an (x, y) pair or an {'x', 'y'} dict to a Point."""
        if isinstance(value, Point):
            return value
        if isinstance(value, dict):
            return cls(float(value['x']), float(value['y']))
        x, y = value
        return cls(float(x), float(y))

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Segment:
    """
    A finite line segment with an optical material.

    Segments are value copies taken from the scene graph for one solve;
    they hold no reference back to the graph.

    Attributes:
        start: First endpoint
        end: Second endpoint
        material: Optical behavior of the segment
    """
    start: Point
    end: Point
    material: MaterialState = MaterialState.REFLECTIVE

    @property
    def direction(self) -> Point:
        """Unnormalized vector from start to end."""
        return self.end - self.start

    @property
    def length_squared(self) -> float:
        return Geometry.distance_squared(self.start, self.end)

    @property
    def is_degenerate(self) -> bool:
        """True if both endpoints coincide (within the degenerate epsilon)."""
        return self.length_squared < DEGENERATE_LENGTH_SQUARED

    @property
    def midpoint(self) -> Point:
        return Geometry.midpoint(self.start, self.end)

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([self.start.to_tuple(), self.end.to_tuple()])

    def __repr__(self) -> str:
        return f"Segment({self.start.to_tuple()} -> {self.end.to_tuple()}, {self.material.value})"


@dataclass(frozen=True)
class CollisionInfo:
    """
    Result of intersecting a ray with a segment.

    Attributes:
        point: The hit point
        normal: Unit normal of the segment at the hit point. Its sign is not
            oriented against the ray; see Geometry.face_against().
        t: Ray parameter (distance along the unit direction)
        u: Segment parameter in [0, 1]
    """
    point: Point
    normal: Point
    t: float
    u: float


class Geometry:
    """
    Pure 2D vector helpers plus the optical primitives used by the solver:
    ray/segment intersection, reflection, refraction and the Schlick
    Fresnel approximation.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        return Point(x, y)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """
        Calculate the cross product (perp-dot), where the two points are
        treated as vectors.

        Returns:
            Cross product (z-component in 2D)
        """
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def perp(p1: Point) -> Point:
        """Rotate a vector by +90 degrees."""
        return Point(-p1.y, p1.x)

    @staticmethod
    def length_squared(p1: Point) -> float:
        return p1.x * p1.x + p1.y * p1.y

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        return math.sqrt(Geometry.distance_squared(p1, p2))

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        """
        Calculate the squared distance between two points.
        """
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def midpoint(p1: Point, p2: Point) -> Point:
        return Point((p1.x + p2.x) * 0.5, (p1.y + p2.y) * 0.5)

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        Raises:
            ValueError: If the vector has zero length.
        """
        len_val = math.sqrt(Geometry.length_squared(p1))
        if len_val == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def face_against(normal: Point, direction: Point) -> Point:
        """
        Orient a normal so that it points against the incoming direction.

        Args:
            normal: Unit normal with arbitrary sign
            direction: Incoming ray direction

        Returns:
            The normal, negated if it pointed along the direction.
        """
        if Geometry.dot(normal, direction) > 0.0:
            return -normal
        return normal

    @staticmethod
    def intersect(ray: 'Ray', segment: Segment) -> Optional[CollisionInfo]:
        """
        Intersect an infinite ray (origin + t*direction, t >= 0) with a
        finite segment (start + u*(end - start), 0 <= u <= 1).

        The 2x2 system is solved with perp-dot products. The ray direction is
        expected to be unit length, so t is the distance to the hit point.

        Args:
            ray: The ray
            segment: The segment

        Returns:
            CollisionInfo, or None if the ray and segment are parallel, the
            segment is degenerate, the hit lies behind the origin, or the hit
            lies outside the segment.
        """
        if segment.is_degenerate:
            return None

        d = ray.direction
        q = segment.end - segment.start

        denominator = Geometry.cross(d, q)
        if abs(denominator) < PARALLEL_EPSILON:
            return None

        w = segment.start - ray.origin
        t = Geometry.cross(w, q) / denominator
        u = Geometry.cross(w, d) / denominator

        if t < 0.0 or u < 0.0 or u > 1.0:
            return None

        hit = ray.origin + d * t

        to_hit = hit - segment.start
        if Geometry.length_squared(to_hit) < DEGENERATE_LENGTH_SQUARED:
            # Hit on the start point: take the perpendicular of the other end
            to_hit = segment.end - hit
        normal = Geometry.normalize_vec(Geometry.perp(to_hit))

        return CollisionInfo(point=hit, normal=normal, t=t, u=u)

    @staticmethod
    def reflect(direction: Point, normal: Point) -> Point:
        """
        Reflect a direction about a normal: d - 2(n.d)n.

        The result is renormalized, so it is unit length even when the
        inputs carry floating-point drift.
        """
        k = 2.0 * Geometry.dot(normal, direction)
        return Geometry.normalize_vec(Point(direction.x - k * normal.x,
                                            direction.y - k * normal.y))

    @staticmethod
    def refract(direction: Point, normal: Point, eta: float) -> Optional[Point]:
        """
        Refract a direction through a surface using Snell's law.

        Args:
            direction: Unit incoming direction
            normal: Unit surface normal (either sign)
            eta: Ratio of refractive indices n1 / n2

        Returns:
            Unit refracted direction, or None on total internal reflection.
        """
        n = Geometry.face_against(normal, direction)
        cos_i = -Geometry.dot(n, direction)
        k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
        if k < 0.0:
            return None
        factor = eta * cos_i - math.sqrt(k)
        return Geometry.normalize_vec(Point(eta * direction.x + factor * n.x,
                                            eta * direction.y + factor * n.y))

    @staticmethod
    def fresnel_reflectance(n1: float, n2: float, normal: Point, incident: Point,
                            object_reflectivity: float = 0.0) -> float:
        """
        Schlick's approximation of the Fresnel reflectance.

        Args:
            n1: Refractive index on the incident side
            n2: Refractive index on the transmitted side
            normal: Unit surface normal (either sign)
            incident: Unit incoming direction
            object_reflectivity: Blend in [0, 1] toward full reflectance

        Returns:
            Reflected fraction in [0, 1]. 1.0 on total internal reflection.
        """
        r0 = ((n1 - n2) / (n1 + n2)) ** 2
        cos_x = abs(Geometry.dot(normal, incident))
        if n1 > n2:
            ratio = n1 / n2
            sin_t2 = ratio * ratio * (1.0 - cos_x * cos_x)
            if sin_t2 > 1.0:
                return 1.0
            cos_x = math.sqrt(1.0 - sin_t2)
        x = 1.0 - cos_x
        ret = r0 + (1.0 - r0) * x ** 5
        return object_reflectivity + (1.0 - object_reflectivity) * ret


# Create a singleton instance for convenience
geometry = Geometry()
