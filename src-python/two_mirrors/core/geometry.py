"""
Copyright 2026 The two-mirrors authors and contributors

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
from typing import Dict, Optional
from shapely.geometry import Point as ShapelyPoint, LineString

from .constants import PARALLEL_EPSILON, MIN_RAY_PARAMETER, ZERO_LENGTH_EPSILON


@dataclass(frozen=True)
class Point:
    """Immutable 2D position, also used as a displacement or direction vector."""
    x: float
    y: float

    def to_shapely(self) -> ShapelyPoint:
        """Shapely Point at the same coordinates."""
        return ShapelyPoint(self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        """Plain {x, y} dict for the presentation layer."""
        return {'x': self.x, 'y': self.y}

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"


@dataclass(frozen=True)
class Line:
    """Mirror segment between two points; p1 is the hinge end."""
    p1: Point
    p2: Point

    def to_shapely(self) -> LineString:
        """Two-point Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])


@dataclass(frozen=True)
class Intersection:
    """
    Result of a ray/segment intersection test.

    Attributes:
        point: The hit point
        t: Ray parameter of the hit (a distance when the direction is unit length)
        normal: Unit normal of the segment, oriented against the incoming ray
    """
    point: Point
    t: float
    normal: Point


class Geometry:
    """Vector and angle primitives of the tracer. Static and pure; angles in degrees."""

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """Scalar product of two vectors."""
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """
        z component of the 3D cross product of two planar vectors.

        Positive when p2 lies counter-clockwise of p1.
        """
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def add(p1: Point, p2: Point) -> Point:
        """Vector sum p1 + p2."""
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def subtract(p1: Point, p2: Point) -> Point:
        """Vector difference p1 - p2."""
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale_vec(p1: Point, factor: float) -> Point:
        """Scale a vector by a scalar factor."""
        return Point(p1.x * factor, p1.y * factor)

    @staticmethod
    def length(p1: Point) -> float:
        """Length of a vector."""
        return math.hypot(p1.x, p1.y)

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """
        Unit vector along p1.

        A zero-length input returns Point(0, 0) instead of raising.
        """
        len_val = Geometry.length(p1)
        if len_val < ZERO_LENGTH_EPSILON:
            return Point(0.0, 0.0)
        return Point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def reflect_vec(v: Point, n: Point) -> Point:
        """
        Specular reflection of v about a surface with unit normal n.

        Computes v - 2 (v . n) n. The result is only a true reflection
        when n has unit length.

        Args:
            v: Vector to reflect
            n: Unit surface normal

        Returns:
            Reflected vector
        """
        d = v.x * n.x + v.y * n.y
        return Point(v.x - 2 * d * n.x, v.y - 2 * d * n.y)

    @staticmethod
    def intersect_ray_segment(
        ray_origin: Point,
        ray_dir: Point,
        p1: Point,
        p2: Point
    ) -> Optional[Intersection]:
        """
        Intersect the ray origin + t * ray_dir with the segment p1-p2.

        Solves the 2x2 linear system for the ray parameter t1 and the segment
        parameter t2. There is no intersection when the ray is parallel to
        the segment (|det| < PARALLEL_EPSILON), when t1 does not exceed
        MIN_RAY_PARAMETER, or when t2 falls outside [0, 1].

        Args:
            ray_origin: Start of the ray
            ray_dir: Direction of the ray (non-zero, need not be unit)
            p1: First endpoint of the segment
            p2: Second endpoint of the segment

        Returns:
            Intersection with the hit point, the ray parameter and the unit
            segment normal facing the incoming ray, or None.
        """
        v1 = ray_origin.x - p1.x
        v2 = ray_origin.y - p1.y
        v3 = p2.x - p1.x
        v4 = p2.y - p1.y
        v5 = ray_dir.x
        v6 = ray_dir.y

        det = v5 * v4 - v6 * v3
        if abs(det) < PARALLEL_EPSILON:
            return None

        t1 = (v3 * v2 - v4 * v1) / det  # ray parameter
        t2 = (v5 * v2 - v6 * v1) / det  # segment parameter

        if t1 <= MIN_RAY_PARAMETER or t2 < 0 or t2 > 1:
            return None

        point = Point(ray_origin.x + ray_dir.x * t1, ray_origin.y + ray_dir.y * t1)

        normal = Geometry.normalize_vec(Point(-v4, v3))
        if normal.x * ray_dir.x + normal.y * ray_dir.y > 0:
            normal = Point(-normal.x, -normal.y)

        return Intersection(point=point, t=t1, normal=normal)

    # -------------------------------------------------------------------------
    # Angle helpers (degrees)
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_angle(angle_deg: float) -> float:
        """
        Wrap an angle in degrees into [0, 360).

        Raises:
            ValueError: If the angle is not a finite number.
        """
        if not math.isfinite(angle_deg):
            raise ValueError(f"Angle must be a finite number, got {angle_deg}")
        wrapped = math.fmod(angle_deg, 360.0)
        if wrapped < 0:
            wrapped += 360.0
        # fmod of a tiny negative number can round up to exactly 360
        if wrapped >= 360.0:
            wrapped = 0.0
        return wrapped

    @staticmethod
    def angle_difference(a_deg: float, b_deg: float) -> float:
        """
        Smallest absolute difference between two angles, in [0, 180].

        355 and 5 are 10 degrees apart, not 350.
        """
        diff = Geometry.normalize_angle(a_deg - b_deg)
        return 360.0 - diff if diff > 180.0 else diff

    @staticmethod
    def direction_from_angle(angle_deg: float) -> Point:
        """Unit vector pointing at angle_deg (0 = +x, counter-clockwise positive)."""
        rad = math.radians(angle_deg)
        return Point(math.cos(rad), math.sin(rad))

    @staticmethod
    def angle_of(v: Point) -> float:
        """Direction of a vector in degrees, in [0, 360)."""
        return Geometry.normalize_angle(math.degrees(math.atan2(v.y, v.x)))


# Create a singleton instance for convenience
geometry = Geometry()
