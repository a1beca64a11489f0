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

from .geometry import geometry, Point


class Ray:
    """
    Representation of a light ray for ray tracing simulation.

    A ray is an origin point plus a direction vector. The direction is
    stored normalized so that ray parameters returned by intersection tests
    are distances.

    Attributes:
        origin (Point): Starting point of the ray
        direction (Point): Unit direction vector
    """

    def __init__(self, origin: Point, direction: Point) -> None:
        """
        Initialize a ray.

        Args:
            origin (Point): Starting point
            direction (Point): Direction vector, any non-zero length

        Raises:
            ValueError: If the direction has zero length.
        """
        unit = geometry.normalize_vec(direction)
        if unit.x == 0.0 and unit.y == 0.0:
            raise ValueError(f"Ray direction must be non-zero, got {direction}")
        self.origin: Point = origin
        self.direction: Point = unit

    @classmethod
    def from_angle(cls, origin: Point, angle_deg: float) -> 'Ray':
        """Create a ray leaving origin at angle_deg (0 = +x, counter-clockwise)."""
        return cls(origin, geometry.direction_from_angle(angle_deg))

    @classmethod
    def through(cls, origin: Point, target: Point) -> 'Ray':
        """Create a ray from origin aimed at target."""
        return cls(origin, geometry.subtract(target, origin))

    @property
    def angle(self) -> float:
        """Direction of the ray in degrees, in [0, 360)."""
        return geometry.angle_of(self.direction)

    def point_at(self, t: float) -> Point:
        """Point at distance t along the ray."""
        return Point(self.origin.x + self.direction.x * t, self.origin.y + self.direction.y * t)

    def __repr__(self) -> str:
        return (f"Ray(origin=({self.origin.x:.4f}, {self.origin.y:.4f}), "
                f"angle={self.angle:.4f})")
