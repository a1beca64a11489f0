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

from typing import Optional

from shapely.geometry import LineString

from .geometry import geometry, Point, Line, Intersection
from .constants import INFINITE_MIRROR_LENGTH
from .ray import Ray


class Mirror:
    """
    Mirror with shape of a line segment.

    A flat mirror reflecting light on both faces according to the law of
    reflection. In the two-mirror wedge both mirrors start at the hinge and
    their far endpoint is placed INFINITE_MIRROR_LENGTH away, which makes
    them semi-infinite for every practical ray.

    Attributes:
        start (Point): First endpoint (the hinge)
        end (Point): Far endpoint
        angle (float): Direction of the mirror in degrees
        id (str): Label used by the presentation layer ('m1', 'm2')
    """

    type = 'Mirror'

    def __init__(self, start: Point, end: Point, mirror_id: str, angle: Optional[float] = None) -> None:
        self.start: Point = start
        self.end: Point = end
        self.id: str = mirror_id
        if angle is None:
            angle = geometry.angle_of(geometry.subtract(end, start))
        self.angle: float = angle

    @classmethod
    def from_hinge(
        cls,
        angle_deg: float,
        mirror_id: str,
        hinge: Point = Point(0.0, 0.0),
        length: float = INFINITE_MIRROR_LENGTH
    ) -> 'Mirror':
        """
        Create a semi-infinite mirror starting at the hinge.

        Args:
            angle_deg: Direction of the mirror in degrees
            mirror_id: Label of the mirror
            hinge: Shared start point of the mirrors
            length: Distance of the far endpoint from the hinge

        Returns:
            Mirror
        """
        direction = geometry.direction_from_angle(angle_deg)
        end = Point(hinge.x + direction.x * length, hinge.y + direction.y * length)
        return cls(hinge, end, mirror_id, geometry.normalize_angle(angle_deg))

    @property
    def direction(self) -> Point:
        """Unit vector from start to end."""
        return geometry.normalize_vec(geometry.subtract(self.end, self.start))

    @property
    def line(self) -> Line:
        """The mirror as a geometry Line."""
        return Line(self.start, self.end)

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return self.line.to_shapely()

    def check_ray_intersects(self, ray: Ray) -> Optional[Intersection]:
        """
        Check if a ray intersects this mirror.

        Args:
            ray: The ray to check for intersection

        Returns:
            The intersection, or None if the ray misses or runs parallel
        """
        return geometry.intersect_ray_segment(ray.origin, ray.direction, self.start, self.end)

    def reflect(self, ray: Ray, hit: Intersection) -> Ray:
        """
        Reflect an incident ray at a hit point on the mirror.

        Args:
            ray: The incident ray
            hit: Intersection returned by check_ray_intersects

        Returns:
            The outgoing ray leaving the hit point
        """
        return Ray(hit.point, geometry.reflect_vec(ray.direction, hit.normal))

    def __repr__(self) -> str:
        return f"Mirror(id={self.id!r}, angle={self.angle:.4f})"
