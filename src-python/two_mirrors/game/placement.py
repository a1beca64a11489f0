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

from typing import Optional, TYPE_CHECKING

from ..core.geometry import geometry, Point
from ..core.constants import (
    DEFAULT_HANDLE_RADIUS,
    INCIDENT_POINT_RATIO,
    MIRROR2_SIDE_BUFFER,
    MIRROR1_HEIGHT_BUFFER,
)

if TYPE_CHECKING:
    from ..core.scene import Scene


class PlacementChecker:
    """
    Decides whether a proposed slider configuration keeps the light source
    inside the wedge between the mirrors.

    The source must lie strictly on the inner side of mirror 2 (by at least
    side_buffer) and at least height_buffer above mirror 1. For a wedge
    wider than 180 degrees the mirror 2 test alone decides the inner side,
    so part of the reflex region is rejected.

    Attributes:
        incident_point (Point): Fixed point on mirror 1 the source aims at
        side_buffer (float): Minimum distance inside mirror 2
        height_buffer (float): Minimum height above mirror 1
    """

    def __init__(
        self,
        incident_point: Optional[Point] = None,
        side_buffer: float = MIRROR2_SIDE_BUFFER,
        height_buffer: float = MIRROR1_HEIGHT_BUFFER,
    ) -> None:
        if incident_point is None:
            incident_point = Point(DEFAULT_HANDLE_RADIUS * INCIDENT_POINT_RATIO, 0.0)
        self.incident_point = incident_point
        self.side_buffer = side_buffer
        self.height_buffer = height_buffer

    @classmethod
    def for_scene(cls, scene: 'Scene') -> 'PlacementChecker':
        """Create a checker for the scene's incidence point."""
        return cls(incident_point=scene.incident_point)

    def source_position(self, incident_angle: float, source_distance: float) -> Point:
        direction = geometry.direction_from_angle(incident_angle)
        return geometry.add(self.incident_point, geometry.scale_vec(direction, source_distance))

    def rejection_reason(self, mirror_angle: float, incident_angle: float, source_distance: float) -> Optional[str]:
        """
        Why a configuration is rejected.

        Returns:
            'beyond_mirror_2', 'below_mirror_1', or None if it is valid
        """
        source = self.source_position(incident_angle, source_distance)
        m2_dir = geometry.direction_from_angle(mirror_angle)
        if geometry.cross(m2_dir, source) > -self.side_buffer:
            return 'beyond_mirror_2'
        if source.y < self.height_buffer:
            return 'below_mirror_1'
        return None

    def is_valid(self, mirror_angle: float, incident_angle: float, source_distance: float) -> bool:
        """
        Check a proposed configuration.

        Args:
            mirror_angle: Angle between the mirrors in degrees
            incident_angle: Source angle relative to the incidence point in degrees
            source_distance: Distance from the incidence point to the source

        Returns:
            True if the source lies inside the wedge with both buffers
        """
        return self.rejection_reason(mirror_angle, incident_angle, source_distance) is None
