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
from typing import List, Optional

from .geometry import geometry, Point
from .mirror import Mirror
from .ray import Ray
from .constants import (
    DEFAULT_HANDLE_RADIUS,
    INCIDENT_POINT_RATIO,
    SOURCE_DISTANCE_RATIO,
    INITIAL_MIRROR_ANGLE,
    INITIAL_INCIDENT_ANGLE,
    MIRROR_1_ID,
    MIRROR_2_ID,
)


class Scene:
    """
    The two-mirror optical bench.

    Holds the committed slider values and derives everything the tracer
    needs from them. Mirror 1 is fixed along +x, mirror 2 is rotated by the
    mirror angle, both hinged at the origin. The ray always starts at the
    light source and aims at a fixed incidence point on mirror 1.

    Attributes:
        mirror_angle (float): Angle between the mirrors in degrees, [0, 360)
        incident_angle (float): Direction of the source seen from the
            incidence point, in degrees, [0, 360)
        source_distance (float): Distance from the incidence point to the source
        handle_radius (float): Layout radius; fixes the incidence point at
            INCIDENT_POINT_RATIO * handle_radius along mirror 1
        error (str or None): Error message if simulation encountered an error
        warning (str or None): Warning message if simulation has warnings
        name (str or None): Optional name for the scene
    """

    def __init__(
        self,
        mirror_angle: float = INITIAL_MIRROR_ANGLE,
        incident_angle: float = INITIAL_INCIDENT_ANGLE,
        source_distance: Optional[float] = None,
        handle_radius: float = DEFAULT_HANDLE_RADIUS,
    ):
        """Initialize the bench with the given (or initial) slider values."""
        self._handle_radius = DEFAULT_HANDLE_RADIUS
        self.handle_radius = handle_radius
        self._mirror_angle = 0.0
        self._incident_angle = 0.0
        self._source_distance = 1.0
        self.mirror_angle = mirror_angle
        self.incident_angle = incident_angle
        if source_distance is None:
            source_distance = self.handle_radius * SOURCE_DISTANCE_RATIO
        self.source_distance = source_distance
        self.error = None
        self.warning = None
        self.name = None

    @property
    def mirror_angle(self):
        """Get the angle between the mirrors."""
        return self._mirror_angle

    @mirror_angle.setter
    def mirror_angle(self, value):
        """Set the mirror angle, wrapped into [0, 360)."""
        self._mirror_angle = geometry.normalize_angle(value)

    @property
    def incident_angle(self):
        """Get the source angle relative to the incidence point."""
        return self._incident_angle

    @incident_angle.setter
    def incident_angle(self, value):
        """Set the source angle, wrapped into [0, 360)."""
        self._incident_angle = geometry.normalize_angle(value)

    @property
    def source_distance(self):
        """Get the distance from the incidence point to the source."""
        return self._source_distance

    @source_distance.setter
    def source_distance(self, value):
        """
        Set the source distance.

        Raises:
            ValueError: If value is not a positive finite number.
        """
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
            raise ValueError(
                f"source_distance must be a positive finite number, got {value}"
            )
        self._source_distance = float(value)

    @property
    def handle_radius(self):
        """Get the layout radius."""
        return self._handle_radius

    @handle_radius.setter
    def handle_radius(self, value):
        """
        Set the layout radius.

        Raises:
            ValueError: If value is not a positive finite number.
        """
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
            raise ValueError(
                f"handle_radius must be a positive finite number, got {value}"
            )
        self._handle_radius = float(value)

    @property
    def incident_distance(self) -> float:
        """Distance of the fixed incidence point from the hinge."""
        return self.handle_radius * INCIDENT_POINT_RATIO

    @property
    def incident_point(self) -> Point:
        """Fixed point on mirror 1 that the source aims at."""
        return Point(self.incident_distance, 0.0)

    @property
    def source_position(self) -> Point:
        """Position of the light source."""
        return self.source_position_for(self.incident_angle, self.source_distance)

    def source_position_for(self, incident_angle: float, source_distance: float) -> Point:
        """Position the source would have for the given slider values."""
        direction = geometry.direction_from_angle(incident_angle)
        p = self.incident_point
        return Point(p.x + source_distance * direction.x, p.y + source_distance * direction.y)

    @property
    def mirrors(self) -> List[Mirror]:
        """The two mirrors, mirror 1 first."""
        return [
            Mirror.from_hinge(0.0, MIRROR_1_ID),
            Mirror.from_hinge(self.mirror_angle, MIRROR_2_ID),
        ]

    @property
    def ray(self) -> Ray:
        """The incident ray, from the source toward the incidence point."""
        return Ray.through(self.source_position, self.incident_point)

    @property
    def ray_angle(self) -> float:
        """Direction of the incident ray in degrees."""
        return self.ray.angle

    def get_display_name(self) -> str:
        """Name of the scene, or a description of its slider values."""
        if self.name:
            return self.name
        return f"Mirrors {self.mirror_angle:g} deg / source {self.incident_angle:g} deg"

    def __repr__(self) -> str:
        return (f"Scene(mirror_angle={self.mirror_angle}, incident_angle={self.incident_angle}, "
                f"source_distance={self.source_distance})")
