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

===============================================================================
Optical Metrics
===============================================================================
Quantities derived from a traced path:

- Angle of incidence at each bounce (angle between the incoming ray and the
  surface normal)
- Total deviation between the initial and the final ray direction
- Virtual sources: the images of the light source produced by the mirrors
  the ray bounced off, composed in bounce order

Reflections across mirror lines are expressed as 2x2 numpy matrices so that
the images of later bounces are plain matrix compositions.
===============================================================================
"""

from __future__ import annotations

import math
from typing import List, Sequence, TYPE_CHECKING

import numpy as np

from ..core.geometry import geometry, Point
from ..core.constants import MIRROR_1_ID

if TYPE_CHECKING:
    from ..core.mirror import Mirror


def _as_array(v: Point) -> np.ndarray:
    return np.array([v.x, v.y], dtype=float)


def _unit(v: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(v)
    if norm < 1e-12:
        return np.zeros(2)
    return v / norm


def incidence_angle(direction: Point, normal: Point) -> float:
    """
    Angle of incidence in degrees, always in [0, 90].

    Args:
        direction: Direction of the incoming ray (any non-zero length)
        normal: Surface normal at the hit point (either orientation)

    Returns:
        Unsigned angle between the incoming ray and the normal line
    """
    d = _unit(_as_array(direction))
    n = _unit(_as_array(normal))
    cos_i = abs(float(np.dot(d, n)))
    return math.degrees(math.acos(min(1.0, cos_i)))


def normal_angle(normal: Point) -> float:
    """Direction of the surface normal in degrees, in [0, 360)."""
    return geometry.angle_of(normal)


def direction_dot(initial: Point, final: Point) -> float:
    """
    Dot product of the normalized initial and final directions.

    -1 means the ray left exactly antiparallel to how it arrived.
    """
    return float(np.dot(_unit(_as_array(initial)), _unit(_as_array(final))))


def total_deviation(initial: Point, final: Point) -> float:
    """
    Signed rotation from the initial to the final direction.

    Computed with atan2(cross, dot) so that the rotational sense survives,
    then folded into [0, 360). Not rounded.

    Args:
        initial: Initial ray direction
        final: Final ray direction

    Returns:
        Deviation in degrees, in [0, 360)
    """
    cross = geometry.cross(initial, final)
    dot = geometry.dot(initial, final)
    return geometry.normalize_angle(math.degrees(math.atan2(cross, dot)))


def two_bounce_deviation(mirror_angle: float, first_mirror_id: str = MIRROR_1_ID) -> float:
    """
    Deviation produced by one bounce on each mirror, in [0, 360).

    Two reflections compose into a rotation by twice the angle between the
    mirrors, whatever the incident angle. The sense of the rotation depends
    on which mirror is hit first.
    """
    if first_mirror_id == MIRROR_1_ID:
        return geometry.normalize_angle(2 * mirror_angle)
    return geometry.normalize_angle(-2 * mirror_angle)


def reflection_matrix(line_angle: float) -> np.ndarray:
    """
    Linear map reflecting vectors across a line through the origin.

    Args:
        line_angle: Direction of the line in degrees

    Returns:
        2x2 numpy array
    """
    two_phi = math.radians(2 * line_angle)
    c = math.cos(two_phi)
    s = math.sin(two_phi)
    return np.array([[c, s], [s, -c]])


def virtual_sources(source: Point, mirrors_hit: Sequence['Mirror']) -> List[Point]:
    """
    Images of the source for each reflection, in bounce order.

    The image for bounce k is the image for bounce k-1 reflected across the
    mirror line of bounce k (the first image is the source reflected across
    the first mirror hit). After bounce k the outgoing ray lies on the line
    through that image and the hit point.

    Args:
        source: Position of the real light source
        mirrors_hit: Mirror struck at each bounce, in order

    Returns:
        One image position per bounce
    """
    images: List[Point] = []
    image = _as_array(source)
    for mirror in mirrors_hit:
        anchor = _as_array(mirror.start)
        image = anchor + reflection_matrix(mirror.angle) @ (image - anchor)
        images.append(Point(float(image[0]), float(image[1])))
    return images
