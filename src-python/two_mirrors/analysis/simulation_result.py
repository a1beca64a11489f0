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
Simulation Result Container
===============================================================================
This module provides a container for simulation results that captures:
- The traced path and the per-bounce reflection events
- The total deviation and the final ray direction
- The slider values the bench had at simulation time

The challenge state machine consumes these results; the presentation layer
draws the path and the angle readouts from them.
===============================================================================
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, TYPE_CHECKING

from shapely.geometry import LineString

from ..core.geometry import Point
from .optical_metrics import direction_dot

if TYPE_CHECKING:
    from ..core.scene import Scene


@dataclass(frozen=True)
class ReflectionEvent:
    """
    One bounce of the ray on a mirror.

    Attributes:
        point: Where the ray hit the mirror
        incidence_angle_deg: Angle between incoming ray and normal, in [0, 90]
        normal_angle_deg: Direction of the normal (facing the incoming ray)
        virtual_source: Image of the source after this bounce, if computed
        mirror_id: Which mirror was hit
    """
    point: Point
    incidence_angle_deg: float
    normal_angle_deg: float
    virtual_source: Optional[Point] = None
    mirror_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'point': self.point.to_dict(),
            'incidence_angle_deg': self.incidence_angle_deg,
            'normal_angle_deg': self.normal_angle_deg,
            'virtual_source': self.virtual_source.to_dict() if self.virtual_source else None,
            'mirror_id': self.mirror_id,
        }


@dataclass(frozen=True)
class DirectionMarker:
    """Arrow drawn along the path: a position and the heading in degrees."""
    pos: Point
    angle: float


@dataclass(frozen=True)
class SceneSnapshot:
    """
    The slider values of the bench at simulation time.

    Attributes:
        mirror_angle: Angle between the mirrors in degrees
        incident_angle: Source angle relative to the incidence point in degrees
        source_distance: Distance from the incidence point to the source
        source: Position of the source
        name: Display name of the scene
    """
    mirror_angle: float
    incident_angle: float
    source_distance: float
    source: Point
    name: str

    @classmethod
    def from_scene(cls, scene: 'Scene') -> 'SceneSnapshot':
        """
        Create a snapshot from a Scene object.

        Args:
            scene: The Scene to snapshot

        Returns:
            A SceneSnapshot capturing the scene's current state
        """
        return cls(
            mirror_angle=scene.mirror_angle,
            incident_angle=scene.incident_angle,
            source_distance=scene.source_distance,
            source=scene.source_position,
            name=scene.get_display_name(),
        )


@dataclass
class SimulationResult:
    """
    Container for one traced path with its optical metrics.

    Attributes:
        path: Start point, one point per bounce, then a terminal point
        reflections: One ReflectionEvent per bounce, in traversal order
        total_deviation_deg: Rotation from initial to final direction, [0, 360)
        initial_direction: Unit direction the ray started with
        final_direction: Unit direction after the last bounce
        escaped: True if the ray left the mirrors for good
        hit_bounce_limit: True if tracing stopped at max_bounces
        max_bounces: Bounce limit used for the trace
        arrows: Direction markers for drawing
        scene_snapshot: Slider values at simulation time, if traced from a Scene
        warnings: Warning messages from the simulation
        error: Error message if simulation failed, None otherwise
    """
    path: List[Point]
    reflections: List[ReflectionEvent]
    total_deviation_deg: float
    initial_direction: Point
    final_direction: Point
    escaped: bool
    hit_bounce_limit: bool
    max_bounces: int
    arrows: List[DirectionMarker] = field(default_factory=list)
    scene_snapshot: Optional[SceneSnapshot] = None
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def reflection_count(self) -> int:
        """Number of bounces, len(path) - 2 clamped to zero."""
        return max(0, len(self.path) - 2)

    @property
    def deviation_display(self) -> int:
        """Deviation rounded for display. Never used for comparisons."""
        return int(round(self.total_deviation_deg)) % 360

    @property
    def direction_dot(self) -> float:
        """Dot product of the normalized initial and final directions."""
        return direction_dot(self.initial_direction, self.final_direction)

    @property
    def success(self) -> bool:
        """Check if the simulation completed successfully (no error)."""
        return self.error is None

    @property
    def virtual_sources(self) -> List[Point]:
        """Images of the source, one per bounce that has one."""
        return [r.virtual_source for r in self.reflections if r.virtual_source is not None]

    def to_linestring(self) -> LineString:
        """The path as a Shapely LineString."""
        return LineString([(p.x, p.y) for p in self.path])

    @property
    def path_length(self) -> float:
        """Length of the traced path, terminal segment included."""
        if len(self.path) < 2:
            return 0.0
        return self.to_linestring().length

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict representation for the presentation layer."""
        return {
            'path': [p.to_dict() for p in self.path],
            'reflections': [r.to_dict() for r in self.reflections],
            'total_deviation_deg': self.total_deviation_deg,
            'deviation_display': self.deviation_display,
            'reflection_count': self.reflection_count,
            'escaped': self.escaped,
            'hit_bounce_limit': self.hit_bounce_limit,
            'arrows': [{'pos': a.pos.to_dict(), 'angle': a.angle} for a in self.arrows],
            'warnings': list(self.warnings),
        }

    def __repr__(self) -> str:
        return (f"SimulationResult(reflections={self.reflection_count}, "
                f"deviation={self.total_deviation_deg:.4f}, escaped={self.escaped})")


def _escape_xml(text: str) -> str:
    """Escape special XML characters in text."""
    return (text
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
            .replace("'", '&apos;'))


def describe_simulation_result(result: SimulationResult, format: str = 'text') -> str:
    """
    Describe a simulation result in a human/LLM readable form.

    Args:
        result: The SimulationResult to describe
        format: 'text' or 'xml'

    Returns:
        The description

    Raises:
        ValueError: If format is not 'text' or 'xml'.
    """
    if format == 'text':
        return _describe_result_text(result)
    if format == 'xml':
        return _describe_result_xml(result)
    raise ValueError(f"Invalid format '{format}'. Valid options: ('text', 'xml')")


def _describe_result_xml(result: SimulationResult) -> str:
    lines = [
        f'<simulation_result reflections="{result.reflection_count}" '
        f'deviation="{result.total_deviation_deg:.4f}" '
        f'escaped="{str(result.escaped).lower()}" '
        f'hit_bounce_limit="{str(result.hit_bounce_limit).lower()}">'
    ]
    snap = result.scene_snapshot
    if snap is not None:
        lines.append(
            f'  <scene name="{_escape_xml(snap.name)}" mirror_angle="{snap.mirror_angle:.4f}" '
            f'incident_angle="{snap.incident_angle:.4f}" '
            f'source_distance="{snap.source_distance:.4f}"/>'
        )
    lines.append('  <reflections>')
    for i, ref in enumerate(result.reflections):
        attrs = (f'index="{i + 1}" mirror="{_escape_xml(ref.mirror_id or "")}" '
                 f'x="{ref.point.x:.4f}" y="{ref.point.y:.4f}" '
                 f'incidence="{ref.incidence_angle_deg:.4f}" normal="{ref.normal_angle_deg:.4f}"')
        if ref.virtual_source is not None:
            attrs += (f' image_x="{ref.virtual_source.x:.4f}"'
                      f' image_y="{ref.virtual_source.y:.4f}"')
        lines.append(f'    <reflection {attrs}/>')
    lines.append('  </reflections>')
    for warning in result.warnings:
        lines.append(f'  <warning>{_escape_xml(warning)}</warning>')
    if result.error:
        lines.append(f'  <error>{_escape_xml(result.error)}</error>')
    lines.append('</simulation_result>')
    return '\n'.join(lines)


def _describe_result_text(result: SimulationResult) -> str:
    lines = []
    snap = result.scene_snapshot
    if snap is not None:
        lines.append(f"Scene: {snap.name}")
        lines.append(f"  Mirror angle: {snap.mirror_angle:.2f} deg")
        lines.append(f"  Incident angle: {snap.incident_angle:.2f} deg")
        lines.append(f"  Source distance: {snap.source_distance:.2f}")
    lines.append(f"Reflections: {result.reflection_count}")
    for i, ref in enumerate(result.reflections):
        line = (f"  R{i + 1} on {ref.mirror_id}: ({ref.point.x:.2f}, {ref.point.y:.2f}), "
                f"incidence {ref.incidence_angle_deg:.2f} deg")
        if ref.virtual_source is not None:
            line += f", image at ({ref.virtual_source.x:.2f}, {ref.virtual_source.y:.2f})"
        lines.append(line)
    lines.append(f"Deviation: {result.deviation_display} deg")
    if result.escaped:
        lines.append("Ray escaped the mirrors")
    if result.hit_bounce_limit:
        lines.append(f"Stopped at the bounce limit ({result.max_bounces})")
    for warning in result.warnings:
        lines.append(f"Warning: {warning}")
    if result.error:
        lines.append(f"Error: {result.error}")
    return '\n'.join(lines)
