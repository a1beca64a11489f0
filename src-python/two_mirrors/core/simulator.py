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

from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from .geometry import Point, Intersection
from .mirror import Mirror
from .ray import Ray
from .constants import (
    DEFAULT_MAX_BOUNCES,
    ESCAPE_DISTANCE,
    SOURCE_ARROW_OFFSET,
    BOUNCE_ARROW_OFFSET,
)
from ..analysis.optical_metrics import (
    incidence_angle,
    normal_angle,
    total_deviation,
    virtual_sources,
)
from ..analysis.simulation_result import (
    SimulationResult,
    ReflectionEvent,
    DirectionMarker,
    SceneSnapshot,
)

if TYPE_CHECKING:
    from .scene import Scene


def find_nearest_hit(
    ray: Ray,
    mirrors: Sequence[Mirror]
) -> Tuple[Optional[Intersection], Optional[Mirror]]:
    """
    Find the mirror the ray strikes first.

    Args:
        ray: The ray to test
        mirrors: Candidate mirrors; on an exact tie the earlier one wins

    Returns:
        (intersection, mirror), or (None, None) if the ray hits nothing
    """
    nearest: Optional[Intersection] = None
    nearest_mirror: Optional[Mirror] = None
    for mirror in mirrors:
        hit = mirror.check_ray_intersects(ray)
        if hit is not None and (nearest is None or hit.t < nearest.t):
            nearest = hit
            nearest_mirror = mirror
    return nearest, nearest_mirror


def trace(
    ray: Ray,
    mirrors: Sequence[Mirror],
    max_bounces: int = DEFAULT_MAX_BOUNCES,
    source: Optional[Point] = None,
    verbose: int = 0
) -> SimulationResult:
    """
    Trace a ray through repeated reflections.

    At each step the nearest mirror hit is taken, the hit point is added to
    the path and the direction is reflected about the hit normal. When no
    mirror is hit, a terminal point ESCAPE_DISTANCE along the final
    direction closes the path. When max_bounces is reached first, the path
    is closed with the point the ray would strike next (not counted as a
    reflection), so len(path) == len(reflections) + 2 always holds.

    Args:
        ray: The initial ray
        mirrors: The mirrors, in tie-break order
        max_bounces: Bounce limit (safety net against endless loops)
        source: Position used for the virtual source images
            (default: the ray origin)
        verbose: Verbosity level (default: 0)
            0 = silent (no debug output)
            1 = verbose (one line per bounce)
            2 = very verbose/debug (hit parameters and normals)

    Returns:
        SimulationResult

    Raises:
        ValueError: If max_bounces is negative.
    """
    if max_bounces < 0:
        raise ValueError(f"max_bounces must be >= 0, got {max_bounces}")

    if source is None:
        source = ray.origin

    initial_direction = ray.direction
    path: List[Point] = [ray.origin]
    hits: List[Tuple[Intersection, Mirror, float]] = []
    arrows: List[DirectionMarker] = [
        DirectionMarker(ray.point_at(SOURCE_ARROW_OFFSET), ray.angle)
    ]
    warnings: List[str] = []
    escaped = False
    hit_bounce_limit = False

    if verbose >= 1:
        print(f"\n### TRACE from ({ray.origin.x:.4f}, {ray.origin.y:.4f}) at {ray.angle:.4f} deg")

    for bounce in range(max_bounces):
        hit, mirror = find_nearest_hit(ray, mirrors)
        if hit is None:
            path.append(ray.point_at(ESCAPE_DISTANCE))
            escaped = True
            if verbose >= 1:
                print(f"  escaped after {bounce} reflection(s) at {ray.angle:.4f} deg")
            break

        path.append(hit.point)
        hits.append((hit, mirror, incidence_angle(ray.direction, hit.normal)))
        if verbose >= 2:
            print(f"  t={hit.t:.6f} normal=({hit.normal.x:.6f}, {hit.normal.y:.6f})")

        ray = mirror.reflect(ray, hit)
        arrows.append(DirectionMarker(ray.point_at(BOUNCE_ARROW_OFFSET), ray.angle))
        if verbose >= 1:
            print(f"  bounce {bounce + 1} on {mirror.id} at ({hit.point.x:.4f}, {hit.point.y:.4f}), "
                  f"outgoing {ray.angle:.4f} deg")
    else:
        hit, _ = find_nearest_hit(ray, mirrors)
        if hit is None:
            path.append(ray.point_at(ESCAPE_DISTANCE))
            escaped = True
        else:
            path.append(hit.point)
            hit_bounce_limit = True
            warnings.append(f"Tracing stopped: maximum bounce count ({max_bounces}) reached")
            if verbose >= 1:
                print(f"  stopped at the bounce limit ({max_bounces})")

    images = virtual_sources(source, [mirror for _, mirror, _ in hits])
    reflections = [
        ReflectionEvent(
            point=hit.point,
            incidence_angle_deg=angle,
            normal_angle_deg=normal_angle(hit.normal),
            virtual_source=image,
            mirror_id=mirror.id,
        )
        for (hit, mirror, angle), image in zip(hits, images)
    ]

    return SimulationResult(
        path=path,
        reflections=reflections,
        total_deviation_deg=total_deviation(initial_direction, ray.direction),
        initial_direction=initial_direction,
        final_direction=ray.direction,
        escaped=escaped,
        hit_bounce_limit=hit_bounce_limit,
        max_bounces=max_bounces,
        arrows=arrows,
        warnings=warnings,
    )


def trace_ray(
    origin: Point,
    direction_angle_deg: float,
    mirrors: Sequence[Mirror],
    max_bounces: int = DEFAULT_MAX_BOUNCES,
    verbose: int = 0
) -> SimulationResult:
    """
    Trace a ray leaving origin at direction_angle_deg. See trace().
    """
    return trace(Ray.from_angle(origin, direction_angle_deg), mirrors, max_bounces, verbose=verbose)


class Simulator:
    """
    Ray tracing simulation of a Scene.

    Traces the scene's ray (from the light source toward the fixed
    incidence point) against the two mirrors. The result is a pure function
    of the scene's slider values.

    Attributes:
        scene (Scene): The scene to simulate
        max_bounces (int): Bounce limit for the tracer
        verbose (int): Verbosity level
    """

    def __init__(self, scene: 'Scene', max_bounces: int = DEFAULT_MAX_BOUNCES, verbose: int = 0) -> None:
        """
        Initialize the simulator.

        Args:
            scene (Scene): The scene to simulate
            max_bounces (int): Bounce limit (default: 20)
            verbose (int): Verbosity level (default: 0)
                0 = silent (no debug output)
                1 = verbose (show bounce info)
                2 = very verbose/debug (show intersection details)
        """
        self.scene: 'Scene' = scene
        self.max_bounces: int = max_bounces
        self.verbose: int = verbose

    def run(self) -> SimulationResult:
        """
        Run the simulation.

        Returns:
            SimulationResult for the scene's current slider values
        """
        self.scene.error = None
        self.scene.warning = None

        result = trace(
            self.scene.ray,
            self.scene.mirrors,
            self.max_bounces,
            source=self.scene.source_position,
            verbose=self.verbose,
        )
        if result.warnings:
            self.scene.warning = result.warnings[-1]
        result.scene_snapshot = SceneSnapshot.from_scene(self.scene)
        return result
