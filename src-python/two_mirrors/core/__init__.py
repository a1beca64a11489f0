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

from . import constants
from .geometry import geometry, Point, Line, Intersection, Geometry
from .ray import Ray
from .mirror import Mirror
from .scene import Scene
from .simulator import Simulator, trace, trace_ray, find_nearest_hit

__all__ = [
    'constants',
    'geometry', 'Point', 'Line', 'Intersection', 'Geometry',
    'Ray',
    'Mirror',
    'Scene',
    'Simulator', 'trace', 'trace_ray', 'find_nearest_hit',
]
