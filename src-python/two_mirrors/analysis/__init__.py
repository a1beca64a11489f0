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
Analysis Utilities
===============================================================================
Quantities derived from a traced path (angles of incidence, total
deviation, virtual sources) and the result container handed to the
challenge engine and the presentation layer.
===============================================================================
"""

from .optical_metrics import (
    incidence_angle,
    normal_angle,
    direction_dot,
    total_deviation,
    two_bounce_deviation,
    reflection_matrix,
    virtual_sources,
)
from .simulation_result import (
    ReflectionEvent,
    DirectionMarker,
    SceneSnapshot,
    SimulationResult,
    describe_simulation_result,
)

__all__ = [
    'incidence_angle',
    'normal_angle',
    'direction_dot',
    'total_deviation',
    'two_bounce_deviation',
    'reflection_matrix',
    'virtual_sources',
    'ReflectionEvent',
    'DirectionMarker',
    'SceneSnapshot',
    'SimulationResult',
    'describe_simulation_result',
]
