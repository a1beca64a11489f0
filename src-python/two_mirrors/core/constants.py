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

"""
Constants used throughout the two-mirror simulation.

Kept in a separate module so that the geometry kernel, the tracer and the
challenge engine can share them without circular imports.
"""

# Determinant below which a ray and a mirror segment are treated as parallel
PARALLEL_EPSILON = 1e-6

# Minimum ray parameter for a valid hit. Rays are traced with unit directions,
# so this is also a distance: a reflected ray never re-hits the surface it
# just left.
MIN_RAY_PARAMETER = 1e-3

# Zero-length guard for vector normalization
ZERO_LENGTH_EPSILON = 1e-12

# Mirrors are semi-infinite: the far endpoint sits this far from the hinge
INFINITE_MIRROR_LENGTH = 50000.0

# Distance of the terminal point appended when a ray escapes the wedge
ESCAPE_DISTANCE = 2000.0

# Bounded-loop safety net for the tracer
DEFAULT_MAX_BOUNCES = 20

# Direction markers drawn along the path
SOURCE_ARROW_OFFSET = 30.0
BOUNCE_ARROW_OFFSET = 40.0

# Scene layout (in scene units, y pointing up, hinge at the origin)
DEFAULT_HANDLE_RADIUS = 300.0
INCIDENT_POINT_RATIO = 0.6       # incidence point = ratio * handle radius along mirror 1
SOURCE_DISTANCE_RATIO = 0.3      # initial source distance = ratio * handle radius
MIN_SOURCE_DISTANCE = 20.0
MAX_SOURCE_DISTANCE = 1000.0

# Initial slider values: mirrors at 60 degrees, ray at a third of that
INITIAL_MIRROR_ANGLE = 60.0
INITIAL_INCIDENT_ANGLE = INITIAL_MIRROR_ANGLE / 3

# Placement buffers: the source must stay this far inside the wedge
MIRROR2_SIDE_BUFFER = 5.0
MIRROR1_HEIGHT_BUFFER = 5.0

# Mirror identifiers
MIRROR_1_ID = 'm1'
MIRROR_2_ID = 'm2'
