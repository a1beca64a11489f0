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

Two Mirrors
===========

Two plane mirrors hinged at a common point, a light source between them,
and a sequence of challenges about where the light goes.

Main modules:
- core: Geometry kernel, rays, mirrors, the bench (Scene) and the tracer
- analysis: Optical metrics and the simulation result container
- game: Placement rules, the challenge state machine and the game session

Quick start:
    from two_mirrors.core.scene import Scene
    from two_mirrors.core.simulator import Simulator
    from two_mirrors.game.session import GameSession
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator, trace_ray
from .core.ray import Ray
from .game.session import GameSession

__all__ = [
    'Scene',
    'Simulator',
    'trace_ray',
    'Ray',
    'GameSession',
    '__version__',
]
