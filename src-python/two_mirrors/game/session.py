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
import time
from typing import Callable, Optional

from ..core.constants import (
    DEFAULT_MAX_BOUNCES,
    MIN_SOURCE_DISTANCE,
    MAX_SOURCE_DISTANCE,
    SOURCE_DISTANCE_RATIO,
)
from ..core.geometry import geometry
from ..core.scene import Scene
from ..core.simulator import Simulator
from ..analysis.simulation_result import SimulationResult
from .config import ChallengeConfig, DEFAULT_CONFIG
from .challenge_state import ChallengeState, Effects
from .debounce import Debouncer
from .messages import wizard_text_for
from .placement import PlacementChecker
from .state_machine import (
    InteractionInputs,
    evaluate_interaction,
    answer_quiz,
    toggle_virtual_sources,
)


class GameSession:
    """
    One game of the two-mirror puzzle.

    Owns the scene, the challenge state and the debounce timer. Slider
    proposals go through the placement checker and, when accepted, update
    the scene at once; the challenge is only evaluated when an interaction
    ends (on_interaction_end, or poll() after the debounce delay).

    Attributes:
        config (ChallengeConfig): Rule set
        scene (Scene): The optical bench
        checker (PlacementChecker): Validates slider proposals
        simulator (Simulator): Traces the scene
        state (ChallengeState): Current progression state
        wizard_text (str): What the wizard currently says
        virtual_sources_visible (bool): Whether the virtual sources overlay is on
        last_effects (Effects): Effects of the latest evaluation
        verbose (int): Verbosity level
    """

    def __init__(
        self,
        config: Optional[ChallengeConfig] = None,
        scene: Optional[Scene] = None,
        max_bounces: int = DEFAULT_MAX_BOUNCES,
        clock: Callable[[], float] = time.monotonic,
        verbose: int = 0,
    ) -> None:
        """
        Start a new game.

        Args:
            config: Rule set (default: ChallengeConfig())
            scene: Bench to play on (default: a Scene at the initial slider values)
            max_bounces: Bounce limit for the tracer
            clock: Monotonic clock for the debounce timer
            verbose: Verbosity level (default: 0)
                0 = silent
                1 = print transitions
                2 = also print every evaluation and the tracer output
        """
        self.config = config if config is not None else DEFAULT_CONFIG
        if scene is None:
            scene = Scene(self.config.initial_mirror_angle, self.config.initial_incident_angle)
        self.scene = scene
        self.simulator = Simulator(scene, max_bounces, verbose=max(0, verbose - 1))
        self.debouncer = Debouncer(self.config.debounce_delay, clock)
        self.verbose = verbose
        self.virtual_sources_visible = False
        self.state = ChallengeState.initial(self.config)
        self.wizard_text = wizard_text_for(self.state, self.config)
        self.last_effects = Effects()

    # -------------------------------------------------------------------------
    # Slider proposals
    # -------------------------------------------------------------------------

    @property
    def checker(self) -> PlacementChecker:
        """Placement rules for the scene's current incidence point."""
        return PlacementChecker.for_scene(self.scene)

    def propose_mirror_angle(self, mirror_angle: float) -> bool:
        """
        Propose a new angle between the mirrors.

        Returns:
            True if accepted; a rejected value leaves the scene unchanged
        """
        mirror_angle = geometry.normalize_angle(mirror_angle)
        if not self.checker.is_valid(mirror_angle, self.scene.incident_angle, self.scene.source_distance):
            return False
        self.scene.mirror_angle = mirror_angle
        return True

    def propose_incident_angle(self, incident_angle: float) -> bool:
        """Propose a new source angle. Returns True if accepted."""
        incident_angle = geometry.normalize_angle(incident_angle)
        if not self.checker.is_valid(self.scene.mirror_angle, incident_angle, self.scene.source_distance):
            return False
        self.scene.incident_angle = incident_angle
        return True

    def propose_source_distance(self, source_distance: float) -> bool:
        """
        Propose a new source distance, clamped to
        [MIN_SOURCE_DISTANCE, MAX_SOURCE_DISTANCE]. Returns True if accepted.

        Raises:
            ValueError: If source_distance is not a finite number.
        """
        if not math.isfinite(source_distance):
            raise ValueError(f"source_distance must be a finite number, got {source_distance}")
        source_distance = min(MAX_SOURCE_DISTANCE, max(MIN_SOURCE_DISTANCE, source_distance))
        if not self.checker.is_valid(self.scene.mirror_angle, self.scene.incident_angle, source_distance):
            return False
        self.scene.source_distance = source_distance
        return True

    # -------------------------------------------------------------------------
    # Simulation and evaluation
    # -------------------------------------------------------------------------

    def simulate(self) -> SimulationResult:
        """Trace the scene at its current slider values."""
        return self.simulator.run()

    @property
    def inputs(self) -> InteractionInputs:
        return InteractionInputs.from_scene(self.scene, self.virtual_sources_visible)

    def _apply(self, state: ChallengeState, effects: Effects) -> Effects:
        if effects.transition is not None and self.verbose >= 1:
            print(f"[{self.state.challenge.name}] {effects.transition} -> {state.challenge.name} "
                  f"(+{effects.points_awarded} points, +{effects.jewels_awarded} jewels)")
        self.state = state
        if effects.wizard_text is not None:
            self.wizard_text = effects.wizard_text
        self.last_effects = effects
        return effects

    def on_interaction_end(self) -> Effects:
        """
        Evaluate the current challenge against the committed slider values.

        Returns:
            Effects of the evaluation
        """
        self.debouncer.cancel()
        result = self.simulate()
        if self.verbose >= 2:
            print(f"evaluate {self.state.challenge.name}: {result!r}")
        state, effects = evaluate_interaction(self.state, result, self.inputs, self.config)
        return self._apply(state, effects)

    def on_quiz_answer(self, option_index: int) -> Effects:
        """
        Answer the pending quiz.

        Raises:
            ValueError: If option_index is out of range for the pending quiz.
        """
        state, effects = answer_quiz(self.state, option_index, self.config)
        return self._apply(state, effects)

    def set_virtual_sources_visible(self, visible: bool) -> Effects:
        """Switch the virtual sources overlay on or off."""
        self.virtual_sources_visible = bool(visible)
        state, effects = toggle_virtual_sources(self.state, self.virtual_sources_visible,
                                                self.simulate(), self.config)
        return self._apply(state, effects)

    # -------------------------------------------------------------------------
    # Drag handling
    # -------------------------------------------------------------------------

    def on_drag_start(self) -> None:
        """A drag began: drop any evaluation still waiting."""
        self.debouncer.cancel()

    def on_drag_move(self) -> None:
        """A drag moved: evaluate once the drag has been idle for the debounce delay."""
        self.debouncer.request()

    def poll(self) -> Optional[Effects]:
        """
        Run the debounced evaluation if it is due.

        Returns:
            Effects of the evaluation, or None if nothing was due
        """
        if not self.debouncer.poll():
            return None
        return self.on_interaction_end()

    def reset_game(self) -> None:
        """Restore the initial slider values and the initial challenge state."""
        self.debouncer.cancel()
        self.scene.mirror_angle = self.config.initial_mirror_angle
        self.scene.incident_angle = self.config.initial_incident_angle
        self.scene.source_distance = self.scene.handle_radius * SOURCE_DISTANCE_RATIO
        self.virtual_sources_visible = False
        self.state = ChallengeState.initial(self.config)
        self.wizard_text = wizard_text_for(self.state, self.config)
        self.last_effects = Effects()
        if self.verbose >= 1:
            print("game reset")
