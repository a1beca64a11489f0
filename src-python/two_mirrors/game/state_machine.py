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
Challenge State Machine
===============================================================================
Transition functions of the challenge progression:

    TUTORIAL -> SINGLE_REFLECTION -> DOUBLE_REFLECTION -> RETRO_REFLECTOR
    -> CONSTANCY -> GENERALIZATION [-> VIRTUAL_IMAGES] -> COMPLETE

Every function takes the current ChallengeState and returns a new state
together with the Effects the caller should present (points, wizard text,
hints, toasts, quiz prompts). Nothing here touches the scene or the clock:
the session decides when an interaction has ended and hands in the traced
result and the committed slider values.
===============================================================================
"""

import math
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from ..core.geometry import geometry
from ..analysis.simulation_result import SimulationResult
from .challenge_state import Challenge, ChallengeState, Effects, QuizPrompt
from .config import (
    ChallengeConfig,
    DEFAULT_CONFIG,
    QuizSpec,
    CONSTANCY_QUIZ,
    GENERALIZATION_QUIZ,
    get_quiz,
)
from .messages import TUTORIAL_STEPS, hint, toast, wizard_text_for

if TYPE_CHECKING:
    from ..core.scene import Scene


# Single reflection: a source beyond this incident angle is Method A
METHOD_SPLIT_ANGLE = 90.0


@dataclass(frozen=True)
class InteractionInputs:
    """
    Slider values committed at the end of an interaction.

    Attributes:
        mirror_angle: Angle between the mirrors in degrees
        incident_angle: Source angle relative to the incidence point in degrees
        source_distance: Distance from the incidence point to the source
        virtual_sources_visible: Whether the virtual sources overlay is on
    """
    mirror_angle: float
    incident_angle: float
    source_distance: float
    virtual_sources_visible: bool = False

    @classmethod
    def from_scene(cls, scene: 'Scene', virtual_sources_visible: bool = False) -> 'InteractionInputs':
        return cls(
            mirror_angle=scene.mirror_angle,
            incident_angle=scene.incident_angle,
            source_distance=scene.source_distance,
            virtual_sources_visible=virtual_sources_visible,
        )


Transition = Tuple[ChallengeState, Effects]


def _rounds_to(angle: float, target: float) -> bool:
    """True if angle rounds half-up to target (89.5 counts as 90, 90.5 does not)."""
    return math.floor(angle + 0.5) == target


def _advance(
    state: ChallengeState,
    next_challenge: Challenge,
    config: ChallengeConfig,
    transition: str,
    points: int = 0,
    jewels: int = 0,
    toast_text: Optional[str] = None,
    **changes
) -> Transition:
    """Move to next_challenge, paying the given reward."""
    new_state = replace(
        state,
        challenge=next_challenge,
        points=state.points + points,
        jewels=state.jewels + jewels,
        **changes
    )
    return new_state, Effects(
        transition=transition,
        advanced=True,
        points_awarded=points,
        jewels_awarded=jewels,
        wizard_text=wizard_text_for(new_state, config),
        toast=toast_text,
    )


def _complete_challenge(
    state: ChallengeState,
    next_challenge: Challenge,
    config: ChallengeConfig,
    transition: str,
    extra_points: int = 0,
    **changes
) -> Transition:
    points = config.challenge_points + extra_points
    jewels = config.challenge_jewels
    return _advance(
        state, next_challenge, config, transition,
        points=points,
        jewels=jewels,
        toast_text=toast('challenge_complete', points=points, jewels=jewels),
        **changes
    )


def _complete_game(state: ChallengeState, config: ChallengeConfig, transition: str, **changes) -> Transition:
    points = config.completion_points
    jewels = config.completion_jewels
    return _advance(
        state, Challenge.COMPLETE, config, transition,
        points=points,
        jewels=jewels,
        toast_text=toast('game_complete', points=points, jewels=jewels),
        **changes
    )


def _present_quiz(state: ChallengeState, quiz: QuizSpec) -> Transition:
    new_state = replace(state, pending_quiz=quiz.quiz_id)
    return new_state, Effects(
        transition='quiz_presented',
        quiz=QuizPrompt(quiz.quiz_id, quiz.question, quiz.options),
    )


# =============================================================================
# Per-challenge evaluation
# =============================================================================

def _evaluate_tutorial(state, result, inputs, config) -> Transition:
    if state.tutorial_step == 0:
        moved = geometry.angle_difference(inputs.mirror_angle, config.initial_mirror_angle)
        if moved < config.tutorial_move_threshold:
            return state, Effects()
        new_state = replace(state, tutorial_step=1)
        return new_state, Effects(
            transition='tutorial_step',
            wizard_text=wizard_text_for(new_state, config),
        )

    moved = geometry.angle_difference(inputs.incident_angle, config.initial_incident_angle)
    if moved < config.tutorial_move_threshold:
        return state, Effects()
    return _advance(
        state, Challenge.SINGLE_REFLECTION, config, 'tutorial_done',
        toast_text=toast('tutorial_done'),
        tutorial_step=len(TUTORIAL_STEPS),
    )


def _evaluate_single_reflection(state, result, inputs, config) -> Transition:
    count = result.reflection_count
    if count != 1:
        return state, Effects(hint=hint('need_one_reflection', config, count=count))

    flags = state.progress_flags
    if inputs.incident_angle > METHOD_SPLIT_ANGLE:
        if flags.method_a:
            return state, Effects(hint=hint('find_method_b', config))
        flags = replace(flags, method_a=True)
        method = 'method_a'
    else:
        if flags.method_b:
            return state, Effects(hint=hint('find_method_a', config))
        flags = replace(flags, method_b=True)
        method = 'method_b'

    points = config.method_points
    if flags.method_a and flags.method_b:
        return _complete_challenge(
            state, Challenge.DOUBLE_REFLECTION, config, method,
            extra_points=points,
            progress_flags=flags,
        )

    new_state = replace(state, progress_flags=flags, points=state.points + points)
    next_hint = hint('find_method_b' if flags.method_a else 'find_method_a', config)
    return new_state, Effects(
        transition=method,
        points_awarded=points,
        toast=toast(method, points=points),
        hint=next_hint,
    )


def _evaluate_double_reflection(state, result, inputs, config) -> Transition:
    count = result.reflection_count
    if count != 2:
        return state, Effects(hint=hint('need_two_reflections', config, count=count))
    return _complete_challenge(state, Challenge.RETRO_REFLECTOR, config, 'double_reflection')


def _retro_failure(result: SimulationResult, inputs: InteractionInputs, config: ChallengeConfig) -> Optional[str]:
    """Hint key explaining why the ray is not sent back, None if it is."""
    if result.reflection_count != 2:
        return 'need_two_reflections'
    if not result.direction_dot < config.retro_dot_threshold:
        return 'not_sent_back'
    if config.strict_right_angle and not _rounds_to(inputs.mirror_angle, config.right_angle):
        return 'need_right_angle'
    return None


def is_retro_reflection(
    result: SimulationResult,
    inputs: InteractionInputs,
    config: ChallengeConfig = DEFAULT_CONFIG
) -> bool:
    """
    Check whether a traced path is a corner-reflector path.

    Exactly two reflections, a final direction nearly antiparallel to the
    initial one (dot strictly below config.retro_dot_threshold) and, under
    the strict rule, a mirror angle that rounds to config.right_angle.
    """
    return _retro_failure(result, inputs, config) is None


def _evaluate_retro_reflector(state, result, inputs, config) -> Transition:
    failure = _retro_failure(result, inputs, config)
    if failure is not None:
        return state, Effects(hint=hint(failure, config, count=result.reflection_count))
    return _complete_challenge(
        state, Challenge.CONSTANCY, config, 'retro_reflector',
        c4_start_angle=inputs.incident_angle,
    )


def _evaluate_constancy(state, result, inputs, config) -> Transition:
    if not _rounds_to(inputs.mirror_angle, config.right_angle):
        return state, Effects(hint=hint('keep_right_angle', config))
    if state.c4_start_angle is None:
        new_state = replace(state, c4_start_angle=inputs.incident_angle)
        return new_state, Effects(transition='baseline_snapshot', hint=hint('move_further', config))
    moved = geometry.angle_difference(inputs.incident_angle, state.c4_start_angle)
    if moved > config.constancy_threshold:
        return _present_quiz(state, CONSTANCY_QUIZ)
    return state, Effects(hint=hint('move_further', config))


def _evaluate_generalization(state, result, inputs, config) -> Transition:
    off_target = geometry.angle_difference(inputs.mirror_angle, config.generalization_target)
    if off_target > config.generalization_tolerance:
        if state.c5_mirror_angle is None:
            return state, Effects(hint=hint('open_to_target', config))
        new_state = replace(state, c5_mirror_angle=None, c5_start_angle=None)
        return new_state, Effects(transition='baseline_cleared', hint=hint('open_to_target', config))

    if (state.c5_mirror_angle is None
            or geometry.angle_difference(inputs.mirror_angle, state.c5_mirror_angle) > config.baseline_hysteresis):
        new_state = replace(
            state,
            c5_mirror_angle=inputs.mirror_angle,
            c5_start_angle=inputs.incident_angle,
        )
        return new_state, Effects(transition='baseline_snapshot', hint=hint('baseline_set', config))

    moved = geometry.angle_difference(inputs.incident_angle, state.c5_start_angle)
    if moved > config.constancy_threshold:
        return _present_quiz(state, GENERALIZATION_QUIZ)
    return state, Effects(hint=hint('move_further', config))


def _check_virtual_images(
    state: ChallengeState,
    result: SimulationResult,
    visible: bool,
    config: ChallengeConfig
) -> Transition:
    if not visible:
        return state, Effects(hint=hint('show_virtual_sources', config))
    if result.reflection_count != 2:
        return state, Effects(hint=hint('need_two_reflections', config, count=result.reflection_count))
    return _complete_game(state, config, 'virtual_images')


def _evaluate_virtual_images(state, result, inputs, config) -> Transition:
    return _check_virtual_images(state, result, inputs.virtual_sources_visible, config)


_HANDLERS: Dict[Challenge, Callable[..., Transition]] = {
    Challenge.TUTORIAL: _evaluate_tutorial,
    Challenge.SINGLE_REFLECTION: _evaluate_single_reflection,
    Challenge.DOUBLE_REFLECTION: _evaluate_double_reflection,
    Challenge.RETRO_REFLECTOR: _evaluate_retro_reflector,
    Challenge.CONSTANCY: _evaluate_constancy,
    Challenge.GENERALIZATION: _evaluate_generalization,
    Challenge.VIRTUAL_IMAGES: _evaluate_virtual_images,
}


# =============================================================================
# Public transition functions
# =============================================================================

def evaluate_interaction(
    state: ChallengeState,
    result: SimulationResult,
    inputs: InteractionInputs,
    config: ChallengeConfig = DEFAULT_CONFIG
) -> Transition:
    """
    Evaluate the current challenge after an interaction has ended.

    Args:
        state: Current state
        result: Trace of the committed slider values
        inputs: The committed slider values
        config: Rule set

    Returns:
        (new_state, effects). The state is returned unchanged when the
        challenge is not satisfied; effects then carry a hint at most.
    """
    if state.is_terminal:
        return state, Effects()
    if state.has_pending_quiz:
        return state, Effects(hint=hint('quiz_pending', config))
    return _HANDLERS[state.challenge](state, result, inputs, config)


def answer_quiz(
    state: ChallengeState,
    option_index: int,
    config: ChallengeConfig = DEFAULT_CONFIG
) -> Transition:
    """
    Answer the pending quiz.

    A wrong answer keeps the quiz pending. A correct answer to the constancy
    quiz moves to the generalization challenge; a correct answer to the
    generalization quiz completes the game (or opens the virtual-image
    stage when the rule set has one).

    Args:
        state: Current state
        option_index: Index of the chosen option
        config: Rule set

    Returns:
        (new_state, effects); unchanged when no quiz is pending

    Raises:
        ValueError: If option_index is not an index of the quiz options.
    """
    if state.pending_quiz is None:
        return state, Effects()

    quiz = get_quiz(state.pending_quiz)
    if not 0 <= option_index < len(quiz.options):
        raise ValueError(
            f"Answer index {option_index} out of range for quiz '{quiz.quiz_id}' "
            f"with {len(quiz.options)} options"
        )
    if option_index != quiz.correct_index:
        return state, Effects(hint=hint('wrong_answer', config))

    if quiz.quiz_id == CONSTANCY_QUIZ.quiz_id:
        return _advance(
            state, Challenge.GENERALIZATION, config, 'quiz_correct',
            points=config.quiz_points,
            jewels=config.challenge_jewels,
            toast_text=toast('quiz_correct', points=config.quiz_points, jewels=config.challenge_jewels),
            pending_quiz=None,
            c4_start_angle=None,
        )
    if config.virtual_image_stage:
        return _advance(
            state, Challenge.VIRTUAL_IMAGES, config, 'quiz_correct',
            points=config.quiz_points,
            jewels=config.challenge_jewels,
            toast_text=toast('quiz_correct', points=config.quiz_points, jewels=config.challenge_jewels),
            pending_quiz=None,
        )
    return _complete_game(state, config, 'quiz_correct', pending_quiz=None)


def toggle_virtual_sources(
    state: ChallengeState,
    visible: bool,
    result: SimulationResult,
    config: ChallengeConfig = DEFAULT_CONFIG
) -> Transition:
    """
    React to the virtual sources overlay being switched on or off.

    Only the virtual-image stage listens; every other state is returned
    unchanged.
    """
    if state.challenge != Challenge.VIRTUAL_IMAGES or state.has_pending_quiz:
        return state, Effects()
    return _check_virtual_images(state, result, visible, config)
