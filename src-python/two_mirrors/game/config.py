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
Challenge parameters and quiz definitions.

The game went through several rule sets (10 vs 20 degree thresholds, a
110 vs 60 degree generalization target, an extra virtual-image stage).
They are all expressed as ChallengeConfig values; ChallengeConfig() is the
default rule set and ChallengeConfig.wide_wedge() the alternative one.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple

from ..core.constants import INITIAL_MIRROR_ANGLE, INITIAL_INCIDENT_ANGLE


@dataclass(frozen=True)
class QuizSpec:
    """
    A multiple-choice question asked by the wizard.

    Attributes:
        quiz_id: Key of the quiz
        question: Question text
        options: Answer labels, presented in this order
        correct_index: Index of the correct answer in options
    """
    quiz_id: str
    question: str
    options: Tuple[str, ...]
    correct_index: int


CONSTANCY_QUIZ = QuizSpec(
    quiz_id='constancy',
    question="You moved the light a long way. What happened to the deviation?",
    options=(
        "It grew with the incident angle",
        "It shrank as the light moved away",
        "It did not change",
        "It depends on how far the light is",
    ),
    correct_index=2,
)

GENERALIZATION_QUIZ = QuizSpec(
    quiz_id='generalization',
    question="After two reflections, what does the deviation depend on?",
    options=(
        "Only on the incident angle",
        "On both the incident angle and the mirror angle",
        "Only on the angle between the mirrors",
        "On the distance of the light source",
    ),
    correct_index=2,
)

QUIZZES: Dict[str, QuizSpec] = {
    quiz.quiz_id: quiz for quiz in (CONSTANCY_QUIZ, GENERALIZATION_QUIZ)
}


def get_quiz(quiz_id: str) -> QuizSpec:
    """
    Look up a quiz by id.

    Raises:
        ValueError: If no quiz has that id.
    """
    try:
        return QUIZZES[quiz_id]
    except KeyError:
        raise ValueError(
            f"Unknown quiz '{quiz_id}'. Valid options: {tuple(QUIZZES)}"
        ) from None


@dataclass(frozen=True)
class ChallengeConfig:
    """
    Rule set of the challenge progression.

    Attributes:
        start_with_tutorial: Start at the tutorial (challenge 0) instead of challenge 1
        tutorial_move_threshold: Degrees a slider must move to complete a tutorial step
        constancy_threshold: Degrees the incident angle must move in the
            constancy and generalization challenges
        generalization_target: Mirror angle of the generalization challenge
        generalization_tolerance: Accepted distance from the target, in degrees
        baseline_hysteresis: Mirror movement (degrees) that re-snapshots the
            generalization baselines
        retro_dot_threshold: The final direction counts as sent back when
            dot(initial, final) is strictly below this value
        strict_right_angle: Also require the mirror angle to round to right_angle
            for the corner reflector
        right_angle: Mirror angle of the corner reflector and constancy challenges
        virtual_image_stage: Insert the virtual-image stage before completion
        method_points: Points for each single-reflection method
        challenge_points: Points for completing a challenge
        challenge_jewels: Jewels for completing a challenge
        quiz_points: Points for a correct answer that does not end the game
        completion_points: Points for reaching the end
        completion_jewels: Jewels for reaching the end
        debounce_delay: Seconds between the last drag movement and evaluation
        initial_mirror_angle: Mirror angle at game start and after reset
        initial_incident_angle: Incident angle at game start and after reset
    """
    start_with_tutorial: bool = True
    tutorial_move_threshold: float = 1.0
    constancy_threshold: float = 20.0
    generalization_target: float = 60.0
    generalization_tolerance: float = 2.0
    baseline_hysteresis: float = 1.0
    retro_dot_threshold: float = -0.99
    strict_right_angle: bool = True
    right_angle: float = 90.0
    virtual_image_stage: bool = False
    method_points: int = 50
    challenge_points: int = 100
    challenge_jewels: int = 1
    quiz_points: int = 150
    completion_points: int = 500
    completion_jewels: int = 3
    debounce_delay: float = 0.5
    initial_mirror_angle: float = INITIAL_MIRROR_ANGLE
    initial_incident_angle: float = INITIAL_INCIDENT_ANGLE

    def __post_init__(self):
        for name in ('tutorial_move_threshold', 'constancy_threshold',
                     'generalization_tolerance', 'baseline_hysteresis', 'debounce_delay'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value}")
        if not -1.0 <= self.retro_dot_threshold <= 1.0:
            raise ValueError(
                f"retro_dot_threshold must lie in [-1, 1], got {self.retro_dot_threshold}"
            )
        for name in ('method_points', 'challenge_points', 'challenge_jewels',
                     'quiz_points', 'completion_points', 'completion_jewels'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

    @classmethod
    def wide_wedge(cls) -> 'ChallengeConfig':
        """
        The alternative rule set: smaller movement threshold, a 110 degree
        generalization target, no right-angle rounding rule for the corner
        reflector, and the virtual-image stage before completion.
        """
        return cls(
            constancy_threshold=10.0,
            generalization_target=110.0,
            strict_right_angle=False,
            virtual_image_stage=True,
        )


DEFAULT_CONFIG = ChallengeConfig()
