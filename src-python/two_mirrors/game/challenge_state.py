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

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

from .config import ChallengeConfig, DEFAULT_CONFIG, get_quiz


class Challenge(IntEnum):
    """Progression states, in the order they are played."""
    TUTORIAL = 0
    SINGLE_REFLECTION = 1
    DOUBLE_REFLECTION = 2
    RETRO_REFLECTOR = 3
    CONSTANCY = 4
    GENERALIZATION = 5
    VIRTUAL_IMAGES = 6
    COMPLETE = 7


@dataclass(frozen=True)
class ProgressFlags:
    """One-way latches of the single-reflection challenge."""
    method_a: bool = False
    method_b: bool = False


@dataclass(frozen=True)
class ChallengeState:
    """
    Progression state of one game.

    Only the transition functions in state_machine produce new states;
    instances are never mutated.

    Attributes:
        challenge: Current challenge
        tutorial_step: Step within the tutorial
        jewels: Jewels collected
        points: Points collected
        progress_flags: Single-reflection latches
        c4_start_angle: Incident angle when the constancy challenge started
        c5_start_angle: Incident angle when the generalization baseline was taken
        c5_mirror_angle: Mirror angle when the generalization baseline was taken
        pending_quiz: Id of the quiz waiting for an answer, if any
    """
    challenge: Challenge = Challenge.TUTORIAL
    tutorial_step: int = 0
    jewels: int = 0
    points: int = 0
    progress_flags: ProgressFlags = ProgressFlags()
    c4_start_angle: Optional[float] = None
    c5_start_angle: Optional[float] = None
    c5_mirror_angle: Optional[float] = None
    pending_quiz: Optional[str] = None

    @classmethod
    def initial(cls, config: ChallengeConfig = DEFAULT_CONFIG) -> 'ChallengeState':
        """State at game start: the tutorial, or challenge 1 when the rule set skips it."""
        if config.start_with_tutorial:
            return cls(challenge=Challenge.TUTORIAL)
        return cls(challenge=Challenge.SINGLE_REFLECTION)

    @property
    def is_terminal(self) -> bool:
        return self.challenge == Challenge.COMPLETE

    @property
    def has_pending_quiz(self) -> bool:
        return self.pending_quiz is not None

    @property
    def quiz_question(self) -> Optional[str]:
        if self.pending_quiz is None:
            return None
        return get_quiz(self.pending_quiz).question

    @property
    def quiz_options(self) -> Tuple[str, ...]:
        """Answer labels of the pending quiz (empty when none is pending)."""
        if self.pending_quiz is None:
            return ()
        return get_quiz(self.pending_quiz).options

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for the HUD and dialogue panel."""
        return {
            'challenge': int(self.challenge),
            'challenge_name': self.challenge.name,
            'tutorial_step': self.tutorial_step,
            'jewels': self.jewels,
            'points': self.points,
            'progress_flags': {
                'method_a': self.progress_flags.method_a,
                'method_b': self.progress_flags.method_b,
            },
            'c4_start_angle': self.c4_start_angle,
            'c5_start_angle': self.c5_start_angle,
            'c5_mirror_angle': self.c5_mirror_angle,
            'pending_quiz': self.pending_quiz,
            'quiz_question': self.quiz_question,
            'quiz_options': list(self.quiz_options),
        }


@dataclass(frozen=True)
class QuizPrompt:
    """A quiz the presentation layer should show."""
    quiz_id: str
    question: str
    options: Tuple[str, ...]


@dataclass(frozen=True)
class Effects:
    """
    Observable outcome of one evaluation, handled by the caller.

    Attributes:
        transition: Name of the transition taken, None if nothing happened
        advanced: True if the challenge id changed
        points_awarded: Points added by this transition
        jewels_awarded: Jewels added by this transition
        wizard_text: New wizard text, if it changed
        hint: Hint for the current challenge
        toast: Short celebration message
        quiz: Quiz to present
    """
    transition: Optional[str] = None
    advanced: bool = False
    points_awarded: int = 0
    jewels_awarded: int = 0
    wizard_text: Optional[str] = None
    hint: Optional[str] = None
    toast: Optional[str] = None
    quiz: Optional[QuizPrompt] = None

    @property
    def changed_state(self) -> bool:
        return self.transition is not None
