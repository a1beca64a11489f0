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

from .config import ChallengeConfig, QuizSpec, DEFAULT_CONFIG, get_quiz
from .challenge_state import Challenge, ChallengeState, ProgressFlags, Effects, QuizPrompt
from .placement import PlacementChecker
from .debounce import Debouncer
from .state_machine import (
    InteractionInputs,
    evaluate_interaction,
    answer_quiz,
    toggle_virtual_sources,
    is_retro_reflection,
)
from .session import GameSession

__all__ = [
    'ChallengeConfig', 'QuizSpec', 'DEFAULT_CONFIG', 'get_quiz',
    'Challenge', 'ChallengeState', 'ProgressFlags', 'Effects', 'QuizPrompt',
    'PlacementChecker',
    'Debouncer',
    'InteractionInputs', 'evaluate_interaction', 'answer_quiz',
    'toggle_virtual_sources', 'is_retro_reflection',
    'GameSession',
]
