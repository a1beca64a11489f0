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
Wizard dialogue, hints and toasts.

Texts carry str.format placeholders that are filled from the active
ChallengeConfig, so the wording follows the rule set.
"""

from typing import Any, Dict

from .challenge_state import Challenge, ChallengeState
from .config import ChallengeConfig, DEFAULT_CONFIG


TUTORIAL_STEPS = (
    "Welcome, apprentice! Grab the handle of mirror M2 and swing it to change "
    "the angle between the two mirrors.",
    "Well done. Now drag the light source to send the beam in from another direction.",
)

WIZARD_TEXT: Dict[Challenge, str] = {
    Challenge.SINGLE_REFLECTION:
        "Challenge 1: make the light bounce exactly once. "
        "There are two different ways to do it. Find both!",
    Challenge.DOUBLE_REFLECTION:
        "Challenge 2: now make the light bounce off both mirrors, "
        "exactly two reflections.",
    Challenge.RETRO_REFLECTOR:
        "Challenge 3: after two reflections, send the light straight back "
        "where it came from. Think of the corner of a room.",
    Challenge.CONSTANCY:
        "A corner reflector! Keep the mirrors at {right_angle:g} degrees and move the "
        "light source far from where it is now. Watch the deviation.",
    Challenge.GENERALIZATION:
        "Now open the mirrors to {target:g} degrees, then move the light again. "
        "Keep an eye on the deviation.",
    Challenge.VIRTUAL_IMAGES:
        "Switch on the virtual sources and find where the light seems to come "
        "from after two reflections.",
    Challenge.COMPLETE:
        "You have mastered the world of two mirrors!",
}

HINTS = {
    'need_one_reflection': "The light must bounce exactly once. Right now it bounces {count} time(s).",
    'find_method_a': "One way found! Now move the light source past 90 degrees.",
    'find_method_b': "One way found! Now keep the light source at 90 degrees or less "
                     "and open the mirrors until only mirror M1 is hit.",
    'need_two_reflections': "The light must bounce exactly twice. Right now it bounces {count} time(s).",
    'not_sent_back': "Two bounces, but the light does not come back. Try another mirror angle.",
    'need_right_angle': "So close! The mirrors must be at exactly {right_angle:g} degrees.",
    'keep_right_angle': "Keep the mirrors at {right_angle:g} degrees while you move the light.",
    'move_further': "Move the light source further, more than {threshold:g} degrees from where you started.",
    'open_to_target': "Set the angle between the mirrors to {target:g} degrees.",
    'baseline_set': "Good. Now move the light source by more than {threshold:g} degrees.",
    'quiz_pending': "Answer the wizard's question first.",
    'wrong_answer': "Not quite. Look at the deviation readout again and think once more.",
    'show_virtual_sources': "Turn on the virtual sources overlay.",
}

TOASTS = {
    'tutorial_done': "Tutorial complete!",
    'method_a': "Method A discovered! +{points}",
    'method_b': "Method B discovered! +{points}",
    'challenge_complete': "Challenge complete! +{points} points, +{jewels} jewel(s)",
    'quiz_correct': "Correct! +{points} points, +{jewels} jewel(s)",
    'game_complete': "All challenges complete! +{points} points, +{jewels} jewels",
}


def _format_values(config: ChallengeConfig) -> Dict[str, Any]:
    return {
        'right_angle': config.right_angle,
        'target': config.generalization_target,
        'threshold': config.constancy_threshold,
    }


def hint(key: str, config: ChallengeConfig = DEFAULT_CONFIG, **values: Any) -> str:
    """Hint text for key, filled from the config and the extra values."""
    return HINTS[key].format(**_format_values(config), **values)


def toast(key: str, **values: Any) -> str:
    return TOASTS[key].format(**values)


def wizard_text_for(state: ChallengeState, config: ChallengeConfig = DEFAULT_CONFIG) -> str:
    """
    What the wizard says for a state.

    Args:
        state: Current challenge state
        config: Rule set used to fill the placeholders

    Returns:
        The wizard text
    """
    if state.challenge == Challenge.TUTORIAL:
        step = min(state.tutorial_step, len(TUTORIAL_STEPS) - 1)
        return TUTORIAL_STEPS[step]
    return WIZARD_TEXT[state.challenge].format(**_format_values(config))
