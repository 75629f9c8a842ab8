"""
sequencer.py — Hand out hints and solution steps one at a time.

How many have been revealed so far is the caller's counter; these helpers
only do bounds-checked reads into the technique table.
"""

from .config import DEFAULT_SETTINGS
from .techniques import TECHNIQUES, technique_info


def next_hint(technique, revealed_count, table=TECHNIQUES):
    """The hint after ``revealed_count`` revealed ones, or None when exhausted."""
    hints = technique_info(technique, table).hints
    if 0 <= revealed_count < len(hints):
        return hints[revealed_count]
    return None


def render_steps(technique, function='', answer='', table=TECHNIQUES):
    """All step descriptions with the function and answer filled in."""
    templates = technique_info(technique, table).step_templates
    return tuple(t.format(function=function, answer=answer) for t in templates)


def next_step(technique, shown_count, function='', answer='', table=TECHNIQUES):
    steps = render_steps(technique, function, answer, table)
    if 0 <= shown_count < len(steps):
        return steps[shown_count]
    return None


def hint_label(revealed, total):
    if revealed >= total:
        return 'All Hints Shown'
    return f'Get Hint ({revealed}/{total})'


def hint_progress(current, settings=DEFAULT_SETTINGS):
    """Progress-bar percentage after revealing a hint."""
    weights = settings.progress
    return min(current, weights.hint_cap) + weights.hint_revealed


def step_progress(shown, total, settings=DEFAULT_SETTINGS):
    """Progress-bar percentage while stepping through a solution."""
    if total <= 0:
        return 0
    weights = settings.progress
    span = weights.steps_end - weights.steps_start
    return min(weights.steps_start + (shown / total) * span, weights.steps_end)

