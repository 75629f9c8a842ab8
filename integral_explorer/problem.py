"""
problem.py — One analysed integration problem.

``analyze()`` runs the whole front half of a session in one go: input check,
classification, answer lookup, hints and rendered steps.  Unlike the pure
helpers it wraps, it rejects unusable input with ValueError so callers can
show the reason.
"""

from dataclasses import dataclass

from .classifier import classify
from .config import DEFAULT_SETTINGS
from .mathfmt import check_input
from .sequencer import render_steps
from .techniques import (
    TECHNIQUES,
    UNKNOWN_ANSWER,
    Difficulty,
    Technique,
    lookup_answer,
    technique_info,
)


@dataclass(frozen=True)
class IntegrationProblem:
    function: str
    technique: Technique
    technique_name: str
    difficulty: Difficulty
    description: str
    correct_answer: str
    hints: tuple
    steps: tuple

    @property
    def has_known_answer(self):
        return self.correct_answer != UNKNOWN_ANSWER

    def to_dict(self):
        return {
            'function': self.function,
            'technique': self.technique.value,
            'technique_name': self.technique_name,
            'difficulty': self.difficulty.value,
            'description': self.description,
            'correct_answer': self.correct_answer,
            'has_known_answer': self.has_known_answer,
            'hints': list(self.hints),
            'steps': list(self.steps),
        }


def technique_name(technique, table=TECHNIQUES):
    try:
        return technique_info(technique, table).name
    except ValueError:
        return 'Unknown'


def analyze(function, settings=DEFAULT_SETTINGS, table=TECHNIQUES):
    """Build an IntegrationProblem for ``function``; ValueError if it is unusable."""
    if function is None or not str(function).strip():
        raise ValueError(settings.messages.no_function)
    function = str(function).strip()
    check = check_input(function)
    if not check.is_valid:
        raise ValueError(check.message)

    result = classify(function, settings)
    info = technique_info(result.technique, table)
    answer = lookup_answer(function, result.technique, table)
    return IntegrationProblem(
        function=function,
        technique=result.technique,
        technique_name=info.name,
        difficulty=result.difficulty,
        description=result.description,
        correct_answer=answer,
        hints=info.hints,
        steps=render_steps(result.technique, function, answer, table),
    )
