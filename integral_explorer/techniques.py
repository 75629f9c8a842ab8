"""
techniques.py — Static table of integration techniques.

One immutable record per technique:
  • display name, difficulty and description
  • ordered hint strings
  • ordered step templates ({function} / {answer} are filled in later)
  • exact-match table: normalized input → known antiderivative (no + C)

The table is built once at import and handed around by reference; nothing
in the package mutates it.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

logger = logging.getLogger(__name__)


class Technique(str, Enum):
    POWER = 'power'
    SUBSTITUTION = 'substitution'
    PARTS = 'parts'
    TRIG = 'trig'
    PARTIAL = 'partial'


class Difficulty(str, Enum):
    EASY = 'Easy'
    MEDIUM = 'Medium'
    HARD = 'Hard'


# Returned when no closed-form answer is known for the exact input
UNKNOWN_ANSWER = 'Answer depends on technique used'


@dataclass(frozen=True)
class TechniqueInfo:
    technique: Technique
    name: str
    difficulty: Difficulty
    description: str
    hints: tuple
    step_templates: tuple
    answers: MappingProxyType


def normalize_input(text):
    """Lowercase and drop all whitespace; shared by lookup and classification."""
    if text is None:
        return ''
    return re.sub(r'\s+', '', str(text).lower())


# ── Technique Table ─────────────────────────────────────────

def _info(technique, name, difficulty, description, hints, steps, answers=None):
    return TechniqueInfo(
        technique=technique,
        name=name,
        difficulty=difficulty,
        description=description,
        hints=tuple(hints),
        step_templates=tuple(steps),
        answers=MappingProxyType(dict(answers or {})),
    )


TECHNIQUES = MappingProxyType({
    Technique.POWER: _info(
        Technique.POWER, 'Power Rule', Difficulty.EASY,
        'For polynomial functions and basic powers of x',
        hints=[
            'Look at each term in your polynomial. What power of x does each term have?',
            'Remember: ∫x^n dx = x^(n+1)/(n+1) + C, where n ≠ -1',
            "Don't forget to add the constant of integration (+C) at the end!",
        ],
        steps=[
            'Identify that this is a polynomial function: {function}',
            'Apply the power rule: ∫x^n dx = x^(n+1)/(n+1) + C',
            'Calculate the result: {answer} + C',
        ],
        answers={
            'x': 'x^2/2',
            'x^2': 'x^3/3',
            'x^3': 'x^4/4',
            '1': 'x',
            '2x': 'x^2',
            '3x^2': 'x^3',
        },
    ),
    Technique.TRIG: _info(
        Technique.TRIG, 'Trigonometric Integration', Difficulty.MEDIUM,
        'For trigonometric functions and identities',
        hints=[
            'What are the derivatives of basic trigonometric functions?',
            'Remember: d/dx[sin(x)] = cos(x) and d/dx[cos(x)] = -sin(x)',
            'Integration is the reverse of differentiation!',
        ],
        steps=[
            'Identify the trigonometric function: {function}',
            'Recall the antiderivatives of basic trig functions',
            'Apply the integration: {answer} + C',
        ],
        answers={
            'sin(x)': '-cos(x)',
            'cos(x)': 'sin(x)',
            'tan(x)': '-ln|cos(x)|',
        },
    ),
    Technique.SUBSTITUTION: _info(
        Technique.SUBSTITUTION, 'U-Substitution', Difficulty.MEDIUM,
        'For composite functions with recognizable derivatives',
        hints=[
            'Look for a function and its derivative in the integrand.',
            'Try setting u equal to the inner function.',
            "Don't forget to substitute back after integrating!",
        ],
        steps=[
            'Analyze the function: {function}',
            'Choose an appropriate substitution u = ...',
            'Calculate du and substitute',
            'Integrate with respect to u',
            'Substitute back to get the final answer',
        ],
        answers={
            'e^x': 'e^x',
            '2e^x': '2e^x',
        },
    ),
    Technique.PARTS: _info(
        Technique.PARTS, 'Integration by Parts', Difficulty.HARD,
        'For products of different function types',
        hints=[
            'Use the LIATE rule to choose u: Logarithmic, Inverse trig, Algebraic, '
            'Trigonometric, Exponential',
            'Remember: ∫u dv = uv - ∫v du',
            'Choose u to be the function that becomes simpler when differentiated.',
        ],
        steps=[
            'Identify the product: {function}',
            'Choose u and dv using LIATE rule',
            'Calculate du and v',
            'Apply integration by parts formula',
            'Simplify to get the final answer',
        ],
    ),
    Technique.PARTIAL: _info(
        Technique.PARTIAL, 'Partial Fractions', Difficulty.HARD,
        'For rational functions',
        hints=[
            'Factor the denominator completely.',
            'Set up partial fractions based on the factors.',
            'Solve for the unknown coefficients using algebraic methods.',
        ],
        steps=[
            'Factor the denominator of: {function}',
            'Set up partial fraction decomposition',
            'Solve for unknown coefficients',
            'Integrate each partial fraction',
            'Combine results',
        ],
        answers={
            '1/x': 'ln|x|',
        },
    ),
})


def technique_info(technique, table=TECHNIQUES):
    """
    Return the TechniqueInfo for a tag.

    Accepts a Technique or its string value (as it arrives over JSON).
    Raises ValueError for anything else.
    """
    try:
        return table[Technique(technique)]
    except (ValueError, TypeError, KeyError):
        raise ValueError(f'Unknown technique: {technique!r}') from None


def lookup_answer(text, technique, table=TECHNIQUES):
    """Known antiderivative for ``text`` under ``technique``, or UNKNOWN_ANSWER."""
    key = normalize_input(text)
    try:
        answers = technique_info(technique, table).answers
    except ValueError:
        logger.debug('No answer table for technique %r', technique)
        return UNKNOWN_ANSWER
    answer = answers.get(key)
    if answer is None:
        logger.debug('No known answer for %r under %s', key, technique)
        return UNKNOWN_ANSWER
    return answer
