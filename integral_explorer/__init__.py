"""
integral_explorer — technique classification and answer checking for an
integration practice page.

Public API:
  • classify(function)                      → ClassificationResult
  • lookup_answer(function, technique)      → known answer or UNKNOWN_ANSWER
  • validate(answer, correct, attempt)      → ValidationVerdict
  • next_hint / next_step                   → bounds-checked hint/step reads
  • analyze(function)                       → IntegrationProblem

JSON entry points for the page live in ``integral_explorer.tutor``.
"""

__version__ = '2.0.0'

from .classifier import ClassificationResult, classify
from .config import DEFAULT_SETTINGS, Settings
from .problem import IntegrationProblem, analyze, technique_name
from .sequencer import hint_progress, next_hint, next_step, step_progress
from .techniques import (
    TECHNIQUES,
    UNKNOWN_ANSWER,
    Difficulty,
    Technique,
    TechniqueInfo,
    lookup_answer,
)
from .validator import (
    FeedbackLevel,
    ValidationVerdict,
    VerdictKind,
    normalize_answer,
    validate,
)

__all__ = [
    '__version__',
    'ClassificationResult', 'classify',
    'DEFAULT_SETTINGS', 'Settings',
    'IntegrationProblem', 'analyze', 'technique_name',
    'hint_progress', 'next_hint', 'next_step', 'step_progress',
    'TECHNIQUES', 'UNKNOWN_ANSWER', 'Difficulty', 'Technique', 'TechniqueInfo',
    'lookup_answer',
    'FeedbackLevel', 'ValidationVerdict', 'VerdictKind', 'normalize_answer', 'validate',
]
