"""
classifier.py — Guess an integration technique from the shape of the input.

Plain pattern matching, no calculus: the lowercased, whitespace-free input
is tested against an ordered list of patterns and the first hit wins.

    1. polynomial in x        → power          (Easy)
    2. sin( / cos( / tan(     → trig           (Medium)
    3. e^ or ln, with a *     → parts          (Hard)
       e^ or ln, without      → substitution   (Medium)
    4. contains /             → partial        (Hard, optional)
    5. anything else          → substitution   (Medium)

Every string is accepted; unmatched input falls through to step 5.
"""

import logging
import re
from dataclasses import dataclass

from .config import DEFAULT_SETTINGS
from .techniques import Difficulty, Technique, normalize_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    technique: Technique
    description: str
    difficulty: Difficulty

    def to_dict(self):
        return {
            'technique': self.technique.value,
            'description': self.description,
            'difficulty': self.difficulty.value,
        }


# ── Patterns ────────────────────────────────────────────────

# Sum of monomials in x:  [+-] [digits] [x] [^digits]  ( [+-] … )*
_POLYNOMIAL = re.compile(r'^[+-]?\d*x?\^?\d*([+-]\d*x?\^?\d*)*$')
_TRIG = re.compile(r'(?:sin|cos|tan)\(')


def _is_polynomial(f):
    # The polynomial pattern also matches "" and a bare sign
    return bool(_POLYNOMIAL.match(f)) and bool(re.search(r'[\dx]', f))


def _is_trig(f):
    return bool(_TRIG.search(f))


def _is_exp_log(f):
    return 'e^' in f or 'ln' in f


def _is_rational(f):
    return '/' in f


_POWER = ClassificationResult(
    Technique.POWER,
    'This is a polynomial function. Use the power rule.',
    Difficulty.EASY)
_TRIG_RESULT = ClassificationResult(
    Technique.TRIG,
    'This contains trigonometric functions.',
    Difficulty.MEDIUM)
_PARTS = ClassificationResult(
    Technique.PARTS,
    'This looks like it needs integration by parts.',
    Difficulty.HARD)
_SUBSTITUTION = ClassificationResult(
    Technique.SUBSTITUTION,
    'This might benefit from u-substitution.',
    Difficulty.MEDIUM)
_PARTIAL = ClassificationResult(
    Technique.PARTIAL,
    'This rational function may need partial fractions.',
    Difficulty.HARD)
_FALLBACK = ClassificationResult(
    Technique.SUBSTITUTION,
    'Try u-substitution or analyze the function structure.',
    Difficulty.MEDIUM)


def _exp_log_result(f):
    # A '*' is read as a product of two function factors
    return _PARTS if '*' in f else _SUBSTITUTION


# Ordered: earlier entries take priority
_TECHNIQUE_PATTERNS = (
    ('polynomial', _is_polynomial, lambda f: _POWER),
    ('trig', _is_trig, lambda f: _TRIG_RESULT),
    ('exp_log', _is_exp_log, _exp_log_result),
    ('rational', _is_rational, lambda f: _PARTIAL),
)


# ── Classification ──────────────────────────────────────────

def classify(text, settings=DEFAULT_SETTINGS):
    """
    Classify a function string.  Pure and total: never raises, and the same
    input always gives the same ClassificationResult.
    """
    f = normalize_input(text)
    for name, matches, build in _TECHNIQUE_PATTERNS:
        if name == 'rational' and not settings.detect_partial_fractions:
            continue
        if matches(f):
            result = build(f)
            logger.debug('Classified %r as %s via %s pattern', f, result.technique.value, name)
            return result
    logger.debug('No pattern matched %r; falling back to substitution', f)
    return _FALLBACK
