"""
validator.py — Compare a typed antiderivative with the known answer.

Not a CAS.  Both answers are normalized textually, then checked in order:

  1. empty input            → 'empty'       (no attempt consumed)
  2. identical strings      → 'exact'
  3. known rewrite matches  → 'equivalent'
  4. near miss heuristics   → 'partial'     (missing +C, sign, coefficient)
  5. otherwise              → 'incorrect'

The validator keeps no state.  The attempt counter belongs to the caller and
is passed in with every call.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from .config import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


class VerdictKind(str, Enum):
    EMPTY = 'empty'
    EXACT = 'exact'
    EQUIVALENT = 'equivalent'
    PARTIAL = 'partial'
    INCORRECT = 'incorrect'


class FeedbackLevel(str, Enum):
    SUCCESS = 'success'
    WARNING = 'warning'
    ERROR = 'error'
    INFO = 'info'


@dataclass(frozen=True)
class ValidationVerdict:
    is_valid: bool
    is_correct: bool
    kind: VerdictKind
    message: str
    feedback_level: FeedbackLevel
    attempts: int
    max_attempts: int
    has_more_attempts: bool

    @property
    def consumes_attempt(self):
        """Empty submissions do not count against the attempt limit."""
        return self.kind is not VerdictKind.EMPTY

    def to_dict(self):
        return {
            'is_valid': self.is_valid,
            'is_correct': self.is_correct,
            'kind': self.kind.value,
            'message': self.message,
            'feedback_level': self.feedback_level.value,
            'attempts': self.attempts,
            'max_attempts': self.max_attempts,
            'has_more_attempts': self.has_more_attempts,
            'consumes_attempt': self.consumes_attempt,
        }


# ── Normalization ───────────────────────────────────────────

_TRAILING_CONSTANT = re.compile(r'(?:\+(?:c|constant))+$')


def _as_text(value):
    if value is None:
        return ''
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    return str(value)


def normalize_answer(answer):
    """
    Lowercase, drop whitespace, a trailing +C / +constant, every '*' and
    every literal '^1' (so 'x^12' becomes 'x2').

    Stripping one piece can expose another ("x+c^1" → "x+c"), so the
    stripping steps run until nothing changes.  That makes the result
    idempotent.
    """
    s = re.sub(r'\s+', '', _as_text(answer).lower())
    while True:
        stripped = _TRAILING_CONSTANT.sub('', s)
        stripped = stripped.replace('*', '')
        stripped = stripped.replace('^1', '')
        if stripped == s:
            return s
        s = stripped


# ── Equivalent Forms ────────────────────────────────────────

# Surface spellings of the same answer, applied to the user's normalized
# string.  Add new rules here; each is a (pattern, replacement) pair.
EQUIVALENCE_REWRITES = (
    (re.compile(r'0\.5x\^2'), 'x^2/2'),
    (re.compile(r'\(1/2\)x\^2'), 'x^2/2'),
    (re.compile(r'(?<![\d.)])1/2x\^2'), 'x^2/2'),
    (re.compile(r'\(1/(\d+)\)x\^(\d+)'), r'x^\2/\1'),
    (re.compile(r'ln\(\|([^|()]+)\|\)'), r'ln|\1|'),
)


def _rewrites(user):
    combined = user
    for pattern, replacement in EQUIVALENCE_REWRITES:
        yield pattern.sub(replacement, user, count=1)
        combined = pattern.sub(replacement, combined)
    yield combined


def is_equivalent(user, correct):
    """True when a known rewrite of ``user`` equals ``correct`` (both normalized)."""
    return any(candidate == correct for candidate in _rewrites(user))


# ── Partial Credit ──────────────────────────────────────────

_MISSING_CONSTANT = "Almost! Don't forget the constant of integration (+C)."
_SIGN_ERROR = 'Close! Check your signs - there might be a sign error.'
_COEFFICIENT_ERROR = 'The form is right, but check your coefficient.'


def check_partial_credit(user, correct):
    """Return the near-miss message for two normalized answers, or None."""
    if user + 'c' == correct or user == correct + 'c':
        return _MISSING_CONSTANT
    if user == re.sub(r'^-', '', correct, count=1) or user == '-' + correct:
        return _SIGN_ERROR
    if re.sub(r'\d+', '1', user, count=1) == re.sub(r'\d+', '1', correct, count=1):
        return _COEFFICIENT_ERROR
    return None


# ── Validation ──────────────────────────────────────────────

def _verdict(kind, is_correct, message, level, attempt_number, settings, is_valid=True):
    return ValidationVerdict(
        is_valid=is_valid,
        is_correct=is_correct,
        kind=kind,
        message=message,
        feedback_level=level,
        attempts=attempt_number,
        max_attempts=settings.max_attempts,
        has_more_attempts=attempt_number < settings.max_attempts,
    )


def validate(user_answer, correct_answer, attempt_number=1, settings=DEFAULT_SETTINGS):
    """
    Check ``user_answer`` against ``correct_answer``.

    Never raises.  ``attempt_number`` is echoed back in the verdict together
    with ``max_attempts`` and whether another attempt is allowed.
    """
    raw = _as_text(user_answer)
    if not raw.strip():
        return _verdict(VerdictKind.EMPTY, False, settings.messages.no_answer,
                        FeedbackLevel.ERROR, attempt_number, settings, is_valid=False)

    user = normalize_answer(raw)
    correct = normalize_answer(correct_answer)

    if user == correct:
        kind, is_correct, message, level = (
            VerdictKind.EXACT, True, 'Perfect! Your answer is exactly correct.',
            FeedbackLevel.SUCCESS)
    elif settings.enable_equivalent_forms and is_equivalent(user, correct):
        kind, is_correct, message, level = (
            VerdictKind.EQUIVALENT, True, 'Correct! Your answer is mathematically equivalent.',
            FeedbackLevel.SUCCESS)
    else:
        partial = check_partial_credit(user, correct) if settings.enable_partial_credit else None
        if partial:
            kind, is_correct, message, level = (
                VerdictKind.PARTIAL, False, partial, FeedbackLevel.WARNING)
        else:
            kind, is_correct, message, level = (
                VerdictKind.INCORRECT, False, 'Not quite right. Check your work and try again!',
                FeedbackLevel.ERROR)

    logger.debug('Answer %r vs %r → %s (attempt %s)', user, correct, kind.value, attempt_number)
    return _verdict(kind, is_correct, message, level, attempt_number, settings)


# ── Progress ────────────────────────────────────────────────

def progress_message(attempts, is_correct, settings=DEFAULT_SETTINGS):
    if is_correct:
        return settings.messages.correct
    if attempts >= settings.max_attempts:
        return settings.messages.max_attempts
    return f'Attempt {attempts}/{settings.max_attempts} - Try again!'


def calculate_progress(is_correct, current_progress=0, settings=DEFAULT_SETTINGS):
    """New progress-bar percentage after a graded attempt."""
    weights = settings.progress
    if is_correct:
        return weights.correct_answer
    return min(current_progress + weights.incorrect_attempt, weights.incorrect_cap)
