"""
test_validator.py — Answer normalization, grading and partial credit.
Run:  pytest test_validator.py
"""
import dataclasses

import pytest

from integral_explorer.config import DEFAULT_SETTINGS
from integral_explorer.techniques import TECHNIQUES
from integral_explorer.validator import (
    FeedbackLevel,
    VerdictKind,
    calculate_progress,
    check_partial_credit,
    is_equivalent,
    normalize_answer,
    progress_message,
    validate,
)

# ── Normalization ─────────────────────────────────────────

@pytest.mark.parametrize('raw, expected', [
    ('x^2/2 + C', 'x^2/2'),
    ('X^2 / 2 + Constant', 'x^2/2'),
    ('3*x^2', '3x^2'),
    ('x^1', 'x'),
    ('2 * x^1 + c', '2x'),
    ('x^12', 'x2'),
    ('x^1*2', 'x2'),
    ('-cos(x)', '-cos(x)'),
    ('x+c+c', 'x'),
    ('', ''),
])
def test_normalize_answer(raw, expected):
    assert normalize_answer(raw) == expected


@pytest.mark.parametrize('raw', [
    'x+c+c', 'x^^11', 'x+c^1', 'X * 2 + Constant', 'x^1^1', '**+c', 'x^1*2',
    '  ', 'ln|x| + C', '\x00\xff', 'x+constant+c',
])
def test_normalize_is_idempotent(raw):
    once = normalize_answer(raw)
    assert normalize_answer(once) == once


# ── Empty Input ───────────────────────────────────────────

@pytest.mark.parametrize('answer', ['', '   ', '\t\n', None])
def test_empty_answer_does_not_consume_an_attempt(answer):
    verdict = validate(answer, 'x^2/2', 1)
    assert verdict.kind is VerdictKind.EMPTY
    assert not verdict.is_valid
    assert not verdict.is_correct
    assert verdict.feedback_level is FeedbackLevel.ERROR
    assert verdict.message == 'Please enter your answer first!'
    assert not verdict.consumes_attempt


# ── Grading Table ─────────────────────────────────────────

CASES = [
    # description, user, correct, kind, is_correct, level
    ('constant stripped from user', 'x^2/2+C', 'x^2/2', VerdictKind.EXACT, True, FeedbackLevel.SUCCESS),
    ('constant stripped from answer', 'x^2/2', 'x^2/2+c', VerdictKind.EXACT, True, FeedbackLevel.SUCCESS),
    ('spacing and case', ' -COS(x) + c ', '-cos(x)', VerdictKind.EXACT, True, FeedbackLevel.SUCCESS),
    ('explicit multiplication', '2*e^x', '2e^x', VerdictKind.EXACT, True, FeedbackLevel.SUCCESS),
    ('unit exponent', 'x^1', 'x', VerdictKind.EXACT, True, FeedbackLevel.SUCCESS),
    ('literal unit exponent', 'x^12', 'x2', VerdictKind.EXACT, True, FeedbackLevel.SUCCESS),
    ('decimal half', '0.5x^2', 'x^2/2', VerdictKind.EQUIVALENT, True, FeedbackLevel.SUCCESS),
    ('decimal half with star', '0.5 * x^2 + C', 'x^2/2', VerdictKind.EQUIVALENT, True, FeedbackLevel.SUCCESS),
    ('bracketed half', '(1/2)x^2', 'x^2/2', VerdictKind.EQUIVALENT, True, FeedbackLevel.SUCCESS),
    ('leading half', '1/2*x^2', 'x^2/2', VerdictKind.EQUIVALENT, True, FeedbackLevel.SUCCESS),
    ('bracketed third', '(1/3)x^3', 'x^3/3', VerdictKind.EQUIVALENT, True, FeedbackLevel.SUCCESS),
    ('bracketed absolute value', 'ln(|x|)', 'ln|x|', VerdictKind.EQUIVALENT, True, FeedbackLevel.SUCCESS),
    ('missing constant marker', 'x^2/2c', 'x^2/2', VerdictKind.PARTIAL, False, FeedbackLevel.WARNING),
    ('extra minus', '-cos(x)', 'cos(x)', VerdictKind.PARTIAL, False, FeedbackLevel.WARNING),
    ('dropped minus', 'cos(x)', '-cos(x)', VerdictKind.PARTIAL, False, FeedbackLevel.WARNING),
    ('wrong coefficient', '3x^2', '2x^2', VerdictKind.PARTIAL, False, FeedbackLevel.WARNING),
    ('wrong denominator', 'x^3/4', 'x^3/3', VerdictKind.INCORRECT, False, FeedbackLevel.ERROR),
    ('unrelated', 'tan(x)', '-cos(x)', VerdictKind.INCORRECT, False, FeedbackLevel.ERROR),
    ('binary garbage', '\x00\xff�', 'x', VerdictKind.INCORRECT, False, FeedbackLevel.ERROR),
]


@pytest.mark.parametrize('description, user, correct, kind, is_correct, level', CASES,
                         ids=[c[0] for c in CASES])
def test_validate(description, user, correct, kind, is_correct, level):
    verdict = validate(user, correct, 1)
    assert verdict.kind is kind
    assert verdict.is_correct is is_correct
    assert verdict.feedback_level is level
    assert verdict.is_valid
    assert verdict.consumes_attempt
    assert verdict.message


def test_partial_credit_messages_name_the_mistake():
    assert '+C' in validate('x^2/2c', 'x^2/2', 1).message
    assert 'sign' in validate('-cos(x)', 'cos(x)', 1).message
    assert 'coefficient' in validate('3x^2', '2x^2', 1).message


def test_bytes_answer_is_handled():
    assert validate(b'\xff\xfe', 'x', 1).kind is VerdictKind.INCORRECT


def test_sentinel_answer_is_never_matched():
    verdict = validate('x^6/6', 'Answer depends on technique used', 1)
    assert verdict.kind is VerdictKind.INCORRECT


# ── Helpers ───────────────────────────────────────────────

def test_is_equivalent_only_rewrites_user_side():
    assert is_equivalent('0.5x^2', 'x^2/2')
    assert not is_equivalent('x^2/2', '0.5x^2')
    assert not is_equivalent('0.5x^3', 'x^2/2')


def test_check_partial_credit_returns_none_without_a_near_miss():
    assert check_partial_credit('sin(x)', 'x^2') is None


# ── Attempts ──────────────────────────────────────────────

@pytest.mark.parametrize('attempt, has_more', [(1, True), (2, True), (3, False), (4, False)])
def test_attempts_are_echoed(attempt, has_more):
    verdict = validate('x^2/2', 'x^2/2', attempt)
    assert verdict.attempts == attempt
    assert verdict.max_attempts == 3
    assert verdict.has_more_attempts is has_more


def test_custom_attempt_limit():
    settings = dataclasses.replace(DEFAULT_SETTINGS, max_attempts=5)
    verdict = validate('x', 'y', 4, settings)
    assert verdict.max_attempts == 5
    assert verdict.has_more_attempts


def test_attempt_limit_must_be_positive():
    with pytest.raises(ValueError):
        dataclasses.replace(DEFAULT_SETTINGS, max_attempts=0)


# ── Feature Flags ─────────────────────────────────────────

def test_equivalent_forms_can_be_switched_off():
    settings = dataclasses.replace(DEFAULT_SETTINGS, enable_equivalent_forms=False)
    assert validate('0.5x^2', 'x^2/2', 1, settings).kind is VerdictKind.INCORRECT


def test_partial_credit_can_be_switched_off():
    settings = dataclasses.replace(DEFAULT_SETTINGS, enable_partial_credit=False)
    assert validate('-cos(x)', 'cos(x)', 1, settings).kind is VerdictKind.INCORRECT


# ── Round Trip Over The Answer Tables ─────────────────────

TABLE_ANSWERS = [
    (info.technique.value, answer)
    for info in TECHNIQUES.values()
    for answer in info.answers.values()
]


@pytest.mark.parametrize('technique, answer', TABLE_ANSWERS)
def test_every_known_answer_matches_itself(technique, answer):
    assert validate(answer, answer, 1).kind is VerdictKind.EXACT
    assert validate(answer + ' + C', answer, 1).kind is VerdictKind.EXACT


# ── Progress ──────────────────────────────────────────────

def test_progress_message():
    assert progress_message(1, True) == 'Congratulations! Correct answer!'
    assert progress_message(1, False) == 'Attempt 1/3 - Try again!'
    assert progress_message(3, False) == 'Maximum attempts reached'


@pytest.mark.parametrize('is_correct, current, expected', [
    (True, 40, 100),
    (False, 60, 75),
    (False, 85, 90),
    (False, 0, 15),
])
def test_calculate_progress(is_correct, current, expected):
    assert calculate_progress(is_correct, current) == expected


def test_verdict_to_dict():
    data = validate('-cos(x)', 'cos(x)', 2).to_dict()
    assert data['kind'] == 'partial'
    assert data['feedback_level'] == 'warning'
    assert data['attempts'] == 2
    assert data['has_more_attempts'] is True
    assert data['consumes_attempt'] is True
