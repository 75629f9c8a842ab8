"""
tutor.py — JSON entry points for the tutoring page.

The page (or Pyodide, when the engine runs in the browser) calls these and
gets back a JSON string:
    { "ok": true,  ... payload ... }
    { "ok": false, "error": "..." }

Session state (attempt number, hints revealed, steps shown, progress) is
owned by the page and passed in on every call.
"""

import functools
import json
import logging

from . import __version__
from .classifier import classify
from .config import DEFAULT_SETTINGS
from .mathfmt import (
    EXAMPLES,
    check_input,
    format_answer_with_constant,
    format_as_integral,
    to_latex,
)
from .problem import analyze
from .sequencer import hint_label, hint_progress, next_hint, next_step, step_progress
from .techniques import TECHNIQUES, lookup_answer, technique_info
from .validator import calculate_progress, progress_message, validate

logger = logging.getLogger(__name__)


def _ok(**payload):
    return json.dumps({'ok': True, **payload})


def _guarded(fn):
    """Run fn, turning any exception into an ok=false JSON result."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            logger.warning('%s failed: %s', fn.__name__, exc)
            return json.dumps({'ok': False, 'error': str(exc)})
    return wrapper


def _count(value, name):
    # bool is an int subclass; reject it along with floats and strings
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f'{name} must be a non-negative integer, got {value!r}')
    return value


def tutor_engine_info():
    """Return JSON info about the engine."""
    import sympy
    return _ok(
        version=__version__,
        sympy_version=sympy.__version__,
        techniques={t.value: info.name for t, info in TECHNIQUES.items()},
        max_attempts=DEFAULT_SETTINGS.max_attempts,
    )


@_guarded
def tutor_analyze(function, settings=DEFAULT_SETTINGS):
    """Classify a function and return hints, steps and the known answer."""
    problem = analyze(function, settings)
    return _ok(
        progress=settings.progress.analysis,
        latex=format_as_integral(problem.function),
        **problem.to_dict(),
    )


@_guarded
def tutor_validate(answer, correct_answer, attempt=1, settings=DEFAULT_SETTINGS):
    """Grade ``answer`` against an explicit ``correct_answer``."""
    verdict = validate(answer, correct_answer, _count(attempt, 'attempt'), settings)
    return _ok(
        progress_message=progress_message(verdict.attempts, verdict.is_correct, settings),
        **verdict.to_dict(),
    )


@_guarded
def tutor_submit(function, answer, attempt=1, progress=0, settings=DEFAULT_SETTINGS):
    """
    Grade an answer for ``function``: classify, look up the known answer,
    validate.  The solution is only included once no attempts are left.
    """
    attempt = _count(attempt, 'attempt')
    if not function or not str(function).strip():
        raise ValueError(settings.messages.no_function)
    check = check_input(str(function))
    if not check.is_valid:
        raise ValueError(check.message)
    result = classify(function, settings)
    correct = lookup_answer(function, result.technique)
    verdict = validate(answer, correct, attempt, settings)

    payload = verdict.to_dict()
    payload['technique'] = result.technique.value
    payload['answer_latex'] = format_answer_with_constant(answer or '')
    if verdict.consumes_attempt:
        payload['progress'] = calculate_progress(verdict.is_correct, progress, settings)
        payload['progress_message'] = progress_message(attempt, verdict.is_correct, settings)
    else:
        payload['progress'] = progress
        payload['progress_message'] = verdict.message
    if not verdict.is_correct and verdict.consumes_attempt and not verdict.has_more_attempts:
        payload['solution'] = f'{correct} + C'
        payload['solution_latex'] = format_answer_with_constant(correct)
    return _ok(**payload)


@_guarded
def tutor_hint(technique, revealed=0, progress=0, settings=DEFAULT_SETTINGS):
    """Next hint after ``revealed`` hints have been shown."""
    revealed = _count(revealed, 'revealed')
    progress = _count(progress, 'progress')
    total = len(technique_info(technique).hints)
    hint = next_hint(technique, revealed)
    if hint is None:
        return _ok(hint=None, message=settings.messages.no_more_hints,
                   revealed=revealed, total=total, label=hint_label(revealed, total),
                   progress=progress)
    revealed += 1
    return _ok(hint=hint, revealed=revealed, total=total,
               label=hint_label(revealed, total),
               progress=hint_progress(progress, settings))


@_guarded
def tutor_step(function, shown=0, settings=DEFAULT_SETTINGS):
    """Next worked step for ``function`` after ``shown`` steps."""
    shown = _count(shown, 'shown')
    problem = analyze(function, settings)
    total = len(problem.steps)
    step = next_step(problem.technique, shown, problem.function, problem.correct_answer)
    if step is None:
        return _ok(step=None, message=settings.messages.all_steps_shown,
                   shown=shown, total=total, progress=step_progress(shown, total, settings))
    shown += 1
    return _ok(step=step, shown=shown, total=total, progress=step_progress(shown, total, settings))


@_guarded
def tutor_latex(text):
    """LaTeX rendering of a typed expression for the live preview."""
    return _ok(latex=to_latex(text))


def tutor_examples():
    return _ok(examples=list(EXAMPLES))
