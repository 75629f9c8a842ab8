"""
mathfmt.py — Display helpers for typed math.

Turns the plain strings users type ("x^2", "2e^x", "-ln|cos(x)|") into LaTeX
for the page's typesetter.  SymPy parses the input when it can; anything it
rejects goes through a small set of regex rewrites instead, so every input
gets some LaTeX back.

Nothing in here decides whether an answer is right.
"""

import logging
import re
from dataclasses import dataclass, field

from sympy import E, Symbol, latex
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

logger = logging.getLogger(__name__)

_TRANSFORMATIONS = standard_transformations + (implicit_multiplication, convert_xor)

# 'e' is Euler's number in everything users type here
_LOCALS = {'x': Symbol('x'), 'e': E}


@dataclass(frozen=True)
class InputCheck:
    is_valid: bool
    message: str
    suggestions: tuple = field(default_factory=tuple)


# ── Input Check ─────────────────────────────────────────────

_VALID_CHARS = re.compile(r'^[a-zA-Z0-9+\-*/^().\s,|]+$')


def check_input(text):
    """Cheap sanity check on a function before it is analysed."""
    if not text or not text.strip():
        return InputCheck(False, 'Input cannot be empty',
                          ('Try entering a simple function like x^2 or sin(x)',))
    if text.count('(') != text.count(')'):
        return InputCheck(False, 'Unbalanced parentheses',
                          ('Make sure every opening parenthesis has a closing one',))
    if not _VALID_CHARS.match(text):
        return InputCheck(False, 'Invalid characters detected',
                          ('Use only letters, numbers, and basic mathematical operators',))
    return InputCheck(True, 'Valid input')


# ── LaTeX Conversion ────────────────────────────────────────

_ABS_BARS = re.compile(r'\|([^|]+)\|')
_FUNC_NAMES = re.compile(r'(?<![\\a-zA-Z])(sin|cos|tan|sec|csc|cot|ln|log|sqrt|pi)(?![a-zA-Z])')


def _sympy_latex(text):
    """LaTeX via SymPy; raises whatever the parser raises."""
    # |u| → (Abs(u)) so ln|x| reads as ln(Abs(x)), not ln*Abs(x)
    algebraic = _ABS_BARS.sub(r'(Abs(\1))', text.strip())
    expr = parse_expr(algebraic, local_dict=dict(_LOCALS),
                      transformations=_TRANSFORMATIONS, evaluate=False)
    return latex(expr, ln_notation=True)


def _regex_latex(text):
    """Textual LaTeX rewrite used when SymPy cannot parse the input."""
    s = text
    s = re.sub(r'(\d+)/(\d+)', r'\\frac{\1}{\2}', s)
    s = re.sub(r'\(([^()]+)\)/\(([^()]+)\)', r'\\frac{\1}{\2}', s)
    s = re.sub(r'\^(\d+)', r'^{\1}', s)
    s = re.sub(r'\^([a-zA-Z]+)', r'^{\1}', s)
    s = s.replace('*', r'\cdot ')
    s = _FUNC_NAMES.sub(r'\\\1', s)
    return re.sub(r'\s+', ' ', s).strip()


def to_latex(text):
    """LaTeX for a typed expression; 'f(x)' when there is nothing to show."""
    if not text or not text.strip():
        return 'f(x)'
    try:
        return _sympy_latex(text)
    except Exception as exc:
        logger.debug('SymPy could not parse %r (%s); using regex conversion', text, exc)
        return _regex_latex(text)


def format_as_integral(text):
    if not text or not text.strip():
        return r'\int f(x) \, dx'
    return rf'\int {to_latex(text)} \, dx'


def format_answer_with_constant(text):
    if not text or not text.strip():
        return 'Your answer will appear here...'
    return f'{to_latex(text)} + C'


# ── Examples ────────────────────────────────────────────────

EXAMPLES = (
    {'func': 'x^2', 'description': 'Simple polynomial (Power Rule)', 'difficulty': 'Easy'},
    {'func': 'sin(x)', 'description': 'Trigonometric function', 'difficulty': 'Easy'},
    {'func': '2x + 3', 'description': 'Linear function', 'difficulty': 'Easy'},
    {'func': 'x*sin(x)', 'description': 'Product requiring integration by parts', 'difficulty': 'Hard'},
    {'func': 'e^x', 'description': 'Exponential function', 'difficulty': 'Medium'},
    {'func': '1/x', 'description': 'Reciprocal function (natural log)', 'difficulty': 'Medium'},
    {'func': 'x/(x^2+1)', 'description': 'Rational function (u-substitution)', 'difficulty': 'Medium'},
    {'func': 'cos(2x)', 'description': 'Trigonometric with coefficient', 'difficulty': 'Medium'},
)
