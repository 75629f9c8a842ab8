"""
config.py — Compiled-in settings for the tutoring engine.

Everything here is static data built once at import.  Callers that need a
variant (a different attempt limit, partial-fractions detection off, …)
derive one with ``dataclasses.replace`` instead of mutating the default.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Messages:
    no_function: str = 'Please enter a function first!'
    no_answer: str = 'Please enter your answer first!'
    no_more_hints: str = 'No more hints available!'
    all_steps_shown: str = 'All steps shown - Enter your answer!'
    max_attempts: str = 'Maximum attempts reached'
    correct: str = 'Congratulations! Correct answer!'


@dataclass(frozen=True)
class ProgressWeights:
    """Progress-bar percentages awarded by the page for each event."""
    analysis: int = 10
    hint_revealed: int = 5
    # a hint adds hint_revealed on top of at most this much
    hint_cap: int = 30
    # stepping through a solution moves the bar from steps_start to steps_end
    steps_start: int = 20
    steps_end: int = 60
    correct_answer: int = 100
    incorrect_attempt: int = 15
    incorrect_cap: int = 90


@dataclass(frozen=True)
class Settings:
    max_attempts: int = 3
    enable_partial_credit: bool = True
    enable_equivalent_forms: bool = True
    # Rational inputs ("1/x", "x/(x^2+1)") classify as partial fractions
    detect_partial_fractions: bool = True
    progress: ProgressWeights = field(default_factory=ProgressWeights)
    messages: Messages = field(default_factory=Messages)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1, got {self.max_attempts}')


DEFAULT_SETTINGS = Settings()
