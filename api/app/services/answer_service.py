"""
Answer matching service.

Decides whether a free-text submission is equivalent to one of the accepted
answers of an exercise. Equivalence is purely textual after normalization:
no partial credit, no fuzzy matching and no code execution.
"""
import re
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

_WHITESPACE_RE = re.compile(r"\s+")


class GradableExercise(Protocol):
    """Anything carrying an expected answer and its accepted alternatives."""
    expected_answer: str
    alternative_answers: Sequence[str]


@dataclass(frozen=True)
class NormalizationOptions:
    """Global normalization toggles applied to every exercise alike.

    Attributes:
        normalize_quotes: Replace every single quote with a double quote
        normalize_spaces: Remove every whitespace character (not just collapse runs)
    """
    normalize_quotes: bool = True
    normalize_spaces: bool = True


STRICT = NormalizationOptions(normalize_quotes=False, normalize_spaces=False)


def normalize_answer(text: str, options: NormalizationOptions) -> str:
    """
    Apply the enabled normalization transforms to an answer.

    Whitespace removal runs before quote replacement. Quote replacement is
    one-directional: ' becomes ", never the reverse.

    Args:
        text: Submission or accepted answer
        options: Active normalization options

    Returns:
        The normalized text
    """
    if options.normalize_spaces:
        text = _WHITESPACE_RE.sub("", text)
    if options.normalize_quotes:
        text = text.replace("'", '"')
    return text


def accepted_answers(exercise: GradableExercise) -> set[str]:
    """Return the candidate set: the expected answer plus every alternative."""
    candidates = {exercise.expected_answer}
    candidates.update(exercise.alternative_answers or [])
    return candidates


def matches_any(submission: str, candidates: Iterable[str], options: NormalizationOptions) -> bool:
    """Check whether the normalized submission equals any normalized non-empty candidate."""
    normalized = normalize_answer(submission, options)
    if not normalized:
        return False
    return any(
        normalized == normalize_answer(candidate, options)
        for candidate in candidates
        if candidate
    )


def is_correct(submission: str, exercise: GradableExercise, options: NormalizationOptions) -> bool:
    """
    Grade a submission against an exercise.

    Args:
        submission: The user's submitted code
        exercise: Exercise providing expected_answer and alternative_answers
        options: Global normalization options

    Returns:
        True if the submission matches the expected answer or any alternative
    """
    return matches_any(submission, accepted_answers(exercise), options)
