"""
Candidate assignee scoring.

A developer's history is summarised as two word-frequency tables, one over
the titles and one over the descriptions of the issues they fixed. A target
issue scores against that history by looking up each of its own words:
title words are worth ``title_weight`` per past occurrence, description
words ``description_weight``.

Example:
    history:  title "server crash", description "null pointer bug"
    target:   title "server crash", description "null pointer exception"
    score:    10 + 10 + 1 + 1 = 22
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from issuetracker.models import Issue, User

TITLE_WEIGHT = 10
DESCRIPTION_WEIGHT = 1


def tokenize(text: str | None) -> list[str]:
    """
    Split text on single spaces.

    Tokens are compared exactly and repeated spaces are not collapsed, so
    interior empty tokens are kept and can match. Trailing empty tokens are dropped. Text without a space
    is a single token, which makes ``""`` tokenize to ``[""]``.
    """
    if text is None:
        return []
    tokens = text.split(" ")
    if len(tokens) == 1:
        return tokens
    while tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


class WordFrequencies(NamedTuple):
    titles: Counter[str]
    descriptions: Counter[str]


def word_frequencies(issues: Iterable[Issue]) -> WordFrequencies:
    """Count title and description words over a set of issues."""
    titles: Counter[str] = Counter()
    descriptions: Counter[str] = Counter()
    for issue in issues:
        titles.update(tokenize(issue.title))
        descriptions.update(tokenize(issue.description))
    return WordFrequencies(titles, descriptions)


class DeveloperScore(NamedTuple):
    developer: User
    points: int


def score_developer(
    developer: User,
    fixed_issues: Iterable[Issue],
    title_tokens: Sequence[str],
    description_tokens: Sequence[str],
    *,
    title_weight: int = TITLE_WEIGHT,
    description_weight: int = DESCRIPTION_WEIGHT,
) -> DeveloperScore:
    """
    Score one developer against a target issue's tokens.

    Every occurrence of a target token counts, so a word repeated in the
    target title adds its history count once per repetition.

    Args:
        developer: The developer being scored
        fixed_issues: Issues the developer previously fixed
        title_tokens: Tokens of the target issue's title
        description_tokens: Tokens of the target issue's description

    Returns:
        DeveloperScore pairing the developer with their points
    """
    frequencies = word_frequencies(fixed_issues)
    points = sum(frequencies.titles[token] * title_weight for token in title_tokens)
    points += sum(
        frequencies.descriptions[token] * description_weight for token in description_tokens
    )
    return DeveloperScore(developer, points)


def pick_best(scores: Iterable[DeveloperScore]) -> DeveloperScore | None:
    """
    Pick the highest scoring developer.

    Only a strictly greater score replaces the current best, so the first
    developer seen wins a tie. A score of zero never qualifies.
    """
    best: DeveloperScore | None = None
    best_points = 0
    for score in scores:
        if score.points > best_points:
            best, best_points = score, score.points
    return best


__all__ = [
    "DESCRIPTION_WEIGHT",
    "DeveloperScore",
    "TITLE_WEIGHT",
    "WordFrequencies",
    "pick_best",
    "score_developer",
    "tokenize",
    "word_frequencies",
]
