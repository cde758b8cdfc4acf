"""Tests for the word-frequency assignee scorer."""

from issuetracker.models import Issue, User
from issuetracker.roles import Role
from issuetracker.services.recommendation import (
    DeveloperScore,
    pick_best,
    score_developer,
    tokenize,
    word_frequencies,
)


def _dev(name: str) -> User:
    return User(username=name, role=Role.DEVELOPER)


class TestTokenize:
    def test_splits_on_single_spaces(self):
        assert tokenize("server crash now") == ["server", "crash", "now"]

    def test_keeps_case_and_punctuation(self):
        assert tokenize("Server crash!") == ["Server", "crash!"]

    def test_keeps_interior_empty_tokens(self):
        assert tokenize("  a  b ") == ["", "", "a", "", "b"]

    def test_drops_trailing_empty_tokens(self):
        assert tokenize("a b   ") == ["a", "b"]
        assert tokenize("   ") == []

    def test_empty_string_is_one_empty_token(self):
        assert tokenize("") == [""]

    def test_none(self):
        assert tokenize(None) == []

    def test_tabs_are_not_separators(self):
        assert tokenize("a\tb c") == ["a\tb", "c"]


def test_word_frequencies_counts_titles_and_descriptions_separately():
    issues = [
        Issue(title="login crash", description="crash on login"),
        Issue(title="crash report", description="report"),
    ]
    freq = word_frequencies(issues)
    assert freq.titles["crash"] == 2
    assert freq.titles["login"] == 1
    assert freq.descriptions["crash"] == 1
    assert freq.descriptions["report"] == 1
    assert freq.titles["missing"] == 0


def test_documented_example_scores_22():
    history = [Issue(title="server crash", description="null pointer bug")]
    score = score_developer(
        _dev("d"),
        history,
        tokenize("server crash"),
        tokenize("null pointer exception"),
    )
    assert score.points == 22


def test_developer_without_history_scores_zero():
    score = score_developer(_dev("e"), [], ["server", "crash"], ["null"])
    assert score.points == 0


def test_repeated_history_multiplies_weight():
    history = [
        Issue(title="crash", description="x"),
        Issue(title="crash", description="x"),
    ]
    score = score_developer(_dev("d"), history, ["crash"], ["x"])
    assert score.points == 2 * 10 + 2 * 1


def test_repeated_target_token_counts_each_occurrence():
    history = [Issue(title="crash", description="")]
    score = score_developer(_dev("d"), history, ["crash", "crash"], [])
    assert score.points == 20


def test_matching_is_case_sensitive():
    history = [Issue(title="Crash", description="")]
    assert score_developer(_dev("d"), history, ["crash"], []).points == 0


def test_custom_weights():
    history = [Issue(title="a", description="b")]
    score = score_developer(_dev("d"), history, ["a"], ["b"], title_weight=3, description_weight=5)
    assert score.points == 8


class TestPickBest:
    def test_highest_wins(self):
        a, b = _dev("a"), _dev("b")
        best = pick_best([DeveloperScore(a, 3), DeveloperScore(b, 7)])
        assert best.developer is b

    def test_first_seen_wins_ties(self):
        a, b = _dev("a"), _dev("b")
        best = pick_best([DeveloperScore(a, 5), DeveloperScore(b, 5)])
        assert best.developer is a

    def test_zero_scores_never_qualify(self):
        assert pick_best([DeveloperScore(_dev("a"), 0)]) is None

    def test_empty(self):
        assert pick_best([]) is None


def test_empty_descriptions_match_each_other():
    history = [Issue(title="a", description="")]
    score = score_developer(_dev("d"), history, tokenize("zzz"), tokenize(""))
    assert score.points == 1


def test_double_spaces_share_an_empty_title_token():
    history = [Issue(title="server  crash", description="x")]
    score = score_developer(_dev("d"), history, tokenize("disk  full"), tokenize("y"))
    assert score.points == 10
