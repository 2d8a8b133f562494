"""Tests for the matcher module."""

import pytest
from pydantic import ValidationError

from grepemail.email_parser import parse_email
from grepemail.matcher import line_matches, make_predicate, record_matches
from grepemail.models import EmailRecord, LineMatch, MatchConfig


@pytest.fixture
def gmail_record():
    return parse_email("Alice Smith <alice@Gmail.com> (work)")


def test_no_criteria_accepts_any_record(gmail_record):
    assert record_matches(gmail_record, MatchConfig())
    assert record_matches(EmailRecord(), MatchConfig())


def test_ignore_case_host_contains(gmail_record):
    """ignore_case makes contains case-insensitive."""
    assert record_matches(gmail_record, MatchConfig(host_contains="GMAIL.com", ignore_case=True))
    assert not record_matches(gmail_record, MatchConfig(host_contains="GMAIL.com"))
    assert record_matches(gmail_record, MatchConfig(host_contains="Gmail.com"))


def test_not_contains(gmail_record):
    assert record_matches(gmail_record, MatchConfig(user_not_contains="bob"))
    assert not record_matches(gmail_record, MatchConfig(user_not_contains="ali"))
    assert record_matches(gmail_record, MatchConfig(user_not_contains="ALI"))
    assert not record_matches(gmail_record, MatchConfig(user_not_contains="ALI", ignore_case=True))


def test_matches_searches_anywhere(gmail_record):
    assert record_matches(gmail_record, MatchConfig(host_matches=r"\.com$"))
    assert record_matches(gmail_record, MatchConfig(address_matches=r"ice@"))
    assert not record_matches(gmail_record, MatchConfig(host_matches=r"^gmail"))
    assert record_matches(gmail_record, MatchConfig(host_matches=r"^gmail", ignore_case=True))


def test_name_and_comment_criteria(gmail_record):
    assert record_matches(gmail_record, MatchConfig(name_contains="Smith"))
    assert record_matches(gmail_record, MatchConfig(comment_matches="^work$"))
    assert not record_matches(gmail_record, MatchConfig(comment_not_contains="work"))


def test_all_criteria_must_pass(gmail_record):
    config = MatchConfig(host_contains="Gmail", user_contains="bob")
    assert not record_matches(gmail_record, config)
    config = MatchConfig(host_contains="Gmail", user_contains="alice", name_not_contains="Bob")
    assert record_matches(gmail_record, config)


@pytest.mark.parametrize("needle", ["a", "alice", "Gmail", "x", "ALICE"])
@pytest.mark.parametrize("ignore_case", [False, True])
def test_contains_and_not_contains_exclusive(gmail_record, needle, ignore_case):
    """The same string never passes both contains and not-contains."""
    for name in ("address", "host", "user", "name", "comment"):
        contains = MatchConfig(**{f"{name}_contains": needle, "ignore_case": ignore_case})
        not_contains = MatchConfig(**{f"{name}_not_contains": needle, "ignore_case": ignore_case})
        assert record_matches(gmail_record, contains) != record_matches(gmail_record, not_contains)


def test_empty_record_fails_contains():
    assert not record_matches(EmailRecord(), MatchConfig(host_contains="example"))


def test_invalid_regex_rejected():
    with pytest.raises(ValidationError, match="invalid regular expression"):
        MatchConfig(user_matches="(unclosed")


def test_unknown_criteria_rejected():
    """Per-key query filters are not part of the criteria."""
    with pytest.raises(ValidationError):
        MatchConfig(query_param_contains={"a": "b"})


def test_min_emails_scenarios():
    line = "Contact: alice@gmail.com, bob@example.org"
    assert line_matches(line, MatchConfig(min_emails=2))
    assert not line_matches(line, MatchConfig(min_emails=3))


def test_max_emails():
    line = "Contact: alice@gmail.com, bob@example.org"
    assert not line_matches(line, MatchConfig(max_emails=1))
    assert line_matches(line, MatchConfig(max_emails=2))
    assert line_matches(line, MatchConfig(max_emails=-1))


def test_count_bounds_ignore_criteria():
    """Bounds reject a line even when its emails satisfy the criteria."""
    line = "bob@example.org and carol@example.org"
    assert not line_matches(line, MatchConfig(min_emails=3, host_contains="example.org"))
    assert not line_matches(line, MatchConfig(max_emails=1, host_contains="example.org"))


@pytest.mark.parametrize("min_emails,expected", [(-1, True), (0, True), (1, False), (2, False)])
def test_line_without_emails(min_emails, expected):
    """A line with no emails passes only when min_emails allows it."""
    result = line_matches("nothing to see here", MatchConfig(min_emails=min_emails))
    assert bool(result) is expected
    assert result.emails == []


def test_line_without_emails_ignores_criteria():
    result = line_matches("nothing here", MatchConfig(min_emails=0, host_contains="example.org"))
    assert result == LineMatch(True, [])


def test_host_contains_rejects_line():
    assert not line_matches("alice@gmail.com only", MatchConfig(host_contains="example.org"))


def test_host_contains_accepts_line():
    result = line_matches(
        "bob@example.org and carol@example.org", MatchConfig(host_contains="example.org")
    )
    assert result.matched
    assert result.emails == ["bob@example.org", "carol@example.org"]


def test_one_matching_email_is_enough():
    result = line_matches(
        "alice@gmail.com, bob@example.org", MatchConfig(host_contains="example.org")
    )
    assert result == LineMatch(True, ["bob@example.org"], [(17, 32)])


def test_spans_cover_only_matching_emails():
    text = "a@x.com xa@x.com"
    result = line_matches(text, MatchConfig(user_matches="^a$"))
    assert result.spans == [(0, 7)]
    assert [text[start:end] for start, end in result.spans] == ["a@x.com"]


def test_no_criteria_reports_all_emails():
    result = line_matches("alice@gmail.com, bob@example.org", MatchConfig())
    assert result.emails == ["alice@gmail.com", "bob@example.org"]


def test_make_predicate():
    predicate = make_predicate(MatchConfig(user_contains="bob"))
    assert predicate("alice@gmail.com, bob@example.org")
    assert not predicate("alice@gmail.com")
