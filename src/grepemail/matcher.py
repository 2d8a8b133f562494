"""Matching lines and the emails in them against criteria."""

import functools
import logging
import re
from typing import Callable

from .email_parser import find_emails, parse_email
from .models import EMAIL_FIELDS, EmailRecord, LineMatch, MatchConfig

logger = logging.getLogger(__name__)

LinePredicate = Callable[[str], LineMatch]


@functools.lru_cache(maxsize=64)
def _compile(pattern: str, ignore_case: bool) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE if ignore_case else 0)


def _contains(value: str, needle: str, ignore_case: bool) -> bool:
    if ignore_case:
        return needle.lower() in value.lower()
    return needle in value


def record_matches(record: EmailRecord, config: MatchConfig) -> bool:
    """
    Check an email against the per-field criteria.

    Args:
        record: The parsed email.
        config: The criteria to apply.

    Returns:
        True if the email satisfies every criterion that is set.
    """
    for name in EMAIL_FIELDS:
        value = getattr(record, name)

        contains = getattr(config, f"{name}_contains")
        if contains is not None and not _contains(value, contains, config.ignore_case):
            return False

        not_contains = getattr(config, f"{name}_not_contains")
        if not_contains is not None and _contains(value, not_contains, config.ignore_case):
            return False

        matches = getattr(config, f"{name}_matches")
        if matches is not None and not _compile(matches, config.ignore_case).search(value):
            return False

    return True


def line_matches(text: str, config: MatchConfig) -> LineMatch:
    """
    Decide whether a line has emails matching the criteria.

    The number of emails in the line must be within the configured bounds,
    and at least one of them must satisfy every per-field criterion. A line
    with no emails passes when the bounds allow it.

    Args:
        text: The line to test.
        config: The criteria to apply.

    Returns:
        LineMatch holding the decision and the emails that matched.
    """
    emails = find_emails(text)
    n = len(emails)

    if config.min_emails >= 0 and n < config.min_emails:
        return LineMatch(False)
    if config.max_emails >= 0 and n > config.max_emails:
        return LineMatch(False)
    if not emails:
        return LineMatch(True)

    matched = [m for m in emails if record_matches(parse_email(m.group(0)), config)]
    return LineMatch(
        bool(matched),
        [m.group(0) for m in matched],
        [m.span() for m in matched],
    )


def make_predicate(config: MatchConfig) -> LinePredicate:
    """Bind the criteria into a predicate for the grep engine."""
    logger.debug("Matching with %s", config)
    return functools.partial(line_matches, config=config)
