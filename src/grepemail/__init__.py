"""Grep lines of text for email addresses matching criteria."""

__version__ = "0.1.0"

from .models import EmailRecord, GrepOptions, Line, LineMatch, MatchConfig
from .email_parser import extract_emails, parse_email
from .matcher import line_matches, make_predicate, record_matches
from .line_source import read_lines
from .grep import grep

__all__ = [
    "EmailRecord",
    "GrepOptions",
    "Line",
    "LineMatch",
    "MatchConfig",
    "extract_emails",
    "parse_email",
    "line_matches",
    "make_predicate",
    "record_matches",
    "read_lines",
    "grep",
]
