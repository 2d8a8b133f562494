"""Finding email addresses in text and splitting them into their parts."""

import email.utils
import logging
import re
from typing import List

from .models import EmailRecord

logger = logging.getLogger(__name__)

# RFC 5322 addr-spec: dot-atom or quoted-string local part, hostname or
# domain-literal domain
_ATEXT = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]"
_DOT_ATOM = _ATEXT + r"+(?:\." + _ATEXT + r"+)*"
_QUOTED_STRING = r'"(?:[^"\\\r\n]|\\.)*"'
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_HOSTNAME = _LABEL + r"(?:\." + _LABEL + r")*"
_DOMAIN_LITERAL = r"\[[^\[\]\\\r\n]*\]"

ADDR_SPEC = (
    r"(?:" + _DOT_ATOM + r"|" + _QUOTED_STRING + r")"
    r"@"
    r"(?:" + _HOSTNAME + r"|" + _DOMAIN_LITERAL + r")"
)

# Word-boundary anchors, so a quoted local part is only found at the start of
# the line or after a word character, and a domain literal only at the end of
# the line or before one
EMAIL_ADDRESS_RE = re.compile(r"(?:\b|\A)" + ADDR_SPEC + r"(?:\b|\Z)")

_COMMENT_RE = re.compile(r"\(([^()]*)\)")


def find_emails(text: str) -> List[re.Match]:
    """Find every email address in a line, as regex matches with their spans."""
    return list(EMAIL_ADDRESS_RE.finditer(text))


def extract_emails(text: str) -> List[str]:
    """
    Find every email address in a line of text.

    Args:
        text: The line to scan.

    Returns:
        Non-overlapping email address substrings, in order of appearance.
    """
    return [m.group(0) for m in find_emails(text)]


def parse_email(text: str) -> EmailRecord:
    """
    Split raw email text into user, host, address, name and comment.

    Accepts a bare address (``alice@example.org``) as well as the
    ``Alice <alice@example.org> (work)`` form. ``name`` falls back to the
    comment and then to the user part when there is no display name.

    Args:
        text: The email text to parse.

    Returns:
        The parsed EmailRecord. Text that does not yield both a user and a
        host gives a record with every field empty.
    """
    phrase, address = email.utils.parseaddr(text)
    user, _, host = address.rpartition("@")
    if not user or not host:
        logger.debug("Could not parse email %r", text)
        return EmailRecord()

    match = _COMMENT_RE.search(text)
    comment = match.group(1).strip() if match else ""

    return EmailRecord(
        user=user,
        host=host,
        address=address,
        name=phrase or comment or user,
        comment=comment,
    )
