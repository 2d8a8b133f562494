"""Data models for email grepping."""

import re
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Parts of an email address that criteria can be applied to
EMAIL_FIELDS = ("comment", "address", "host", "user", "name")


@dataclass
class EmailRecord:
    """Structured parts of an email address found in a line."""
    user: str = ""
    host: str = ""
    address: str = ""
    name: str = ""
    comment: str = ""

    def __str__(self) -> str:
        return self.address


@dataclass
class Line:
    """A line of input with the label of the file it came from."""
    text: str
    label: Optional[str] = None
    # Position within its file, counted from 1
    lineno: Optional[int] = field(default=None, compare=False)


@dataclass
class LineMatch:
    """Result of testing a line against the match criteria."""
    matched: bool
    emails: List[str] = field(default_factory=list)
    # (start, end) offsets of the matched emails in the line
    spans: List[Tuple[int, int]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.matched


class MatchConfig(BaseModel):
    """Criteria a line and its emails must satisfy."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    min_emails: int = Field(default=1, ge=-1, description="Minimum emails per line, -1 disables")
    max_emails: int = Field(default=-1, ge=-1, description="Maximum emails per line, -1 means unbounded")
    ignore_case: bool = Field(default=False, description="Case-insensitive contains/matches")

    comment_contains: Optional[str] = None
    comment_not_contains: Optional[str] = None
    comment_matches: Optional[str] = None

    address_contains: Optional[str] = None
    address_not_contains: Optional[str] = None
    address_matches: Optional[str] = None

    host_contains: Optional[str] = None
    host_not_contains: Optional[str] = None
    host_matches: Optional[str] = None

    user_contains: Optional[str] = None
    user_not_contains: Optional[str] = None
    user_matches: Optional[str] = None

    name_contains: Optional[str] = None
    name_not_contains: Optional[str] = None
    name_matches: Optional[str] = None

    @field_validator(
        "comment_matches", "address_matches", "host_matches", "user_matches", "name_matches"
    )
    @classmethod
    def valid_regex(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid regular expression {v!r}: {e}")
        return v


class GrepOptions(BaseModel):
    """Options controlling how selected lines are reported."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    invert_match: bool = Field(default=False, description="Select lines that do not match")
    count: bool = Field(default=False, description="Print only a count of selected lines")
    line_number: bool = Field(default=False, description="Prefix lines with their line number")
    quiet: bool = Field(default=False, description="Print nothing, exit on first selected line")
    color: Literal["auto", "always", "never"] = Field(default="auto", description="Highlight matches")


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="WARNING", description="Logging level")

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown logging level {v!r}")
        return v


class Config(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="forbid")

    criteria: MatchConfig = Field(default_factory=MatchConfig)
    output: GrepOptions = Field(default_factory=GrepOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
