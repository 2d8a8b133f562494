"""Shared fixtures for the grep-email test suite."""

import pytest

from grepemail.config.config_manager import CONFIG_ENV_VAR
from grepemail.models import Line


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """Keep a developer's GREP_EMAIL_CONFIG out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def sample_lines():
    """Lines with zero, one and two emails."""
    return [
        "Contact: alice@gmail.com, bob@example.org",
        "nothing to see here",
        "bob@example.org and carol@example.org",
        "alice@gmail.com only",
    ]


@pytest.fixture
def make_source():
    """Turn texts into Line objects, optionally labelled."""
    def _make(texts, label=None):
        return [Line(text, label) for text in texts]
    return _make


@pytest.fixture
def mail_file(tmp_path):
    """A text file with a few emails in it."""
    path = tmp_path / "mail.txt"
    path.write_text(
        "From: Alice <alice@gmail.com>\n"
        "To: bob@example.org, carol@example.org\n"
        "Subject: lunch\n"
    )
    return path


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(content):
        path = tmp_path / "config.yaml"
        path.write_text(content)
        return path
    return _write
