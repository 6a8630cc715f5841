"""
Shared Test Configuration and Fixtures

Sample message streams and helpers used across the MailChain test suite.
"""

import io
from typing import List

import pytest

from mailchain.message import Message


SAMPLE_INPUT = (
    "erich@example.com\n"
    "richard@example.com\n"
    "Hello there\n"

    "erich@example.com\n"
    "ralph@example.com\n"
    "Are you sure you pressed the right button?\n"

    "ralph@example.com\n"
    "erich@example.com\n"
    "I do not make mistakes of that kind\n"
)

SAMPLE_EXPECTED_OUTPUT = (
    "erich@example.com\n"
    "richard@example.com\n"
    "Hello there\n"

    "erich@example.com\n"
    "ralph@example.com\n"
    "Are you sure you pressed the right button?\n"

    "erich@example.com\n"
    "richard@example.com\n"
    "Are you sure you pressed the right button?\n"
)


def serialize(messages: List[Message]) -> str:
    """Render messages in the three-line wire layout."""
    return "".join(f"{m.sender}\n{m.recipient}\n{m.body}\n" for m in messages)


class CollectorStage:
    """Stand-in successor that records every message it receives."""

    def __init__(self):
        self.received: List[Message] = []

    def process(self, message: Message) -> None:
        self.received.append(message)


@pytest.fixture
def sample_input() -> str:
    """Input text with three messages from the reference scenario."""
    return SAMPLE_INPUT


@pytest.fixture
def sample_expected_output() -> str:
    """Expected output for the reference filter/copy/send chain."""
    return SAMPLE_EXPECTED_OUTPUT


@pytest.fixture
def sample_messages() -> List[Message]:
    """The messages contained in ``sample_input``."""
    return [
        Message("erich@example.com", "richard@example.com", "Hello there"),
        Message("erich@example.com", "ralph@example.com", "Are you sure you pressed the right button?"),
        Message("ralph@example.com", "erich@example.com", "I do not make mistakes of that kind"),
    ]


@pytest.fixture
def input_stream(sample_input) -> io.StringIO:
    return io.StringIO(sample_input)


@pytest.fixture
def output_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def collector() -> CollectorStage:
    return CollectorStage()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MAILCHAIN_* variables so tests see only what they set."""
    import os
    for key in list(os.environ):
        if key.startswith("MAILCHAIN_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(name="serialize")
def serialize_fixture():
    return serialize
