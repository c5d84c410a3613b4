"""Fixtures for tests in the mailcompose application"""
# pylint: disable=redefined-outer-name

import datetime
import itertools

import pytest

from mailcompose.rfc5322.composer import EmailBuilder

FIXED_DATE = datetime.datetime(
    2024, 3, 5, 14, 7, 9, tzinfo=datetime.timezone(datetime.timedelta(hours=1))
)


class SequenceTokenSource:
    """Deterministic token source, returning token0, token1... padded to size."""

    def __init__(self, prefix="boundary"):
        self.prefix = prefix
        self.counter = itertools.count()

    def __call__(self, length):
        return f"{self.prefix}{next(self.counter)}".ljust(length, "x")[:length]


@pytest.fixture
def token_source():
    """A deterministic boundary source."""
    return SequenceTokenSource()


@pytest.fixture
def message_id_source():
    """A deterministic message id source."""
    ids = (f"id{n}" for n in itertools.count())
    return lambda: next(ids)


@pytest.fixture
def builder(token_source, message_id_source):
    """An EmailBuilder with deterministic boundaries, ids and clock."""
    return EmailBuilder(
        token_source=token_source,
        message_id_source=message_id_source,
        clock=lambda: FIXED_DATE,
    )
