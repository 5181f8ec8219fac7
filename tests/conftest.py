"""Shared fixtures for all tests."""

import pytest

from monotab import constants


@pytest.fixture(autouse=True)
def lenient_arity(monkeypatch):
    # Keep tests independent of MONOTAB_STRICT_ROW_ARITY in the environment.
    monkeypatch.setattr(constants, 'STRICT_ROW_ARITY', False)


@pytest.fixture
def make_people_table():
    """Factory fixture returning the Name/Age table with the given rows."""
    from monotab.util.table import Row, Table

    def _make(*people):
        table = Table().header('Name').header('Age').end_header()
        for name, age in people:
            table = table.row(Row().cell(name).cell(age))
        return table

    return _make
