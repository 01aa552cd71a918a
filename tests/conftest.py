"""Pytest configuration and shared fixtures for date puzzle tests."""

from __future__ import annotations

import pytest

from datepuzzle.board import Board
from datepuzzle.shapes import Catalog, get_catalog


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that start worker processes")


@pytest.fixture
def catalog() -> Catalog:
    """The calendar puzzle pieces."""
    return get_catalog()


@pytest.fixture
def jan_first() -> Board:
    """Board for January 1 with only the sentinels set."""
    return Board.for_date(1, 1)


@pytest.fixture
def trominoes() -> Catalog:
    """An L tromino and an I tromino; together they cannot tile a 2x3 board."""
    return Catalog.from_patterns([("L", ("#.", "##")), ("I", ("###",))])


@pytest.fixture
def two_ls() -> Catalog:
    """Two L trominoes, which tile a 2x3 board."""
    return Catalog.from_patterns([("A", ("#.", "##")), ("B", ("#.", "##"))])
