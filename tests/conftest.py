"""Shared fixtures for rota tests."""

from datetime import date, timedelta

import pytest


@pytest.fixture
def base_date():
    """A Monday for testing weekly rotas."""
    return date(2024, 1, 15)  # This is a Monday


@pytest.fixture
def week_days():
    """Helper returning all seven days of the n-th week after a Monday."""

    def _days(monday: date, week_index: int = 0) -> set[date]:
        start = monday + timedelta(weeks=week_index)
        return {start + timedelta(days=i) for i in range(7)}

    return _days
