"""Shared fixtures."""

import pytest

HEADER = "Date,Estimate,5th Percentile,95th Percentile"


@pytest.fixture
def csv_text():
    def _build(*lines: str) -> str:
        return "\n".join((HEADER,) + lines) + "\n"
    return _build
