"""Tests for the shared API dependencies."""

import pytest
from fastapi import HTTPException

from habit_tracker.api.dependencies import get_current_owner_id


@pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42)])
def test_owner_id_from_header(raw, expected):
    assert get_current_owner_id(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "0", "-1", "abc", "²", "١"])
def test_invalid_owner_id(raw):
    with pytest.raises(HTTPException) as excinfo:
        get_current_owner_id(raw)
    assert excinfo.value.status_code == 401
