"""Tests for service boundary payload contracts."""

import pytest
from pydantic import ValidationError

from acctl.services.contracts import AccountListData, dump_validated

_ROW = {
    "id": "u1",
    "username": "ops",
    "profiles": "local",
    "roles": "",
    "status": "ACTIVE",
    "state": "Enabled, Unverified",
}


def test_dump_validated_round_trips_rows() -> None:
    data = dump_validated(AccountListData, {"count": 1, "items": [_ROW]})
    assert data == {"count": 1, "items": [_ROW]}


def test_dump_validated_rejects_missing_column() -> None:
    row = {k: v for k, v in _ROW.items() if k != "state"}
    with pytest.raises(ValidationError):
        dump_validated(AccountListData, {"count": 1, "items": [row]})
