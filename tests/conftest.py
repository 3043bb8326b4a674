"""Shared fixtures for connector_installer tests."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

VALID_TOKEN = (
    "https://acme.fyde.com/connectors/v1/1234"
    "?auth_token=abcDEF123&tenant_id=0123abcd-4567-89ab-cdef-0123456789ab"
)


@pytest.fixture
def valid_token() -> str:
    return VALID_TOKEN


@pytest.fixture
def fake_connector(tmp_path: Path):
    """Write an executable shell script standing in for the connector binary."""

    def _make(body: str, name: str = "fyde-connector") -> str:
        p = tmp_path / "bin" / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("#!/bin/sh\n" + body, encoding="utf-8")
        p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(p)

    return _make
