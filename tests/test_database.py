"""Tests for the optional Supabase reachability check."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from enrollment_forecast import database
from enrollment_forecast.config import Config


class FakeQuery:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.table_name = None

    def table(self, name):
        self.table_name = name
        return self

    def select(self, columns):
        return self

    def limit(self, n):
        return self

    def execute(self):
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.rows)


def test_skips_without_credentials(monkeypatch):
    monkeypatch.setattr(Config, "SUPABASE_URL", "")
    monkeypatch.setattr(Config, "SUPABASE_SERVICE_ROLE_KEY", "")

    def fail(*args, **kwargs):
        raise AssertionError("client should not be created")

    monkeypatch.setattr(database, "create_client", fail)
    assert database.check_database_connection() is False


def test_success_with_given_client():
    client = FakeQuery(rows=[{"id": 1}])
    assert database.check_database_connection(client, table_name="sections") is True
    assert client.table_name == "sections"


def test_query_failure_is_not_raised():
    client = FakeQuery(error=ConnectionError("unreachable"))
    assert database.check_database_connection(client) is False


def test_client_creation_failure_is_not_raised(monkeypatch):
    monkeypatch.setattr(Config, "SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setattr(Config, "SUPABASE_SERVICE_ROLE_KEY", "key")

    def fail(url, key):
        raise RuntimeError("bad key")

    monkeypatch.setattr(database, "create_client", fail)
    assert database.check_database_connection() is False


def test_get_client_requires_credentials(monkeypatch):
    monkeypatch.setattr(Config, "SUPABASE_URL", "")
    with pytest.raises(ValueError, match="SUPABASE_URL"):
        database.get_supabase_client()
