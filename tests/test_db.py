"""Tests for the account stores."""

import pytest

from app import create_app
from db import Account, MemoryAccountStore, SQLiteAccountStore, create_store


def test_memory_store():
    store = MemoryAccountStore()
    assert store.get("a@example.com") is None

    store.put("a@example.com", Account("Alice", "SecureSuite", "JBSWY3DP"))
    account = store.get("a@example.com")
    assert account == Account("Alice", "SecureSuite", "JBSWY3DP", False)

    # returned records are copies
    account.verified = True
    assert store.get("a@example.com").verified is False

    assert store.delete("a@example.com") is True
    assert store.delete("a@example.com") is False
    assert store.get("a@example.com") is None


def test_sqlite_store(tmp_path):
    app = create_app({"ACCOUNT_STORE": "sqlite", "DATABASE": str(tmp_path / "accounts.db")})
    store = app.extensions["account_store"]
    assert isinstance(store, SQLiteAccountStore)

    with app.app_context():
        store.put("a@example.com", Account("Alice", "SecureSuite", "JBSWY3DP"))
        store.put("a@example.com", Account("Alice", "SecureSuite", "JBSWY3DP", verified=True))

    # new app context, new connection
    with app.app_context():
        assert store.get("a@example.com") == Account("Alice", "SecureSuite", "JBSWY3DP", True)
        assert store.delete("a@example.com") is True
        assert store.get("a@example.com") is None
        assert store.delete("a@example.com") is False


def test_unknown_store_kind():
    app = create_app()
    app.config["ACCOUNT_STORE"] = "redis"
    with pytest.raises(ValueError):
        create_store(app)
