"""
Account storage for provisioned secrets, keyed by the account's email.

The store is created with the application and reached through
``get_store()`` inside a request.
"""
import sqlite3
import threading
from dataclasses import dataclass
from typing import Optional

from flask import Flask, current_app, g


@dataclass
class Account:
    label: str
    issuer: str
    secret: str
    verified: bool = False


class AccountStore:
    def get(self, key: str) -> Optional[Account]:
        raise NotImplementedError

    def put(self, key: str, account: Account):
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def init_db(self):
        pass


class MemoryAccountStore(AccountStore):
    """Process-local store, lost on restart."""

    def __init__(self):
        self._accounts = {}
        self._lock     = threading.Lock()

    def get(self, key):
        with self._lock:
            account = self._accounts.get(key)
        if account is None:
            return None
        return Account(account.label, account.issuer, account.secret, account.verified)

    def put(self, key, account):
        with self._lock:
            self._accounts[key] = Account(account.label, account.issuer, account.secret, account.verified)

    def delete(self, key):
        with self._lock:
            return self._accounts.pop(key, None) is not None


class SQLiteAccountStore(AccountStore):
    def __init__(self, database: str):
        self.database = database

    def get_db(self):
        db = getattr(g, '_database', None)
        if db is None:
            # Connect to the SQLite database file
            db = g._database = sqlite3.connect(self.database)
            db.row_factory = sqlite3.Row
        return db

    def init_db(self):
        """Create the accounts table if it doesn't exist."""
        db = self.get_db()
        db.execute('''
            CREATE TABLE IF NOT EXISTS accounts (
                key TEXT PRIMARY KEY,
                label TEXT NOT NULL,
                issuer TEXT NOT NULL,
                secret TEXT NOT NULL,
                verified INTEGER NOT NULL DEFAULT 0
            )
        ''')
        db.commit()

    def get(self, key):
        row = self.get_db().execute(
            'SELECT label, issuer, secret, verified FROM accounts WHERE key = ?', (key,)
        ).fetchone()
        if row is None:
            return None
        return Account(row['label'], row['issuer'], row['secret'], bool(row['verified']))

    def put(self, key, account):
        db = self.get_db()
        db.execute(
            "INSERT OR REPLACE INTO accounts (key, label, issuer, secret, verified) VALUES (?, ?, ?, ?, ?)",
            (key, account.label, account.issuer, account.secret, int(account.verified))
        )
        db.commit()

    def delete(self, key):
        db = self.get_db()
        cursor = db.execute('DELETE FROM accounts WHERE key = ?', (key,))
        db.commit()
        return cursor.rowcount > 0


def close_connection(exception):
    db = g.pop('_database', None)
    if db is not None:
        db.close()


def create_store(app: Flask) -> AccountStore:
    kind = app.config["ACCOUNT_STORE"]
    if kind == "memory":
        store = MemoryAccountStore()
    elif kind == "sqlite":
        store = SQLiteAccountStore(app.config["DATABASE"])
    else:
        raise ValueError(f"unknown account store {kind!r}")

    app.extensions["account_store"] = store
    app.teardown_appcontext(close_connection)
    with app.app_context():
        store.init_db()
    return store


def get_store() -> AccountStore:
    return current_app.extensions["account_store"]
