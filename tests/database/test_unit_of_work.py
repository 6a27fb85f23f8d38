from __future__ import annotations

from datetime import time, timedelta

import pytest

from src.lateness_system.lateness_system.database.mysql_base import db_cursor, normalize_mysql_time
from src.lateness_system.lateness_system.database.unit_of_work import MySQLUnitOfWork


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self.closed = False

    def execute(self, sql, params=None):
        self.conn.statements.append(sql)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.statements = []
        self.events = []

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def start_transaction(self):
        self.events.append("begin")

    def commit(self):
        self.events.append("commit")

    def rollback(self):
        self.events.append("rollback")

    def close(self):
        self.events.append("close")


class FakeConnectionFactory:
    """Stands in for DatabaseConnection without a MySQL server."""

    def __init__(self):
        self.opened: list[FakeConnection] = []
        self._bound = None

    def connect(self):
        conn = FakeConnection()
        self.opened.append(conn)
        return conn

    def active(self):
        return self._bound

    def bind(self, conn):
        self._bound = conn


def test_standalone_cursor_commits_and_closes_its_own_connection():
    factory = FakeConnectionFactory()

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    [conn] = factory.opened
    assert conn.statements == ["SELECT 1"]
    assert conn.events == ["commit", "close"]


def test_standalone_cursor_rolls_back_on_error():
    factory = FakeConnectionFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory) as (_, cur):
            cur.execute("UPDATE t SET x = 1")
            raise RuntimeError("boom")

    assert factory.opened[0].events == ["rollback", "close"]


def test_atomic_block_shares_one_connection_and_commits_once():
    factory = FakeConnectionFactory()
    uow = MySQLUnitOfWork(factory)

    with uow.atomic():
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT 1")
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT 2")

    [conn] = factory.opened
    assert conn.statements == ["INSERT 1", "INSERT 2"]
    assert conn.events == ["begin", "commit", "close"]
    assert factory.active() is None


def test_atomic_block_rolls_back_everything_on_error():
    factory = FakeConnectionFactory()
    uow = MySQLUnitOfWork(factory)

    with pytest.raises(ValueError):
        with uow.atomic():
            with db_cursor(factory) as (_, cur):
                cur.execute("INSERT 1")
            raise ValueError("conflict")

    assert factory.opened[0].events == ["begin", "rollback", "close"]
    assert factory.active() is None


def test_nested_atomic_joins_outer_transaction():
    factory = FakeConnectionFactory()
    uow = MySQLUnitOfWork(factory)

    with uow.atomic():
        with uow.atomic():
            with db_cursor(factory) as (_, cur):
                cur.execute("INSERT 1")

    assert len(factory.opened) == 1
    assert factory.opened[0].events == ["begin", "commit", "close"]


def test_normalize_mysql_time_accepts_connector_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(10, 10)) == time(10, 10)
    assert normalize_mysql_time(timedelta(hours=10, minutes=5)) == time(10, 5)
    assert normalize_mysql_time("09:30") == time(9, 30)
    with pytest.raises(ValueError):
        normalize_mysql_time("930")
