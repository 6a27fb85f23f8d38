from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """DB connection factory.

    Note: Outside a transaction we create short-lived connections per operation.
    Inside `UnitOfWork.atomic()` the open connection is bound to the current
    thread and reused by every repository call.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    def active(self) -> Optional[Any]:
        return getattr(self._local, "conn", None)

    def bind(self, conn: Optional[Any]) -> None:
        self._local.conn = conn
