# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

"""SQLite implementation of the generic data-access handle.

Table and column names are interpolated into SQL text, so they are checked
against a strict identifier pattern.  All values are bound as named
parameters.
"""

import re
import sqlite3
from collections.abc import Iterable, Mapping
from typing import Any

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class InvalidIdentifierError(Exception):
    def __init__(self, name: str):
        super().__init__(f"Invalid SQL identifier: {name!r}")


class RecordNotFoundError(Exception):
    def __init__(self, table: str, conditions: Mapping[str, Any]):
        super().__init__(f"No record in {table} matching {dict(conditions)}")
        self.table = table
        self.conditions = dict(conditions)


def _ident(name: str) -> str:
    if not _IDENTIFIER_RE.match(name):
        raise InvalidIdentifierError(name)
    return name


def _where(conditions: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    if not conditions:
        return "", {}
    clauses = []
    params = {}
    for i, (col, val) in enumerate(conditions.items()):
        if val is None:
            clauses.append(f"{_ident(col)} IS NULL")
        else:
            clauses.append(f"{_ident(col)} = :w{i}")
            params[f"w{i}"] = val
    return "WHERE " + " AND ".join(clauses), params


class SQLiteDatabase:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self._conn.row_factory = sqlite3.Row

    def get_records(self, table: str, conditions: Mapping[str, Any]) -> list[sqlite3.Row]:
        where, params = _where(conditions)
        return self._conn.execute(f"SELECT * FROM {_ident(table)} {where} ORDER BY id", params).fetchall()

    def get_records_sql(self, sql: str, params: Mapping[str, Any]) -> list[sqlite3.Row]:
        return self._conn.execute(sql, dict(params)).fetchall()

    def get_field(self, table: str, field: str, conditions: Mapping[str, Any], *, must_exist: bool = False) -> Any:
        where, params = _where(conditions)
        row = self._conn.execute(f"SELECT {_ident(field)} FROM {_ident(table)} {where} LIMIT 1", params).fetchone()
        if row is None:
            if must_exist:
                raise RecordNotFoundError(table, conditions)
            return None
        return row[0]

    def delete_records(self, table: str, conditions: Mapping[str, Any]) -> int:
        """ Delete matching rows, returning the number deleted. """
        where, params = _where(conditions)
        cur = self._conn.execute(f"DELETE FROM {_ident(table)} {where}", params)
        return cur.rowcount

    def in_or_equal(self, values: Iterable[int], prefix: str = 'param') -> tuple[str, dict[str, int]]:
        """ Build an SQL fragment matching any of the given values.

        Returns e.g. ("= :param0", {...}) for a single value or
        ("IN (:param0, :param1)", {...}) for several.
        """
        values = list(values)
        if not values:
            raise ValueError("in_or_equal() requires at least one value")
        params = {f"{_ident(prefix)}{i}": val for i, val in enumerate(values)}
        if len(params) == 1:
            return f"= :{prefix}0", params
        placeholders = ", ".join(f":{name}" for name in params)
        return f"IN ({placeholders})", params
