# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .interfaces import Database

# Host context levels
CONTEXT_SYSTEM = 10
CONTEXT_USER = 30
CONTEXT_COURSECAT = 40
CONTEXT_COURSE = 50
CONTEXT_MODULE = 70
CONTEXT_BLOCK = 80


class ContextNotFoundError(Exception):
    def __init__(self, contextid: int):
        super().__init__(f"Context not found: {contextid}")
        self.contextid = contextid


@dataclass(frozen=True)
class User:
    id: int


@dataclass(frozen=True)
class Context:
    id: int
    contextlevel: int
    instanceid: int

    @property
    def is_module(self) -> bool:
        return self.contextlevel == CONTEXT_MODULE


class ContextList:
    """ An ordered set of context ids, as located for a single user. """
    def __init__(self) -> None:
        self._contextids: dict[int, None] = {}  # dict as an insertion-ordered set

    def add_from_sql(self, db: 'Database', sql: str, params: Mapping[str, Any]) -> None:
        """ Add the context ids returned in the first column of the given query. """
        for row in db.get_records_sql(sql, params):
            self._contextids[int(row[0])] = None

    def add_contextids(self, contextids: Iterable[int]) -> None:
        for contextid in contextids:
            self._contextids[int(contextid)] = None

    def get_contextids(self) -> list[int]:
        return list(self._contextids)

    def count(self) -> int:
        return len(self._contextids)

    def __len__(self) -> int:
        return len(self._contextids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._contextids)


@dataclass(frozen=True)
class ApprovedContextList:
    """ A user-confirmed set of contexts for which export or deletion is authorized. """
    user: User
    contexts: tuple[Context, ...] = field(default=())

    def get_user(self) -> User:
        return self.user

    def get_contexts(self) -> tuple[Context, ...]:
        return self.contexts

    def get_contextids(self) -> list[int]:
        return [ctx.id for ctx in self.contexts]

    def count(self) -> int:
        return len(self.contexts)

    def __iter__(self) -> Iterator[Context]:
        return iter(self.contexts)


class SQLiteContextResolver:
    """ Resolves context handles from the host's `context` table. """
    def __init__(self, db: 'Database'):
        self._db = db

    def _from_row(self, row: Mapping[str, Any]) -> Context:
        return Context(id=row['id'], contextlevel=row['contextlevel'], instanceid=row['instanceid'])

    def get_context(self, contextid: int) -> Context:
        rows = self._db.get_records('context', {'id': contextid})
        if not rows:
            raise ContextNotFoundError(contextid)
        return self._from_row(rows[0])

    def module_context(self, cmid: int) -> Context:
        rows = self._db.get_records('context', {'contextlevel': CONTEXT_MODULE, 'instanceid': cmid})
        if not rows:
            raise ContextNotFoundError(cmid)
        return self._from_row(rows[0])

    def is_module_of_type(self, context: Context, modname: str) -> bool:
        """ Check that a context belongs to a course module of the named module type. """
        if not context.is_module:
            return False
        rows = self._db.get_records_sql("""
            SELECT cm.id
            FROM course_modules cm
            INNER JOIN modules m ON m.id = cm.module
            WHERE cm.id = :cmid AND m.name = :modname
        """, {'cmid': context.instanceid, 'modname': modname})
        return bool(rows)

    def approved_list(self, userid: int, contextids: Iterable[int]) -> ApprovedContextList:
        """ Build an approved context list for a user from raw context ids. """
        contexts = tuple(self.get_context(contextid) for contextid in contextids)
        return ApprovedContextList(User(userid), contexts)
