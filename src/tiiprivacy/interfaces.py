# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

"""Capability interfaces the privacy provider requires from its host.

The provider never reaches into the host directly.  The host supplies
objects satisfying these protocols when it constructs the provider.
"""

from collections.abc import Iterable, Mapping, Sequence
from sqlite3 import Row
from typing import Any, Protocol

from .contexts import Context, User


class Database(Protocol):
    """Generic SQL execution facility."""
    def get_records(self, table: str, conditions: Mapping[str, Any]) -> list[Row]:
        ...

    def get_records_sql(self, sql: str, params: Mapping[str, Any]) -> list[Row]:
        ...

    def get_field(self, table: str, field: str, conditions: Mapping[str, Any], *, must_exist: bool = False) -> Any:
        ...

    def delete_records(self, table: str, conditions: Mapping[str, Any]) -> int:
        ...

    def in_or_equal(self, values: Iterable[int], prefix: str = 'param') -> tuple[str, dict[str, int]]:
        ...


class ContextResolver(Protocol):
    """Context-resolution facility."""
    def get_context(self, contextid: int) -> Context:
        ...

    def module_context(self, cmid: int) -> Context:
        """Return the module-level context for a course module id."""
        ...


class ContextWriter(Protocol):
    def export_data(self, subcontext: Sequence[str], data: Mapping[str, Any]) -> None:
        ...

    def export_file(self, subcontext: Sequence[str], filename: str, content: bytes) -> None:
        ...


class ExportWriter(Protocol):
    """Generic export-writer facility."""
    def with_context(self, context: Context) -> ContextWriter:
        ...


class ExportHelper(Protocol):
    """Generic context data and file export facility."""
    def get_context_data(self, context: Context, user: User) -> dict[str, Any]:
        ...

    def export_context_files(self, context: Context, user: User) -> None:
        ...
