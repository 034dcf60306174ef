# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

"""Provider behavior against mocked host collaborators."""

import sqlite3
from unittest.mock import MagicMock

import pytest

from tiiprivacy.contexts import CONTEXT_MODULE, ApprovedContextList, Context, SQLiteContextResolver, User
from tiiprivacy.provider import TurnitinToolProvider
from tiiprivacy.records import SQLiteDatabase

ESSAY1 = Context(20, CONTEXT_MODULE, 10)
ESSAY2 = Context(21, CONTEXT_MODULE, 11)


@pytest.fixture
def mocked(db: SQLiteDatabase) -> tuple[TurnitinToolProvider, MagicMock, MagicMock]:
    writer = MagicMock()
    helper = MagicMock()
    helper.get_context_data.return_value = {
        'name': 'Generic activity name',
        'intro': 'Generic intro',
        'submission_title': 'generic value that must be overridden',
    }
    provider = TurnitinToolProvider(db, SQLiteContextResolver(db), writer, helper)
    return provider, writer, helper


def test_empty_contextlist_makes_no_calls(mocked) -> None:
    provider, writer, helper = mocked
    db = MagicMock()
    provider = TurnitinToolProvider(db, MagicMock(), writer, helper)

    provider.export_user_data(ApprovedContextList(User(100)))
    provider.delete_data_for_user(ApprovedContextList(User(100)))

    db.assert_not_called()
    assert db.method_calls == []
    assert writer.method_calls == []
    assert helper.method_calls == []


def test_export_merges_generic_and_submission_fields(mocked) -> None:
    provider, writer, helper = mocked

    provider.export_user_data(ApprovedContextList(User(100), (ESSAY1,)))

    writer.with_context.assert_called_with(ESSAY1)
    export_calls = writer.with_context.return_value.export_data.call_args_list
    assert len(export_calls) == 2

    subcontext, record = export_calls[0].args
    assert subcontext == ['Submissions', '1']
    assert record['name'] == 'Generic activity name'
    assert record['intro'] == 'Generic intro'
    assert record['submission_title'] == 'Essay on rhetoric'
    assert record['submission_score'] == 12
    assert record['turnitin_uid'] == 5001

    helper.get_context_data.assert_called_with(ESSAY1, User(100))
    helper.export_context_files.assert_called_once_with(ESSAY1, User(100))


def test_export_only_approved_contexts(mocked) -> None:
    provider, writer, helper = mocked

    # user 100 has data in contexts 20, 21, and 22
    provider.export_user_data(ApprovedContextList(User(100), (ESSAY2,)))

    assert [c.args for c in writer.with_context.call_args_list] == [(ESSAY2,)]
    assert [c.args for c in helper.export_context_files.call_args_list] == [(ESSAY2, User(100))]


def test_export_query_errors_propagate(mocked) -> None:
    _, writer, helper = mocked
    db = MagicMock()
    db.in_or_equal.return_value = ("= :ctx0", {'ctx0': 20})
    db.get_records_sql.side_effect = sqlite3.OperationalError("no such table: turnitintool")
    provider = TurnitinToolProvider(db, MagicMock(), writer, helper)

    with pytest.raises(sqlite3.OperationalError):
        provider.export_user_data(ApprovedContextList(User(100), (ESSAY1,)))
    assert writer.method_calls == []


def test_delete_removes_comments_before_submissions() -> None:
    db = MagicMock()
    db.get_field.return_value = 1
    db.get_records.return_value = [{'id': 1}, {'id': 2}]
    db.delete_records.return_value = 0
    provider = TurnitinToolProvider(db, MagicMock(), MagicMock(), MagicMock())

    provider.delete_data_for_user(ApprovedContextList(User(100), (ESSAY1,)))

    db.get_field.assert_called_once_with('course_modules', 'instance', {'id': 10}, must_exist=True)
    assert [c.args for c in db.delete_records.call_args_list] == [
        ('turnitintool_comments', {'submissionid': 1}),
        ('turnitintool_comments', {'submissionid': 2}),
        ('turnitintool_submissions', {'turnitintoolid': 1, 'userid': 100}),
    ]
