# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

import sqlite3

import pytest

from tiiprivacy.records import InvalidIdentifierError, RecordNotFoundError, SQLiteDatabase


def test_get_records(db: SQLiteDatabase) -> None:
    rows = db.get_records('turnitintool_submissions', {'turnitintoolid': 1, 'userid': 100})
    assert [row['id'] for row in rows] == [1, 2]

    assert db.get_records('turnitintool_submissions', {'userid': 999}) == []
    assert db.get_records('turnitintool_submissions', {'submission_unanonreason': None, 'userid': 100}) != []


def test_get_field(db: SQLiteDatabase) -> None:
    assert db.get_field('course_modules', 'instance', {'id': 11}) == 2
    assert db.get_field('course_modules', 'instance', {'id': 999}) is None

    with pytest.raises(RecordNotFoundError) as e:
        db.get_field('course_modules', 'instance', {'id': 999}, must_exist=True)
    assert e.value.table == 'course_modules'
    assert e.value.conditions == {'id': 999}


def test_delete_records(db: SQLiteDatabase) -> None:
    assert db.delete_records('turnitintool_comments', {'submissionid': 1}) == 2
    assert db.delete_records('turnitintool_comments', {'submissionid': 1}) == 0
    assert db.get_records('turnitintool_comments', {'submissionid': 3}) != []


def test_delete_parent_before_children_fails(db: SQLiteDatabase) -> None:
    with pytest.raises(sqlite3.IntegrityError):
        db.delete_records('turnitintool_submissions', {'id': 1})


def test_in_or_equal(db: SQLiteDatabase) -> None:
    assert db.in_or_equal([5]) == ("= :param0", {'param0': 5})
    sql, params = db.in_or_equal([5, 6, 7], prefix='ctx')
    assert sql == "IN (:ctx0, :ctx1, :ctx2)"
    assert params == {'ctx0': 5, 'ctx1': 6, 'ctx2': 7}

    rows = db.get_records_sql(f"SELECT id FROM context WHERE id {sql} ORDER BY id", {'ctx0': 20, 'ctx1': 22, 'ctx2': 999})
    assert [row['id'] for row in rows] == [20, 22]

    with pytest.raises(ValueError):
        db.in_or_equal([])


@pytest.mark.parametrize('name', ['users; DROP TABLE context', 'a b', '1table', ''])
def test_invalid_identifiers(db: SQLiteDatabase, name: str) -> None:
    with pytest.raises(InvalidIdentifierError):
        db.get_records(name, {})
    with pytest.raises(InvalidIdentifierError):
        db.delete_records('turnitintool_comments', {name: 1})
