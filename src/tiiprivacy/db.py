# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

import sqlite3
import time
from datetime import date, datetime
from importlib import resources

import click
from flask import current_app, g
from flask.app import Flask

from .records import SQLiteDatabase


# https://docs.python.org/3/library/sqlite3.html#sqlite3-adapter-converter-recipes
# Register adapters going from date/datetime to text (going into SQLite).
def adapt_date_iso(val: date) -> str:
    """Adapt datetime.date to ISO 8601 date."""
    return val.isoformat()

def adapt_datetime_iso(val: datetime) -> str:
    """Adapt datetime.datetime to timezone-naive ISO 8601 date."""
    return val.isoformat()

sqlite3.register_adapter(date, adapt_date_iso)
sqlite3.register_adapter(datetime, adapt_datetime_iso)


class TimingConnection(sqlite3.Connection):
    """A Connection subclass that logs query execution times when in debug mode."""
    def execute(self, sql: str, *args, **kwargs) -> sqlite3.Cursor:  # type: ignore[no-untyped-def]
        start = time.perf_counter()
        try:
            result = super().execute(sql, *args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            current_app.logger.debug("Query took %.3fs: %s", elapsed, sql)
        return result


def get_db() -> sqlite3.Connection:
    if 'db' not in g:
        connection_class = TimingConnection if current_app.debug else sqlite3.Connection
        db = sqlite3.connect(
            current_app.config['DATABASE'],
            detect_types=sqlite3.PARSE_DECLTYPES,
            factory=connection_class
        )
        db.row_factory = sqlite3.Row
        db.execute("PRAGMA busy_timeout = 5000")   # to avoid immediate errors on some blocked writes
        db.execute("PRAGMA foreign_keys = ON")
        g.db = db

    assert isinstance(g.db, sqlite3.Connection)
    return g.db


def get_records_db() -> SQLiteDatabase:
    """ Wrap the current connection in a data-access handle for the provider. """
    return SQLiteDatabase(get_db())


def close_db(_e: BaseException | None = None) -> None:
    db = g.pop('db', None)

    if db is not None:
        db.close()


def init_db() -> None:
    db = get_db()

    schema_res = resources.files(__package__).joinpath('schema.sql')
    with resources.as_file(schema_res) as file_path, file_path.open(encoding="utf-8") as f:
        db.executescript(f.read())

    db.commit()


@click.command('initdb')
def init_db_command() -> None:
    """Clear the existing data and create new tables."""
    init_db()
    click.echo('Initialized the database.')


def init_app(app: Flask) -> None:
    app.teardown_appcontext(close_db)
    app.cli.add_command(init_db_command)
