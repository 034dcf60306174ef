# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskCliRunner

import tiiprivacy
from tiiprivacy.db import get_db, init_db
from tiiprivacy.export import JSONExportWriter
from tiiprivacy.host import build_provider
from tiiprivacy.provider import TurnitinToolProvider
from tiiprivacy.records import SQLiteDatabase

# Load test DB data
test_sql = Path(__file__).parent / 'test_data.sql'
with test_sql.open('rb') as f:
    _test_data_sql = f.read().decode('utf8')


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch) -> Generator[Flask]:
    """ Provides an application object with a freshly initialized and
    populated database in a temporary instance directory.
    """
    monkeypatch.delenv('AGE_PUBLIC_KEY', raising=False)

    with tempfile.TemporaryDirectory() as temp_dir:
        instance_path = Path(temp_dir)

        app = tiiprivacy.create_app(
            test_config={
                'TESTING': True,
                'DATABASE': str(instance_path / 'test.db'),
                'EXPORT_DIR': str(instance_path / 'exports'),
            },
            instance_path=instance_path,
        )

        with app.app_context():
            init_db()
            get_db().executescript(_test_data_sql)

        yield app
        # Directory cleanup happens automatically when the context manager exits


@pytest.fixture
def runner(app: Flask) -> FlaskCliRunner:
    return app.test_cli_runner()


@pytest.fixture
def db(app: Flask) -> Generator[SQLiteDatabase]:
    with app.app_context():
        yield SQLiteDatabase(get_db())


@pytest.fixture
def provider(app: Flask, tmp_path: Path) -> Generator[TurnitinToolProvider]:
    """ A provider wired to the test database, exporting into tmp_path. """
    with app.app_context():
        yield build_provider(JSONExportWriter(tmp_path))
