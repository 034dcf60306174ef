# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

from pathlib import Path

from flask import current_app

from .contexts import SQLiteContextResolver
from .db import get_records_db
from .export import JSONExportWriter, SQLiteExportHelper
from .provider import TurnitinToolProvider


def build_provider(writer: JSONExportWriter | None = None) -> TurnitinToolProvider:
    """ Wire a provider to the current app context's database.
    Exports go to the configured EXPORT_DIR unless a writer is given.
    """
    records = get_records_db()
    if writer is None:
        writer = JSONExportWriter(Path(current_app.config['EXPORT_DIR']))
    return TurnitinToolProvider(
        db=records,
        contexts=SQLiteContextResolver(records),
        writer=writer,
        helper=SQLiteExportHelper(records, writer),
    )
