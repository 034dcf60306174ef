# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

"""Reference export writer and helper used by the host application.

Exported data is written as JSON files in a directory tree, one directory
per context, and can be bundled into a zip archive that is optionally
encrypted with an Age or SSH public key.
"""

import json
import logging
import zipfile
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pyrage

from .contexts import Context, User
from .interfaces import Database, ExportWriter

logger = logging.getLogger(__name__)

COMPONENT = 'mod_turnitintool'
INTRO_FILEAREA = 'intro'


def _safe_part(part: str) -> str:
    """ Make a subcontext name safe to use as a single path component. """
    cleaned = "".join(c if c.isalnum() or c in " -_." else "_" for c in part).strip(" .")
    return cleaned or "_"


def encrypt_file(source: Path, target: Path, pubkey: str) -> None:
    """Encrypt a file using the given Age or SSH public key"""
    recipient: pyrage.ssh.Recipient | pyrage.x25519.Recipient
    if pubkey.startswith('ssh'):
        recipient = pyrage.ssh.Recipient.from_str(pubkey)
    else:
        recipient = pyrage.x25519.Recipient.from_str(pubkey)
    pyrage.encrypt_file(str(source), str(target), [recipient])


class JSONContextWriter:
    def __init__(self, root: Path):
        self._root = root

    def _path(self, subcontext: Sequence[str]) -> Path:
        path = self._root.joinpath(*(_safe_part(p) for p in subcontext))
        path.mkdir(parents=True, exist_ok=True)
        return path

    def export_data(self, subcontext: Sequence[str], data: Mapping[str, Any]) -> None:
        target = self._path(subcontext) / 'data.json'
        with target.open('w', encoding='utf-8') as f:
            json.dump(dict(data), f, indent=2, default=str)

    def export_file(self, subcontext: Sequence[str], filename: str, content: bytes) -> None:
        target = self._path(subcontext) / _safe_part(filename)
        target.write_bytes(content)


class JSONExportWriter:
    def __init__(self, export_dir: Path):
        self.export_dir = Path(export_dir)

    def with_context(self, context: Context) -> JSONContextWriter:
        return JSONContextWriter(self.export_dir / f"context_{context.id}")

    def finalise(self, target: Path, pubkey: str | None = None) -> Path:
        """ Zip the export tree into target, encrypting it if a public key is given.
        Returns the path of the file written (with an '.age' suffix if encrypted).
        """
        target = Path(target)
        zip_path = target.with_suffix('.tmp') if pubkey else target
        with zipfile.ZipFile(zip_path, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            if self.export_dir.exists():
                for path in sorted(self.export_dir.rglob('*')):
                    if path.is_file():
                        zf.write(path, path.relative_to(self.export_dir))

        if not pubkey:
            logger.warning("Creating data export *without* encryption - no public key configured.")
            return target

        encrypted = target.with_name(target.name + '.age')
        try:
            encrypt_file(zip_path, encrypted, pubkey)
        finally:
            zip_path.unlink()  # Clean up temp file
        return encrypted


class SQLiteExportHelper:
    """ Supplies generic context data and context files from the host tables. """
    def __init__(self, db: Database, writer: ExportWriter):
        self._db = db
        self._writer = writer

    def get_context_data(self, context: Context, user: User) -> dict[str, Any]:
        rows = self._db.get_records_sql("""
            SELECT t.name,
                t.intro,
                m.name AS modulename,
                co.fullname AS course
            FROM course_modules cm
            INNER JOIN modules m ON m.id = cm.module
            INNER JOIN turnitintool t ON t.id = cm.instance
            LEFT JOIN course co ON co.id = cm.course
            WHERE cm.id = :cmid
        """, {'cmid': context.instanceid})
        if not rows:
            return {}
        return dict(rows[0])

    def export_context_files(self, context: Context, user: User) -> None:
        files = self._db.get_records('files', {
            'contextid': context.id,
            'component': COMPONENT,
            'filearea': INTRO_FILEAREA,
            'itemid': 0,
        })
        contextwriter = self._writer.with_context(context)
        for file in files:
            contextwriter.export_file([INTRO_FILEAREA], file['filename'], file['content'])
