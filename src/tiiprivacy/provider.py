# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

"""Privacy provider for the Turnitin tool.

Locates, exports, and deletes the personal data held in the turnitintool
tables.  None of these operations commit; the caller owns the transaction.
"""

import logging
from typing import Any

from .contexts import (
    CONTEXT_MODULE,
    ApprovedContextList,
    Context,
    ContextList,
    User,
)
from .interfaces import ContextResolver, Database, ExportHelper, ExportWriter
from .metadata import SUBMISSION_FIELDS, MetadataCollection, get_metadata

logger = logging.getLogger(__name__)

MODULE_NAME = 'turnitintool'


class TurnitinToolProvider:
    def __init__(self, db: Database, contexts: ContextResolver, writer: ExportWriter, helper: ExportHelper):
        self._db = db
        self._contexts = contexts
        self._writer = writer
        self._helper = helper

    @staticmethod
    def get_metadata(collection: MetadataCollection) -> MetadataCollection:
        return get_metadata(collection)

    def get_contexts_for_userid(self, userid: int) -> ContextList:
        """ Return the module contexts in which the user has at least one submission. """
        sql = """
            SELECT DISTINCT c.id
            FROM context c
            INNER JOIN course_modules cm ON cm.id = c.instanceid AND c.contextlevel = :contextlevel
            INNER JOIN modules m ON m.id = cm.module AND m.name = :modname
            INNER JOIN turnitintool t ON t.id = cm.instance
            LEFT JOIN turnitintool_submissions ts ON ts.turnitintoolid = t.id
            WHERE ts.userid = :userid
            ORDER BY c.id
        """
        params = {
            'contextlevel': CONTEXT_MODULE,
            'modname': MODULE_NAME,
            'userid': userid,
        }

        contextlist = ContextList()
        contextlist.add_from_sql(self._db, sql, params)
        logger.debug("Found %d contexts for user %s", contextlist.count(), userid)
        return contextlist

    def export_user_data(self, contextlist: ApprovedContextList) -> None:
        """ Export the user's submissions in each approved context. """
        if not contextlist.count():
            return

        user = contextlist.get_user()
        contextsql, contextparams = self._db.in_or_equal(contextlist.get_contextids(), prefix='ctx')

        submission_cols = ",\n                ".join(f"ts.{name}" for name in SUBMISSION_FIELDS)
        sql = f"""
            SELECT cm.id AS cmid,
                ts.id AS submissionid,
                ts.submission_part,
                {submission_cols},
                tu.turnitin_uid
            FROM context c
            INNER JOIN course_modules cm ON cm.id = c.instanceid AND c.contextlevel = :contextlevel
            INNER JOIN modules m ON m.id = cm.module AND m.name = :modname
            INNER JOIN turnitintool t ON t.id = cm.instance
            LEFT JOIN turnitintool_submissions ts ON ts.turnitintoolid = t.id
            LEFT JOIN turnitintool_users tu ON ts.userid = tu.userid
            WHERE c.id {contextsql}
              AND ts.userid = :userid
            ORDER BY cm.id, ts.id
        """
        params = {
            'contextlevel': CONTEXT_MODULE,
            'modname': MODULE_NAME,
            'userid': user.id,
        } | contextparams

        exported_files: set[int] = set()
        for row in self._db.get_records_sql(sql, params):
            context = self._contexts.module_context(row['cmid'])
            self._export_submission(dict(row), context, user)

            # Generic files belong to the context, not to a submission
            if context.id not in exported_files:
                self._helper.export_context_files(context, user)
                exported_files.add(context.id)

    def _export_submission(self, submission: dict[str, Any], context: Context, user: User) -> None:
        contextdata = self._helper.get_context_data(context, user)
        # submission fields take precedence over same-named generic fields
        record = contextdata | submission
        subcontext = ['Submissions', str(submission['submissionid'])]
        self._writer.with_context(context).export_data(subcontext, record)

    def _delete_submissions(self, instanceid: int, conditions: dict[str, Any]) -> None:
        """ Delete comments, then the submissions they belong to. """
        submissions = self._db.get_records('turnitintool_submissions', conditions)
        num_comments = 0
        for submission in submissions:
            num_comments += self._db.delete_records('turnitintool_comments', {'submissionid': submission['id']})

        num_submissions = self._db.delete_records('turnitintool_submissions', conditions)
        logger.info(
            "Deleted %d submissions and %d comments from turnitintool %s",
            num_submissions, num_comments, instanceid
        )

    def delete_data_for_all_users_in_context(self, context: Context | None) -> None:
        if context is None:
            return

        if not context.is_module:
            return

        instanceid = self._db.get_field('course_modules', 'instance', {'id': context.instanceid}, must_exist=True)
        self._delete_submissions(instanceid, {'turnitintoolid': instanceid})

    def delete_data_for_user(self, contextlist: ApprovedContextList) -> None:
        """ Delete the user's submissions and comments in each approved context.

        Processing stops at the first context that is not a module context;
        any contexts after it in the list are left untouched.
        """
        if not contextlist.count():
            return

        userid = contextlist.get_user().id
        for context in contextlist.get_contexts():
            if not context.is_module:
                logger.warning(
                    "Stopped deleting data for user %s at non-module context %s",
                    userid, context.id
                )
                return

            instanceid = self._db.get_field('course_modules', 'instance', {'id': context.instanceid}, must_exist=True)
            self._delete_submissions(instanceid, {'turnitintoolid': instanceid, 'userid': userid})
