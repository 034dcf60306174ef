# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

# English text for privacy metadata string identifiers
STRINGS: dict[str, str] = {
    'privacy:metadata:core_files': 'Turnitin Assignment stores files which have been uploaded to the host to form a Turnitin submission.',

    'privacy:metadata:turnitintool_users': 'Information that links a user to their account on Turnitin.',
    'privacy:metadata:turnitintool_users:userid': 'The ID of the user.',
    'privacy:metadata:turnitintool_users:turnitin_uid': 'The Turnitin ID of the user.',

    'privacy:metadata:turnitintool_submissions': 'Information about the user\'s submissions to Turnitin.',
    'privacy:metadata:turnitintool_submissions:userid': 'The ID of the user who made the submission.',
    'privacy:metadata:turnitintool_submissions:submission_title': 'The title of the submission.',
    'privacy:metadata:turnitintool_submissions:submission_filename': 'The name of the uploaded file.',
    'privacy:metadata:turnitintool_submissions:submission_objectid': 'The Turnitin ID of the submission.',
    'privacy:metadata:turnitintool_submissions:submission_score': 'The similarity score of the submission.',
    'privacy:metadata:turnitintool_submissions:submission_grade': 'The grade given to the submission.',
    'privacy:metadata:turnitintool_submissions:submission_attempts': 'The number of times the submission has been made.',
    'privacy:metadata:turnitintool_submissions:submission_modified': 'A timestamp of when the submission was last modified.',
    'privacy:metadata:turnitintool_submissions:submission_unanon': 'Whether the submission has been unanonymised.',
    'privacy:metadata:turnitintool_submissions:submission_unanonreason': 'The reason given for unanonymising the submission.',
    'privacy:metadata:turnitintool_submissions:submission_transmatch': 'Whether the submission was checked against translated sources.',
    'privacy:metadata:turnitintool_submissions:submission_hash': 'A hash identifying the submission.',

    'privacy:metadata:turnitintool_comments': 'Comments left on submissions.',
    'privacy:metadata:turnitintool_comments:userid': 'The ID of the user who left the comment.',
    'privacy:metadata:turnitintool_comments:commenttext': 'The text of the comment.',

    'privacy:metadata:turnitintool_client': 'To integrate with Turnitin, some user data needs to be sent to the Turnitin service.',
    'privacy:metadata:turnitintool_client:email': 'The user\'s email address, sent to Turnitin to create a user account.',
    'privacy:metadata:turnitintool_client:firstname': 'The user\'s first name, sent to Turnitin to create a user account.',
    'privacy:metadata:turnitintool_client:lastname': 'The user\'s last name, sent to Turnitin to create a user account.',
    'privacy:metadata:turnitintool_client:submission_title': 'The title of the submission, sent to Turnitin for identification.',
    'privacy:metadata:turnitintool_client:submission_filename': 'The name of the submitted file, sent to Turnitin for identification.',
}


def get_string(identifier: str) -> str:
    """ Look up English text for an identifier, falling back to the identifier itself. """
    return STRINGS.get(identifier, identifier)
