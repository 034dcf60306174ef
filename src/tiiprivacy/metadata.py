# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

"""Declaration of the personal data stored or transmitted by the Turnitin tool."""

from dataclasses import dataclass, field
from typing import Literal

from .strings import get_string

ItemKind = Literal['database_table', 'subsystem_link', 'external_location']


@dataclass(frozen=True)
class MetadataItem:
    kind: ItemKind
    name: str
    summary: str  # string identifier
    fields: dict[str, str] = field(default_factory=dict)  # field name -> string identifier


class MetadataCollection:
    """ Accumulates metadata items declared by privacy providers. """
    def __init__(self, component: str):
        self.component = component
        self._items: list[MetadataItem] = []

    def add_database_table(self, name: str, fields: dict[str, str], summary: str) -> 'MetadataCollection':
        self._items.append(MetadataItem('database_table', name, summary, dict(fields)))
        return self

    def link_subsystem(self, name: str, summary: str) -> 'MetadataCollection':
        self._items.append(MetadataItem('subsystem_link', name, summary))
        return self

    def link_external_location(self, name: str, fields: dict[str, str], summary: str) -> 'MetadataCollection':
        self._items.append(MetadataItem('external_location', name, summary, dict(fields)))
        return self

    def get_collection(self) -> list[MetadataItem]:
        return list(self._items)

    def describe(self) -> list[dict[str, object]]:
        """ Render all items with their string identifiers resolved to text. """
        return [
            {
                'kind': item.kind,
                'name': item.name,
                'summary': get_string(item.summary),
                'fields': {name: get_string(ident) for name, ident in item.fields.items()},
            }
            for item in self._items
        ]


SUBMISSION_FIELDS = (
    'submission_title',
    'submission_filename',
    'submission_objectid',
    'submission_score',
    'submission_grade',
    'submission_attempts',
    'submission_modified',
    'submission_unanon',
    'submission_unanonreason',
    'submission_transmatch',
    'submission_hash',
)


def _fields(table: str, names: tuple[str, ...]) -> dict[str, str]:
    return {name: f"privacy:metadata:{table}:{name}" for name in names}


def get_metadata(collection: MetadataCollection) -> MetadataCollection:
    """ Append the Turnitin tool's personal data declarations to the collection. """
    collection.link_subsystem('core_files', 'privacy:metadata:core_files')

    collection.add_database_table(
        'turnitintool_users',
        _fields('turnitintool_users', ('userid', 'turnitin_uid')),
        'privacy:metadata:turnitintool_users',
    )
    collection.add_database_table(
        'turnitintool_submissions',
        _fields('turnitintool_submissions', ('userid', *SUBMISSION_FIELDS)),
        'privacy:metadata:turnitintool_submissions',
    )
    collection.add_database_table(
        'turnitintool_comments',
        _fields('turnitintool_comments', ('userid', 'commenttext')),
        'privacy:metadata:turnitintool_comments',
    )

    # Data sent to the Turnitin service itself
    collection.link_external_location(
        'turnitintool_client',
        _fields('turnitintool_client', ('email', 'firstname', 'lastname', 'submission_title', 'submission_filename')),
        'privacy:metadata:turnitintool_client',
    )

    return collection
