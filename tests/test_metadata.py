# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

from tiiprivacy.metadata import MetadataCollection, get_metadata
from tiiprivacy.provider import TurnitinToolProvider
from tiiprivacy.strings import STRINGS


def _items_by_name(collection: MetadataCollection) -> dict:
    return {item.name: item for item in collection.get_collection()}


def test_get_metadata_returns_same_collection() -> None:
    collection = MetadataCollection('mod_turnitintool')
    assert get_metadata(collection) is collection
    assert TurnitinToolProvider.get_metadata(MetadataCollection('mod_turnitintool')).get_collection() == collection.get_collection()


def test_get_metadata_appends_to_existing_items() -> None:
    collection = MetadataCollection('mod_turnitintool')
    collection.link_subsystem('core_grades', 'privacy:metadata:core_grades')
    get_metadata(collection)

    items = collection.get_collection()
    assert items[0].name == 'core_grades'
    assert len(items) == 6


def test_metadata_declares_tables_and_locations() -> None:
    items = _items_by_name(get_metadata(MetadataCollection('mod_turnitintool')))

    assert items['core_files'].kind == 'subsystem_link'
    assert items['turnitintool_client'].kind == 'external_location'
    for table in ('turnitintool_users', 'turnitintool_submissions', 'turnitintool_comments'):
        assert items[table].kind == 'database_table'
        assert items[table].summary == f'privacy:metadata:{table}'

    assert list(items['turnitintool_users'].fields) == ['userid', 'turnitin_uid']
    assert list(items['turnitintool_comments'].fields) == ['userid', 'commenttext']
    assert list(items['turnitintool_client'].fields) == ['email', 'firstname', 'lastname', 'submission_title', 'submission_filename']

    submission_fields = items['turnitintool_submissions'].fields
    assert len(submission_fields) == 12
    assert submission_fields['submission_hash'] == 'privacy:metadata:turnitintool_submissions:submission_hash'


def test_every_identifier_has_text() -> None:
    collection = get_metadata(MetadataCollection('mod_turnitintool'))
    for item in collection.get_collection():
        assert item.summary in STRINGS
        for ident in item.fields.values():
            assert ident in STRINGS, ident

    described = collection.describe()
    assert described[0]['summary'] == STRINGS['privacy:metadata:core_files']
    assert not any(str(d['summary']).startswith('privacy:') for d in described)
