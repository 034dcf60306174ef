# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

import datetime as dt
import tempfile
from pathlib import Path

import click
from flask import current_app
from flask.app import Flask
from flask.cli import AppGroup

from .contexts import ContextNotFoundError, SQLiteContextResolver
from .db import get_db, get_records_db
from .export import JSONExportWriter
from .host import build_provider
from .metadata import MetadataCollection
from .provider import MODULE_NAME, TurnitinToolProvider

privacy_cli = AppGroup('privacy', help="Locate, export, and delete personal data held by the Turnitin tool.")


@privacy_cli.command('metadata')
def metadata_command() -> None:
    """Describe the personal data stored by the Turnitin tool."""
    collection = TurnitinToolProvider.get_metadata(MetadataCollection('mod_turnitintool'))
    for item in collection.describe():
        click.secho(f"{item['name']} ({item['kind']})", bold=True)
        click.echo(f"  {item['summary']}")
        for name, text in item['fields'].items():  # type: ignore[attr-defined]
            click.echo(f"    {name}: {text}")


@privacy_cli.command('contexts')
@click.argument('userid', type=int)
def contexts_command(userid: int) -> None:
    """List the contexts in which a user has data."""
    contextlist = build_provider().get_contexts_for_userid(userid)
    if not contextlist.count():
        click.echo(f"No data found for user {userid}.")
        return
    for contextid in contextlist:
        click.echo(contextid)


@privacy_cli.command('export')
@click.argument('userid', type=int)
@click.argument('contextids', type=int, nargs=-1)
def export_command(userid: int, contextids: tuple[int, ...]) -> None:
    """Export a user's data from the given contexts to an archive."""
    try:
        approved = SQLiteContextResolver(get_records_db()).approved_list(userid, contextids)
    except ContextNotFoundError as e:
        click.secho(f"Error: {e}", fg='red')
        return

    export_dir = Path(current_app.config['EXPORT_DIR'])
    export_dir.mkdir(parents=True, exist_ok=True)
    timestamp = dt.datetime.now().strftime("%Y%m%d%H%M%S")
    target = export_dir / f"{timestamp}_user{userid}_export.zip"

    with tempfile.TemporaryDirectory() as staging:
        writer = JSONExportWriter(Path(staging))
        build_provider(writer).export_user_data(approved)
        output = writer.finalise(target, current_app.config.get('AGE_PUBLIC_KEY'))

    click.secho(f"Exported data for user {userid} to {output}", fg='green')


@privacy_cli.command('delete-user')
@click.argument('userid', type=int)
@click.argument('contextids', type=int, nargs=-1)
def delete_user_command(userid: int, contextids: tuple[int, ...]) -> None:
    """Delete a user's data in the given contexts."""
    resolver = SQLiteContextResolver(get_records_db())
    try:
        approved = resolver.approved_list(userid, contextids)
    except ContextNotFoundError as e:
        click.secho(f"Error: {e}", fg='red')
        return

    # Only contexts of this tool's course modules may be erased
    foreign = [ctx.id for ctx in approved.get_contexts() if not resolver.is_module_of_type(ctx, MODULE_NAME)]
    if foreign:
        click.secho(f"Error: not {MODULE_NAME} contexts: {', '.join(map(str, foreign))}", fg='red')
        return

    build_provider().delete_data_for_user(approved)
    get_db().commit()
    click.secho(f"Deleted data for user {userid}.", fg='green')


@privacy_cli.command('delete-context')
@click.argument('contextid', type=int)
def delete_context_command(contextid: int) -> None:
    """Delete all users' data in a context."""
    resolver = SQLiteContextResolver(get_records_db())
    try:
        context = resolver.get_context(contextid)
    except ContextNotFoundError as e:
        click.secho(f"Error: {e}", fg='red')
        return

    if not resolver.is_module_of_type(context, MODULE_NAME):
        click.secho(f"Error: not a {MODULE_NAME} context: {contextid}", fg='red')
        return

    build_provider().delete_data_for_all_users_in_context(context)
    get_db().commit()
    click.secho(f"Deleted all data in context {contextid}.", fg='green')


def init_app(app: Flask) -> None:
    app.cli.add_command(privacy_cli)
