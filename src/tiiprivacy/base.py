# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

import logging
import logging.config
import os
from pathlib import Path
from typing import Any

import pyrage
from dotenv import load_dotenv
from flask import Flask

from . import cli, db


class InvalidAGEKeyError(Exception):
    def __init__(self, varname: str):
        super().__init__(f"Invalid key provided in {varname}.  Must be an Age public key or an SSH public key.")


def _init_logging(*, testing: bool) -> None:
    """ Configure logging before Flask sets up its own default handler. """
    if not testing:
        logging.config.dictConfig({
            'version': 1,
            'formatters': {'default': {
                'format': '[%(asctime)s] %(levelname)s in %(module)s: %(message)s',
            }},
            'handlers': {'wsgi': {
                'class': 'logging.StreamHandler',
                'stream': 'ext://flask.logging.wsgi_errors_stream',
                'formatter': 'default'
            }},
            'root': {
                'level': 'INFO',
                'handlers': ['wsgi']
            },
        })
    else:
        # For testing/debugging, ensure DEBUG level logging.
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("DEBUG logging enabled.")


def _config_app(app: Flask, app_config: dict[str, Any]) -> None:
    base_config = dict(
        DATABASE=os.path.join(app.instance_path, app_config.get('DATABASE_NAME', 'tiiprivacy.db')),
        EXPORT_DIR=os.path.join(app.instance_path, 'exports'),
        AGE_PUBLIC_KEY=None,
    )

    # Optional variables:
    #  - AGE_PUBLIC_KEY: used to encrypt data exports
    varname = "AGE_PUBLIC_KEY"
    try:
        env_var = os.environ[varname]
        # test the key
        if env_var.startswith('ssh'):
            pyrage.ssh.Recipient.from_str(env_var)
        else:
            pyrage.x25519.Recipient.from_str(env_var)
        base_config[varname] = env_var
    except pyrage.RecipientError as e:
        raise InvalidAGEKeyError(varname) from e
    except KeyError:
        app.logger.warning(f"{varname} environment variable not set.  Data exports will not be encrypted.")

    # build total configuration
    total_config = base_config | app_config
    app.config.from_mapping(total_config)


def create_app(test_config: dict[str, Any] | None = None, instance_path: Path | None = None) -> Flask:
    ''' Flask app factory.  Create and configure the host application. '''
    # load config values from .env file
    load_dotenv()

    if instance_path is None:
        instance_path = Path(os.environ.get("FLASK_INSTANCE_PATH", "instance"))
    # Flask() requires an absolute instance path
    instance_path = instance_path.resolve()
    instance_path.mkdir(parents=True, exist_ok=True)

    app = Flask(__name__, instance_path=str(instance_path), instance_relative_config=True)

    app_config: dict[str, Any] = dict(
        APPLICATION_TITLE='Turnitin Tool Privacy',
        DATABASE_NAME='tiiprivacy.db',
    )
    # load test config if provided, potentially overriding above config
    if test_config is not None:
        app_config = app_config | test_config

    _init_logging(testing=app.debug or app_config.get("TESTING", False))
    _config_app(app, app_config)

    db.init_app(app)
    cli.init_app(app)

    return app
