# SPDX-FileCopyrightText: 2026 The tiiprivacy Authors
#
# SPDX-License-Identifier: AGPL-3.0-only

from .base import create_app
from .contexts import ApprovedContextList, Context, ContextList, User
from .metadata import MetadataCollection, get_metadata
from .provider import TurnitinToolProvider

__all__ = [
    'ApprovedContextList',
    'Context',
    'ContextList',
    'MetadataCollection',
    'TurnitinToolProvider',
    'User',
    'create_app',
    'get_metadata',
]
