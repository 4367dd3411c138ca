# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Extract control metadata from Debian binary packages.

The package archive is walked one member at a time; the control tarball is
decompressed on the fly and its ./control file parsed into a DebPackage. The
data payload is never decompressed.
"""

import os
import logging
from typing import Optional

logger = logging.getLogger('debinfo')
# allow 'DEBUG' env var to override 'DEBINFO_LOG_LEVEL'
if 'DEBUG' in os.environ.keys():
    level = 'debug'
else:
    level = os.getenv('DEBINFO_LOG_LEVEL', '').lower()

if level == 'info':
    loglevel = logging.INFO
elif level == 'debug':
    loglevel = logging.DEBUG
elif level in ('', 'warn', 'warning'):
    loglevel = logging.WARNING
elif level in ('err', 'error', 'fatal'):
    loglevel = logging.ERROR
else:
    loglevel = logging.WARNING
logging.basicConfig(
    format='%(asctime)s - [%(levelname)-7s] ' +
           '%(filename)s:%(lineno)d %(message)s',
    level=loglevel)


class DebInfoError(Exception):
    pass


class SourceError(DebInfoError):
    """package file could not be opened or stat'ed"""

    def __init__(self, msg: str, path: str):
        super().__init__(msg)
        self.path = path


class ArchiveError(DebInfoError):
    pass


class ControlMemberError(DebInfoError):
    """failure decompressing or scanning a control.tar.* member"""

    def __init__(self, msg: str, member: str, codec: Optional[str] = None):
        super().__init__(msg)
        self.member = member
        self.codec = codec


class ControlFieldError(DebInfoError):
    def __init__(self, msg: str, field: str, value: str):
        super().__init__(msg)
        self.field = field
        self.value = value


from .package import DebPackage  # noqa: E402
from .control import parse_control  # noqa: E402
from .compression import Codec, codec_for  # noqa: E402
from .deb import parse, parse_file  # noqa: E402

__all__ = [
    'DebInfoError', 'SourceError', 'ArchiveError', 'ControlMemberError',
    'ControlFieldError', 'DebPackage', 'Codec', 'codec_for',
    'parse_control', 'parse', 'parse_file',
]
