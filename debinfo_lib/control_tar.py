# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

import io
import tarfile
from typing import BinaryIO

from . import logger
from .control import parse_control
from .package import DebPackage

CONTROL_MEMBER = "./control"


def parse_control_tar(package: DebPackage, fileobj: BinaryIO) -> bool:
    """scan the (decompressed) control tarball for ./control and parse it
    into <package> -> True if ./control was found

    The tarball is read as a stream, front to back. A tarball without a
    ./control member, or an empty stream, leaves <package> untouched.
    tarfile.TarError and the stream's own read errors propagate to the
    caller.
    """
    stream = io.BufferedReader(fileobj)  # type: ignore[arg-type]
    if stream.peek(1) == b"":
        return False

    with tarfile.open(fileobj=stream, mode="r|") as tar:
        for member in tar:
            if member.name != CONTROL_MEMBER:
                continue

            logger.debug(f'found {member.name} ({member.size} bytes)')
            if not member.isfile():
                logger.warning(f'{member.name} is not a regular file')
                return True

            fob = tar.extractfile(member)
            assert fob is not None
            with fob:
                control = fob.read(member.size)

            parse_control(control, package)
            return True

    return False
