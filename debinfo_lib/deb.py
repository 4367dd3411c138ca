# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""
This module walks the top level members of a Debian binary package and
collects its control metadata into a DebPackage.
"""
import io
import os
import tarfile
from datetime import datetime, timezone
from typing import BinaryIO, Optional, Union

from debian import arfile

from . import (
    ArchiveError, ControlMemberError, DebInfoError, SourceError, logger)
from .compression import GZIP, XZ, ZSTD, Codec
from .control_tar import parse_control_tar
from .package import DebPackage

AnyPath = Union[str, os.PathLike]

DEBIAN_BINARY = "debian-binary"
CONTROL_MEMBERS: dict[str, Codec] = {
    "control.tar.gz": GZIP,
    "control.tar.xz": XZ,
    "control.tar.zst": ZSTD,
}
DATA_MEMBERS = ("data.tar.gz", "data.tar.xz", "data.tar.zst")


def str_path(p: AnyPath) -> str:
    p = os.fspath(p)
    assert isinstance(p, str)
    return p


class MemberReader(io.RawIOBase):
    """Read-only view of one ar member's body.

    Reads never go past the member's declared size, so the next member's
    header is left in place. Closing the view leaves the archive open.
    """

    def __init__(self, fileobj: BinaryIO, size: int):
        super().__init__()
        self.fileobj = fileobj
        self.remaining = size

    def readable(self) -> bool:
        return True

    def read(self, size: Optional[int] = -1) -> bytes:
        if self.closed:
            raise ValueError("I/O operation on closed member")
        if size is None or size < 0 or size > self.remaining:
            size = self.remaining
        if not size:
            return b""

        buf = self.fileobj.read(size)
        self.remaining -= len(buf)
        return buf

    def readinto(self, b) -> int:  # type: ignore[override]
        data = self.read(len(b))
        b[:len(data)] = data
        return len(data)


def parse(path: AnyPath) -> DebPackage:
    """Parse the control metadata of the package at <path> -> DebPackage

    Raises a DebInfoError subclass describing the layer that failed.
    """
    path_ = str_path(path)
    try:
        fob = open(path_, "rb")
    except OSError as e:
        raise SourceError(f"cannot open {path_}: {e}", path_) from e

    with fob:
        try:
            st = os.fstat(fob.fileno())
        except OSError as e:
            raise SourceError(f"cannot stat {path_}: {e}", path_) from e

        modified = datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
        return parse_file(fob, path_, modified)


def _next_member(fob: BinaryIO, filename: str) -> Optional[arfile.ArMember]:
    try:
        return arfile.ArMember.from_file(fob, None)
    except (arfile.ArError, OSError, ValueError) as e:
        raise ArchiveError(f"error reading {filename}: {e}") from e


def parse_file(fob: BinaryIO,
               filename: str,
               modified: Optional[datetime] = None) -> DebPackage:
    """walk the members of the ar archive open at <fob> -> DebPackage

    The archive is read forward from the current position. The walk stops
    at the first data.tar.* header; neither that member nor anything after
    it is read.
    """
    package = DebPackage(filename=filename, modified=modified)

    try:
        magic = fob.read(len(arfile.GLOBAL_HEADER))
    except OSError as e:
        raise ArchiveError(f"error reading {filename}: {e}") from e
    if magic != arfile.GLOBAL_HEADER:
        raise ArchiveError(f"error reading {filename}: not an ar archive")

    while True:
        header = _next_member(fob, filename)
        if header is None:
            return package

        name = header.name
        size = header.size
        if name in DATA_MEMBERS:
            logger.debug(f'{filename}: reached {name}, done')
            return package

        offset = fob.tell()
        with MemberReader(fob, size) as member:
            if name == DEBIAN_BINARY:
                logger.debug(f'{filename}: reading {name}')
                package.deb_version = read_debian_binary(member)

            elif name in CONTROL_MEMBERS:
                codec = CONTROL_MEMBERS[name]
                logger.debug(f'{filename}: reading {name} ({codec.name})')
                read_control_member(package, member, name, codec)

            else:
                logger.debug(f'{filename}: skipping member {name!r}')

        # bodies are padded to an even length
        try:
            fob.seek(offset + size + size % 2)
        except OSError as e:
            raise ArchiveError(f"error reading {filename}: {e}") from e


def read_debian_binary(member: BinaryIO) -> str:
    """read the format version token -> str

    The token runs up to the first NUL byte or the end of the member.
    """
    try:
        data = member.read()
    except OSError as e:
        raise ArchiveError(f"cannot read DEB version string: {e}") from e

    token = data.split(b"\0", 1)[0]
    return token.decode("ascii", errors="replace").strip()


def read_control_member(package: DebPackage,
                        member: BinaryIO,
                        name: str,
                        codec: Codec) -> None:
    """decompress control.tar.* <member> with <codec> and parse ./control
    into <package>"""
    try:
        stream = codec.wrap(member)
    except codec.errors as e:
        raise ControlMemberError(
            f"error decompressing {name} ({codec.name}): {e}",
            name, codec.name) from e

    with stream:
        try:
            found = parse_control_tar(package, stream)
        except DebInfoError as e:
            raise ControlMemberError(f"error parsing control in {name}: {e}",
                                     name, codec.name) from e
        except ((tarfile.TarError,) + codec.errors) as e:
            raise ControlMemberError(f"error decompressing {name}: {e}",
                                     name, codec.name) from e

    if not found:
        logger.debug(f'no ./control in {name}')
