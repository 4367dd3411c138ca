# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Decompressors for the control.tar.* members of a package archive"""

import gzip
import lzma
from typing import BinaryIO, Optional

import zstandard


class Codec:
    """A compression format, selected by member name suffix.

    wrap() returns a lazily decompressing file object over <fileobj>.
    Closing it releases the decompressor but leaves <fileobj> open.
    """

    name = ""
    suffix = ""

    # exceptions the decompressor raises on corrupt or truncated input
    errors: tuple[type[BaseException], ...] = (OSError, EOFError)

    def wrap(self, fileobj: BinaryIO) -> BinaryIO:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f'<Codec {self.name}>'


class Gzip(Codec):
    name = "gzip"
    suffix = ".gz"

    def wrap(self, fileobj: BinaryIO) -> BinaryIO:
        return gzip.GzipFile(fileobj=fileobj, mode="rb")  # type: ignore


class Xz(Codec):
    name = "xz"
    suffix = ".xz"
    errors = (lzma.LZMAError, OSError, EOFError)

    def wrap(self, fileobj: BinaryIO) -> BinaryIO:
        return lzma.LZMAFile(fileobj, mode="rb")  # type: ignore


class Zstd(Codec):
    name = "zstd"
    suffix = ".zst"
    errors = (zstandard.ZstdError, OSError, EOFError)

    def wrap(self, fileobj: BinaryIO) -> BinaryIO:
        dctx = zstandard.ZstdDecompressor()
        return dctx.stream_reader(fileobj,
                                  read_across_frames=True,
                                  closefd=False)  # type: ignore


GZIP = Gzip()
XZ = Xz()
ZSTD = Zstd()

CODECS = (GZIP, XZ, ZSTD)


def codec_for(member_name: str) -> Optional[Codec]:
    """Select the codec for a member from its name suffix -> Codec or None"""
    for codec in CODECS:
        if member_name.endswith(codec.suffix):
            return codec
    return None
