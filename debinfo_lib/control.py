# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Parser for the ./control file of a binary package.

Only a fixed set of fields is recognized (see FIELDS); anything else in the
control text is skipped. The one multi-line field is Description: lines
starting with whitespace after it are appended to it verbatim.
"""

import re
from typing import Iterator, Optional, Union

from . import ControlFieldError, logger
from .package import DebPackage

CONTINUATION_CHARS = " \t\r\n"
LIST_SEPARATOR = ", "

_INTEGER = re.compile(r'[+-]?[0-9]+')
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class FieldOp:
    """Stores the value of one control field on a DebPackage"""

    # entering this field switches the parser into continuation mode
    continues = False

    def __init__(self, attr: str):
        self.attr = attr

    def convert(self, field: str, value: str) -> object:
        return value

    def apply(self, package: DebPackage, field: str, value: str) -> None:
        setattr(package, self.attr, self.convert(field, value))

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.attr!r})'


class StoreString(FieldOp):
    pass


class StoreList(FieldOp):
    def convert(self, field: str, value: str) -> list[str]:
        return value.split(LIST_SEPARATOR)


class StoreInt(FieldOp):
    def convert(self, field: str, value: str) -> int:
        if not _INTEGER.fullmatch(value):
            raise ControlFieldError(
                f"error parsing {field}: invalid integer {value!r}",
                field, value)
        n = int(value)
        if not INT64_MIN <= n <= INT64_MAX:
            raise ControlFieldError(
                f"error parsing {field}: {value!r} out of range",
                field, value)
        return n


class StartDescription(StoreString):
    continues = True


FIELDS: dict[str, FieldOp] = {
    'Architecture': StoreString('architecture'),
    'Built-Using': StoreList('built_using'),
    'Depends': StoreList('depends'),
    'Description': StartDescription('description'),
    'Homepage': StoreString('homepage'),
    'Installed-Size': StoreInt('installed_size'),
    'Maintainer': StoreString('maintainer'),
    'Package': StoreString('name'),
    'Priority': StoreString('priority'),
    'Recommends': StoreList('recommends'),
    'Section': StoreString('section'),
    'Version': StoreString('version'),
}


def parse_field(line: str) -> tuple[str, str]:
    """Split a `Name: value` line -> (name, value), or ('', '') if the line
    isn't a field"""
    fields = line.split(": ", 1)
    if len(fields) == 2:
        return fields[0].strip(), fields[1].strip()
    return "", ""


def _lines(text: str) -> Iterator[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def parse_control(control: Union[str, bytes],
                  package: Optional[DebPackage] = None) -> DebPackage:
    """parse control file text into <package> -> DebPackage

    If <package> is None a new record is created. Raises ControlFieldError
    if Installed-Size isn't an integer.
    """
    if isinstance(control, bytes):
        control = control.decode('utf-8', errors='replace')
    if package is None:
        package = DebPackage(filename="")

    in_description = False
    for line in _lines(control):
        if in_description:
            if line and line[0] in CONTINUATION_CHARS:
                package.description += line
                continue
            in_description = False

        name, value = parse_field(line)
        op = FIELDS.get(name)
        if op is None:
            if name:
                logger.debug(f'ignoring control field {name!r}')
            continue

        op.apply(package, name, value)
        if op.continues:
            in_description = True

    return package
