# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Print control metadata of Debian binary packages

  Only the control member of each package is read; the data payload is
  never decompressed.

Options:
  -f --field <name>	print only the value of control field <name>
  -j --json		print packages as JSON

Environment variables:
    DEBINFO_LOG_LEVEL   Log level (debug, info, warning, error)
    DEBUG               Same as DEBINFO_LOG_LEVEL=debug
"""
import sys
import getopt
from typing import Iterable, NoReturn, Optional

import orjson

from . import DebInfoError, utils
from .deb import parse
from .package import DebPackage

FIELD_NAMES = [control_name for _, control_name in DebPackage.CONTROL_FIELDS]


def format_package(package: DebPackage) -> str:
    """render populated fields as `Field: value` lines"""
    lines = [f"Filename: {package.filename}"]
    if package.deb_version:
        lines.append(f"Deb-Version: {package.deb_version}")
    for name, value in package.control_fields().items():
        lines.append(f"{name}: {value}")
    return "\n".join(lines)


# debinfo <deb> ...
def print_packages(packages: Iterable[DebPackage]) -> None:
    for i, package in enumerate(packages):
        if i:
            print()
        print(format_package(package))


def field_value(package: DebPackage, field: str) -> Optional[str]:
    """value of control <field> (case insensitive) or None if unset"""
    for name, value in package.control_fields().items():
        if name.lower() == field.lower():
            return value
    return None


# debinfo --field <name> <deb> ...
def print_field(packages: Iterable[DebPackage], field: str) -> None:
    for package in packages:
        value = field_value(package, field)
        print(value if value is not None else "")


def dumps_json(packages: list[DebPackage]) -> str:
    return orjson.dumps([package.to_dict() for package in packages],
                        option=orjson.OPT_INDENT_2).decode()


# debinfo --json <deb> ...
def print_json(packages: list[DebPackage]) -> None:
    print(dumps_json(packages))


def usage(e: Optional[object] = None) -> NoReturn:
    if e:
        print("error: " + str(e), file=sys.stderr)

    print(f"Syntax: {sys.argv[0]} [-options] <package.deb> ...",
          file=sys.stderr)
    print(__doc__.rstrip(), file=sys.stderr)
    sys.exit(1)


def main(argv: Optional[list[str]] = None) -> None:
    if argv is None:
        argv = sys.argv[1:]

    try:
        opts, args = getopt.gnu_getopt(argv, 'hf:j',
                                       ['help', 'field=', 'json'])
    except getopt.GetoptError as e:
        usage(e)

    opt_field = None
    opt_json = False

    for opt, val in opts:
        if opt in ('-h', '--help'):
            usage()
        elif opt in ('-f', '--field'):
            opt_field = val
        elif opt in ('-j', '--json'):
            opt_json = True

    if not args:
        usage()

    if opt_field and opt_json:
        utils.fatal("--field and --json are conflicting options")

    if opt_field and opt_field.lower() not in [
            name.lower() for name in FIELD_NAMES]:
        utils.fatal(f"unknown field `{opt_field}'")

    packages = []
    for path in args:
        try:
            package = parse(path)
        except DebInfoError as e:
            utils.fatal(e)

        if not package.name:
            utils.warn(f"{path}: no control metadata found")
        packages.append(package)

    if opt_json:
        print_json(packages)
    elif opt_field:
        print_field(packages, opt_field)
    else:
        print_packages(packages)
