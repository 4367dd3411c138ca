# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Optional


@dataclass
class DebPackage:
    """Metadata of a single Debian binary package.

    Only `filename` is required; everything else keeps its zero value unless
    the package archive provides it. An instance belongs to the parse call
    that created it and is handed over to the caller on return.
    """

    filename: str
    modified: Optional[datetime] = None
    deb_version: str = ""

    name: str = ""
    version: str = ""
    architecture: str = ""

    maintainer: str = ""
    homepage: str = ""
    section: str = ""
    priority: str = ""
    description: str = ""

    installed_size: int = 0

    depends: list[str] = field(default_factory=list)
    recommends: list[str] = field(default_factory=list)
    built_using: list[str] = field(default_factory=list)

    # attribute -> control field name, in the order fields are rendered
    CONTROL_FIELDS = (
        ('name', 'Package'),
        ('version', 'Version'),
        ('architecture', 'Architecture'),
        ('maintainer', 'Maintainer'),
        ('installed_size', 'Installed-Size'),
        ('depends', 'Depends'),
        ('recommends', 'Recommends'),
        ('built_using', 'Built-Using'),
        ('section', 'Section'),
        ('priority', 'Priority'),
        ('homepage', 'Homepage'),
        ('description', 'Description'),
    )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        for f in fields(self):
            val = getattr(self, f.name)
            if isinstance(val, list):
                val = list(val)
            d[f.name] = val
        return d

    def control_fields(self) -> dict[str, str]:
        """Return populated fields keyed by their control file names ->
        dict (lists joined with ', ')"""
        d = {}
        for attr, control_name in self.CONTROL_FIELDS:
            val = getattr(self, attr)
            if not val:
                continue
            if isinstance(val, list):
                val = ", ".join(val)
            d[control_name] = str(val)
        return d
