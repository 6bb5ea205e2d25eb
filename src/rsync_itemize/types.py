# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# Copyright (C) 2026 HRDAG https://hrdag.org
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program; if not, see <https://www.gnu.org/licenses/>.
#
# ------
# rsync-itemize/src/rsync_itemize/types.py

"""Type definitions for rsync itemize-changes events."""

from collections import Counter
from dataclasses import asdict, dataclass
from typing import ClassVar, Iterable, Literal, Union


FileKind = Literal["file", "directory", "symlink", "device", "special"]

# "local" is only reported for itemized lines starting with "c"; the
# hard-link and no-update codes never create anything on their own.
Origin = Literal["local", "sent", "received", "hardlink_info", "none"]


class ItemizeDecodeError(ValueError):
    """A line matched the itemized layout but carries an invalid field."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


@dataclass(frozen=True)
class Create:
    """A new entry was (or would be) created."""
    kind: ClassVar[str] = "create"

    path: str
    file_kind: FileKind
    origin: Origin | None
    hardlink: bool = False
    hardlink_target: str | None = None

    def to_dict(self) -> dict:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class Update:
    """An existing entry's content or metadata changed."""
    kind: ClassVar[str] = "update"

    path: str
    file_kind: FileKind
    origin: Origin
    hardlink: bool = False
    hardlink_target: str | None = None
    checksum_changed: bool = False
    size_changed: bool = False
    time_changed: bool = False
    permissions_changed: bool = False
    owner_changed: bool = False
    group_changed: bool = False
    acl_changed: bool = False
    xattr_changed: bool = False

    def to_dict(self) -> dict:
        return {"type": self.kind, **asdict(self)}

    @property
    def changed_attributes(self) -> list[str]:
        """Names of the attributes flagged as changed, in column order."""
        names = ("checksum", "size", "time", "permissions",
                 "owner", "group", "acl", "xattr")
        return [name for name in names if getattr(self, f"{name}_changed")]


@dataclass(frozen=True)
class Unchanged:
    """Entry was inspected but nothing about it changed."""
    kind: ClassVar[str] = "unchanged"

    path: str
    file_kind: FileKind

    def to_dict(self) -> dict:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class Delete:
    """Entry was removed."""
    kind: ClassVar[str] = "delete"

    path: str

    def to_dict(self) -> dict:
        return {"type": self.kind, **asdict(self)}


@dataclass(frozen=True)
class CannotDelete:
    """A non-empty directory could not be removed."""
    kind: ClassVar[str] = "cannot_delete"

    path: str
    file_kind: FileKind = "directory"

    def to_dict(self) -> dict:
        return {"type": self.kind, **asdict(self)}


Event = Union[Create, Update, Unchanged, Delete, CannotDelete]


@dataclass(frozen=True)
class SyncSummary:
    """Counts of decoded events per variant."""
    created: int = 0
    updated: int = 0
    unchanged: int = 0
    deleted: int = 0
    cannot_delete: int = 0

    @property
    def total(self) -> int:
        return (self.created + self.updated + self.unchanged
                + self.deleted + self.cannot_delete)

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "SyncSummary":
        counts = Counter(event.kind for event in events)
        return cls(
            created=counts["create"],
            updated=counts["update"],
            unchanged=counts["unchanged"],
            deleted=counts["delete"],
            cannot_delete=counts["cannot_delete"],
        )
