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
# rsync-itemize/src/rsync_itemize/decoder.py

"""Decoder for rsync --itemize-changes output.

Itemized lines have the layout ``YXcstpoguax path``: an update type ``Y``, a
file type ``X``, nine attribute columns and a single space before the path.
Deletions and failed directory removals are reported as free-form messages.
"""

import logging
from typing import Final, Iterator

from .stream import LineInput, LineSource
from .types import (
    CannotDelete,
    Create,
    Delete,
    Event,
    FileKind,
    ItemizeDecodeError,
    Origin,
    Unchanged,
    Update,
)

logger = logging.getLogger(__name__)


# Update types (the Y column)
TYPE_SENT: Final = "<"
TYPE_RECEIVED: Final = ">"
TYPE_LOCAL_CHANGE: Final = "c"
TYPE_HARDLINK_INFO: Final = "h"
TYPE_NONE: Final = "."
TYPE_MESSAGE: Final = "*"

ORIGINS: Final[dict[str, Origin]] = {
    TYPE_SENT: "sent",
    TYPE_RECEIVED: "received",
    TYPE_LOCAL_CHANGE: "local",
    TYPE_HARDLINK_INFO: "hardlink_info",
    TYPE_NONE: "none",
}

# File types (the X column)
FILE_KINDS: Final[dict[str, FileKind]] = {
    "f": "file",
    "d": "directory",
    "L": "symlink",
    "D": "device",
    "S": "special",
}

CANNOT_DELETE_PREFIX: Final = "cannot delete non-empty directory:"
CANNOT_DELETE_PATH_OFFSET: Final = 35
DELETING_MESSAGE: Final = "deleting"
DELETING_PATH_OFFSET: Final = 12

# Attribute columns, offsets into the line
FLAGS_START: Final = 2
FLAGS_END: Final = 11
PATH_SEPARATOR_OFFSET: Final = 11
PATH_OFFSET: Final = 12
HARDLINK_SEPARATOR: Final = " => "


def _file_kind(code: str, line: str) -> FileKind:
    try:
        return FILE_KINDS[code]
    except KeyError:
        raise ItemizeDecodeError(line, f"Unknown file type {code!r}") from None


def _split_hardlink(path: str) -> tuple[str, str | None]:
    """Split ``name => target`` into its parts."""
    index = path.find(HARDLINK_SEPARATOR)
    if index == -1:
        return path, None
    return path[:index], path[index + len(HARDLINK_SEPARATOR):]


def _decode_itemized(line: str) -> Event | None:
    update_type = line[0]

    if len(line) <= PATH_SEPARATOR_OFFSET or line[PATH_SEPARATOR_OFFSET] != " ":
        return None
    path = line[PATH_OFFSET:]
    if not path:
        return None

    file_kind = _file_kind(line[1], line)
    flags = line[FLAGS_START:FLAGS_END]

    # rsync blanks the whole attribute area for an identical item
    if update_type == TYPE_NONE and not flags.strip(" "):
        return Unchanged(path=path, file_kind=file_kind)

    hardlink = update_type == TYPE_HARDLINK_INFO
    hardlink_target = None
    if hardlink:
        path, hardlink_target = _split_hardlink(path)
        if not path:
            return None

    if flags[0] == "+":
        origin = ORIGINS[update_type]
        return Create(
            path=path,
            file_kind=file_kind,
            origin=origin if origin in ("local", "sent", "received") else None,
            hardlink=hardlink,
            hardlink_target=hardlink_target,
        )

    return Update(
        path=path,
        file_kind=file_kind,
        origin=ORIGINS[update_type],
        hardlink=hardlink,
        hardlink_target=hardlink_target,
        checksum_changed=line[2] == "c",
        size_changed=line[3] == "s",
        # "T" means the time will be set to the transfer time
        time_changed=line[4] in ("t", "T"),
        permissions_changed=line[5] == "p",
        owner_changed=line[6] == "o",
        group_changed=line[7] == "g",
        acl_changed=line[9] == "a",
        xattr_changed=line[10] == "x",
    )


def decode_line(line: str) -> Event | None:
    """Decode a single report line.

    Returns None for lines that are not change records (progress output,
    transfer summaries, blank lines). Raises ItemizeDecodeError when a line
    has the itemized layout but an unknown file type.
    """
    if line.startswith(CANNOT_DELETE_PREFIX):
        path = line[CANNOT_DELETE_PATH_OFFSET:]
        return CannotDelete(path=path) if path else None

    if not line:
        return None
    update_type = line[0]

    if update_type == TYPE_MESSAGE:
        if line[1:9] == DELETING_MESSAGE:
            path = line[DELETING_PATH_OFFSET:]
            return Delete(path=path) if path else None
        return None

    if update_type in ORIGINS:
        return _decode_itemized(line)

    return None


class ItemizeChangesDecoder:
    """Pull change events out of rsync --itemize-changes output.

    The decoder owns a single cursor over its line source; `read()` and
    iteration advance the same cursor, and neither ever rewinds.
    """

    def __init__(self, source: LineSource | LineInput):
        self.source = LineSource.from_input(source)
        self.skipped = 0

    def read(self) -> Event | None:
        """Return the next event, or None once the source is exhausted."""
        while True:
            line = self.source.read_line()
            if line is None:
                return None

            event = decode_line(line)
            if event is not None:
                return event

            self.skipped += 1
            logger.debug("Skipping uninterpretable line: %r", line)

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        event = self.read()
        if event is None:
            raise StopIteration
        return event


def decode_itemize_changes(source: LineSource | LineInput) -> list[Event]:
    """Decode a complete itemize-changes report into a list of events."""
    return list(ItemizeChangesDecoder(source))
