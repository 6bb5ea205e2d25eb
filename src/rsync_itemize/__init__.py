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
# rsync-itemize/src/rsync_itemize/__init__.py

"""Decoder for rsync --itemize-changes output."""

from .decoder import ItemizeChangesDecoder, decode_itemize_changes, decode_line
from .runner import RsyncError, RsyncOptions, build_rsync_command, run_rsync
from .stream import LineSource
from .types import (
    CannotDelete,
    Create,
    Delete,
    Event,
    FileKind,
    ItemizeDecodeError,
    Origin,
    SyncSummary,
    Unchanged,
    Update,
)

__version__ = "0.1.0"

__all__ = [
    "ItemizeChangesDecoder",
    "decode_itemize_changes",
    "decode_line",
    "LineSource",
    "run_rsync",
    "build_rsync_command",
    "RsyncOptions",
    "RsyncError",
    "Create",
    "Update",
    "Unchanged",
    "Delete",
    "CannotDelete",
    "Event",
    "FileKind",
    "Origin",
    "ItemizeDecodeError",
    "SyncSummary",
]
