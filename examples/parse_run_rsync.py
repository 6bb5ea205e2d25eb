#!/usr/bin/env python3

# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# examples/parse_run_rsync.py

"""
Example: run rsync against two throwaway directories and report its changes.

The destination starts with one file that differs from the source and one
file the source does not have, so a dry run with --delete reports an update,
a creation and a deletion.
"""

import tempfile
from pathlib import Path

from rsync_itemize import Create, Delete, RsyncOptions, Update, run_rsync


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)

        source = root / "source"
        source.mkdir()
        (source / "one").write_bytes(b"\x01")
        (source / "two").write_bytes(b"\x02")

        destination = root / "destination"
        destination.mkdir()
        (destination / "one").write_bytes(b"\x01\x01")
        (destination / "three").write_bytes(b"\x03\x03")

        options = RsyncOptions(dry_run=True, delete=True, archive=True)
        for event in run_rsync(f"{source}/", f"{destination}/", options):
            if isinstance(event, Create):
                print(f"Created {event.path}")
            elif isinstance(event, Update):
                print(f"Updated {event.path}")
            elif isinstance(event, Delete):
                print(f"Deleted {event.path}")


if __name__ == "__main__":
    main()
