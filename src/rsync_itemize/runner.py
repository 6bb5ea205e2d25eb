# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-itemize/src/rsync_itemize/runner.py

"""Run rsync and decode its itemized output as it is produced."""

import logging
import os
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .decoder import ItemizeChangesDecoder
from .types import Event

logger = logging.getLogger(__name__)

RSYNC_ENV_VAR = "RSYNC_ITEMIZE_RSYNC"


class RsyncError(RuntimeError):
    """rsync could not be started or exited with an error."""

    def __init__(self, message: str, returncode: int | None = None,
                 stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


def default_rsync_binary() -> str:
    return os.environ.get(RSYNC_ENV_VAR) or "rsync"


@dataclass(frozen=True)
class RsyncOptions:
    """Flags passed to rsync alongside --itemize-changes."""
    rsync_binary: str = field(default_factory=default_rsync_binary)
    dry_run: bool = True
    delete: bool = False
    archive: bool = True
    extra_args: tuple[str, ...] = ()


def build_rsync_command(source: Path | str, destination: Path | str,
                        options: RsyncOptions | None = None) -> list[str]:
    """Build the rsync argv for an itemized run."""
    options = options or RsyncOptions()
    cmd = [options.rsync_binary, "--itemize-changes"]
    if options.dry_run:
        cmd.append("--dry-run")
    if options.delete:
        cmd.append("--delete")
    if options.archive:
        cmd.append("--archive")
    cmd.extend(options.extra_args)
    cmd.extend([str(source), str(destination)])
    return cmd


def run_rsync(source: Path | str, destination: Path | str,
              options: RsyncOptions | None = None) -> Iterator[Event]:
    """Run rsync and yield change events while it runs.

    Only standard output is decoded; standard error is kept for the error
    message when rsync exits non-zero. Closing the generator early stops
    the rsync process.
    """
    cmd = build_rsync_command(source, destination, options)
    logger.debug("Running %s", " ".join(cmd))

    # stderr goes to a file so a chatty rsync cannot block on a full pipe
    stderr_file = tempfile.TemporaryFile()
    try:
        process = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=stderr_file)
    except FileNotFoundError as e:
        stderr_file.close()
        raise RsyncError(f"rsync not found: {cmd[0]}") from e
    except OSError as e:
        stderr_file.close()
        raise RsyncError(f"cannot run rsync: {cmd[0]}: {e}") from e

    completed = False
    try:
        yield from ItemizeChangesDecoder(process.stdout)
        completed = True
    finally:
        if not completed and process.poll() is None:
            logger.debug("Stopping rsync before it finished")
            process.terminate()
        process.stdout.close()
        returncode = process.wait()
        stderr_file.seek(0)
        stderr = stderr_file.read().decode("utf-8", errors="replace")
        stderr_file.close()

    if returncode != 0:
        raise RsyncError(
            f"rsync failed with exit code {returncode}: {stderr.strip()}",
            returncode=returncode,
            stderr=stderr,
        )
