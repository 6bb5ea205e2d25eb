# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/conftest.py
"""Pytest configuration for rsync-itemize tests."""

import shutil

import pytest


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-rsync-tests",
        action="store_true",
        default=False,
        help="Run tests that invoke a real rsync executable",
    )


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "rsync_required: mark test as requiring an rsync executable",
    )


def pytest_collection_modifyitems(config, items):
    """Skip rsync tests unless --run-rsync-tests is passed and rsync exists."""
    if not config.getoption("--run-rsync-tests"):
        reason = "need --run-rsync-tests option to run"
    elif shutil.which("rsync") is None:
        reason = "rsync executable not found"
    else:
        return

    skip_rsync = pytest.mark.skip(reason=reason)
    for item in items:
        if "rsync_required" in item.keywords:
            item.add_marker(skip_rsync)
