"""Runtime version info -- displayed in the Streamlit sidebar.

The git commit is looked up when the label is built so a deployed app
shows exactly which code it runs.
"""
from __future__ import annotations

import subprocess
from pathlib import Path

from platecost import __version__

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

APP_VERSION = __version__


def _git(*args: str) -> str:
    """Run a git query in the project root; 'unknown' when it fails."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=str(_PROJECT_ROOT),
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return "unknown"


def get_git_commit() -> str:
    """Short commit hash of the running checkout."""
    return _git("rev-parse", "--short", "HEAD")


def version_label() -> str:
    """Human-readable version string like 'v0.1.0 (abc1234)'."""
    return f"v{APP_VERSION} ({get_git_commit()})"
