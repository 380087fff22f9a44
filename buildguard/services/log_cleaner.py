"""
Log Cleaner
===========
Removes build log files (``*.log``, ``*.gz``, ``*.log.gz`` by default)
anywhere under a project directory.

Only regular files are deleted; directories matching a pattern are left
alone. Returns what was removed so the caller can report it.
"""
import os
import fnmatch
import logging
from typing import Iterable, Optional

from buildguard.core.constants import DEFAULT_CLEAN_PATTERNS

logger = logging.getLogger(__name__)


def find_log_files(project_dir: str, patterns: Iterable[str]) -> list[str]:
    """All files under project_dir whose name matches any pattern, sorted."""
    patterns = list(patterns)
    matches: list[str] = []
    for root, _dirs, files in os.walk(project_dir):
        for fname in files:
            if any(fnmatch.fnmatch(fname, p) for p in patterns):
                matches.append(os.path.join(root, fname))
    return sorted(matches)


def clean_logs(project_dir: str, patterns: Optional[Iterable[str]] = None) -> list[str]:
    """
    Delete matching log files.

    Parameters
    ----------
    project_dir : str
        Root of the tree to clean. A missing directory removes nothing.
    patterns : iterable of str | None
        fnmatch patterns matched against file names.

    Returns
    -------
    list[str]
        Absolute paths of the removed files, sorted.
    """
    if patterns is None:
        patterns = DEFAULT_CLEAN_PATTERNS

    project_dir = os.path.abspath(project_dir)
    if not os.path.isdir(project_dir):
        logger.debug("Nothing to clean, %s is not a directory", project_dir)
        return []

    removed: list[str] = []
    for path in find_log_files(project_dir, patterns):
        os.remove(path)
        removed.append(path)
        logger.debug("Removed %s", path)

    logger.info("Removed %d log file(s) under %s", len(removed), project_dir)
    return removed
