"""File listing through ``rg --files`` with an ``os.walk`` fallback."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from .content import RG_NO_MATCHES_EXIT
from .types import MatchCandidate, SearchOptions

logger = logging.getLogger(__name__)


def _files_command(pattern: str, options: SearchOptions) -> list[str]:
    cmd = ["rg", "--files", "--color=never"]
    if options.search_hidden:
        cmd.append("--hidden")
    if pattern:
        cmd.append("--glob" if options.case_sensitive else "--iglob")
        cmd.append(f"*{pattern}*")
    if options.directory:
        cmd.append(options.directory)
    return cmd


def _list_files_walk(pattern: str, options: SearchOptions) -> list[str]:
    root = Path(options.directory) if options.directory else Path(".")
    needle = pattern if options.case_sensitive else pattern.casefold()
    labels: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        if not options.search_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            filenames = [name for name in filenames if not name.startswith(".")]
        dirnames.sort(key=str.lower)
        filenames.sort(key=str.lower)
        base = Path(dirpath)
        for filename in filenames:
            path = base / filename
            relative = path.relative_to(root).as_posix()
            haystack = relative if options.case_sensitive else relative.casefold()
            if needle and needle not in haystack:
                continue
            labels.append(path.as_posix() if options.directory else relative)
    return labels


def list_files(pattern: str, options: SearchOptions) -> tuple[list[MatchCandidate], str | None]:
    """List files whose path contains ``pattern``; empty pattern lists all.

    Returns ``(candidates, error)`` with ``line_number`` 0 and empty content.
    """
    if shutil.which("rg") is None:
        logger.debug("rg missing; listing files with os.walk")
        try:
            labels = _list_files_walk(pattern, options)
        except OSError as exc:
            return [], f"failed to list files: {exc}"
        return [MatchCandidate(path=label, line_number=0, content="") for label in labels], None

    cmd = _files_command(pattern, options)
    logger.debug("file search: %s", cmd)
    try:
        proc = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        logger.warning("failed to run rg --files: %s", exc)
        return [], f"failed to run rg: {exc}"

    if proc.returncode not in (0, RG_NO_MATCHES_EXIT):
        err = proc.stderr.strip() or f"rg failed with exit code {proc.returncode}"
        logger.warning("file search failed: %s", err)
        return [], err

    candidates = [
        MatchCandidate(path=raw, line_number=0, content="")
        for raw in proc.stdout.splitlines()
        if raw
    ]
    return candidates, None
