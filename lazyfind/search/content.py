"""Content search through ripgrep's line-oriented output."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile

from .types import MatchCandidate, SearchOptions

logger = logging.getLogger(__name__)

MAX_CONTENT_MATCHES = 20_000
RG_NO_MATCHES_EXIT = 1
PATH_TERMINATOR = "\0"


def _content_command(query: str, options: SearchOptions) -> list[str]:
    cmd = [
        "rg",
        "--line-number",
        "--with-filename",
        "--no-heading",
        "--null",
        "--color=never",
    ]
    if not options.regex:
        cmd.append("--fixed-strings")
    if not options.case_sensitive:
        cmd.append("--ignore-case")
    if options.search_hidden:
        cmd.append("--hidden")
    if options.max_results is not None:
        cmd.append(f"--max-count={options.max_results}")
    cmd.extend(["-e", query])
    cmd.append(options.directory or ".")
    return cmd


def parse_rg_line(raw: str, strip_dot_prefix: bool = True) -> MatchCandidate | None:
    """Parse one ``path:line_number:content`` line; ``None`` when malformed.

    With ``--null`` the path ends at a NUL byte instead of the first colon,
    so paths that contain colons survive.
    """
    line = raw.rstrip("\r\n")
    if not line:
        return None
    if PATH_TERMINATOR in line:
        path, rest = line.split(PATH_TERMINATOR, 1)
        parts = [path, *rest.split(":", 1)]
    else:
        parts = line.split(":", 2)
    if len(parts) < 3:
        return None
    path, line_number_text, content = parts
    if not path:
        return None
    try:
        line_number = int(line_number_text)
    except ValueError:
        return None
    if line_number < 0:
        return None
    if strip_dot_prefix and path.startswith("./"):
        path = path[2:]
    return MatchCandidate(path=path, line_number=line_number, content=content)


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def search_content_rg(query: str, options: SearchOptions) -> tuple[list[MatchCandidate], str | None]:
    """Run ripgrep for ``query`` and return matches in emission order.

    Returns ``(matches, error)``. Exit status 1 is ripgrep's "no matches" and
    is not an error. An empty query matches every line, up to
    ``MAX_CONTENT_MATCHES``.

    stderr goes to a temporary file, so any volume of diagnostics can be written
    while stdout is still being read.
    """
    if shutil.which("rg") is None:
        return [], "rg is not installed."

    cmd = _content_command(query, options)
    logger.debug("content search: %s", cmd)
    with tempfile.TemporaryFile() as stderr_file:
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=stderr_file,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.warning("failed to run rg: %s", exc)
            return [], f"failed to run rg: {exc}"

        matches: list[MatchCandidate] = []
        truncated = False
        finished = False
        strip_dot_prefix = options.directory is None
        try:
            assert proc.stdout is not None
            for raw in proc.stdout:
                match = parse_rg_line(raw, strip_dot_prefix=strip_dot_prefix)
                if match is None:
                    continue
                matches.append(match)
                if len(matches) >= MAX_CONTENT_MATCHES:
                    truncated = True
                    break
            finished = True
        finally:
            if (truncated or not finished) and proc.poll() is None:
                proc.kill()
            proc.wait()

        stderr_file.seek(0)
        stderr_text = stderr_file.read().decode("utf-8", errors="replace")

    if not truncated and proc.returncode not in (0, RG_NO_MATCHES_EXIT):
        err = _first_line(stderr_text) or f"rg failed with exit code {proc.returncode}"
        logger.warning("content search failed (exit %s): %s", proc.returncode, stderr_text.strip() or err)
        return [], err

    return matches, None
