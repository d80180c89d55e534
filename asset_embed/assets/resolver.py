"""Input resolver -- glob patterns to an ordered list of regular files.

Patterns use shell-style syntax, matched one path segment at a time:

    ``*``        any run of characters within a segment (dot-files included)
    ``?``        exactly one character
    ``[abc]``    character class; ranges ``[a-z]``; negation ``[^a]``/``[!a]``
    ``\\c``       literal ``c`` (POSIX hosts only; ``\\`` is a separator on Windows)

There is no recursive ``**``: it behaves like ``*``.

Ordering:
    Directory listings are sorted at every level, so matches come out in
    lexical order per path component and the result is deterministic.

Errors:
    A malformed pattern raises ``PatternError`` before any filesystem
    access.  Directories and entries that cannot be stat'ed are yielded
    as ``Skipped`` values; they never abort the run.
"""

from __future__ import annotations

import logging
import os
import re
import stat
from typing import Iterator

from asset_embed.assets.entries import ResolvedFile, ResolveOutcome, Skipped
from asset_embed.errors import PatternError
from asset_embed.utils.fs import from_slash

logger = logging.getLogger(__name__)

_ESCAPES_ENABLED = os.sep == "/"
_MAGIC = "*?[\\" if _ESCAPES_ENABLED else "*?["


# ---------------------------------------------------------------------------
# Pattern compilation
# ---------------------------------------------------------------------------


def has_magic(segment: str) -> bool:
    """Return ``True`` if ``segment`` contains any glob metacharacter."""
    return any(c in _MAGIC for c in segment)


def _class_char(segment: str, i: int, pattern: str) -> tuple[str, int]:
    """Read one (possibly escaped) character inside ``[...]``."""
    if i >= len(segment):
        raise PatternError(f"Unterminated character class in pattern {pattern!r}")
    c = segment[i]
    if c in "-]":
        raise PatternError(f"Unexpected {c!r} in character class of pattern {pattern!r}")
    if c == "\\" and _ESCAPES_ENABLED:
        i += 1
        if i >= len(segment):
            raise PatternError(f"Trailing escape in pattern {pattern!r}")
        c = segment[i]
    return c, i + 1


def compile_segment(segment: str, pattern: str = "") -> re.Pattern:
    """Translate one path segment of a glob into an anchored regex.

    Parameters
    ----------
    segment : str
        Pattern text between separators.
    pattern : str
        Full pattern, only used in error messages.

    Raises
    ------
    PatternError
        Unterminated or empty character class, misplaced ``-``/``]``
        inside a class, or a trailing escape.
    """
    pattern = pattern or segment
    out = []
    i = 0
    n = len(segment)
    while i < n:
        c = segment[i]
        if c == "*":
            out.append(".*")
            i += 1
        elif c == "?":
            out.append(".")
            i += 1
        elif c == "\\" and _ESCAPES_ENABLED:
            if i + 1 >= n:
                raise PatternError(f"Trailing escape in pattern {pattern!r}")
            out.append(re.escape(segment[i + 1]))
            i += 2
        elif c == "[":
            i += 1
            negate = i < n and segment[i] in "^!"
            if negate:
                i += 1
            nrange = 0
            body = ""
            while True:
                if i < n and segment[i] == "]" and nrange:
                    i += 1
                    break
                lo, i = _class_char(segment, i, pattern)
                hi = lo
                if i < n and segment[i] == "-":
                    hi, i = _class_char(segment, i + 1, pattern)
                nrange += 1
                # Reversed ranges are legal but match nothing.
                if lo == hi:
                    body += re.escape(lo)
                elif lo < hi:
                    body += f"{re.escape(lo)}-{re.escape(hi)}"
            if not body:
                out.append("." if negate else "(?!)")
            else:
                out.append(f"[{'^' if negate else ''}{body}]")
        else:
            out.append(re.escape(c))
            i += 1
    return re.compile("".join(out), re.DOTALL)


def validate_pattern(pattern: str) -> None:
    """Raise ``PatternError`` unless every segment of ``pattern`` compiles."""
    for segment in pattern.split(os.sep):
        compile_segment(segment, pattern)


# ---------------------------------------------------------------------------
# Globbing
# ---------------------------------------------------------------------------


def _list_matches(directory: str, regex: re.Pattern) -> list[str]:
    try:
        if not os.path.isdir(directory):
            return []
        names = sorted(os.listdir(directory))
    except OSError as e:
        logger.debug("Cannot list %s, ignoring: %s", directory, e)
        return []
    return [os.path.join(directory, name) for name in names if regex.fullmatch(name)]


def glob_paths(pattern: str) -> list[str]:
    """Expand ``pattern`` (host separators) into matching paths.

    Mirrors a segment-wise glob: the last segment is matched against the
    sorted listing of every directory the leading part expands to.
    The pattern must already be validated.
    """
    if not has_magic(pattern):
        return [pattern] if os.path.lexists(pattern) else []

    directory, name = os.path.split(pattern)
    if not directory:
        directory = os.curdir
    elif directory != os.sep:
        directory = directory.rstrip(os.sep) or os.sep

    if has_magic(directory) and directory != pattern:
        parents = glob_paths(directory)
    else:
        parents = [directory]

    regex = compile_segment(name, pattern)
    matches: list[str] = []
    for parent in parents:
        matches.extend(_list_matches(parent, regex))
    return matches


def resolve(base_directory: str, pattern: str) -> Iterator[ResolveOutcome]:
    """Resolve one pattern against ``base_directory``.

    Parameters
    ----------
    base_directory : str
        Directory the pattern is relative to (forward slashes accepted).
    pattern : str
        Glob pattern written with forward slashes.

    Yields
    ------
    ResolvedFile | Skipped
        One outcome per match, in sorted match order.  Matches are
        absolute paths.

    Raises
    ------
    PatternError
        If ``pattern`` is malformed (raised before the first yield).

    Notes
    -----
    The pattern is always appended to the base: a leading separator (or
    drive) does not make it absolute, so ``/etc/*.conf`` searches
    ``<base>/etc``.
    """
    host_pattern = os.path.splitdrive(from_slash(pattern))[1]
    host_pattern = host_pattern.lstrip(os.sep + (os.altsep or ""))
    validate_pattern(host_pattern)
    full = os.path.join(os.path.abspath(from_slash(base_directory)), host_pattern)
    return _stat_matches(glob_paths(full))


def _stat_matches(paths: list[str]) -> Iterator[ResolveOutcome]:
    for path in paths:
        logger.info("Processing file %s", path)
        try:
            st = os.stat(path)
        except OSError as e:
            yield Skipped(path, f"Cannot stat input file, skipping: {e}")
            continue
        if stat.S_ISDIR(st.st_mode):
            yield Skipped(path, "Directory caught in glob, skipping", quiet=True)
            continue
        yield ResolvedFile(path, st.st_mtime)
