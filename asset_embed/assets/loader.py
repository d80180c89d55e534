"""Asset loader -- file content plus its canonical relative-path key.

The key is the file's path relative to the base directory, always with
forward slashes, e.g. ``/base/sub/dir/a.txt`` → ``sub/dir/a.txt``.

Read failures and files outside the base directory are returned as
``Skipped`` values so that one bad file never aborts the run.
"""

from __future__ import annotations

import os

from asset_embed.assets.entries import AssetEntry, LoadOutcome, ResolvedFile, Skipped
from asset_embed.utils.fs import from_slash, to_slash


def relative_key(base_directory: str, path: str) -> str:
    """Return the forward-slash key of ``path`` relative to ``base_directory``.

    Raises
    ------
    ValueError
        If ``path`` does not lie under ``base_directory``.
    """
    base = os.path.abspath(from_slash(base_directory))
    target = os.path.abspath(path)
    try:
        common = os.path.commonpath([base, target])
    except ValueError as e:
        # Different drives on Windows
        raise ValueError(f"{path} is not under {base}: {e}") from e
    if common != base or target == base:
        raise ValueError(f"{path} is not under {base}")
    return to_slash(os.path.relpath(target, base))


def load(base_directory: str, resolved: ResolvedFile) -> LoadOutcome:
    """Read ``resolved`` fully and key it relative to ``base_directory``."""
    try:
        with open(resolved.path, "rb") as f:
            content = f.read()
    except OSError as e:
        return Skipped(resolved.path, f"Cannot read input file, skipping: {e}")

    try:
        key = relative_key(base_directory, resolved.path)
    except ValueError as e:
        return Skipped(resolved.path, f"Cannot compute relative path, skipping: {e}")

    return AssetEntry(key, content)
