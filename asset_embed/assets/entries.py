"""Per-file result values flowing through one generation run.

Every stage yields plain, immutable values instead of signalling problems
with control flow:

    Resolver  →  ResolvedFile | Skipped
    Loader    →  AssetEntry   | Skipped

The pipeline folds these into an ``AssetTable``: success values are
accumulated in order, ``Skipped`` values are logged and counted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """A regular file matched by an input pattern.

    Parameters
    ----------
    path : str
        Absolute host path of the file.
    mtime : float
        Modification time (seconds since the epoch) from the resolver's stat.
    """

    path: str
    mtime: float


@dataclass(frozen=True, slots=True)
class AssetEntry:
    """One embedded asset: forward-slash key plus raw (or gzipped) bytes."""

    relative_path: str
    content: bytes

    def __repr__(self) -> str:
        return f"AssetEntry({self.relative_path!r}, {len(self.content)} bytes)"


@dataclass(frozen=True, slots=True)
class Skipped:
    """A matched entry that was left out of the table.

    Parameters
    ----------
    path : str
        Host path of the skipped entry.
    reason : str
        Human-readable diagnostic.
    quiet : bool
        ``True`` for expected skips (directories caught by a glob) that
        are only worth a debug line.
    """

    path: str
    reason: str
    quiet: bool = False


ResolveOutcome = Union[ResolvedFile, Skipped]
LoadOutcome = Union[AssetEntry, Skipped]

AssetTable = list[AssetEntry]
"""Ordered entries of one run; never persisted except as generated source."""
