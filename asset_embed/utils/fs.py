"""Filesystem helpers shared by the config loader and the source emitter.

Provides:
    - YAML loading with safe_load and actionable errors
    - Scoped acquisition of the generated output file
    - Host ↔ slash path conversion

Output file lifecycle:
    The output file is created (or truncated) when the run starts and is
    flushed and closed on every exit path. Failure to create, flush or
    close it raises ``EmitError``; a failure mid-write may leave a
    truncated file behind, which callers treat as invalid via the
    non-zero exit status.

Usage:
    from asset_embed.utils import fs
    cfg = fs.load_yaml("embed.yaml")
    with fs.open_output("assets.go") as out:
        out.write(b"package assets\\n")
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterator, Union

import yaml

from asset_embed.errors import ConfigError, EmitError

logger = logging.getLogger(__name__)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content (empty dict for an empty document)

    Raises
    ------
    ConfigError
        If the file doesn't exist, fails to parse, or isn't a mapping
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _close_after_error(f: BinaryIO, path: Path) -> None:
    # Another error is already propagating; don't let this one replace it.
    try:
        f.close()
    except OSError as e:
        logger.debug("Cannot close output file %s after error: %s", path, e)


@contextmanager
def open_output(path: Union[str, Path]) -> Iterator[BinaryIO]:
    """Create or truncate ``path`` and yield a buffered binary writer.

    Parameters
    ----------
    path : Union[str, Path]
        Output file path; parent directories are NOT created

    Yields
    ------
    BinaryIO
        Buffered writer; flushed and closed when the block exits

    Raises
    ------
    EmitError
        If the file cannot be created, flushed or closed

    Notes
    -----
    Exceptions raised inside the ``with`` block propagate unchanged (write
    errors are labelled by the writer, see ``SourceEmitter.emit``).  The
    file is closed on every exit path.
    """
    path = Path(path)
    try:
        f = open(path, 'wb')
    except OSError as e:
        raise EmitError(f"Cannot create output file {path}: {e}") from e

    try:
        yield f
    except BaseException:
        _close_after_error(f, path)
        raise

    try:
        f.flush()
    except OSError as e:
        _close_after_error(f, path)
        raise EmitError(f"Cannot flush output file {path}: {e}") from e
    try:
        f.close()
    except OSError as e:
        raise EmitError(f"Cannot close output file {path}: {e}") from e


def from_slash(p: str) -> str:
    """Convert a forward-slash path to host separators."""
    if os.sep == '/':
        return p
    return p.replace('/', os.sep)


def to_slash(p: str) -> str:
    """Convert a host path to forward-slash separators."""
    if os.sep == '/':
        return p
    return p.replace(os.sep, '/')
