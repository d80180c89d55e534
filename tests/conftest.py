"""Shared fixtures: Go string-literal decoding and asset trees.

The decoder implements Go's interpreted string literal rules (the inverse
of ``strconv.Quote``) so tests can check that generated source reproduces
the embedded bytes exactly.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import pytest

from asset_embed.utils import logging_config

_SIMPLE = {
    "a": 0x07, "b": 0x08, "f": 0x0C, "n": 0x0A, "r": 0x0D,
    "t": 0x09, "v": 0x0B, "\\": 0x5C, '"': 0x22, "'": 0x27,
}

_ENTRY_LINE = re.compile(r'^\t(".*"): \[\]byte\((".*")\),$')


def _go_unquote(literal: str) -> bytes:
    assert literal[0] == '"' and literal[-1] == '"', literal
    body = literal[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        c = body[i]
        if c != "\\":
            assert c not in '"\n', f"unescaped {c!r} in literal"
            out += c.encode("utf-8")
            i += 1
            continue
        e = body[i + 1]
        if e in _SIMPLE:
            out.append(_SIMPLE[e])
            i += 2
        elif e == "x":
            out.append(int(body[i + 2:i + 4], 16))
            i += 4
        elif e == "u":
            out += chr(int(body[i + 2:i + 6], 16)).encode("utf-8")
            i += 6
        elif e == "U":
            out += chr(int(body[i + 2:i + 10], 16)).encode("utf-8")
            i += 10
        elif e in "01234567":
            out.append(int(body[i + 1:i + 4], 8))
            i += 4
        else:
            raise ValueError(f"unknown escape \\{e}")
    return bytes(out)


def _parse_generated(text: str) -> list[tuple[str, bytes]]:
    """Return (key, content) pairs of a generated file, in source order."""
    entries = []
    for line in text.splitlines():
        m = _ENTRY_LINE.match(line)
        if m:
            key = _go_unquote(m.group(1)).decode("utf-8")
            entries.append((key, _go_unquote(m.group(2))))
    return entries


@pytest.fixture()
def go_unquote():
    return _go_unquote


@pytest.fixture()
def parse_generated():
    return _parse_generated


@pytest.fixture()
def make_tree(tmp_path: Path):
    """Create files under ``tmp_path / "base"`` from a {relpath: bytes} dict."""

    def _make(files: dict[str, bytes], dirs: tuple[str, ...] = ()) -> Path:
        base = tmp_path / "base"
        base.mkdir(exist_ok=True)
        for d in dirs:
            (base / d).mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            p = base / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(content)
        return base

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging() so tests stay isolated."""
    yield
    logging_config.setup_logging(
        log_level="WARNING", to_stderr=False, capture_warnings=False,
    )
    logging_config.pop_context()
    logging.captureWarnings(False)
