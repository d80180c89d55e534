"""Source emitter -- asset table to a generated Go source file.

Output shape::

    // This file was generated by asset-embed. DO NOT EDIT.

    package <pkg>

    var <var> = map[string][]byte{
        "<key>": []byte("<payload>"),
    }

Quoting:
    Keys and payloads are written as Go interpreted string literals with
    ``strconv.Quote`` semantics, so arbitrary bytes (NUL, invalid UTF-8,
    control characters) survive the trip through the Go compiler:

        printable code points        verbatim
        \\a \\b \\f \\n \\r \\t \\v \\\\ \\"  short escapes
        other C0 controls, DEL       \\xNN
        invalid UTF-8 bytes          \\xNN (one per byte)
        other non-printables         \\uNNNN / \\UNNNNNNNN

Duplicate keys:
    Go rejects duplicate keys in a map literal, so the table is
    de-duplicated here: the last occurrence's content wins, at the
    position of the first occurrence.
"""

from __future__ import annotations

import logging
import os
from io import StringIO

from asset_embed.assets.entries import AssetEntry
from asset_embed.errors import EmitError

logger = logging.getLogger(__name__)

TOOL_NAME = "asset-embed"

_SHORT_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


# ---------------------------------------------------------------------------
# Quoting
# ---------------------------------------------------------------------------


def quote_go_bytes(data: bytes) -> str:
    """Quote ``data`` as a Go interpreted string literal (with quotes)."""
    # surrogateescape maps every byte that is not part of valid UTF-8 to a
    # lone surrogate U+DC80..U+DCFF, which valid UTF-8 can never produce.
    text = data.decode("utf-8", errors="surrogateescape")
    out = ['"']
    for ch in text:
        cp = ord(ch)
        if ch in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[ch])
        elif 0xDC80 <= cp <= 0xDCFF:
            out.append(f"\\x{cp - 0xDC00:02x}")
        elif ch.isprintable():
            out.append(ch)
        elif cp < 0x20 or cp == 0x7F:
            out.append(f"\\x{cp:02x}")
        elif cp < 0x10000:
            out.append(f"\\u{cp:04x}")
        else:
            out.append(f"\\U{cp:08x}")
    out.append('"')
    return "".join(out)


def quote_go_string(s: str) -> str:
    """Quote a host string (e.g. a path key) as a Go string literal."""
    return quote_go_bytes(os.fsencode(s))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def dedupe(entries: list[AssetEntry]) -> tuple[list[AssetEntry], int]:
    """Collapse entries sharing a key.

    Returns
    -------
    tuple[list[AssetEntry], int]
        Unique entries (first position, last content) and the number of
        duplicates dropped.
    """
    table: dict[str, AssetEntry] = {}
    dropped = 0
    for entry in entries:
        if entry.relative_path in table:
            logger.warning(
                "Duplicate key %r, keeping the later content", entry.relative_path
            )
            dropped += 1
        table[entry.relative_path] = entry
    return list(table.values()), dropped


class SourceEmitter:
    """Render an asset table as Go source.

    Parameters
    ----------
    package_name : str
        Go package clause of the generated file.
    variable_name : str
        Name of the package-level ``map[string][]byte`` variable.
    """

    def __init__(self, package_name: str, variable_name: str) -> None:
        self._pkg = package_name
        self._var = variable_name

    def render(self, entries: list[AssetEntry]) -> str:
        """Render ``entries`` (already de-duplicated) to source text."""
        buf = StringIO()
        self._write_header(buf)
        for entry in entries:
            buf.write(
                f"\t{quote_go_string(entry.relative_path)}: "
                f"[]byte({quote_go_bytes(entry.content)}),\n"
            )
        buf.write("}\n")
        return buf.getvalue()

    def _write_header(self, buf: StringIO) -> None:
        buf.write(f"// This file was generated by {TOOL_NAME}. DO NOT EDIT.\n\n")
        buf.write(f"package {self._pkg}\n\n")
        buf.write(f"var {self._var} = map[string][]byte{{\n")

    def emit(self, entries: list[AssetEntry], out) -> int:
        """De-duplicate, render and write ``entries`` to the binary stream ``out``.

        Returns
        -------
        int
            Number of duplicate entries dropped.

        Raises
        ------
        EmitError
            If writing to ``out`` fails.
        """
        unique, dropped = dedupe(entries)
        text = self.render(unique)
        try:
            out.write(text.encode("utf-8"))
        except OSError as e:
            name = getattr(out, "name", "<stream>")
            raise EmitError(f"Cannot write output file {name}: {e}") from e
        return dropped

