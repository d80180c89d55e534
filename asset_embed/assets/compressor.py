"""Idempotent gzip compression of asset content.

``gzip_content`` never double-compresses: input that already starts with
the gzip magic bytes ``1f 8b`` is returned unchanged, so running the
generator twice, or feeding it pre-compressed ``.gz`` assets, is safe.

Fresh output is a single gzip member (RFC 1952) at compression level 9.
The header is written here rather than by ``gzip.GzipFile``, which drops
a trailing ``.gz`` from the stored name:

    ID1 ID2 CM FLG | MTIME (4, LE) | XFL OS | FNAME ... 00

FNAME is the asset's base file name exactly as on disk, Latin-1 encoded;
names outside Latin-1 leave FNAME out.  MTIME is the file's modification
time clamped into 32 bits.
"""

from __future__ import annotations

import logging
import struct
import zlib

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"

_DEFLATE = 8
_FNAME = 0x08
_XFL_BEST = 2
_OS_UNKNOWN = 255

# The gzip MTIME header field is an unsigned 32-bit integer.
_MAX_MTIME = 0xFFFFFFFF


def is_gzipped(data: bytes) -> bool:
    """Return ``True`` if ``data`` starts with the gzip magic bytes."""
    return data[:2] == GZIP_MAGIC


def _header(name: str, mtime: float) -> bytes:
    try:
        fname = name.encode("latin-1")
    except UnicodeEncodeError:
        logger.debug("File name %r is not Latin-1, leaving it out of the gzip header", name)
        fname = b""
    # A NUL would end the field early.
    if b"\x00" in fname:
        fname = b""
    flags = _FNAME if fname else 0
    header_mtime = int(min(max(mtime, 0), _MAX_MTIME))
    header = GZIP_MAGIC + struct.pack("<BBIBB", _DEFLATE, flags, header_mtime, _XFL_BEST, _OS_UNKNOWN)
    if fname:
        header += fname + b"\x00"
    return header


def gzip_content(data: bytes, name: str, mtime: float) -> bytes:
    """Gzip ``data`` unless it is already gzipped.

    Parameters
    ----------
    data : bytes
        Raw asset content.
    name : str
        Base file name recorded in the gzip header (FNAME field), verbatim.
    mtime : float
        Modification time (seconds since the epoch) recorded in the header.

    Returns
    -------
    bytes
        ``data`` itself when already gzipped, else the compressed stream.
    """
    if is_gzipped(data):
        logger.debug("%s is already gzipped, leaving as is", name)
        return data

    deflater = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
    body = deflater.compress(data) + deflater.flush()
    trailer = struct.pack("<II", zlib.crc32(data) & 0xFFFFFFFF, len(data) & 0xFFFFFFFF)
    return _header(name, mtime) + body + trailer


def maybe_compress(data: bytes, name: str, mtime: float, enabled: bool) -> bytes:
    """Apply ``gzip_content`` when ``enabled``; otherwise return ``data``."""
    if not enabled:
        return data
    logger.info("Applying gzip compression to content of %s", name)
    return gzip_content(data, name, mtime)
