"""asset-embed: build-time generator that embeds files in Go source.

Reads files matched by glob patterns, optionally gzips them (never twice),
and writes a Go file defining ``var <Name> = map[string][]byte{...}`` keyed
by forward-slash paths relative to a base directory.

Architecture layers (strict one-way dependency):
    cli → pipeline → {assets, emit, configs} → utils

Key invariants:
    - Entries follow pattern order, then sorted match order
    - Keys always use forward slashes
    - Malformed globs and output-file failures are fatal; per-file
      problems are skipped and logged
"""

from asset_embed.configs.loader import GenerationRequest
from asset_embed.errors import ConfigError, EmbedError, EmitError, PatternError
from asset_embed.pipeline import GenerationResult, generate

__version__ = "1.0.0"

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "generate",
    "EmbedError",
    "ConfigError",
    "PatternError",
    "EmitError",
]
