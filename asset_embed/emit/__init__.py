"""
Source emission module.

Renders the ordered asset table as a Go source file defining a
package-level ``map[string][]byte`` variable.
"""

from asset_embed.emit.generator import SourceEmitter, quote_go_bytes

__all__ = ["SourceEmitter", "quote_go_bytes"]
