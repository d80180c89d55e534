"""
Asset discovery and loading.

Resolver → Loader → Compressor, each producing plain values
(``ResolvedFile``, ``AssetEntry``, ``Skipped``) for the pipeline to fold.
"""

from asset_embed.assets.entries import AssetEntry, AssetTable, ResolvedFile, Skipped

__all__ = ["AssetEntry", "AssetTable", "ResolvedFile", "Skipped"]
