"""
Configuration module.

Builds and validates the ``GenerationRequest`` for one run from
command-line values and an optional YAML config file.
"""

from asset_embed.configs.loader import GenerationRequest, load_request

__all__ = ["GenerationRequest", "load_request"]
