"""Cross-cutting utilities (lowest dependency layer).

Provides:
    - Filesystem helpers: YAML loading, output-file acquisition (fs)
    - Unified logging (logging_config)

No module in utils/ may import from assets/, emit/ or the pipeline.
"""

from . import fs
from . import logging_config

from .logging_config import pop_context, push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'setup_logging',
    'push_context',
    'pop_context',
]
