"""Exception hierarchy for asset-embed.

Only *fatal* conditions are exceptions. Per-file problems (directories,
unreadable files, paths outside the base directory) are reported as
``Skipped`` values and never raise.
"""


class EmbedError(Exception):
    """Base class for all fatal generation errors."""

    pass


class ConfigError(EmbedError):
    """Raised when a generation request or config file is invalid."""

    pass


class PatternError(EmbedError):
    """Raised when an input glob pattern is malformed."""

    pass


class EmitError(EmbedError):
    """Raised when the output file cannot be created, written or closed."""

    pass
