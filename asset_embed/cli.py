"""Command-line entry point: embed files into generated Go source.

CLI:
    asset-embed --pkg assets --var Files --out assets/files.go \\
                --base web "*.html" "static/*.css"
    asset-embed -pkg assets -var Files -out files.go -gzip "img/*.png"
    asset-embed --config embed.yaml --verbose

Flags may also be written with a single dash (``-pkg``).  Positional
arguments are glob patterns relative to ``--base``; when given they
replace the ``patterns`` list of a ``--config`` file.

Exit status:
    0   success, or usage shown because a required flag / pattern is missing
    1   fatal error (bad config, malformed glob, output file failure)
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from asset_embed import __version__
from asset_embed.configs.loader import (
    describe,
    load_config_file,
    load_request,
    merge_values,
    missing_keys,
)
from asset_embed.errors import EmbedError
from asset_embed.pipeline import generate
from asset_embed.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asset-embed",
        description="Embed file contents in a generated Go map[string][]byte variable",
    )
    parser.add_argument(
        "--pkg", "-pkg",
        type=str,
        default=None,
        help="Name of package, required",
    )
    parser.add_argument(
        "--var", "-var",
        dest="var",
        type=str,
        default=None,
        help="Name of map variable, required",
    )
    parser.add_argument(
        "--out", "-out",
        type=str,
        default=None,
        help="Name of output file, required",
    )
    parser.add_argument(
        "--base", "-base",
        type=str,
        default=None,
        help="Base directory of input files; similar to tar -C mode (default: .)",
    )
    parser.add_argument(
        "--verbose", "-verbose",
        action="store_true",
        default=None,
        help="If set, prints additional log messages",
    )
    parser.add_argument(
        "--gzip", "-gzip",
        action="store_true",
        default=None,
        help="If set, passes data through gzip compression; checks for existing "
             "gzip header first so as not to double-compress",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file with pkg/var/out/base/gzip/verbose/patterns keys",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write log records to this file",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write the --log-file as JSON lines",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help="Glob pattern of input files, relative to the base directory",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    cli_values = {
        "pkg": args.pkg,
        "var": args.var,
        "out": args.out,
        "base": args.base,
        "gzip": args.gzip,
        "verbose": args.verbose,
        "patterns": args.patterns,
    }

    # Logging must exist before the config file is read so its errors are reported.
    setup_logging(
        log_level="DEBUG" if args.verbose else "WARNING",
        log_file=args.log_file,
        json=args.log_json,
        context={"app": "asset-embed"},
    )

    try:
        file_values = load_config_file(args.config) if args.config else {}
        values = merge_values(file_values, cli_values)
        if missing_keys(values):
            parser.print_help(sys.stderr)
            return 0

        request = load_request(values)
        if request.verbose and not args.verbose:
            setup_logging(
                log_level="DEBUG",
                log_file=args.log_file,
                json=args.log_json,
            )
        logger.info("Generating %s", describe(request, args.config))

        result = generate(request)
    except EmbedError as e:
        logger.critical("%s", e)
        return 1

    logger.info(
        "Wrote %s: %d entries, %d skipped, %d duplicate keys dropped",
        result.output_path, result.entries, result.skipped, result.duplicates,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
