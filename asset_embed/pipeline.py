"""Generation pipeline: Resolver → Loader → Compressor → Emitter.

One run is fully sequential: patterns in the order given, matches of
each pattern in sorted order, one file at a time.

The output file is acquired first, so an unwritable destination fails
the run before any input is read, and it is closed on every exit path.

Severity:
    Fatal (exception propagates): ``PatternError``, ``EmitError``.
    Skip (logged, run continues): directories, stat/read failures, files
    whose key can't be computed relative to the base directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from asset_embed.assets import compressor, loader, resolver
from asset_embed.assets.entries import AssetEntry, AssetTable, ResolvedFile, Skipped
from asset_embed.configs.loader import GenerationRequest
from asset_embed.emit.generator import SourceEmitter
from asset_embed.utils import fs
from asset_embed.utils.logging_config import pop_context, push_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Summary of a completed run."""

    output_path: str
    entries: int
    skipped: int
    duplicates: int


@dataclass
class _Fold:
    """Accumulator for per-file outcomes."""

    table: AssetTable
    skipped: int = 0

    def add(self, outcome: AssetEntry | Skipped) -> None:
        if isinstance(outcome, Skipped):
            self.skip(outcome)
        else:
            self.table.append(outcome)

    def skip(self, outcome: Skipped) -> None:
        if outcome.quiet:
            logger.debug("%s: %s", outcome.path, outcome.reason)
        else:
            logger.info("%s: %s", outcome.path, outcome.reason)
            self.skipped += 1


def _load_one(request: GenerationRequest, resolved: ResolvedFile) -> AssetEntry | Skipped:
    outcome = loader.load(request.base_directory, resolved)
    if isinstance(outcome, Skipped):
        return outcome
    content = compressor.maybe_compress(
        outcome.content,
        os.path.basename(resolved.path),
        resolved.mtime,
        request.compress,
    )
    return AssetEntry(outcome.relative_path, content)


def collect_assets(request: GenerationRequest) -> tuple[AssetTable, int]:
    """Build the ordered asset table for ``request``.

    Returns
    -------
    tuple[AssetTable, int]
        Entries in pattern-then-match order (duplicates kept) and the
        number of non-directory files that were skipped.

    Raises
    ------
    PatternError
        If any pattern is malformed.
    """
    fold = _Fold(table=[])
    for pattern in request.patterns:
        push_context(pattern=pattern)
        try:
            logger.info("Processing arg %s", pattern)
            for outcome in resolver.resolve(request.base_directory, pattern):
                if isinstance(outcome, Skipped):
                    fold.skip(outcome)
                else:
                    fold.add(_load_one(request, outcome))
        finally:
            pop_context(keys=["pattern"])
    return fold.table, fold.skipped


def generate(request: GenerationRequest) -> GenerationResult:
    """Run one generation end to end and write ``request.output_path``.

    Raises
    ------
    PatternError
        If any pattern is malformed.
    EmitError
        If the output file cannot be created, written, flushed or closed.
    """
    logger.info("Creating %s", request.output_path)
    emitter = SourceEmitter(request.package_name, request.variable_name)
    with fs.open_output(request.output_path) as out:
        table, skipped = collect_assets(request)
        duplicates = emitter.emit(table, out)
        logger.info("Flushing and closing %s", request.output_path)

    return GenerationResult(
        output_path=request.output_path,
        entries=len(table) - duplicates,
        skipped=skipped,
        duplicates=duplicates,
    )
