"""Command-line interface for deps-resolver."""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

from . import __version__ as deps_resolver_version
from .config import OutputFormat, Settings
from .dependencies import ExhaustedCandidates, LibraryIndex, ResolutionCancelled, ResolutionError, Resolver
from .logger import setup_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def build_index(descriptions: Iterable[str]) -> LibraryIndex:
    """Populate a library index from `NAME@VERSION` and `NAME@VERSION->DEP@VERSION` strings."""
    index = LibraryIndex()
    for description in descriptions:
        index.add_from_string(description)
    return index


def main(argv: list[str] | None = None) -> None:
    settings = Settings(_cli_parse_args=argv)  # type: ignore[call-arg]
    setup_logger(settings.log_level)

    logger.debug("Starting deps-resolver with settings: %s", settings)

    if settings.version:
        sys.stdout.write(f"deps-resolver {deps_resolver_version}\n")
        return

    if not settings.libraries:
        logger.error("Nothing to resolve: pass at least one library with `--libraries`")
        sys.exit(1)

    try:
        index = build_index(settings.index)
    except ValueError as e:
        logger.error("%s", e)  # noqa: TRY400
        sys.exit(1)
    logger.info("Loaded %d library versions and %d dependency edges", len(index), index.edge_count)

    if settings.output_file is None:
        output_write = sys.stdout.write
    else:
        output_write = settings.output_file.write_text  # type: ignore[assignment]
        if not settings.force and settings.output_file.exists():
            logger.error("%s already exists!\nRe-run with `--force` to overwrite the file.\n", settings.output_file)
            sys.exit(1)

    resolver = Resolver(
        index,
        timeout=settings.timeout if settings.timeout >= 0 else None,
        show_progress=settings.progress,
    )
    try:
        configuration = resolver.resolve(*settings.libraries)
    except ResolutionError as e:
        logger.error("Unable to resolve %s: %s", ", ".join(settings.libraries), e)  # noqa: TRY400
        if isinstance(e, ExhaustedCandidates):
            for cause in e.root_causes():
                logger.info("  caused by: %s", cause)
        sys.exit(1)
    except ResolutionCancelled as e:
        logger.error("%s", e)  # noqa: TRY400
        sys.exit(1)

    if settings.output_format == OutputFormat.dot:
        output_write(index.to_dot(configuration, roots=settings.libraries).source)
    else:
        output_write(json.dumps(configuration.to_obj(), indent=4))

    if settings.output_file is not None:
        logger.info("Output saved to %s\n", settings.output_file.absolute())
