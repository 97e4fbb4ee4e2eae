"""spm-outdated - report Swift package dependencies with newer tags.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import parse_args
from common.logging_utils import configure_logging
from constants import Constants, ExitCodes, _load_yaml_config, apply_config
from dependency import apply_requirements, dependencies_from_pins
from manifest.discovery import discover_manifest_sources, load_manifests
from manifest.merge import merge_manifests
from output.console import format_json, format_table
from repository.providers import build_tag_fetcher
from resolved.lockfile_parser import load_resolved
from resolved.locator import locate_resolved_file
from resolved.models import PackageResolvedError
from versioning.checker import VersionChecker

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        file_handler = logging.FileHandler(args.LOG_FILE)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", args.LOG_FILE)


def _apply_cli_overrides(args) -> None:
    """CLI flags take precedence over YAML configuration."""
    if args.TAG_SOURCE:
        Constants.TAG_SOURCE = args.TAG_SOURCE
    if args.CONCURRENCY is not None:
        Constants.MAX_CONCURRENCY = max(1, args.CONCURRENCY)


def collect_requirements(resolved_path, dependencies):
    """Attach manifest requirements found around resolved_path to dependencies."""
    sources = discover_manifest_sources(resolved_path)
    if not sources:
        logger.info("No Package.swift or Xcode project found for %s", resolved_path)
        return dependencies
    for source in sources:
        logger.info("Reading requirements from %s", source.path)
    declarations = merge_manifests(load_manifests(sources))
    return apply_requirements(dependencies, declarations)


def run(args) -> int:
    """Execute one check and print the report; returns the exit code."""
    search_path = args.path or os.getcwd()

    try:
        resolved_path = locate_resolved_file(search_path)
        resolved = load_resolved(resolved_path)
    except PackageResolvedError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value
    logger.info("Using %s", resolved_path)

    dependencies = dependencies_from_pins(resolved.pins)
    if not dependencies:
        print("No dependencies found in Package.resolved")
        return ExitCodes.SUCCESS.value

    if not args.NO_MANIFEST:
        dependencies = collect_requirements(resolved_path, dependencies)

    checker = VersionChecker(build_tag_fetcher(Constants.TAG_SOURCE), Constants.MAX_CONCURRENCY)
    checked = checker.check_for_updates(dependencies)

    if args.JSON:
        print(format_json(checked, show_all=args.SHOW_ALL))
    else:
        use_colors = False if args.NO_COLOR else None
        print(format_table(checked, show_all=args.SHOW_ALL, use_colors=use_colors))
    return ExitCodes.SUCCESS.value


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    apply_config(_load_yaml_config(args.CONFIG))
    _apply_cli_overrides(args)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
