"""Argument parsing functionality for spm-outdated."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="spm-outdated",
        description=(
            "Check for outdated Swift package dependencies. Scans Package.resolved "
            "and reports dependencies that have newer tagged versions available."
        ),
        add_help=True,
    )

    parser.add_argument("path",
                        nargs="?",
                        default=None,
                        help="Path to a directory, .xcodeproj, .xcworkspace, or Package.resolved file "
                             "(default: current directory)")
    parser.add_argument("--json",
                        dest="JSON",
                        help="Output results in JSON format",
                        action="store_true")
    parser.add_argument("-a", "--all",
                        dest="SHOW_ALL",
                        help="Show all dependencies, not only outdated ones",
                        action="store_true")
    parser.add_argument("--no-manifest",
                        dest="NO_MANIFEST",
                        help="Do not read Package.swift / Xcode project requirements",
                        action="store_true")
    parser.add_argument("--tag-source",
                        dest="TAG_SOURCE",
                        help="How to list remote tags: git (git ls-remote) or api (GitHub/GitLab REST)",
                        action="store",
                        type=str.lower,
                        choices=Constants.TAG_SOURCES)
    parser.add_argument("-j", "--concurrency",
                        dest="CONCURRENCY",
                        help="Maximum number of concurrent tag lookups",
                        action="store",
                        type=int)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--no-color",
                        dest="NO_COLOR",
                        help="Disable colored output",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: SPM_OUTDATED_LOG_LEVEL or WARNING)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
