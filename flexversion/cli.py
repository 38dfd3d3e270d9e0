# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for flexversion.

Commands:

    parse: Parse one or more version strings and show leftovers
    compare: Compare two version strings
    check: Compare an installed version against a package feed

Example:
    Parse a tagged version:
        ```bash
        $ flexver parse 1.2.3.4-beta3
        ```

    Machine-readable output:
        ```bash
        $ flexver parse 1.2.2147483700.4 --json
        ```

    Compare two versions:
        ```bash
        $ flexver compare 1.2.10 1.2.9
        ```

    Check a package against the NuGet feed:
        ```bash
        $ flexver check Newtonsoft.Json 12.0.3 --verbose
        ```

Exit Codes:

- 0: Success (parse: every input usable; check: up to date)
- 1: Error (unusable input, configuration or network failure)
- 2: check only, a newer version is published

Note:
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode and shows numeric tier decisions.

"""

from __future__ import annotations

import argparse
from importlib.metadata import version
import json
from pathlib import Path
import sys

from flexversion.config import capabilities_from_config, load_effective_config
from flexversion.exceptions import ConfigError, FlexVersionError
from flexversion.freshness import check_freshness
from flexversion.logging import get_logger, set_global_logger
from flexversion.versioning import (
    FlexibleVersionParser,
    NumericCapabilities,
    ParseResult,
    compare_versions,
)

EXIT_OUTDATED = 2


def _configure(args: argparse.Namespace) -> dict:
    """Set up the global logger and load the effective config."""
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)
    return load_effective_config(Path(args.config) if args.config else None)


def _build_parser(cfg: dict, args: argparse.Namespace) -> FlexibleVersionParser:
    capabilities = capabilities_from_config(cfg)
    if getattr(args, "no_big_integer", False):
        capabilities = NumericCapabilities(
            big_integer=False, floating_point=capabilities.floating_point
        )
    return FlexibleVersionParser(capabilities=capabilities)


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def _print_parse_result(result: ParseResult) -> None:
    leftovers = result.leftovers
    print("=" * 70)
    print("PARSE RESULTS")
    print("=" * 70)
    print(f"Input:       {result.raw!r}")
    print(f"Version:     {result.version if result.is_usable else '(none)'}")
    print(f"Components:  {tuple(result.version)}")
    print(f"Outcome:     {result.outcome.name} ({int(result.outcome)})")
    if not leftovers.is_empty or result.is_partial:
        print("Leftovers:")
        for name, value in leftovers.to_dict().items():
            print(f"  {name:<9} {value!r}")
    print("=" * 70)


def cmd_parse(args: argparse.Namespace) -> int:
    """Handler for 'flexver parse' command.

    Args:
        args: Parsed command-line arguments containing the version strings
            and output flags.

    Returns:
        Exit code (0 when every input is usable, 1 otherwise).

    """
    try:
        cfg = _configure(args)
    except ConfigError as err:
        return _report_error(err, args)

    parser = _build_parser(cfg, args)
    results = [parser.parse(text) for text in args.versions]

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        for result in results:
            _print_parse_result(result)
            print()

    return 0 if all(r.is_usable for r in results) else 1


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'flexver compare' command.

    Prints "older", "same" or "newer" describing the first version
    relative to the second.
    """
    try:
        cfg = _configure(args)
    except ConfigError as err:
        return _report_error(err, args)

    parser = _build_parser(cfg, args)
    result = compare_versions(args.first, args.second, parser=parser)
    if result == 0:
        print(f"{args.first} is the same as {args.second}")
    else:
        word = "newer" if result > 0 else "older"
        print(f"{args.first} is {word} than {args.second}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'flexver check' command.

    Args:
        args: Parsed command-line arguments containing package id, installed
            version, and optional feed overrides.

    Returns:
        Exit code (0 up to date, 2 outdated, 1 on error).

    """
    try:
        cfg = _configure(args)
        freshness_cfg = cfg["freshness"]
        parser = _build_parser(cfg, args)
        result = check_freshness(
            args.package,
            args.installed,
            feed_url=args.feed_url or freshness_cfg["feed_url"],
            versions_path=args.versions_path or freshness_cfg["versions_path"],
            timeout=freshness_cfg["timeout"],
            headers=freshness_cfg["headers"],
            parser=parser,
        )
    except FlexVersionError as err:
        return _report_error(err, args)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print("=" * 70)
        print("FRESHNESS RESULTS")
        print("=" * 70)
        print(f"Package:      {result.package}")
        print(f"Installed:    {result.installed} ({result.installed_outcome.name})")
        print(f"Latest:       {result.latest or '(none)'}")
        print(f"Candidates:   {result.candidate_count}")
        print(f"Status:       {'OUTDATED' if result.is_outdated else 'UP TO DATE'}")
        print("=" * 70)

    return EXIT_OUTDATED if result.is_outdated else 0


def _add_common_flags(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--config",
        default=None,
        help="Path to a flexversion.yaml (default: search upward from cwd)",
    )
    subparser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    subparser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the flexver CLI.

    This function is registered as the 'flexver' console script in pyproject.toml.
    """
    parser = argparse.ArgumentParser(
        prog="flexver",
        description="flexver - best-effort four-part version parsing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"flexver {version('flexversion')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'parse' command
    parser_parse = subparsers.add_parser(
        "parse",
        help="Parse version strings and show leftovers",
        description="Parse each version string into major.minor.build.revision and report what could not be converted.",
    )
    parser_parse.add_argument("versions", nargs="+", help="Version strings to parse")
    parser_parse.add_argument(
        "--json", action="store_true", help="Print results as JSON"
    )
    parser_parse.add_argument(
        "--no-big-integer",
        action="store_true",
        help="Disable the arbitrary-precision tier (fall back to double)",
    )
    _add_common_flags(parser_parse)
    parser_parse.set_defaults(func=cmd_parse)

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Compare two version strings",
        description="Report whether the first version is older, the same, or newer than the second.",
    )
    parser_compare.add_argument("first", help="First version string")
    parser_compare.add_argument("second", help="Second version string")
    _add_common_flags(parser_compare)
    parser_compare.set_defaults(func=cmd_compare)

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Check an installed version against a package feed",
        description="Fetch published versions from a JSON feed and report whether the installed version is outdated.",
    )
    parser_check.add_argument("package", help="Package identifier")
    parser_check.add_argument("installed", help="Installed version string")
    parser_check.add_argument(
        "--feed-url",
        default=None,
        help="Feed URL template with a {package} placeholder (default: from config)",
    )
    parser_check.add_argument(
        "--versions-path",
        default=None,
        help="JSONPath selecting version strings (default: from config)",
    )
    parser_check.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    _add_common_flags(parser_check)
    parser_check.set_defaults(func=cmd_check)

    # Parse and dispatch
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
