#!/usr/bin/env python3
"""
dirchain CLI

A tool for resolving Sprockets-style require directives and printing the
files a source file depends on, in dependency order.
"""

import argparse
import logging
import sys
from pathlib import Path

from graph.model import CyclicDependencyError
from scanner.builder import ChainScanner
from scanner.config import ScanConfig, find_config, load_config
from scanner.errors import ScanError
from exporters import to_list, to_json, to_bundle, to_ascii


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dirchain",
        description="Resolve require directives and print a file's dependency chain.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dirchain app.coffee -I assets            # Dependencies then app.coffee, one per line
  dirchain app.js -I assets -e js -e coffee
  dirchain app.js -I assets -f bundle -o build/app.js
  dirchain app.js -I assets -f tree --ascii-style=ascii
  dirchain app.js -c dirchain.yaml -f json
        """,
    )

    parser.add_argument(
        "file",
        help="File to scan, relative to a load path or absolute",
    )

    parser.add_argument(
        "-I", "--load-path",
        action="append",
        default=None,
        help="Directory searched for files, in order (repeatable)",
    )

    parser.add_argument(
        "-e", "--ext",
        action="append",
        default=None,
        help="Extension of files that hold directives (repeatable; replaces configured extensions)",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Config file (default: dirchain.yaml/.yml/.json/.toml or pyproject.toml in the current directory)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["list", "json", "bundle", "tree"],
        default="list",
        help="Output format (default: list)",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output)",
    )

    return parser.parse_args(args)


def _load_settings(parsed) -> ScanConfig:
    """Combine the config file with command line overrides."""
    if parsed.config:
        config = load_config(Path(parsed.config))
    else:
        found = find_config(Path.cwd())
        config = load_config(found) if found else ScanConfig()

    if parsed.ext:
        config.extensions = [ext.lstrip(".") for ext in parsed.ext]
    if parsed.load_path:
        config.load_paths = config.load_paths + parsed.load_path
    if not config.load_paths:
        config.load_paths = ["."]

    return config


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    if parsed.verbose:
        logging.basicConfig(
            level=logging.DEBUG if parsed.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        config = _load_settings(parsed)
        scanner = ChainScanner(extensions=config.extensions, load_paths=config.load_paths)
        scanner.scan(parsed.file)

        if parsed.format == "json":
            output = to_json(scanner.get_file_chain(parsed.file))
        elif parsed.format == "bundle":
            output = to_bundle(scanner.get_file_chain(parsed.file))
        elif parsed.format == "tree":
            # Surface cycles as errors, as the other formats do
            scanner.get_chain(parsed.file)
            output = to_ascii(scanner.graph, parsed.file, style=parsed.ascii_style)
        else:  # list (default)
            output = to_list(scanner.get_chain(parsed.file) + [parsed.file])
    except (ScanError, CyclicDependencyError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
