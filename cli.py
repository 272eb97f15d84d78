#!/usr/bin/env python3
"""
dlldepends CLI

Finds the projects of a Visual Studio solution that depend on a component
and reports how each one declares the dependency.
"""

import argparse
import sys
from functools import partial
from pathlib import Path

from scanner.finder import find_references
from scanner.solution import SolutionReadError
from exporters import to_text, to_json, to_yaml


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dlldepends",
        description="Find the projects of a solution that reference a component.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dlldepends App.sln Newtonsoft.Json           # Trace and summary
  dlldepends App.sln Grpc.Tools.dll -q         # Summary only
  dlldepends App.sln System.Data -f json       # JSON report on stdout
  dlldepends App.sln Serilog -f yaml -o deps.yaml
        """,
    )

    # Positional arguments
    parser.add_argument(
        "solution",
        help="Path to the solution (.sln) file",
    )

    parser.add_argument(
        "target",
        help="Component to look for, as a name or a .dll file name",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print the per-project trace",
    )

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    # Keep machine-readable output clean by tracing to stderr
    trace = None
    if not parsed.quiet:
        stream = sys.stdout if parsed.format == "text" else sys.stderr
        trace = partial(print, file=stream)

    base = Path(parsed.relative_to).resolve() if parsed.relative_to else None

    try:
        result = find_references(parsed.solution, parsed.target, trace=trace)
    except SolutionReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.format == "json":
        output = to_json(result, base=base)
    elif parsed.format == "yaml":
        output = to_yaml(result, base=base)
    else:  # text (default)
        output = to_text(result, base=base)

    # Write output
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
