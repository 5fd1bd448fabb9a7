#!/usr/bin/env python3
"""
CLI for the rt3scene scene reader.

Usage:
    python -m rt3scene check FILE.xml [--tags TAGS.yaml] [--malformed POLICY]
    python -m rt3scene dump FILE.xml [--json] [--tags TAGS.yaml] [--malformed POLICY]
    python -m rt3scene kinds

Examples:
    # Check a scene for unknown tags and malformed attributes
    python -m rt3scene check scenes/simple.xml --malformed warn

    # Print the render API calls a scene produces, as JSON
    python -m rt3scene dump scenes/simple.xml --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path


def _load_inputs(args):
    """Resolve the catalog and options selected on the command line."""
    from .catalog import load_catalog
    from .options import MalformedPolicy, ParseOptions

    catalog = load_catalog(Path(args.tags) if args.tags else None)
    options = ParseOptions(malformed=MalformedPolicy(args.malformed))
    return catalog, options


def _run_parse(args):
    """Parse args.file with a RecordingAPI; returns (api, result) or None on error."""
    from . import parse, RecordingAPI, SceneError

    try:
        catalog, options = _load_inputs(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    api = RecordingAPI()
    try:
        result = parse(args.file, api, catalog=catalog, options=options)
    except SceneError as e:
        print(e.diagnostic.format(), file=sys.stderr)
        return None
    return api, result


def cmd_check(args):
    """Check a scene file for load errors and warnings."""
    outcome = _run_parse(args)
    if outcome is None:
        return 1
    api, result = outcome

    if result.has_warnings:
        print(result.diagnostics.format_all())

    print(f"OK: {Path(args.file).name} - {result.tag_count} tag(s), "
          f"{len(result.warnings)} warning(s)")
    return 0


def cmd_dump(args):
    """Print the render API calls produced by a scene file."""
    outcome = _run_parse(args)
    if outcome is None:
        return 1
    api, result = outcome

    if args.json:
        print(json.dumps({
            "calls": api.to_json(),
            "diagnostics": result.diagnostics.to_json()["diagnostics"],
        }, indent=2))
        return 0

    for call in api.calls:
        if call.params is None:
            print(f"{call.name}()")
            continue
        print(f"{call.name}(")
        for name, value in call.params.items():
            print(f"    {name}: {value.kind.value} = {value.to_json()!r}")
        print(")")
    if result.has_warnings:
        print(result.diagnostics.format_all(), file=sys.stderr)
    return 0


def cmd_kinds(args):
    """List parameter kinds and whether attribute text converts to them."""
    from .kinds import ParamKind
    from .reader import has_conversion

    for kind in ParamKind:
        status = "yes" if has_conversion(kind) else "no (declare as string)"
        print(f"  {kind.value:<14} {kind.category.name.lower():<10} convertible: {status}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m rt3scene',
        description='RT3 scene file reader',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    def add_scene_args(sub):
        sub.add_argument('file', help='Scene file (XML)')
        sub.add_argument('--tags', metavar='YAML',
                         help='Tag catalog to use instead of the default search')
        sub.add_argument('--malformed', choices=['ignore', 'warn', 'strict'], default='ignore',
                         help='Policy for attributes that do not match their kind')

    # check command
    check_parser = subparsers.add_parser('check', help='Check scene file for errors')
    add_scene_args(check_parser)

    # dump command
    dump_parser = subparsers.add_parser('dump', help='Print the render API calls of a scene')
    add_scene_args(dump_parser)
    dump_parser.add_argument('--json', action='store_true', help='Output JSON')

    # kinds command
    subparsers.add_parser('kinds', help='List parameter kinds')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.action == 'check':
        return cmd_check(args)
    elif args.action == 'dump':
        return cmd_dump(args)
    elif args.action == 'kinds':
        return cmd_kinds(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
