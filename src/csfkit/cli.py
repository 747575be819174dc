"""csfutil - command line tool for CSF string table files.

Usage:
    csfutil export <filename.csf> [output.xlsx]
    csfutil import <input.xlsx> <filename.csf>
    csfutil merge <source.csf> <destination.csf>
    csfutil new <filename.csf> [language code]
    csfutil inspect <filename.csf>
    csfutil help [command]

Spreadsheet rows have the layout:

    <CSF Label Name>    <CSF Value>    <CSF Extra Value>
"""

import sys
import json
import logging
import argparse
from typing import Optional

from .formats.csf import LANGUAGES
from .Tools.core.file_operations import (
    FileOpResult, export_file, import_file, merge_files, create_file, inspect_file,
    DEFAULT_EXPORT_NAME,
)


USAGE_MESSAGES = {
    "export": """Usage: csfutil export <filename.csf> [output.xlsx]

Exports all CSF label/value items inside the given CSF file into a spreadsheet. The exported file will have the following structure:

\t<CSF Label Name>\t<CSF Value>\t<CSF Extra Value>

This file can be imported into a CSF file later.""",
    "import": """Usage: csfutil import <input.xlsx> <filename.csf>

Imports all label/value items inside the spreadsheet into the CSF file. Existing items will be overwritten and missing items will be created. The file must have the following structure:

\t<CSF Label Name>\t<CSF Value>\t<CSF Extra Value>

Rows with any other number of columns are rejected and the CSF file is left unchanged.""",
    "merge": """Usage: csfutil merge <source.csf> <destination.csf>

Merges all label/value items inside the source file into the destination file. Only existing items will be overwritten and missing items won't be created.""",
    "new": """Usage: csfutil new <filename.csf> [language code]

Creates an empty version 3 CSF file. Valid language codes are 0~9, anything else is recognized as "Unknown".""",
    "inspect": """Usage: csfutil inspect <filename.csf>

Prints the header fields and the number of labels in each category.""",
    "help": """csfutil is a tool for manipulating CSF files.

Usage:

\tcsfutil <command> [arguments]

The commands are:

\texport   convert a CSF file to a spreadsheet
\timport   merge items from a spreadsheet into a CSF file
\tmerge    merge one CSF file into another
\tnew      create an empty version 3 CSF file
\tinspect  show header and category summary

Use "csfutil help <command>" for more information about a command.""",
}


def print_usage(cmd: Optional[str]):
    if cmd is None:
        print(USAGE_MESSAGES["help"])
    elif cmd not in USAGE_MESSAGES:
        print(f"Unknown command: {cmd}")
        print("Run 'csfutil help' for usage.")
    else:
        print(USAGE_MESSAGES[cmd])


def report(result: FileOpResult) -> int:
    """Print the outcome of a file operation, returning an exit code."""
    if not result.success:
        print(f"ERROR: {result.message}", file=sys.stderr)
        return 1
    print(f"{result.message}: {result.path}")
    return 0


def cmd_export(args) -> int:
    """Export a CSF file to a spreadsheet."""
    return report(export_file(args.file, args.output))


def cmd_import(args) -> int:
    """Import a spreadsheet into a CSF file."""
    return report(import_file(args.input, args.file))


def cmd_merge(args) -> int:
    """Merge one CSF file into another."""
    return report(merge_files(args.source, args.destination))


def cmd_new(args) -> int:
    """Create an empty CSF file."""
    return report(create_file(args.file, args.language))


def cmd_inspect(args) -> int:
    """Show the header and categories of a CSF file."""
    result = inspect_file(args.file)
    if not result.success:
        return report(result)

    info = result.data
    if args.format == "json":
        print(json.dumps(info, indent=2))
        return 0

    print(f"CSF file: {args.file}")
    print(f"Version: {info['version']}  |  Language: {info['language_name']} ({info['language']})")
    print(f"Labels: {info['labels']}  (header says {info['num_labels']} labels, "
          f"{info['num_strings']} strings)  |  With extra: {info['with_extra']}\n")
    if info["categories"]:
        print("CATEGORIES")
        print("─" * 50)
        for name, count in info["categories"].items():
            print(f"  {name or '(none)':<30} {count:>6}")
    return 0


def cmd_help(args) -> int:
    print_usage(args.topic)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="csfutil",
        description="Read, edit and rewrite CSF string table files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Language codes: " + ", ".join(f"{i}={n}" for i, n in enumerate(LANGUAGES[:10])),
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    # export
    p = sub.add_parser("export", help="Convert a CSF file to a spreadsheet")
    p.add_argument("file", help="Path to the .csf file")
    p.add_argument("output", nargs="?", default=DEFAULT_EXPORT_NAME,
                   help=f"Output spreadsheet (default: {DEFAULT_EXPORT_NAME})")

    # import
    p = sub.add_parser("import", help="Merge items from a spreadsheet into a CSF file")
    p.add_argument("input", help="Path to the .xlsx file")
    p.add_argument("file", help="Path to the .csf file to update")

    # merge
    p = sub.add_parser("merge", help="Merge one CSF file into another")
    p.add_argument("source", help="CSF file to take values from")
    p.add_argument("destination", help="CSF file to update")

    # new
    p = sub.add_parser("new", help="Create an empty version 3 CSF file")
    p.add_argument("file", help="Path to the new .csf file")
    p.add_argument("language", nargs="?", type=int, default=0, help="Language code (default: 0)")

    # inspect
    p = sub.add_parser("inspect", help="Show header and category summary")
    p.add_argument("file", help="Path to the .csf file")
    p.add_argument("--format", choices=["table", "json"], default="table",
                   help="Output format (default: table)")

    # help
    p = sub.add_parser("help", help="Show help for a command")
    p.add_argument("topic", nargs="?", help="Command name")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        print("Run 'csfutil help' for usage.")
        return 0

    commands = {
        "export": cmd_export,
        "import": cmd_import,
        "merge": cmd_merge,
        "new": cmd_new,
        "inspect": cmd_inspect,
        "help": cmd_help,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
