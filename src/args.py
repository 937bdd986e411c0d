"""Argument parsing functionality for nestdeps."""

import argparse

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _add_declaring(parser):
    parser.add_argument("--declaring",
                        dest="DECLARING",
                        help="Identifier of the declaring bundle, used to substitute 'this' in version ranges",
                        action="store",
                        type=str)


def _add_output(parser, help_text):
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help=help_text,
                        action="store",
                        type=str)


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="nestdeps",
        description="nestdeps - bundle identifier and dependency declaration tool",
        add_help=True,
    )
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    sub = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    sub.required = True

    check = sub.add_parser("check", help="Parse declaration files and report their targets")
    check.add_argument("FILES", nargs="+", help="Declaration files")
    _add_declaring(check)
    check.add_argument("--without-optionals",
                       dest="WITHOUT_OPTIONALS",
                       help="Ignore optional dependencies",
                       action="store_true")

    fmt = sub.add_parser("format", help="Rewrite a declaration file in canonical form")
    fmt.add_argument("FILE", help="Declaration file")
    _add_declaring(fmt)
    _add_output(fmt, "Path to output file (default: stdout)")
    fmt.add_argument("--without-optionals",
                     dest="WITHOUT_OPTIONALS",
                     help="Drop optional dependencies",
                     action="store_true")

    export = sub.add_parser("export", help="Export a declaration file as JSON")
    export.add_argument("FILE", help="Declaration file")
    _add_declaring(export)
    _add_output(export, "Path to JSON output file (default: stdout)")

    ident = sub.add_parser("identifier", help="Show the canonical form of bundle identifiers")
    ident.add_argument("IDENTIFIERS", nargs="+", help="Bundle identifiers")

    compare = sub.add_parser("compare", help="Compare two version numbers or version qualifiers")
    compare.add_argument("LEFT", help="First version")
    compare.add_argument("RIGHT", help="Second version")
    compare.add_argument("--qualifiers",
                         dest="QUALIFIERS",
                         help="Compare version qualifiers (v1.0) instead of version numbers",
                         action="store_true")
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
