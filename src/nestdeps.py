"""nestdeps - bundle identifier and dependency declaration tool.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from bundle.errors import NestDepsError
from bundle.identifier import Identifier
from bundle.version_order import compare_version_numbers, compare_version_qualifiers
from cli_config import ConfigError, apply_config_overrides, load_config
from codec import format_dependency_information, parse
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from serialization import to_json

logger = logging.getLogger(__name__)


def load_declarations(file_name, declaring=None, without_optionals=False):
    """Loads dependency declarations from a file.

    Args:
        file_name (str): Declaration file path.
        declaring (str, optional): Identifier of the declaring bundle.
        without_optionals (bool, optional): Drop optional dependencies.

    Returns:
        DependencyInformation: Parsed declarations.
    """
    with open(file_name, "rb") as fh:
        info = parse(fh, declaring)
    if without_optionals:
        info = info.without_optionals()
    return info


def emit(text, path=None):
    """Writes command output to ``path``, or to stdout when no path is given."""
    if path:
        with open(path, "w", encoding=Constants.ENCODING, newline="") as fh:
            fh.write(text)
        logging.info("Output written to %s", path)
    else:
        sys.stdout.write(text)


def cmd_check(args):
    """Parses every file and reports its targets and dependency counts."""
    for file_name in args.FILES:
        info = load_declarations(file_name, args.DECLARING, args.WITHOUT_OPTIONALS)
        lines = [f"{file_name}: {len(info)} target bundle(s)"]
        for bundle_id in info:
            dependency_list = info.get_dependency_list(bundle_id)
            kinds = ", ".join(dependency_list.all_present_kinds())
            lines.append(f"  {bundle_id}: {len(dependency_list)} dependency(ies) [{kinds}]")
        emit("\n".join(lines) + "\n")
    return ExitCodes.SUCCESS.value


def cmd_format(args):
    """Rewrites a declaration file in canonical form."""
    info = load_declarations(args.FILE, args.DECLARING, args.WITHOUT_OPTIONALS)
    emit(format_dependency_information(info), args.OUTPUT)
    return ExitCodes.SUCCESS.value


def cmd_export(args):
    """Exports a declaration file as JSON."""
    info = load_declarations(args.FILE, args.DECLARING)
    emit(to_json(info) + "\n", args.OUTPUT)
    return ExitCodes.SUCCESS.value


def cmd_identifier(args):
    """Prints the canonical form and parts of each identifier."""
    lines = []
    for text in args.IDENTIFIERS:
        identifier = Identifier.parse(text)
        lines.append(str(identifier))
        lines.append(f"  name: {identifier.name}")
        lines.append(f"  qualifiers: {', '.join(identifier.qualifiers)}")
        lines.append(f"  meta-qualifiers: {', '.join(identifier.meta_qualifiers)}")
        lines.append(f"  version: {identifier.version_number or ''}")
    emit("\n".join(lines) + "\n")
    return ExitCodes.SUCCESS.value


def cmd_compare(args):
    """Prints -1, 0 or 1 for the ordering of two versions."""
    compare = compare_version_qualifiers if args.QUALIFIERS else compare_version_numbers
    result = compare(args.LEFT, args.RIGHT)
    emit(f"{(result > 0) - (result < 0)}\n")
    return ExitCodes.SUCCESS.value


COMMANDS = {
    "check": cmd_check,
    "format": cmd_format,
    "export": cmd_export,
    "identifier": cmd_identifier,
    "compare": cmd_compare,
}


def main(argv=None):
    """Main function of the program."""
    try:
        args = parse_args(argv)
    except SystemExit as e:
        return ExitCodes.SUCCESS.value if not e.code else ExitCodes.USAGE_ERROR.value

    try:
        apply_config_overrides(args, load_config(args.CONFIG))
    except (OSError, ConfigError) as e:
        configure_logging(getattr(args, "LOG_LEVEL", None))
        logging.error("Config error: %s, aborting", e)
        return ExitCodes.USAGE_ERROR.value
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.COMMAND)
        )

    try:
        code = COMMANDS[args.COMMAND](args)
    except FileNotFoundError as e:
        logging.error("File not found: %s, aborting", e)
        return ExitCodes.FILE_ERROR.value
    except OSError as e:
        logging.error("IO error: %s, aborting", e)
        return ExitCodes.FILE_ERROR.value
    except NestDepsError as e:
        logging.error("%s", e)
        return ExitCodes.DECLARATION_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(event="function_exit", component="cli", action=args.COMMAND, outcome="success")
        )
    return code


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
