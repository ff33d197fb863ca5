"""Argument parsing functionality for ec0lint-init."""

import argparse
from constants import Constants

def _indent(value):
    """Accept "tab" or a number of spaces."""
    if value == "tab":
        return value
    try:
        spaces = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("indent must be 'tab' or a number of spaces") from exc
    if spaces <= 0:
        raise argparse.ArgumentTypeError("indent must be a positive number of spaces")
    return spaces

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="ec0lint-init",
        description=(
            "Create an .ec0lintrc config file and install the packages it needs"
        ),
        add_help=True,
    )

    # Answers; anything left out is asked interactively
    parser.add_argument("--purpose",
                        dest="PURPOSE",
                        help="What ec0lint should check",
                        action="store", type=str,
                        choices=["syntax-only", "syntax-and-resources", "syntax", "all"])
    parser.add_argument("--env",
                        dest="ENV",
                        help="Environment the code runs in (repeatable)",
                        action="append", type=str,
                        choices=Constants.SUPPORTED_ENVS)
    parser.add_argument("-f", "--format",
                        dest="FORMAT",
                        help="Config file format",
                        action="store", type=str,
                        choices=Constants.SUPPORTED_FORMATS)
    parser.add_argument("--framework",
                        dest="FRAMEWORK",
                        help="Framework used by the project",
                        action="store", type=str,
                        choices=Constants.SUPPORTED_FRAMEWORKS)
    parser.add_argument("--typescript",
                        dest="TYPESCRIPT",
                        help="The project uses TypeScript",
                        action="store_true")
    parser.add_argument("--indent",
                        dest="INDENT",
                        help="Indentation style: 'tab' or a number of spaces",
                        action="store", type=_indent)

    install_group = parser.add_mutually_exclusive_group()
    install_group.add_argument("-y", "--yes",
                        dest="YES",
                        help="Install missing packages without asking",
                        action="store_true")
    install_group.add_argument("--no-install",
                        dest="NO_INSTALL",
                        help="Only write the config file; never install packages",
                        action="store_true")

    parser.add_argument("--cwd",
                        dest="CWD",
                        help="Project directory (default: current directory)",
                        action="store", type=str)
    parser.add_argument("--registry",
                        dest="REGISTRY_URL",
                        help="npm registry used for peer dependency lookups",
                        action="store", type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to an ec0lint-init settings file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
