import roi_annotation.utils.i18n  # noqa: F401

"""CLI interface for roi_annotation project.

Subcommands live in `roi_annotation/cli/<name>/__init__.py`; each one
exports COMMAND_DESCRIPTION and a `command(subparser)` function that
registers its arguments and returns the handler.
"""

import importlib
import logging
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser
from gettext import gettext as _
from pathlib import Path

logger = logging.getLogger(__name__)


def add_subcommand(subparsers, name: str, submodule):
    subparser = subparsers.add_parser(name, help=submodule.COMMAND_DESCRIPTION)
    common_flags(subparser)
    handler = submodule.command(subparser)
    subparser.set_defaults(fn=handler)


def common_flags(parser):
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help=_("Give more details about what is happening"),
    )  # noqa: E501
    parser.add_argument(
        "-V",
        "--version",
        dest="is_show_version",
        action="store_true",
        help=_("Print version and exit"),
    )  # noqa: E501


def config_flag(parser):
    from roi_annotation.config import store_path

    parser.add_argument(
        "-c",
        "--config",
        dest="config",
        type=Path,
        default=store_path(),
        help=_("Stream manager config file, defaults to ROI_store__path"),
    )


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="roi_annotation", formatter_class=ArgumentDefaultsHelpFormatter
    )
    common_flags(parser)
    subparsers = parser.add_subparsers()

    for module in sorted(Path(__file__).parent.glob("*/__init__.py")):
        if str(module).find("pycache") > 0:
            continue
        module_name = module.parent.name
        subcommand_module = importlib.import_module(
            f"roi_annotation.cli.{module_name}"
        )
        add_subcommand(subparsers, module_name, subcommand_module)
    return parser


def get_version() -> str:
    return (Path(__file__).parent.parent / "VERSION").read_text().strip()


def main(argv=None):  # pragma: no cover
    """
    The main function executes on commands:
    `python -m roi_annotation` and `$ roi_annotation `.
    """
    logging.basicConfig()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.root.setLevel(logging.DEBUG)

    version = get_version()
    if args.is_show_version:
        print(version)
        sys.exit(0)
    logger.debug(f"{_('Starting')} roi_annotation v{version}")

    fn = args.__dict__.get("fn")
    args.__dict__["fn"] = None
    if fn is not None:
        sys.exit(fn(args) or 0)
    else:
        parser.parse_args([*(argv if argv is not None else sys.argv[1:]), "--help"])
