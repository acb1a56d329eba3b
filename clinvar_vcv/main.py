import logging
import sys
from argparse import Namespace

import coloredlogs

from clinvar_vcv.cli import parse_args
from clinvar_vcv.config import get_env
from clinvar_vcv.parse import parse_and_write_items

_logger = logging.getLogger("clinvar_vcv")


def run_parse(args: Namespace):
    result = parse_and_write_items(
        args.input_filename,
        args.output_filename,
        limit=args.limit,
    )
    print(result)
    return result


def run_cli(argv: list[str]):
    """
    Primary entrypoint function for CLI args. Takes argv vector excluding program name.
    """
    args = parse_args(argv)
    if args.subcommand == "parse":
        return run_parse(args)
    raise ValueError(f"Unknown subcommand: {args.subcommand}")


def main(argv=sys.argv[1:]):
    """
    Used when executing main as a script.
    Initializes default configs.
    """
    coloredlogs.install(level=get_env().log_level)
    run_cli(argv)


if __name__ == "__main__":
    main()
