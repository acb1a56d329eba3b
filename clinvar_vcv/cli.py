import argparse


def parse_args(argv):
    parser = argparse.ArgumentParser(prog="clinvar-vcv")
    subparsers = parser.add_subparsers(
        dest="subcommand", help="Subcommands", required=True
    )

    # PARSE
    parse_sp = subparsers.add_parser(
        "parse", help="Classify every VariationArchive in a ClinVar VCV XML file"
    )
    parse_sp.add_argument("--input-filename", "-i", required=True, type=str)
    parse_sp.add_argument(
        "--output-filename",
        "-o",
        required=True,
        type=str,
        help=(
            "NDJSON output file. A .gz suffix compresses the output. "
            "Set environment variable GZIP_COMPRESSLEVEL to set compression level (default: 9)"
        ),
    )
    parse_sp.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many items have been written",
    )

    return parser.parse_args(argv)
