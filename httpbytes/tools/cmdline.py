import argparse

from httpbytes.utils import human


def _size(value: str) -> int:
    try:
        size = human.parse_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    assert size is not None
    return size


def httpbytes() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpbytes",
        description="Convert raw HTTP/1.1 messages to JSON and back.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="show version number and exit",
        dest="version",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Increase log verbosity.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["decode-request", "decode-response", "encode-request", "encode-response"],
        help="""
            decode-* reads a raw HTTP message and prints it as JSON,
            encode-* reads the JSON shape and writes the raw HTTP message.
        """,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        metavar="PATH",
        help="Input file, or - for stdin (default).",
    )

    group = parser.add_argument_group("Converter Options")
    group.add_argument(
        "--preserve-header-case",
        action="store_true",
        dest="preserve_header_case",
        help="Keep the case of header names.",
    )
    group.add_argument(
        "--max-body-size",
        type=_size,
        dest="max_body_size",
        metavar="SIZE",
        help="Refuse bodies larger than SIZE. Understands k/m/g suffixes, e.g. 3m.",
    )
    group.add_argument(
        "--boundary",
        dest="multipart_boundary",
        metavar="BOUNDARY",
        help="Multipart boundary for encoded forms. Random by default.",
    )
    group.add_argument(
        "--no-decompress",
        action="store_false",
        dest="decompress",
        help="Do not undo content-encodings of responses.",
    )
    group.add_argument(
        "--strict",
        action="store_true",
        dest="strict",
        help="Reject unknown methods, malformed targets and header names.",
    )
    return parser
