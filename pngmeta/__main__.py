"""
Read and write textual metadata in PNG images.

Adds key/value pairs to PNG files as `tEXt` chunks, looks up values by key, and lists existing entries.

Copyright 2022-2026, Levente Hunyadi
"""

import argparse
import logging
import os.path
import sys
import typing
from pathlib import Path
from typing import Any, Literal, Optional, Sequence, Union

from . import __version__
from .domain import TextEntry
from .environment import ArgumentError, MetadataProperties, PngMetadataError
from .extra import override
from .metadata import get_metadata, list_metadata, write_metadata_file
from .png import get_checksum_function
from .serializer import object_to_json_payload


class Arguments(argparse.Namespace):
    command: Literal["get", "add", "list"]
    path: Path
    key: str
    entries: list[TextEntry]
    output: Optional[Path]
    checksum: Optional[str]
    json: bool
    loglevel: str


class EntryAppendAction(argparse.Action):
    """Collect key-value pairs into a list of metadata entries."""

    @override
    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[None, str, Sequence[Any]],
        option_string: Optional[str] = None,
    ) -> None:
        entries: list[TextEntry] = []
        for value in typing.cast(Sequence[str], values):
            key, sep, text = value.partition("=")
            if not sep or not key:
                raise argparse.ArgumentError(
                    self,
                    f'Could not parse argument "{value}". It should follow the format: k1=v1 k2=v2 ...',
                )
            entries.append(TextEntry(key, text))
        setattr(namespace, self.dest, entries)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.prog = os.path.basename(os.path.dirname(__file__))
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "-l",
        "--loglevel",
        choices=[
            logging.getLevelName(level).lower()
            for level in (
                logging.DEBUG,
                logging.INFO,
                logging.WARN,
                logging.ERROR,
                logging.CRITICAL,
            )
        ],
        default=logging.getLevelName(logging.INFO),
        help="Use this option to set the log verbosity.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    get_command = subparsers.add_parser("get", help="Print the value associated with a key.")
    get_command.add_argument("path", help="Path to PNG file.")
    get_command.add_argument("key", help="Key to look up.")

    add_command = subparsers.add_parser("add", help="Add key-value pairs as tEXt chunks.")
    add_command.add_argument("path", help="Path to PNG file.")
    add_command.add_argument(
        "entries",
        nargs="+",
        action=EntryAppendAction,
        metavar="KEY=VALUE",
        help="Key-value pairs to add. Keys must be between 1 and 79 bytes.",
    )
    add_command.add_argument(
        "-o",
        "--output",
        help="Path to PNG file to write. If omitted, the input file is overwritten.",
    )
    add_command.add_argument(
        "--checksum",
        choices=["crc32", "zero"],
        help="Checksum written into new chunks (default: 'crc32', or the value of PNGMETA_CHECKSUM).",
    )

    list_command = subparsers.add_parser("list", help="Print all key-value pairs stored in tEXt chunks.")
    list_command.add_argument("path", help="Path to PNG file.")
    list_command.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print entries as a JSON array.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = get_parser()
    args = Arguments()
    parser.parse_args(argv, namespace=args)

    args.path = Path(args.path)

    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(funcName)s [%(lineno)d] - %(message)s",
    )

    try:
        match args.command:
            case "get":
                with open(args.path, "rb") as f:
                    value = get_metadata(f.read(), args.key)
                if value is None:
                    logging.error("Key not found: %s", args.key)
                    sys.exit(1)
                print(value)

            case "add":
                try:
                    properties = MetadataProperties(checksum=args.checksum)
                except ArgumentError as e:
                    parser.error(str(e))
                target = Path(args.output) if args.output else args.path
                write_metadata_file(
                    args.path,
                    target,
                    args.entries,
                    checksum=get_checksum_function(properties.checksum),
                )
                logging.info("Added %d entries to %s", len(args.entries), target)

            case "list":
                with open(args.path, "rb") as f:
                    entries = list_metadata(f.read())
                if args.json:
                    print(object_to_json_payload(entries).decode("utf-8"))
                else:
                    for entry in entries:
                        print(entry)

    except (OSError, PngMetadataError) as err:
        logging.error(err)
        sys.exit(1)


if __name__ == "__main__":
    main()
