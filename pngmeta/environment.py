"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

import os
from typing import Literal

ChecksumMode = Literal["crc32", "zero"]


class ArgumentError(ValueError):
    "Raised when wrong arguments are passed to a function call."


class PngMetadataError(ValueError):
    "Raised when PNG metadata cannot be read or written."


class InvalidFormatError(PngMetadataError):
    """
    Raised when the input does not adhere to the PNG container format.

    Examples include:

    * PNG signature missing from the first 8 bytes
    * input shorter than the PNG signature
    * chunk whose declared length runs past the end of the input
    """


class InvalidKeyLengthError(PngMetadataError):
    "Raised when a metadata key is empty or longer than 79 bytes when encoded."


class InvalidDataURIError(PngMetadataError):
    "Raised when a string is not a PNG image encoded as a Base64 data URI."


def _validate_checksum(checksum: str) -> ChecksumMode:
    match checksum.lower():
        case "crc32":
            return "crc32"
        case "zero":
            return "zero"
        case _:
            raise ArgumentError(f"expected: checksum mode `crc32` or `zero`; got: {checksum}")


class MetadataProperties:
    """
    Properties that control how metadata chunks are written.

    :param checksum: Checksum written into new chunks; `crc32` for a standard CRC-32, `zero` for a placeholder value.
    """

    checksum: ChecksumMode

    def __init__(self, checksum: str | None = None) -> None:
        opt_checksum = checksum or os.getenv("PNGMETA_CHECKSUM")

        if not opt_checksum:
            opt_checksum = "crc32"

        self.checksum = _validate_checksum(opt_checksum)
