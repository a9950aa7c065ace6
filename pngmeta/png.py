"""
PNG chunk parsing and serialization utilities.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
import zlib
from collections.abc import Iterator
from struct import pack, unpack
from typing import Protocol

from .environment import ArgumentError, ChecksumMode, InvalidFormatError

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class Chunk:
    __slots__ = ("length", "name", "data", "crc")

    length: int
    name: bytes
    data: bytes
    crc: bytes

    def __init__(self, length: int, name: bytes, data: bytes, crc: bytes):
        self.length = length
        self.name = name
        self.data = data
        self.crc = crc

    @property
    def size(self) -> int:
        "Number of bytes the chunk occupies in the PNG stream."

        return 4 + 4 + self.length + 4

    @property
    def is_critical(self) -> bool:
        "Critical chunks (e.g. `IHDR`, `PLTE` or `IDAT`) have an uppercase first letter in their type."

        return not self.name[0] & 0x20


class ChecksumFunction(Protocol):
    "Computes the 32-bit value written into the checksum field of a chunk."

    def __call__(self, chunk_type: bytes, chunk_data: bytes) -> int: ...


def crc32_checksum(chunk_type: bytes, chunk_data: bytes) -> int:
    "CRC-32 over chunk type and chunk data, as required by the PNG standard."

    return zlib.crc32(chunk_data, zlib.crc32(chunk_type)) & 0xFFFFFFFF


def placeholder_checksum(chunk_type: bytes, chunk_data: bytes) -> int:
    "Dummy zero checksum. Lenient decoders accept it; validating decoders reject the chunk."

    return 0


def get_checksum_function(mode: ChecksumMode) -> ChecksumFunction:
    match mode:
        case "crc32":
            return crc32_checksum
        case "zero":
            return placeholder_checksum
        case _:
            raise ArgumentError(f"expected: checksum mode `crc32` or `zero`; got: {mode}")


def is_png(data: bytes) -> bool:
    "True if the first 8 bytes of the input are the PNG signature."

    if len(data) < len(PNG_SIGNATURE):
        return False
    return data[: len(PNG_SIGNATURE)] == PNG_SIGNATURE


def check_signature(data: bytes) -> None:
    "Raises an error unless the input starts with the PNG signature."

    if not is_png(data):
        raise InvalidFormatError("not a valid PNG file")


def read_chunk(data: bytes, offset: int) -> Chunk:
    """
    Reads and parses a PNG chunk such as `IHDR` or `tEXt`.

    :param data: PNG binary data.
    :param offset: Position of the chunk's length field.
    :returns: The chunk starting at the given offset.
    """

    if offset + 8 > len(data):
        raise InvalidFormatError("corrupted PNG: incomplete chunk header")

    (length,) = unpack(">I", data[offset : offset + 4])
    chunk_type = data[offset + 4 : offset + 8]

    data_start = offset + 8
    data_end = data_start + length
    if data_end + 4 > len(data):
        raise InvalidFormatError(f"corrupted PNG: incomplete data for chunk {chunk_type.decode('latin1')}")

    return Chunk(length, chunk_type, data[data_start:data_end], data[data_end : data_end + 4])


def iter_chunks(data: bytes) -> Iterator[tuple[int, Chunk]]:
    """
    Iterates over the chunks of a PNG stream in order.

    Scanning stops after the `IEND` chunk.

    :param data: PNG binary data, signature included.
    :returns: Pairs of chunk offset and chunk.
    """

    check_signature(data)

    offset = len(PNG_SIGNATURE)
    while offset < len(data):
        chunk = read_chunk(data, offset)
        yield offset, chunk

        # data after the image trailer is not part of the PNG stream
        if chunk.name == b"IEND":
            break

        offset += chunk.size


def header_chunk_end(data: bytes) -> int:
    "Returns the offset immediately following the header chunk, where subsequent chunks begin."

    check_signature(data)

    offset = len(PNG_SIGNATURE)
    if offset + 4 > len(data):
        raise InvalidFormatError("missing IHDR chunk")

    (header_length,) = unpack(">I", data[offset : offset + 4])
    end = offset + 4 + 4 + header_length + 4
    if end > len(data):
        raise InvalidFormatError(f"corrupted PNG: IHDR chunk length {header_length} exceeds available data")
    return end


def make_chunk(name: bytes, data: bytes, checksum: ChecksumFunction = crc32_checksum) -> bytes:
    """
    Serializes a chunk into its on-disk representation.

    :param name: Four-character chunk type, e.g. `tEXt`.
    :param data: Chunk data.
    :param checksum: Strategy that produces the value of the checksum field.
    :returns: Length, type, data and checksum concatenated.
    """

    if len(name) != 4:
        raise ValueError(f"expected: 4-byte chunk type; got: {name!r}")

    return b"".join([pack(">I", len(data)), name, data, pack(">I", checksum(name, data))])


def verify_chunk(chunk: Chunk) -> bool:
    "True if the checksum stored in the chunk matches the CRC-32 computed over its type and data."

    (stored,) = unpack(">I", chunk.crc)
    return stored == crc32_checksum(chunk.name, chunk.data)
