"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .domain import TextEntry
from .environment import InvalidKeyLengthError
from .png import ChecksumFunction, check_signature, crc32_checksum, header_chunk_end, iter_chunks, make_chunk
from .uri import from_png_data_uri, to_png_data_uri

logger = logging.getLogger(__name__)

TEXT_CHUNK = b"tEXt"
MAX_KEY_LENGTH = 79


def _encode_key(key: str) -> bytes:
    key_bytes = key.encode("utf-8")
    if not 1 <= len(key_bytes) <= MAX_KEY_LENGTH:
        raise InvalidKeyLengthError(f"invalid length for key: expected between 1 and {MAX_KEY_LENGTH} bytes; got: {len(key_bytes)}")
    return key_bytes


def _key_prefixes(key: str) -> list[bytes]:
    "Keyword followed by null separator, as written by this module (UTF-8) and by the PNG standard (Latin-1)."

    prefixes = [key.encode("utf-8") + b"\x00"]
    try:
        latin1 = key.encode("latin1") + b"\x00"
    except UnicodeEncodeError:
        return prefixes

    if latin1 != prefixes[0]:
        prefixes.append(latin1)
    return prefixes


def _decode_text(data: bytes) -> str:
    "Decodes text written by this module (UTF-8), falling back to Latin-1 as mandated for `tEXt` by the PNG standard."

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin1")


def add_metadata(data: bytes, key: str, value: str, *, checksum: ChecksumFunction = crc32_checksum) -> bytes:
    """
    Adds a key/value pair as a `tEXt` chunk to a PNG image.

    The new chunk is placed immediately after the `IHDR` (image header) chunk. Keys already present in the image are
    not checked; when the same key appears multiple times, readers see the entry added last.

    :param data: PNG binary data.
    :param key: Keyword that identifies the metadata, 1 to 79 bytes when encoded as UTF-8.
    :param value: Text to store.
    :param checksum: Strategy that produces the checksum field of the new chunk.
    :returns: PNG binary data with the metadata chunk inserted.
    """

    check_signature(data)
    key_bytes = _encode_key(key)
    offset = header_chunk_end(data)

    chunk = make_chunk(TEXT_CHUNK, key_bytes + b"\x00" + value.encode("utf-8"), checksum)
    logger.debug("Inserting %d-byte tEXt chunk for key %r at offset %d", len(chunk), key, offset)

    return b"".join([data[:offset], chunk, data[offset:]])


def add_metadata_from_base64_data_uri(data_uri: str, key: str, value: str, *, checksum: ChecksumFunction = crc32_checksum) -> str:
    """
    Adds a key/value pair as a `tEXt` chunk to a PNG image embedded in a data URI.

    :param data_uri: Data URI starting with `data:image/png;base64,`.
    :param key: Keyword that identifies the metadata, 1 to 79 bytes when encoded as UTF-8.
    :param value: Text to store.
    :param checksum: Strategy that produces the checksum field of the new chunk.
    :returns: Data URI with a Base64-encoded PNG image that contains the metadata.
    """

    data = from_png_data_uri(data_uri)
    return to_png_data_uri(add_metadata(data, key, value, checksum=checksum))


def get_metadata(data: bytes, key: str) -> str | None:
    """
    Retrieves the value of a `tEXt` chunk with the given key.

    Chunks are scanned in stream order, and the first match is returned.

    :param data: PNG binary data.
    :param key: Keyword that identifies the metadata.
    :returns: The value associated with the key, or `None` if no such key exists.
    """

    check_signature(data)

    prefixes = _key_prefixes(key)
    for offset, chunk in iter_chunks(data):
        if chunk.name != TEXT_CHUNK:
            continue

        for prefix in prefixes:
            if chunk.data.startswith(prefix):
                logger.debug("Found tEXt chunk for key %r at offset %d", key, offset)
                return _decode_text(chunk.data[len(prefix) :])

    return None


def list_metadata(data: bytes) -> list[TextEntry]:
    """
    Enumerates all `tEXt` chunks in a PNG image.

    :param data: PNG binary data.
    :returns: Key/value pairs in stream order, duplicates included.
    """

    entries: list[TextEntry] = []
    for offset, chunk in iter_chunks(data):
        if chunk.name != TEXT_CHUNK:
            continue

        key, sep, value = chunk.data.partition(b"\x00")
        if not sep:
            logger.warning("Skipping tEXt chunk without keyword separator at offset %d", offset)
            continue

        entries.append(TextEntry(_decode_text(key), _decode_text(value)))

    return entries


def read_metadata_file(path: str | Path, key: str) -> str | None:
    "Retrieves the value of a `tEXt` chunk with the given key from a PNG file."

    with open(path, "rb") as f:
        return get_metadata(f.read(), key)


def write_metadata_file(
    source: str | Path,
    target: str | Path,
    entries: Iterable[TextEntry],
    *,
    checksum: ChecksumFunction = crc32_checksum,
) -> None:
    """
    Adds key/value pairs to a PNG file.

    :param source: PNG file to read.
    :param target: PNG file to write, which may be the same as the source.
    :param entries: Key/value pairs to add, in order.
    :param checksum: Strategy that produces the checksum field of new chunks.
    """

    with open(source, "rb") as f:
        data = f.read()

    for entry in entries:
        data = add_metadata(data, entry.key, entry.value, checksum=checksum)

    with open(target, "wb") as f:
        f.write(data)
