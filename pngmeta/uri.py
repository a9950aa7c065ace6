"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

import base64
import binascii

from .environment import InvalidDataURIError

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


def to_data_uri(mime: str, data: bytes) -> str:
    "Generates a Base64-encoded data URI with the specified MIME type."

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def from_png_data_uri(data_uri: object) -> bytes:
    """
    Extracts PNG binary data from a data URI.

    :param data_uri: A string that starts with `data:image/png;base64,`.
    :returns: Binary data decoded from the Base64 payload.
    """

    if not isinstance(data_uri, str) or not data_uri.startswith(PNG_DATA_URI_PREFIX):
        raise InvalidDataURIError("invalid PNG as Base64 data URI")

    try:
        return base64.b64decode(data_uri[len(PNG_DATA_URI_PREFIX) :], validate=True)
    except binascii.Error as e:
        raise InvalidDataURIError("data URI payload is not properly Base64-encoded") from e


def to_png_data_uri(data: bytes) -> str:
    "Generates a data URI for PNG binary data."

    return to_data_uri("image/png", data)
