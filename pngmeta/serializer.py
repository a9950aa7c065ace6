"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

from cattrs.preconf.orjson import make_converter  # spellchecker:disable-line

_converter = make_converter(forbid_extra_keys=True)


def object_to_json_payload(data: object) -> bytes:
    """
    Converts a structured object to a JSON string encoded in UTF-8.

    :param data: Object to convert to a JSON string.
    :returns: JSON string encoded in UTF-8.
    """

    return _converter.dumps(data)
