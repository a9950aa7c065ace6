"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextEntry:
    """
    A key/value pair stored in a PNG `tEXt` chunk.

    :param key: Keyword that identifies the entry (1 to 79 bytes).
    :param value: Text associated with the keyword.
    """

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"
