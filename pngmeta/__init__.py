"""
Read and write textual metadata in PNG images.

Attaches key/value pairs to PNG images as `tEXt` chunks, and retrieves values by key. Images are passed as raw bytes
or as Base64-encoded data URIs.
"""

from ._version import __version__
from .domain import TextEntry
from .environment import InvalidDataURIError, InvalidFormatError, InvalidKeyLengthError, PngMetadataError
from .metadata import add_metadata, add_metadata_from_base64_data_uri, get_metadata, list_metadata
from .png import crc32_checksum, is_png, placeholder_checksum

__all__ = [
    "__version__",
    "TextEntry",
    "InvalidDataURIError",
    "InvalidFormatError",
    "InvalidKeyLengthError",
    "PngMetadataError",
    "add_metadata",
    "add_metadata_from_base64_data_uri",
    "get_metadata",
    "list_metadata",
    "crc32_checksum",
    "is_png",
    "placeholder_checksum",
]

__author__ = "Levente Hunyadi"
__copyright__ = "Copyright 2022-2026, Levente Hunyadi"
__license__ = "MIT"
__maintainer__ = "Levente Hunyadi"
__status__ = "Production"
