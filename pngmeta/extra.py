"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

import sys

if sys.version_info >= (3, 12):
    from typing import override as override  # noqa: F401
else:
    from typing_extensions import override as override  # noqa: F401
