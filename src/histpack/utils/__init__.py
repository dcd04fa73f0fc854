"""Utility functions for histpack."""

from histpack.utils.binary import decode_text, detect_binary, is_binary_content, is_binary_extension
from histpack.utils.language import language_for_path

__all__ = [
    "decode_text",
    "detect_binary",
    "is_binary_content",
    "is_binary_extension",
    "language_for_path",
]
