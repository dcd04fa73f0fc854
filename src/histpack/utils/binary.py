"""Binary blob detection and text decoding utilities."""

import codecs
from pathlib import Path

# Extensions whose blobs are never rendered as text
BINARY_EXTENSIONS = {
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    # Documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt", ".ods",
    # Archives
    ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
    # Executables
    ".exe", ".dll", ".so", ".dylib", ".bin", ".pdb",
    # Media
    ".mp3", ".mp4", ".avi", ".mov", ".wav", ".flac", ".mkv", ".webm",
    # Compiled
    ".pyc", ".pyo", ".class", ".o", ".obj", ".wasm",
    # Fonts
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
    # Other
    ".db", ".sqlite", ".sqlite3",
}

_UTF16_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)


def is_binary_extension(path: str | Path) -> bool:
    """Check if file extension indicates binary content."""
    return Path(path).suffix.lower() in BINARY_EXTENSIONS


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Detect if content is binary by checking for null bytes and non-text chars.

    Args:
        content: Raw blob data
        sample_size: Number of bytes to sample from the start

    Returns:
        True if content appears to be binary
    """
    if not content:
        return False

    # UTF-16 text is full of null bytes but still text
    if content.startswith(_UTF16_BOMS):
        return False

    sample = content[:sample_size]

    if b"\x00" in sample:
        return True

    # Printable ASCII + tab, LF, CR; bytes >= 128 count as text (UTF-8)
    text_chars = set(range(32, 127)) | {9, 10, 13} | set(range(128, 256))
    non_text = sum(1 for byte in sample if byte not in text_chars)

    return (non_text / len(sample)) > 0.30


def detect_binary(path: str | Path, content: bytes) -> bool:
    """Detect if a blob is binary using both extension and content analysis."""
    if is_binary_extension(path):
        return True
    return is_binary_content(content)


def decode_text(content: bytes) -> str:
    """Decode blob data: UTF-8 (BOM aware), then UTF-16, then lossy UTF-8."""
    if content.startswith(_UTF16_BOMS):
        try:
            return content.decode("utf-16")
        except UnicodeDecodeError:
            pass
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("utf-8", errors="replace")
