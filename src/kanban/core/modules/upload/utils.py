"""Helpers for storing uploaded images under URL-safe names."""

import re
from io import BytesIO
from pathlib import Path

from PIL import Image

MAX_FILENAME_LENGTH = 100
DEFAULT_FILENAME = "image"


def sanitize_filename(filename: str) -> str:
    """Turn a client-supplied filename into a safe, URL-friendly file name.

    Path components and leading dots are dropped, whitespace runs become a single
    hyphen, and anything other than word characters, dots, and hyphens becomes an
    underscore. The extension survives truncation to MAX_FILENAME_LENGTH.
    """
    filename = Path(filename.replace("\\", "/")).name
    filename = filename.lstrip(".")

    sanitized = re.sub(r"\s+", "-", filename.strip())
    sanitized = re.sub(r"[^\w.-]", "_", sanitized)
    sanitized = re.sub(r"_+", "_", sanitized)
    sanitized = re.sub(r"-+", "-", sanitized)

    if len(sanitized) > MAX_FILENAME_LENGTH:
        name, dot, ext = sanitized.rpartition(".")
        if dot and 0 < len(ext) < MAX_FILENAME_LENGTH - 1:
            sanitized = f"{name[: MAX_FILENAME_LENGTH - len(ext) - 1]}.{ext}"
        else:
            sanitized = sanitized[:MAX_FILENAME_LENGTH]

    if not re.sub(r"[._-]", "", sanitized):
        return DEFAULT_FILENAME
    return sanitized


def is_valid_image(content: bytes) -> bool:
    """Check that the bytes decode as an image Pillow understands."""
    try:
        with Image.open(BytesIO(content)) as img:
            img.verify()
    except Exception:
        return False
    else:
        return True
