"""Disk storage for uploaded images."""

from pathlib import Path


def write_upload_file(uploads_path: str, stored_name: str, content: bytes) -> Path:
    """Write an uploaded file and return its absolute path.

    Raises:
        ValueError: If ``stored_name`` would resolve outside ``uploads_path``
        FileExistsError: If a file with ``stored_name`` already exists
    """
    base = Path(uploads_path).resolve()
    file_path = (base / stored_name).resolve()
    if file_path.parent != base:
        raise ValueError(f"Refusing to write outside uploads directory: {stored_name}")
    base.mkdir(parents=True, exist_ok=True)
    with file_path.open("xb") as f:
        f.write(content)
    return file_path
