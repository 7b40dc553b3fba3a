"""Tests for UploadService."""

from datetime import UTC, datetime
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from kanban.core.modules.upload.storage import write_upload_file
from kanban.errors import ValidationError


def solid_png(color: tuple[int, int, int]) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=color).save(buffer, format="PNG")
    return buffer.getvalue()


class TestSaveImage:
    async def test_stores_file_and_returns_url(self, core, png_bytes):
        content = png_bytes

        url = await core.services.upload.save_image("my photo.png", content, "image/png")

        assert url.startswith("/uploads/")
        stored_name = url.removeprefix("/uploads/")
        millis, random_part, name = stored_name.split("-", 2)
        assert millis.isdigit()
        assert len(random_part) == 8
        assert name == "my-photo.png"
        assert (Path(core.config.uploads_path) / stored_name).read_bytes() == content

    async def test_rejects_non_image_mime_type(self, core):
        with pytest.raises(ValidationError, match="Only image files are allowed"):
            await core.services.upload.save_image("doc.pdf", b"%PDF-1.4", "application/pdf")

    async def test_rejects_oversized_file(self, core):
        content = b"\0" * (core.config.upload_max_bytes + 1)

        with pytest.raises(ValidationError, match="File too large"):
            await core.services.upload.save_image("big.png", content, "image/png")

    async def test_rejects_unreadable_image(self, core):
        with pytest.raises(ValidationError, match="not a readable image"):
            await core.services.upload.save_image("fake.png", b"hello", "image/png")
        assert list(Path(core.config.uploads_path).iterdir()) == []

    async def test_same_name_in_same_millisecond_keeps_both(self, core, monkeypatch):
        instant = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)
        monkeypatch.setattr("kanban.core.modules.upload.service.now", lambda: instant)
        red = solid_png((255, 0, 0))
        blue = solid_png((0, 0, 255))

        first = await core.services.upload.save_image("photo.png", red, "image/png")
        second = await core.services.upload.save_image("photo.png", blue, "image/png")

        assert first != second
        uploads = Path(core.config.uploads_path)
        assert (uploads / first.removeprefix("/uploads/")).read_bytes() == red
        assert (uploads / second.removeprefix("/uploads/")).read_bytes() == blue


class TestWriteUploadFile:
    def test_never_overwrites(self, tmp_path):
        write_upload_file(str(tmp_path), "a.png", b"first")

        with pytest.raises(FileExistsError):
            write_upload_file(str(tmp_path), "a.png", b"second")
        assert (tmp_path / "a.png").read_bytes() == b"first"

    def test_rejects_path_outside_directory(self, tmp_path):
        with pytest.raises(ValueError, match="outside uploads directory"):
            write_upload_file(str(tmp_path / "uploads"), "../escape.png", b"x")
