"""Tests for upload filename sanitization and image checks."""

import pytest

from kanban.core.modules.upload.utils import DEFAULT_FILENAME, MAX_FILENAME_LENGTH, is_valid_image, sanitize_filename


class TestSanitizeFilename:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("photo.png", "photo.png"),
            ("my photo.png", "my-photo.png"),
            ("a   b\tc.jpg", "a-b-c.jpg"),
            ("../../etc/passwd", "passwd"),
            ("..\\..\\windows\\evil.png", "evil.png"),
            (".hidden.png", "hidden.png"),
            ("résumé.png", "résumé.png"),
            ("a$b%c.png", "a_b_c.png"),
        ],
    )
    def test_cases(self, filename, expected):
        assert sanitize_filename(filename) == expected

    @pytest.mark.parametrize("filename", ["", "...", "___", "/"])
    def test_empty_result_falls_back(self, filename):
        assert sanitize_filename(filename) == DEFAULT_FILENAME

    def test_truncates_preserving_extension(self):
        result = sanitize_filename("x" * 300 + ".png")

        assert len(result) == MAX_FILENAME_LENGTH
        assert result.endswith(".png")

    def test_truncates_without_extension(self):
        assert sanitize_filename("y" * 300) == "y" * MAX_FILENAME_LENGTH


class TestIsValidImage:
    def test_png(self, png_bytes):
        assert is_valid_image(png_bytes) is True

    def test_garbage(self):
        assert is_valid_image(b"not an image at all") is False
        assert is_valid_image(b"") is False
