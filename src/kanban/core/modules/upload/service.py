import secrets
from pathlib import Path

import structlog

from kanban.core.core import Service
from kanban.core.modules.upload.storage import write_upload_file
from kanban.core.modules.upload.utils import is_valid_image, sanitize_filename
from kanban.errors import ValidationError
from kanban.utils import epoch_millis, now

logger = structlog.get_logger(__name__)


class UploadService(Service):
    """Stores task images on local disk and hands back their public URL."""

    async def on_start(self) -> None:
        Path(self.core.config.uploads_path).mkdir(parents=True, exist_ok=True)

    async def save_image(self, filename: str, content: bytes, mime_type: str) -> str:
        """Validate and store an uploaded image, returning the URL it is served under."""
        if not mime_type.startswith("image/"):
            raise ValidationError("Only image files are allowed")

        max_bytes = self.core.config.upload_max_bytes
        if len(content) > max_bytes:
            raise ValidationError(f"File too large (max {max_bytes // (1024 * 1024)}MB)")

        if not is_valid_image(content):
            raise ValidationError("File is not a readable image")

        stored_name = f"{epoch_millis(now())}-{secrets.token_hex(4)}-{sanitize_filename(filename)}"
        write_upload_file(self.core.config.uploads_path, stored_name, content)
        logger.info("image_uploaded", stored_name=stored_name, size=len(content), mime_type=mime_type)
        return f"{self.core.config.uploads_url.rstrip('/')}/{stored_name}"
