from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # mongodb://host:port/dbname, or memory:// for the in-process backend
    host: str
    port: int
    debug: bool  # Also decides the `secure` flag of the session cookie (secure when not debug)
    cors_origins: list[str] = []
    api_token: str | None = None  # Static bearer token for machine clients; unset keeps the API open
    webhook_url: str | None = None  # Target for task change notifications (optional)
    webhook_token: str | None = None  # Bearer token sent to webhook_url, never accepted inbound
    uploads_path: str = "uploads"  # Directory for uploaded images
    uploads_url: str = "/uploads"  # Public URL prefix the uploaded images are served under
    upload_max_bytes: int = 5 * 1024 * 1024

    model_config = {
        "env_file": [".env"],
        "env_prefix": "KANBAN_",
        "extra": "ignore",
    }

    @property
    def secure_cookies(self) -> bool:
        return not self.debug
