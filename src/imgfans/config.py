from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "1.0.0"

# ──────────────────────────────────────────────
# Defaults
# ──────────────────────────────────────────────
DEFAULT_BASE_URL = "https://imgfans.com/api/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_FILENAME = "image.png"

UPLOAD_PATH = "/upload"
UPLOAD_FIELD = "file"


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Client settings loaded from ``IMGFANS_*`` environment variables or .env file.

    Only read when a client is built with ``ImgfansClient.from_settings()``.
    """

    token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    model_config = SettingsConfigDict(
        env_prefix="IMGFANS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class ClientConfig(BaseModel):
    """Immutable connection parameters shared by every request of a client."""

    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    model_config = ConfigDict(frozen=True)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
            "User-Agent": f"imgfans-python/{VERSION}",
        }
