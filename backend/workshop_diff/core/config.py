from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "Workshop Diff"
    debug: bool = False
    api_prefix: str = "/api/v1"
    host: str = "0.0.0.0"
    port: int = 3000

    # Steam Workshop catalog (ISteamRemoteStorage)
    workshop_api_url: str = (
        "https://api.steampowered.com/ISteamRemoteStorage/GetPublishedFileDetails/v1/"
    )
    workshop_api_timeout_seconds: float = 30.0
    workshop_batch_size: int = Field(100, ge=1, le=100)  # catalog rejects larger batches

    # Uploads
    max_files_per_group: int = 1000
    max_file_size_mb: int = 20

    # Landing page
    static_dir: str = "public"

    # CORS
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
