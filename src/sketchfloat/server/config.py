from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from sketchfloat.protocol.constants import DEFAULT_PORT


class Settings(BaseSettings):
    """
    Runtime config (relay server).

    - Loaded from environment variables (`SKETCHFLOAT_PORT=9000`, ...)
    - Also reads `.env` if present (via pydantic-settings + python-dotenv)
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SKETCHFLOAT_", extra="ignore")

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    # Client assets (index.html, script.js, ...). Not mounted if missing.
    static_dir: str = "public"

    # Sprites carry a whole PNG data URL, so frames can get big.
    ws_max_size: int = 16 * 1024 * 1024

    # A recipient that takes longer than this to accept one frame is dropped.
    send_timeout_s: float = 5.0

    log_level: str = "INFO"

    # Debugging: log every relayed frame
    debug_log_msgs: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
