from .constants import (
    DEFAULT_PORT,
    PNG_DATA_URL_PREFIX,
    SPRITE_LIFETIME_MS,
    SPRITE_MAX_SPEED,
    SPRITE_SCALE,
    WS_PATH,
)
from .messages import Sprite, confirm_sprite

__all__ = [
    "DEFAULT_PORT",
    "PNG_DATA_URL_PREFIX",
    "SPRITE_LIFETIME_MS",
    "SPRITE_MAX_SPEED",
    "SPRITE_SCALE",
    "WS_PATH",
    "Sprite",
    "confirm_sprite",
]
