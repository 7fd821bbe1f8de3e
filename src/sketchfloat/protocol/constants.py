
# Relay transport defaults
DEFAULT_PORT = 8080
WS_PATH = "/"

# Client-side sprite conventions (the relay itself never reads these)
SPRITE_SCALE = 0.5  # confirmed drawings float at half their drawn size
SPRITE_MAX_SPEED = 2.0  # vx, vy drawn uniformly from [-max, max] px/frame
SPRITE_LIFETIME_MS = 30_000  # receivers drop a sprite after this long

PNG_DATA_URL_PREFIX = "data:image/png;base64,"
