from __future__ import annotations

import json
import random

from pydantic import BaseModel, Field, field_validator

from .constants import PNG_DATA_URL_PREFIX, SPRITE_MAX_SPEED, SPRITE_SCALE

# Reference shape of what browser clients exchange. The relay forwards frames
# verbatim and never imports this; it exists for the developer tools and docs.


class Sprite(BaseModel):
    """A confirmed drawing, floating across every other client's screen."""

    src: str = Field(description="PNG data URL of the drawing")
    x: float = Field(description="center x, px")
    y: float = Field(description="center y, px")
    width: float
    height: float
    vx: float = 0.0
    vy: float = 0.0

    @field_validator("src")
    @classmethod
    def check_src(cls, v: str) -> str:
        if not v.startswith(PNG_DATA_URL_PREFIX):
            raise ValueError(f"src must start with {PNG_DATA_URL_PREFIX!r}")
        return v

    def to_wire(self) -> str:
        return json.dumps(self.model_dump(), separators=(",", ":"))

    @classmethod
    def from_wire(cls, raw: str | bytes) -> Sprite:
        return cls.model_validate_json(raw)


def confirm_sprite(
    src: str,
    *,
    x: float,
    y: float,
    width: float,
    height: float,
    rng: random.Random | None = None,
) -> Sprite:
    """
    Turn drawn bounds into a sprite the way the browser client does on "confirm":
    center on the bounds, halve the size, pick a random drift.
    """
    r = rng or random
    return Sprite(
        src=src,
        x=x + width / 2,
        y=y + height / 2,
        width=width * SPRITE_SCALE,
        height=height * SPRITE_SCALE,
        vx=r.uniform(-SPRITE_MAX_SPEED, SPRITE_MAX_SPEED),
        vy=r.uniform(-SPRITE_MAX_SPEED, SPRITE_MAX_SPEED),
    )
