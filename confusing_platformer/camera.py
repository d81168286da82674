"""Vertical camera follow and the advancing fog line."""
from confusing_platformer import config


class Camera:
    def __init__(self):
        self.y = 0.0

    def reset(self):
        self.y = 0.0

    def follow(self, player_center_y: float, viewport_height: float):
        # Exponential smoothing toward the anchor, never above the level top.
        target = player_center_y - viewport_height * config.CAMERA_ANCHOR
        self.y += (target - self.y) * config.CAMERA_SMOOTHING
        self.y = max(0.0, self.y)


class FogLine:
    """Deadly boundary that moves a little further every tick until reset."""

    def __init__(self):
        self.y = config.FOG_START

    def reset(self):
        self.y = config.FOG_START

    @staticmethod
    def speed(level: int) -> float:
        return config.FOG_SPEED_BASE + config.FOG_SPEED_PER_LEVEL * level

    def advance(self, level: int):
        self.y += self.speed(level)
