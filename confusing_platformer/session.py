"""
Game session: level progression, attempts and the per-frame snapshot.

The host calls ``tick`` once per rendered frame and draws the returned
``FrameSnapshot``. Respawns and level changes complete inside the tick that
triggers them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import structlog

from confusing_platformer import config
from confusing_platformer.camera import Camera, FogLine
from confusing_platformer.physics import Controls, Outcome, step
from confusing_platformer.rng import RngStream
from confusing_platformer.world import (Platform, PlatformKind, Player, Rect, Viewport,
                                        generate_level, level_seed)

log = structlog.get_logger()


# ----------------------------- Snapshot -------------------------------
class RenderKind(Enum):
    NORMAL = "normal"
    FAKE = "fake"
    DEADLY = "deadly"


def render_kind(kind: PlatformKind) -> RenderKind:
    if kind is PlatformKind.DEADLY:
        return RenderKind.DEADLY
    if kind is PlatformKind.FAKE:
        return RenderKind.FAKE
    return RenderKind.NORMAL


@dataclass(frozen=True)
class PlatformView:
    bounds: Rect
    render_kind: RenderKind
    visible: bool
    is_goal: bool = False

    @classmethod
    def of(cls, platform: Platform) -> "PlatformView":
        hidden = platform.kind is PlatformKind.HIDDEN and not platform.revealed
        return cls(
            bounds=platform.bounds.copy(),
            render_kind=render_kind(platform.kind),
            visible=not hidden,
            is_goal=platform.kind is PlatformKind.GOAL,
        )


@dataclass(frozen=True)
class FrameSnapshot:
    player: Rect
    camera_y: float
    fog_y: float
    level: int
    attempts: int
    platforms: Tuple[PlatformView, ...]
    level_seed: int


# ----------------------------- Session --------------------------------
def hazard_seed(base_seed: int) -> int:
    return base_seed ^ config.HAZARD_SEED_SALT


class GameSession:
    def __init__(self, viewport: Viewport, base_seed: int = config.DEFAULT_SEED,
                 hazard_rng: Optional[RngStream] = None):
        self.viewport = viewport
        self.base_seed = base_seed
        self.hazard_rng = hazard_rng if hazard_rng is not None else RngStream(hazard_seed(base_seed))

        self.level = 1
        self.attempts = 0
        self.player = Player()
        self.camera = Camera()
        self.fog = FogLine()
        self.platforms: List[Platform] = []
        self.load_level()

    @property
    def level_seed(self) -> int:
        return level_seed(self.base_seed, self.level)

    def load_level(self):
        """Regenerate the current level and put the player back at the start."""
        self.platforms = generate_level(self.level, self.level_seed, self.viewport.width)
        self._reset_run()

    def _reset_run(self):
        self.player.reset()
        self.camera.reset()
        self.fog.reset()

    def respawn(self):
        self.attempts += 1
        self._reset_run()
        for platform in self.platforms:
            if platform.resettable:
                platform.revealed = False
        log.info("Respawned", level=self.level, attempts=self.attempts)

    def advance_level(self):
        log.info("Level completed", level=self.level, attempts=self.attempts)
        self.level += 1
        self.load_level()

    def resize(self, viewport: Viewport):
        # Takes effect for clamping and the camera now, for layout on the next level.
        self.viewport = viewport

    def tick(self, controls: Controls) -> FrameSnapshot:
        outcome = step(
            self.player, self.platforms, controls,
            level=self.level,
            viewport=self.viewport,
            fog=self.fog,
            camera_y=self.camera.y,
            rng=self.hazard_rng,
        )
        if outcome is Outcome.DIED:
            self.respawn()
        elif outcome is Outcome.REACHED_GOAL:
            self.advance_level()

        self.camera.follow(self.player.bounds.center_y, self.viewport.height)
        return self.snapshot()

    def snapshot(self) -> FrameSnapshot:
        return FrameSnapshot(
            player=self.player.bounds.copy(),
            camera_y=self.camera.y,
            fog_y=self.fog.y,
            level=self.level,
            attempts=self.attempts,
            platforms=tuple(PlatformView.of(p) for p in self.platforms),
            level_seed=self.level_seed,
        )
