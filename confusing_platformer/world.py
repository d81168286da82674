"""
World types and the procedural level generator.

A level is a vertical chain of platforms running down the screen (y grows
downward) from a fixed start ledge to a single goal platform. Layout is a pure
function of the level number, the level seed and the viewport width.
"""
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple

import pygame
import structlog

from confusing_platformer import config
from confusing_platformer.rng import RngStream

log = structlog.get_logger()


# ----------------------------- Geometry -------------------------------
def clamp(v, lo, hi):
    return lo if v < lo else hi if v > hi else v


@dataclass
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_tuple(cls, ltrb) -> "Rect":
        return cls(*ltrb)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) * 0.5

    def offset(self, dx: float, dy: float):
        self.left += dx
        self.right += dx
        self.top += dy
        self.bottom += dy

    def copy(self) -> "Rect":
        return Rect(self.left, self.top, self.right, self.bottom)


class Viewport(NamedTuple):
    width: float
    height: float


# ----------------------------- World Types ----------------------------
class PlatformKind(Enum):
    NORMAL = "normal"
    FAKE = "fake"
    DEADLY = "deadly"
    HIDDEN = "hidden"
    GOAL = "goal"


@dataclass
class Platform:
    bounds: Rect
    kind: PlatformKind = PlatformKind.NORMAL
    revealed: bool = False

    @property
    def resettable(self) -> bool:
        """Fake and hidden platforms carry reveal state that a respawn clears."""
        return self.kind in (PlatformKind.FAKE, PlatformKind.HIDDEN)


class Player:
    def __init__(self):
        self.bounds = Rect.from_tuple(config.SPAWN_RECT)
        self.vel = pygame.Vector2(0, 0)
        self.grounded = False

    def reset(self):
        self.bounds = Rect.from_tuple(config.SPAWN_RECT)
        self.vel.update(0, 0)
        self.grounded = False


# ----------------------------- Level Generator ------------------------
def level_seed(base_seed: int, level: int) -> int:
    return base_seed + config.LEVEL_SEED_STEP * (level - 1)


def kind_chance(table, level: int) -> float:
    base, per_level, cap = table
    return min(cap, base + per_level * level)


def _pick_kind(rng: RngStream, level: int) -> PlatformKind:
    fake = rng.next_float() < kind_chance(config.FAKE_CHANCE, level)
    deadly = not fake and rng.next_float() < kind_chance(config.DEADLY_CHANCE, level)
    # A fake platform still spends a hidden draw, keeping layouts stable.
    hidden = not deadly and rng.next_float() < kind_chance(config.HIDDEN_CHANCE, level)
    if fake:
        return PlatformKind.FAKE
    if deadly:
        return PlatformKind.DEADLY
    if hidden:
        return PlatformKind.HIDDEN
    return PlatformKind.NORMAL


def generate_level(level: int, seed: int, viewport_width: float) -> List[Platform]:
    """Build the platform list for ``level``; the goal is always the last entry."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")

    rng = RngStream(seed)
    rng.stir()

    width = max(viewport_width, config.MIN_GENERATION_WIDTH)
    x_max = max(config.EDGE_MARGIN, width - config.PLATFORM_WIDTH - config.EDGE_MARGIN)
    x = width * config.CHAIN_START_X_FRACTION
    y = config.CHAIN_START_Y

    platforms = [Platform(Rect.from_tuple(config.START_PLATFORM_RECT))]

    count = config.CHAIN_BASE_COUNT + config.CHAIN_COUNT_PER_LEVEL * level
    for index in range(count):
        x = clamp(x + rng.next_int(*config.X_JUMP), config.EDGE_MARGIN, x_max)
        y += config.BASE_GAP + rng.next_int(*config.GAP_JITTER)

        kind = _pick_kind(rng, level)

        shift = rng.next_int(*config.PLATFORM_WIDTH_SHIFT)
        w = max(config.PLATFORM_MIN_WIDTH,
                config.PLATFORM_WIDTH + shift - config.PLATFORM_SHRINK_PER_LEVEL * level)

        platforms.append(Platform(Rect(x, y, x + w, y + config.PLATFORM_THICKNESS), kind))

        if index % config.SIDE_TRAP_EVERY == 0 and level >= config.SIDE_TRAP_MIN_LEVEL:
            left = x + w + config.SIDE_TRAP_GAP
            top = y - config.SIDE_TRAP_RAISE
            trap = Rect(left, top, left + config.SIDE_TRAP_WIDTH, top + config.PLATFORM_THICKNESS)
            platforms.append(Platform(trap, PlatformKind.DEADLY))

    goal_top = max(p.bounds.top for p in platforms) + config.GOAL_DROP
    half = config.GOAL_WIDTH * 0.5
    goal = Rect(width * 0.5 - half, goal_top, width * 0.5 + half, goal_top + config.GOAL_THICKNESS)
    platforms.append(Platform(goal, PlatformKind.GOAL))

    log.info("Level generated", level=level, seed=seed, platforms=len(platforms))
    log.debug("Level kinds", level=level,
              **{k.value: n for k, n in Counter(p.kind for p in platforms).items()})
    return platforms
