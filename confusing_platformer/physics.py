"""
Per-tick player physics and platform collision.

One call to ``step`` is one frame. It never touches session bookkeeping: a
death or a goal landing is reported back as an ``Outcome`` and the session
decides what to reset.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import structlog

from confusing_platformer import config
from confusing_platformer.camera import FogLine
from confusing_platformer.rng import RngStream
from confusing_platformer.world import Platform, PlatformKind, Player, Viewport

log = structlog.get_logger()


@dataclass(frozen=True)
class Controls:
    """Input snapshot taken at the start of a tick."""
    left: bool = False
    right: bool = False
    jump: bool = False     # true only on the frame the jump was asked for

    @classmethod
    def idle(cls) -> "Controls":
        return cls()


class Outcome(Enum):
    CONTINUE = "continue"
    DIED = "died"
    REACHED_GOAL = "reached_goal"


def move_speed(level: int) -> float:
    return config.MOVE_SPEED_BASE + config.MOVE_SPEED_PER_LEVEL * level


def jump_velocity(level: int) -> float:
    return config.JUMP_IMPULSE - min(level, config.JUMP_LEVEL_CAP)


def confusion_chance(level: int) -> float:
    return config.CONFUSION_CHANCE_PER_LEVEL * min(level, config.CONFUSION_LEVEL_CAP)


# ----------------------------- Input ----------------------------------
def handle_input(player: Player, controls: Controls, level: int):
    p = player
    if controls.jump and abs(p.vel.y) < config.JUMP_READY_SPEED:
        p.vel.y = jump_velocity(level)

    speed = move_speed(level)
    if controls.left and not controls.right:
        p.vel.x = -speed
    elif controls.right and not controls.left:
        p.vel.x = speed
    else:
        p.vel.x = 0.0


# ----------------------------- Motion ---------------------------------
def integrate(player: Player, viewport_width: float):
    p = player
    p.vel.y += config.GRAVITY
    p.bounds.offset(p.vel.x, p.vel.y)

    if p.bounds.left < 0:
        p.bounds.offset(-p.bounds.left, 0)
    if p.bounds.right > viewport_width:
        p.bounds.offset(viewport_width - p.bounds.right, 0)


def overlaps(player: Player, platform: Platform) -> bool:
    """Feet inside the landing band of a platform while falling or resting."""
    pb, r = player.bounds, platform.bounds
    horizontal = pb.right > r.left and pb.left < r.right
    vertical = r.top <= pb.bottom <= r.top + config.LANDING_TOLERANCE
    return horizontal and vertical and player.vel.y >= 0


def collide(player: Player, platforms: Sequence[Platform]) -> Outcome:
    """Resolve landings in generation order; a deadly hit or the goal ends the pass."""
    p = player
    p.grounded = False
    for platform in platforms:
        if (platform.kind is PlatformKind.HIDDEN and not platform.revealed
                and p.bounds.center_y >= platform.bounds.top - config.REVEAL_DISTANCE):
            platform.revealed = True

        # A triggered fake platform has dropped away.
        if platform.kind is PlatformKind.FAKE and platform.revealed:
            continue

        if not overlaps(p, platform):
            continue

        if platform.kind is PlatformKind.DEADLY:
            log.debug("Hit deadly platform", top=platform.bounds.top)
            return Outcome.DIED

        p.bounds.offset(0, platform.bounds.top - p.bounds.bottom)
        p.vel.y = 0.0
        p.grounded = True
        if platform.kind is PlatformKind.FAKE:
            platform.revealed = True
        if platform.kind is PlatformKind.GOAL:
            return Outcome.REACHED_GOAL
    return Outcome.CONTINUE


# ----------------------------- Hazards --------------------------------
def maybe_confuse(player: Player, fog: FogLine, level: int, rng: RngStream):
    p = player
    if (not p.grounded and p.bounds.bottom < fog.y - config.CONFUSION_FOG_CLEARANCE
            and rng.next_float() < confusion_chance(level)):
        p.vel.y -= config.CONFUSION_IMPULSE
        log.debug("Confusion pulse", level=level, vy=p.vel.y)


def fell_out(player: Player, fog: FogLine, camera_y: float, viewport_height: float) -> bool:
    top = player.bounds.top
    return top > fog.y or top > camera_y + viewport_height + config.FALL_OUT_MARGIN


# ----------------------------- Step -----------------------------------
def step(player: Player, platforms: Sequence[Platform], controls: Controls, *,
         level: int, viewport: Viewport, fog: FogLine, camera_y: float,
         rng: RngStream) -> Outcome:
    handle_input(player, controls, level)
    integrate(player, viewport.width)

    outcome = collide(player, platforms)
    if outcome is not Outcome.CONTINUE:
        return outcome

    maybe_confuse(player, fog, level, rng)
    fog.advance(level)
    if fell_out(player, fog, camera_y, viewport.height):
        log.debug("Fell out", player_top=player.bounds.top, fog_y=fog.y)
        return Outcome.DIED
    return Outcome.CONTINUE
