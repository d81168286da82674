"""
pygame frontend for the session.

Controls
- Left/Right or A/D: move
- Space / W / Up: jump (only while standing)
- Mouse or touch: hold the left/right half of the screen to move, press in the
  upper half to jump
- Esc: pause
- R: restart at current seed (while paused)
- N: new seed (while paused)
- F1: show/hide debug overlay
"""
import random
import sys
from typing import Optional, Tuple

import pygame
import structlog

from confusing_platformer import config
from confusing_platformer.logs import setup_logging
from confusing_platformer.physics import Controls
from confusing_platformer.session import FrameSnapshot, GameSession, RenderKind
from confusing_platformer.world import Viewport

log = structlog.get_logger()

KIND_COLORS = {
    RenderKind.NORMAL: config.PLATFORM_COLOR,
    RenderKind.FAKE: config.FAKE_COLOR,
    RenderKind.DEADLY: config.TRAP_COLOR,
}


# ----------------------------- Input decoding -------------------------
def pointer_intents(x: float, y: float, width: float, height: float) -> Tuple[bool, bool, bool]:
    """Map a press at (x, y) to (left, right, jump) like the touch controls."""
    left = x < width / 2
    return left, not left, y < height / 2


JUMP_KEYS = (pygame.K_SPACE, pygame.K_w, pygame.K_UP)


class InputState:
    """Collects held directions and one-shot jump requests between ticks."""

    def __init__(self):
        self.pointer_left = False
        self.pointer_right = False
        self.jump_requested = False

    def press_pointer(self, x: float, y: float, width: float, height: float):
        self.pointer_left, self.pointer_right, jump = pointer_intents(x, y, width, height)
        if jump:
            self.jump_requested = True

    def drag_pointer(self, x: float, y: float, width: float, height: float):
        # Dragging steers but never jumps.
        self.pointer_left, self.pointer_right, _ = pointer_intents(x, y, width, height)

    def release_pointer(self):
        self.pointer_left = False
        self.pointer_right = False

    def clear(self):
        self.release_pointer()
        self.jump_requested = False

    def handle_event(self, event, width: float, height: float):
        """Fold one pygame keyboard, mouse or finger event into the pending input."""
        if event.type == pygame.KEYDOWN and event.key in JUMP_KEYS:
            self.jump_requested = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.press_pointer(event.pos[0], event.pos[1], width, height)
        elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
            self.drag_pointer(event.pos[0], event.pos[1], width, height)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.release_pointer()
        # Finger coordinates are normalized to [0, 1].
        elif event.type == pygame.FINGERDOWN:
            self.press_pointer(event.x * width, event.y * height, width, height)
        elif event.type == pygame.FINGERMOTION:
            self.drag_pointer(event.x * width, event.y * height, width, height)
        elif event.type == pygame.FINGERUP:
            self.release_pointer()

    def sample(self, keys) -> Controls:
        # "Pressed this frame" semantics for jump.
        left = self.pointer_left or keys[pygame.K_LEFT] or keys[pygame.K_a]
        right = self.pointer_right or keys[pygame.K_RIGHT] or keys[pygame.K_d]
        controls = Controls(left=bool(left), right=bool(right), jump=self.jump_requested)
        self.jump_requested = False
        return controls


# ----------------------------- Game -----------------------------------
class Game:
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = config.DEFAULT_SEED
        self.seed = seed
        pygame.init()
        pygame.display.set_caption("Confusing Platformer")
        self.screen = pygame.display.set_mode((config.WIDTH, config.HEIGHT), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 22)
        self.small_font = pygame.font.SysFont("consolas", 16)

        self.input = InputState()
        self.pause = False
        self.show_debug = False
        self.reset_session(self.seed)

    @property
    def viewport(self) -> Viewport:
        w, h = self.screen.get_size()
        return Viewport(w, h)

    def reset_session(self, seed: int):
        self.seed = seed
        self.session = GameSession(self.viewport, base_seed=seed)
        self.frame = self.session.snapshot()
        log.info("Session started", seed=seed, viewport=tuple(self.viewport))

    # --------------------------- Update --------------------------------
    def handle_events(self) -> bool:
        w, h = self.viewport
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.VIDEORESIZE:
                self.session.resize(self.viewport)
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.pause = not self.pause
                    # Nothing pressed around a pause carries into the next tick.
                    self.input.clear()
                    log.info("Pause toggled", paused=self.pause)
                    continue
                if event.key == pygame.K_F1:
                    self.show_debug = not self.show_debug
                elif self.pause and event.key == pygame.K_r:
                    self.reset_session(self.seed)
                elif self.pause and event.key == pygame.K_n:
                    self.reset_session(random.randint(1, 1_000_000_000))
            if not self.pause:
                self.input.handle_event(event, w, h)
        return True

    def update(self):
        if self.pause:
            return
        controls = self.input.sample(pygame.key.get_pressed())
        self.frame = self.session.tick(controls)

    # --------------------------- Render --------------------------------
    def _to_screen(self, rect, camera_y: float) -> pygame.Rect:
        return pygame.Rect(round(rect.left), round(rect.top - camera_y),
                           round(rect.width), round(rect.height))

    def draw_platforms(self, frame: FrameSnapshot):
        h = self.screen.get_height()
        for pf in frame.platforms:
            r = self._to_screen(pf.bounds, frame.camera_y)
            if r.bottom < -config.CULL_MARGIN or r.top > h + config.CULL_MARGIN:
                continue
            pygame.draw.rect(self.screen, KIND_COLORS[pf.render_kind], r, border_radius=12)
            if not pf.visible:
                pygame.draw.rect(self.screen, config.BG_COLOR, r)

    def draw_player(self, frame: FrameSnapshot):
        body = self._to_screen(frame.player, frame.camera_y)
        pygame.draw.rect(self.screen, config.PLAYER_COLOR, body, border_radius=20)

    def draw_fog(self, frame: FrameSnapshot):
        w, h = self.screen.get_size()
        fog_top = round(frame.fog_y - frame.camera_y)
        if fog_top < h:
            pygame.draw.rect(self.screen, config.TRAP_COLOR, pygame.Rect(0, fog_top, w, h - fog_top))

    def draw_hud(self, frame: FrameSnapshot):
        h = self.screen.get_height()
        for i, txt in enumerate((f"Level: {frame.level}", f"Attempts: {frame.attempts}")):
            self.screen.blit(self.font.render(txt, True, config.TEXT_COLOR), (24, 20 + 30 * i))
        hint = self.small_font.render(
            "Arrows/A/D or hold left/right half to move, Space or tap upper half to jump",
            True, config.TEXT_COLOR)
        self.screen.blit(hint, (24, h - 32))

        if self.pause:
            s = self.font.render("PAUSED  (R)estart  (N)ew seed  (Esc) Resume", True, config.TEXT_COLOR)
            rect = s.get_rect(center=self.screen.get_rect().center)
            pygame.draw.rect(self.screen, (0, 0, 0), rect.inflate(40, 20))
            self.screen.blit(s, rect)

        if self.show_debug:
            p = self.session.player
            lines = [
                f"seed={self.seed} level_seed={frame.level_seed}",
                f"pos=({p.bounds.left:7.2f},{p.bounds.top:7.2f}) vel=({p.vel.x:6.2f},{p.vel.y:6.2f}) grounded={p.grounded}",
                f"camera={frame.camera_y:8.2f} fog={frame.fog_y:8.2f} platforms={len(frame.platforms)}",
            ]
            for i, txt in enumerate(lines):
                self.screen.blit(self.small_font.render(txt, True, config.TEXT_COLOR), (24, 84 + 18 * i))

    def render(self):
        frame = self.frame
        self.screen.fill(config.BG_COLOR)
        self.draw_platforms(frame)
        self.draw_player(frame)
        self.draw_fog(frame)
        self.draw_hud(frame)
        pygame.display.flip()

    def run(self):
        running = True
        while running:
            self.clock.tick(config.FPS)
            running = self.handle_events()
            if not running:
                break
            self.update()
            self.render()
        log.info("Shutting down", level=self.frame.level, attempts=self.frame.attempts)
        pygame.quit()


def parse_seed(argv) -> int:
    if len(argv) >= 2:
        try:
            return int(argv[1])
        except ValueError:
            log.warning("Ignoring non-integer seed", arg=argv[1])
    return config.DEFAULT_SEED


def main(argv=None):
    argv = sys.argv if argv is None else argv
    setup_logging()
    Game(parse_seed(argv)).run()
