from collections import defaultdict

import pygame

from confusing_platformer import config
from confusing_platformer.game import InputState, parse_seed, pointer_intents


def no_keys():
    return defaultdict(bool)


def test_pointer_halves():
    assert pointer_intents(100, 100, 1000, 800) == (True, False, True)
    assert pointer_intents(900, 700, 1000, 800) == (False, True, False)
    assert pointer_intents(500, 400, 1000, 800) == (False, True, False)


def test_jump_is_one_shot():
    inp = InputState()
    inp.press_pointer(100, 50, 1000, 800)
    first = inp.sample(no_keys())
    second = inp.sample(no_keys())
    assert first.left and first.jump
    assert second.left and not second.jump


def test_release_clears_pointer_movement():
    inp = InputState()
    inp.press_pointer(900, 700, 1000, 800)
    inp.release_pointer()
    controls = inp.sample(no_keys())
    assert not controls.left and not controls.right and not controls.jump


def test_keyboard_directions():
    keys = no_keys()
    keys[pygame.K_a] = True
    keys[pygame.K_RIGHT] = True
    controls = InputState().sample(keys)
    assert controls.left and controls.right


def test_parse_seed():
    assert parse_seed(["prog"]) == config.DEFAULT_SEED
    assert parse_seed(["prog", "123"]) == 123
    assert parse_seed(["prog", "abc"]) == config.DEFAULT_SEED


def test_finger_drag_steers_without_jumping():
    inp = InputState()
    inp.handle_event(pygame.event.Event(pygame.FINGERDOWN, x=0.9, y=0.9), 1000, 800)
    inp.handle_event(pygame.event.Event(pygame.FINGERMOTION, x=0.1, y=0.1), 1000, 800)
    controls = inp.sample(no_keys())
    assert controls.left and not controls.right
    assert not controls.jump


def test_jump_key_event_requests_jump():
    inp = InputState()
    inp.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE), 1000, 800)
    assert inp.sample(no_keys()).jump


def test_clear_drops_pending_jump_and_steering():
    inp = InputState()
    inp.press_pointer(100, 50, 1000, 800)
    inp.clear()
    controls = inp.sample(no_keys())
    assert not controls.left and not controls.jump
