import pytest

from confusing_platformer.camera import FogLine
from confusing_platformer.physics import (Controls, Outcome, collide, confusion_chance, handle_input,
                                          integrate, jump_velocity, move_speed, step)
from confusing_platformer.world import Platform, PlatformKind, Player, Rect, Viewport

VIEW = Viewport(1080, 1920)


class FixedRng:
    def __init__(self, value):
        self.value = value
        self.draws = 0

    def next_float(self):
        self.draws += 1
        return self.value


def make_player(left, top, vy=0.0):
    p = Player()
    p.bounds = Rect(left, top, left + 50, top + 50)
    p.vel.update(0, vy)
    return p


def platform(kind, left=60.0, top=200.0, width=240.0):
    return Platform(Rect(left, top, left + width, top + 34), kind)


def run(player, platforms, controls=Controls(), *, level=1, fog=None, camera_y=0.0,
        rng=None, viewport=VIEW):
    return step(player, platforms, controls, level=level, viewport=viewport,
                fog=fog if fog is not None else FogLine(), camera_y=camera_y,
                rng=rng if rng is not None else FixedRng(0.99))


# ----------------------------- Input ----------------------------------
def test_both_directions_cancel_out():
    p = make_player(500, 500)
    p.vel.x = 5.0
    handle_input(p, Controls(left=True, right=True), level=1)
    assert p.vel.x == 0.0


def test_move_speed_scales_with_level():
    p = make_player(500, 500)
    handle_input(p, Controls(left=True), level=1)
    assert p.vel.x == pytest.approx(-8.28)
    handle_input(p, Controls(right=True), level=10)
    assert p.vel.x == pytest.approx(move_speed(10))
    assert move_speed(10) == pytest.approx(10.8)
    handle_input(p, Controls(), level=10)
    assert p.vel.x == 0.0


def test_jump_needs_near_zero_vertical_speed():
    p = make_player(500, 500, vy=0.3)
    handle_input(p, Controls(jump=True), level=1)
    assert p.vel.y == pytest.approx(-17.0)

    airborne = make_player(500, 500, vy=3.0)
    handle_input(airborne, Controls(jump=True), level=1)
    assert airborne.vel.y == pytest.approx(3.0)


def test_jump_strength_caps_at_level_eight():
    assert jump_velocity(3) == pytest.approx(-19.0)
    assert jump_velocity(8) == jump_velocity(30) == pytest.approx(-24.0)


# ----------------------------- Motion ---------------------------------
def test_gravity_then_move():
    p = make_player(500, 500, vy=2.0)
    p.vel.x = -8.0
    integrate(p, 1080)
    assert p.vel.y == pytest.approx(2.86)
    assert p.bounds.top == pytest.approx(502.86)
    assert p.bounds.left == pytest.approx(492.0)


def test_player_clamped_to_viewport():
    p = make_player(1025, 500)
    p.vel.x = 8.0
    integrate(p, 1080)
    assert p.bounds.right == pytest.approx(1080)
    assert p.bounds.width == pytest.approx(50)

    q = make_player(3, 500)
    q.vel.x = -8.0
    integrate(q, 1080)
    assert q.bounds.left == pytest.approx(0)


# ----------------------------- Collision ------------------------------
def test_landing_snaps_to_top():
    p = make_player(80, 149.5)
    assert run(p, [platform(PlatformKind.NORMAL)]) is Outcome.CONTINUE
    assert p.bounds.bottom == pytest.approx(200)
    assert p.vel.y == 0.0
    assert p.grounded


def test_no_landing_while_moving_up():
    p = make_player(80, 160, vy=-1.0)
    assert collide(p, [platform(PlatformKind.NORMAL)]) is Outcome.CONTINUE
    assert not p.grounded
    assert p.bounds.bottom == pytest.approx(210)


def test_no_landing_past_tolerance():
    p = make_player(80, 177, vy=1.0)  # feet 27 below the top
    collide(p, [platform(PlatformKind.NORMAL)])
    assert not p.grounded


def test_hidden_platform_revealed_at_sixteen_units():
    hidden = platform(PlatformKind.HIDDEN, left=600, top=300)
    p = make_player(80, 259)  # center 284 = top - 16
    collide(p, [hidden])
    assert hidden.revealed


def test_hidden_platform_stays_hidden_further_away():
    hidden = platform(PlatformKind.HIDDEN, left=600, top=300)
    p = make_player(80, 258)  # center 283
    collide(p, [hidden])
    assert not hidden.revealed


def test_resting_player_reveals_hidden_platform_in_full_step():
    hidden = platform(PlatformKind.HIDDEN, left=600, top=300)
    p = make_player(80, 259)
    run(p, [hidden])
    assert hidden.revealed


def test_fake_platform_crumbles_after_landing():
    fake = platform(PlatformKind.FAKE)
    p = make_player(80, 149.5)

    assert run(p, [fake]) is Outcome.CONTINUE
    assert p.grounded and fake.revealed
    assert p.bounds.bottom == pytest.approx(200)

    assert run(p, [fake]) is Outcome.CONTINUE
    assert not p.grounded
    assert p.bounds.bottom == pytest.approx(200.86)
    assert p.vel.y == pytest.approx(0.86)


def test_deadly_hit_aborts_remaining_checks():
    hidden = platform(PlatformKind.HIDDEN, left=600, top=180)
    p = make_player(80, 149.5)
    fog = FogLine()

    outcome = run(p, [platform(PlatformKind.DEADLY), platform(PlatformKind.NORMAL), hidden], fog=fog)

    assert outcome is Outcome.DIED
    assert p.bounds.bottom == pytest.approx(200.36)  # never snapped
    assert not hidden.revealed                       # never evaluated
    assert fog.y == pytest.approx(900)               # tick cut short


def test_normal_before_deadly_still_dies():
    p = make_player(80, 149.5)
    assert run(p, [platform(PlatformKind.NORMAL), platform(PlatformKind.DEADLY)]) is Outcome.DIED


def test_goal_landing_reports_and_stops():
    hidden = platform(PlatformKind.HIDDEN, left=600, top=180)
    p = make_player(80, 149.5)
    assert run(p, [platform(PlatformKind.GOAL), hidden]) is Outcome.REACHED_GOAL
    assert p.bounds.bottom == pytest.approx(200)
    assert not hidden.revealed


# ----------------------------- Hazards --------------------------------
def test_confusion_pulse_while_airborne():
    p = make_player(500, 500)
    rng = FixedRng(0.0)
    run(p, [], rng=rng)
    assert rng.draws == 1
    assert p.vel.y == pytest.approx(0.86 - 14)


def test_no_confusion_close_to_fog():
    p = make_player(500, 500)
    fog = FogLine()
    fog.y = 560  # feet at 550.86, inside the 40 unit band
    rng = FixedRng(0.0)
    run(p, [], fog=fog, rng=rng)
    assert rng.draws == 0
    assert p.vel.y == pytest.approx(0.86)


def test_confusion_chance_grows_with_level():
    calm = make_player(500, 500)
    run(calm, [], level=1, rng=FixedRng(0.02))  # chance 0.015
    assert calm.vel.y == pytest.approx(0.86)

    pulsed = make_player(500, 500)
    run(pulsed, [], level=2, rng=FixedRng(0.02))  # chance 0.03
    assert pulsed.vel.y == pytest.approx(0.86 - 14)


def test_confusion_chance_caps_at_level_twelve():
    assert confusion_chance(1) == pytest.approx(0.015)
    assert confusion_chance(12) == pytest.approx(0.18)
    assert confusion_chance(30) == pytest.approx(0.18)


def test_no_confusion_when_grounded():
    p = make_player(80, 149.5)
    rng = FixedRng(0.0)
    run(p, [platform(PlatformKind.NORMAL)], rng=rng)
    assert rng.draws == 0


def test_fog_advances_each_tick():
    fog = FogLine()
    p = make_player(500, 500)
    run(p, [], level=1, fog=fog)
    run(p, [], level=1, fog=fog)
    assert fog.y == pytest.approx(900 + 2 * 0.61)


def test_player_below_fog_dies():
    fog = FogLine()
    fog.y = 400
    p = make_player(500, 400)
    assert run(p, [], fog=fog) is Outcome.DIED


def test_player_far_below_screen_dies():
    p = make_player(500, 400)
    small = Viewport(1080, 100)
    assert run(p, [], viewport=small, camera_y=0.0) is Outcome.DIED
    q = make_player(500, 400)
    assert run(q, [], viewport=small, camera_y=200.0) is Outcome.CONTINUE
