import math
import random

import pytest

from bubbleshot.components.ball_color import BallColor
from bubbleshot.components.game_state import FlightPhase
from bubbleshot.components.projectile import Projectile
from bubbleshot.components.shooter import Shooter
from bubbleshot.constants import BALL_RADIUS, CANVAS_WIDTH, SHOT_SPEED
from bubbleshot.events.bus import (
    EventBus,
    EVENT_AIM,
    EVENT_FIRE_REQUEST,
    EVENT_PROJECTILE_ADVANCED,
    EVENT_SHOT_FIRED,
    EVENT_SHOT_REJECTED,
    EVENT_TICK,
)
from bubbleshot.systems.physics import (
    PhysicsSystem,
    advance_projectile,
    launch_velocity,
    live_projectile,
    reflect_off_walls,
    shoot,
)
from bubbleshot.utils.game_state import get_game_state
from bubbleshot.world import create_world


def _shooter(world) -> Shooter:
    return list(world.get_component(Shooter))[0][1]


def test_launch_velocity_matches_angle_and_speed():
    dx, dy = launch_velocity(0.0, 10.0)
    assert dx == pytest.approx(10.0) and dy == pytest.approx(0.0)
    dx, dy = launch_velocity(-math.pi / 2, 10.0)
    assert dx == pytest.approx(0.0, abs=1e-9) and dy == pytest.approx(-10.0)
    dx, dy = launch_velocity(math.pi / 4, 4.0)
    assert math.hypot(dx, dy) == pytest.approx(4.0)


def test_shoot_rejected_while_projectile_live():
    world = create_world(EventBus(), rng=random.Random(3))
    first = shoot(world, (300.0, 740.0), -math.pi / 2, BallColor.RED, 10.0)
    assert first is not None

    second = shoot(world, (300.0, 740.0), 0.0, BallColor.BLUE, 10.0)

    assert second is None
    projectiles = list(world.get_component(Projectile))
    assert len(projectiles) == 1
    assert projectiles[0][1].color is BallColor.RED


def test_advance_adds_velocity_once_per_tick():
    projectile = Projectile(x=100.0, y=200.0, dx=3.0, dy=-4.0, color=BallColor.GREEN)
    advance_projectile(projectile)
    assert (projectile.x, projectile.y) == (103.0, 196.0)
    advance_projectile(projectile)
    assert (projectile.x, projectile.y) == (106.0, 192.0)


@pytest.mark.parametrize("x", [BALL_RADIUS, CANVAS_WIDTH - BALL_RADIUS])
def test_reflection_off_side_walls_flips_dx_only(x):
    projectile = Projectile(x=float(x), y=400.0, dx=6.0, dy=-8.0, color=BallColor.RED)
    reflect_off_walls(projectile, CANVAS_WIDTH)
    assert projectile.dx == -6.0
    assert projectile.dy == -8.0


def test_reflection_off_top_wall_flips_dy_only():
    projectile = Projectile(x=300.0, y=float(BALL_RADIUS), dx=6.0, dy=-8.0, color=BallColor.RED)
    reflect_off_walls(projectile, CANVAS_WIDTH)
    assert projectile.dy == 8.0
    assert projectile.dx == 6.0


def test_corner_reflection_flips_both_components():
    projectile = Projectile(x=10.0, y=10.0, dx=-3.0, dy=-4.0, color=BallColor.RED)
    reflect_off_walls(projectile, CANVAS_WIDTH)
    assert (projectile.dx, projectile.dy) == (3.0, 4.0)


def test_no_bottom_wall():
    projectile = Projectile(x=300.0, y=5000.0, dx=1.0, dy=8.0, color=BallColor.RED)
    reflect_off_walls(projectile, CANVAS_WIDTH)
    assert (projectile.dx, projectile.dy) == (1.0, 8.0)


def test_fire_request_uses_shooter_state_and_reloads():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(11))
    PhysicsSystem(world, bus)
    fired = {}
    bus.subscribe(EVENT_SHOT_FIRED, lambda s, **k: fired.update(k))

    bus.emit(EVENT_AIM, angle=-math.pi / 4)
    loaded = _shooter(world).loaded_color
    bus.emit(EVENT_FIRE_REQUEST)

    entity, projectile = live_projectile(world)
    assert fired['entity'] == entity
    assert projectile.color is loaded
    assert fired['color'] is loaded
    assert projectile.x == _shooter(world).x and projectile.y == _shooter(world).y
    assert projectile.dx == pytest.approx(math.cos(-math.pi / 4) * SHOT_SPEED)
    assert projectile.dy == pytest.approx(math.sin(-math.pi / 4) * SHOT_SPEED)
    assert get_game_state(world).phase == FlightPhase.FLYING


def test_duplicate_fire_request_is_rejected_and_trajectory_unchanged():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(11))
    PhysicsSystem(world, bus)
    rejected = []
    bus.subscribe(EVENT_SHOT_REJECTED, lambda s, **k: rejected.append(k))

    bus.emit(EVENT_FIRE_REQUEST)
    _, projectile = live_projectile(world)
    velocity = (projectile.dx, projectile.dy)
    loaded_after_first = _shooter(world).loaded_color

    bus.emit(EVENT_AIM, angle=0.0)
    bus.emit(EVENT_FIRE_REQUEST)

    assert rejected == [{'reason': 'projectile_live'}]
    assert len(list(world.get_component(Projectile))) == 1
    assert (projectile.dx, projectile.dy) == velocity
    assert _shooter(world).loaded_color is loaded_after_first


def test_tick_advances_and_announces_projectile():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(5))
    PhysicsSystem(world, bus)
    advanced = []
    bus.subscribe(EVENT_PROJECTILE_ADVANCED, lambda s, **k: advanced.append(k['entity']))

    bus.emit(EVENT_TICK, dt=1 / 60)
    assert advanced == []

    bus.emit(EVENT_FIRE_REQUEST)
    entity, projectile = live_projectile(world)
    start_y = projectile.y
    # Displacement is per tick, independent of dt.
    bus.emit(EVENT_TICK, dt=0.5)

    assert advanced == [entity]
    assert projectile.y == pytest.approx(start_y - SHOT_SPEED)


def test_straight_shot_bounces_off_top_and_is_not_despawned():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(5))
    PhysicsSystem(world, bus)

    bus.emit(EVENT_FIRE_REQUEST)
    _, projectile = live_projectile(world)
    min_y = projectile.y
    for _ in range(200):
        bus.emit(EVENT_TICK, dt=1 / 60)
        min_y = min(min_y, projectile.y)

    assert min_y <= BALL_RADIUS
    assert projectile.dy == pytest.approx(SHOT_SPEED)
    assert live_projectile(world) is not None
