from __future__ import annotations

import math
from typing import Tuple

from esper import World

from bubbleshot.components.ball_color import BallColor, PALETTE
from bubbleshot.components.game_state import FlightPhase
from bubbleshot.components.projectile import Projectile
from bubbleshot.components.shooter import Shooter
from bubbleshot.constants import BALL_RADIUS, CANVAS_WIDTH, SHOT_SPEED
from bubbleshot.events.bus import (
    EventBus,
    EVENT_AIM,
    EVENT_FIRE_REQUEST,
    EVENT_GAME_RESET,
    EVENT_PROJECTILE_ADVANCED,
    EVENT_SHOT_FIRED,
    EVENT_SHOT_REJECTED,
    EVENT_TICK,
)
from bubbleshot.utils.game_state import set_flight_phase


def launch_velocity(angle: float, speed: float) -> Tuple[float, float]:
    return math.cos(angle) * speed, math.sin(angle) * speed


def live_projectile(world: World) -> Tuple[int, Projectile] | None:
    for entity, projectile in world.get_component(Projectile):
        return entity, projectile
    return None


def shoot(
    world: World,
    origin: Tuple[float, float],
    angle: float,
    color: BallColor,
    speed: float = SHOT_SPEED,
) -> int | None:
    """Spawn the projectile entity, or return None if one is already in flight."""
    if live_projectile(world) is not None:
        return None
    dx, dy = launch_velocity(angle, speed)
    x, y = origin
    return world.create_entity(Projectile(x=x, y=y, dx=dx, dy=dy, color=color))


def advance_projectile(projectile: Projectile) -> None:
    """Move by one tick's worth of velocity; elapsed wall time plays no part."""
    projectile.x += projectile.dx
    projectile.y += projectile.dy


def reflect_off_walls(projectile: Projectile, width: float) -> None:
    """Bounce off the left, right and top walls. There is no bottom wall."""
    if projectile.x <= BALL_RADIUS or projectile.x >= width - BALL_RADIUS:
        projectile.dx = -projectile.dx
    if projectile.y <= BALL_RADIUS:
        projectile.dy = -projectile.dy


class PhysicsSystem:
    """Fires the shooter and integrates the live projectile once per tick."""

    def __init__(self, world: World, event_bus: EventBus, *, speed: float = SHOT_SPEED):
        self.world = world
        self.event_bus = event_bus
        self.speed = speed
        self.event_bus.subscribe(EVENT_AIM, self.on_aim)
        self.event_bus.subscribe(EVENT_FIRE_REQUEST, self.on_fire_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    def on_aim(self, sender, **kwargs):
        angle = kwargs.get('angle')
        if angle is None:
            return
        shooter = self._shooter()
        if shooter is None:
            return
        shooter.angle = float(angle)

    def on_fire_request(self, sender, **kwargs):
        shooter = self._shooter()
        if shooter is None:
            return
        entity = shoot(
            self.world,
            (shooter.x, shooter.y),
            shooter.angle,
            shooter.loaded_color,
            self.speed,
        )
        if entity is None:
            self.event_bus.emit(EVENT_SHOT_REJECTED, reason='projectile_live')
            return
        fired_color = shooter.loaded_color
        shooter.loaded_color = self.world.random.choice(PALETTE)
        set_flight_phase(self.world, self.event_bus, FlightPhase.FLYING)
        self.event_bus.emit(EVENT_SHOT_FIRED, entity=entity, color=fired_color, angle=shooter.angle)

    def on_tick(self, sender, **kwargs):
        # dt is deliberately ignored: displacement is per tick.
        live = live_projectile(self.world)
        if live is None:
            return
        entity, projectile = live
        advance_projectile(projectile)
        reflect_off_walls(projectile, getattr(self.world, "width", CANVAS_WIDTH))
        self.event_bus.emit(EVENT_PROJECTILE_ADVANCED, entity=entity)

    def on_game_reset(self, sender, **kwargs):
        live = live_projectile(self.world)
        if live is not None:
            self.world.delete_entity(live[0], immediate=True)
        shooter = self._shooter()
        if shooter is not None:
            shooter.loaded_color = self.world.random.choice(PALETTE)
        set_flight_phase(self.world, self.event_bus, FlightPhase.IDLE)

    def _shooter(self) -> Shooter | None:
        for _, shooter in self.world.get_component(Shooter):
            return shooter
        return None

