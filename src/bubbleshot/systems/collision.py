from __future__ import annotations

import math
from typing import Tuple

from esper import World

from bubbleshot.components.game_state import FlightPhase
from bubbleshot.components.projectile import Projectile
from bubbleshot.constants import BALL_RADIUS
from bubbleshot.events.bus import (
    EventBus,
    EVENT_BALL_SETTLED,
    EVENT_PLACEMENT_REJECTED,
    EVENT_PROJECTILE_ADVANCED,
)
from bubbleshot.systems.grid_ops import Position, in_bounds, occupied_cells, place_ball
from bubbleshot.utils.game_state import set_flight_phase


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def snap_cell(x: float, y: float) -> Position:
    """Map a projectile centre to the (row, col) whose canonical centre is nearest."""
    diameter = BALL_RADIUS * 2
    return (
        _round_half_up((y - BALL_RADIUS) / diameter),
        _round_half_up((x - BALL_RADIUS) / diameter),
    )


def find_collision(world: World, projectile: Projectile) -> Position | None:
    """Return the first settled ball, scanning row-major, that the projectile touches.

    Ties between several touching balls go to the lowest row, then lowest column,
    not to the nearest one.
    """
    for pos, ball in occupied_cells(world):
        if math.hypot(projectile.x - ball.x, projectile.y - ball.y) < BALL_RADIUS * 2:
            return pos
    return None


class CollisionSystem:
    """Snaps the projectile into the grid when it touches a settled ball."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_PROJECTILE_ADVANCED, self.on_projectile_advanced)

    def on_projectile_advanced(self, sender, **kwargs):
        entity = kwargs.get('entity')
        if entity is None:
            return
        self.resolve(entity)

    def resolve(self, entity: int) -> Tuple[int, int] | None:
        """Settle the projectile if it collided; returns the cell it settled into."""
        try:
            projectile = self.world.component_for_entity(entity, Projectile)
        except KeyError:
            return None
        hit = find_collision(self.world, projectile)
        if hit is None:
            return None
        row, col = snap_cell(projectile.x, projectile.y)
        # The destination depends only on the projectile centre, so a rejected
        # destination stays rejected for every other touching ball this tick.
        if not place_ball(self.world, row, col, projectile.color):
            reason = 'out_of_bounds' if not in_bounds(self.world, row, col) else 'occupied'
            self.event_bus.emit(EVENT_PLACEMENT_REJECTED, row=row, col=col, reason=reason, hit=hit)
            return None
        # Matching runs synchronously inside this emit, before the projectile goes away.
        self.event_bus.emit(EVENT_BALL_SETTLED, row=row, col=col, color=projectile.color)
        self.world.delete_entity(entity, immediate=True)
        set_flight_phase(self.world, self.event_bus, FlightPhase.IDLE)
        return row, col
