"""Explicit game session: one world, one bus, the core systems, and the tick function.

A driver loop (the arcade window, or a test) calls ``GameSession.tick`` once per
frame with whatever input arrived since the previous frame and gets back a
read-only ``RenderSnapshot``.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from bubbleshot.components.ball_color import BallColor
from bubbleshot.components.game_state import FlightPhase
from bubbleshot.components.shooter import Shooter
from bubbleshot.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    GRID_COLS,
    GRID_ROWS,
    SHOT_SPEED,
    UPDATE_RATE,
)
from bubbleshot.events.bus import (
    EVENT_AIM,
    EVENT_FIRE_REQUEST,
    EVENT_GAME_RESET,
    EVENT_TICK,
    EventBus,
)
from bubbleshot.systems.collision import CollisionSystem
from bubbleshot.systems.grid import GridSystem
from bubbleshot.systems.grid_ops import occupied_cells
from bubbleshot.systems.high_score_system import HighScoreSystem
from bubbleshot.systems.match import MatchSystem
from bubbleshot.systems.physics import PhysicsSystem, live_projectile
from bubbleshot.systems.score import ScoreSystem
from bubbleshot.utils.game_state import get_game_state, get_score
from bubbleshot.world import create_world


@dataclass(frozen=True, slots=True)
class InputSnapshot:
    """Input gathered since the previous tick. ``aim_angle`` is None when the pointer did not move."""
    aim_angle: float | None = None
    fire: bool = False
    reset: bool = False


@dataclass(frozen=True, slots=True)
class CellView:
    row: int
    col: int
    x: float
    y: float
    color: BallColor


@dataclass(frozen=True, slots=True)
class ShooterView:
    x: float
    y: float
    angle: float
    loaded_color: BallColor


@dataclass(frozen=True, slots=True)
class ProjectileView:
    x: float
    y: float
    dx: float
    dy: float
    color: BallColor


@dataclass(frozen=True, slots=True)
class RenderSnapshot:
    width: int
    height: int
    cells: Tuple[CellView, ...]
    shooter: ShooterView | None
    projectile: ProjectileView | None
    score: int
    high_score: int
    phase: FlightPhase


class GameSession:
    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        save_path: Path | None = None,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        speed: float = SHOT_SPEED,
        event_bus: EventBus | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus, width=width, height=height, rng=rng)
        # Subscription order fixes the per-tick pipeline: physics -> collision -> match -> score -> store.
        self.grid_system = GridSystem(self.world, self.event_bus, rows=rows, cols=cols)
        self.physics_system = PhysicsSystem(self.world, self.event_bus, speed=speed)
        self.collision_system = CollisionSystem(self.world, self.event_bus)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.score_system = ScoreSystem(self.world, self.event_bus)
        self.high_score_system = HighScoreSystem(self.world, self.event_bus, save_path=save_path)

    def tick(self, inputs: InputSnapshot | None = None, dt: float = UPDATE_RATE) -> RenderSnapshot:
        if inputs is not None:
            if inputs.reset:
                self.reset()
            if inputs.aim_angle is not None:
                self.event_bus.emit(EVENT_AIM, angle=inputs.aim_angle)
            if inputs.fire:
                self.event_bus.emit(EVENT_FIRE_REQUEST)
        self.event_bus.emit(EVENT_TICK, dt=dt)
        return self.snapshot()

    def reset(self) -> None:
        self.event_bus.emit(EVENT_GAME_RESET, reason='restart')

    def snapshot(self) -> RenderSnapshot:
        cells = tuple(
            CellView(row=row, col=col, x=ball.x, y=ball.y, color=ball.color)
            for (row, col), ball in occupied_cells(self.world)
        )
        shooter_view = None
        for _, shooter in self.world.get_component(Shooter):
            shooter_view = ShooterView(
                x=shooter.x, y=shooter.y, angle=shooter.angle, loaded_color=shooter.loaded_color
            )
            break
        projectile_view = None
        live = live_projectile(self.world)
        if live is not None:
            projectile = live[1]
            projectile_view = ProjectileView(
                x=projectile.x, y=projectile.y, dx=projectile.dx, dy=projectile.dy, color=projectile.color
            )
        score = get_score(self.world)
        state = get_game_state(self.world)
        return RenderSnapshot(
            width=self.world.width,
            height=self.world.height,
            cells=cells,
            shooter=shooter_view,
            projectile=projectile_view,
            score=score.value if score else 0,
            high_score=score.high_score if score else 0,
            phase=state.phase if state else FlightPhase.IDLE,
        )
