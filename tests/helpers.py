from __future__ import annotations

import random
from pathlib import Path
from typing import Tuple

from esper import World

from bubbleshot.events.bus import EventBus
from bubbleshot.session import GameSession
from bubbleshot.systems.grid import GridSystem
from bubbleshot.systems.grid_ops import occupied_cells, remove_ball
from bubbleshot.world import create_world


def build_grid(rows: int = 8, cols: int = 10, seed: int = 1234) -> Tuple[World, EventBus, GridSystem]:
    """Return a world with a populated grid and nothing else attached."""

    bus = EventBus()
    world = create_world(bus, rng=random.Random(seed))
    grid = GridSystem(world, bus, rows=rows, cols=cols)
    return world, bus, grid


def clear_grid(world: World) -> None:
    """Empty every cell so a test can lay out exactly the balls it needs."""

    for (row, col), _ in list(occupied_cells(world)):
        remove_ball(world, row, col)


def make_session(tmp_path: Path, seed: int = 1234, *, empty: bool = False) -> GameSession:
    session = GameSession(rng=random.Random(seed), save_path=Path(tmp_path) / "high_score.json")
    if empty:
        clear_grid(session.world)
    return session
