from __future__ import annotations

import random
from typing import Dict, Iterator, List, Tuple

from esper import World

from bubbleshot.components.ball import Ball
from bubbleshot.components.ball_color import BallColor, PALETTE
from bubbleshot.components.board import Board
from bubbleshot.components.board_position import BoardPosition
from bubbleshot.constants import BALL_RADIUS, POPULATED_ROWS

Position = Tuple[int, int]


def canonical_position(row: int, col: int) -> Tuple[float, float]:
    """Centre of the cell at (row, col) on the square-packed lattice."""
    return (
        float(col * BALL_RADIUS * 2 + BALL_RADIUS),
        float(row * BALL_RADIUS * 2 + BALL_RADIUS),
    )


def grid_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def in_bounds(world: World, row: int, col: int) -> bool:
    dims = grid_dimensions(world)
    if not dims:
        return False
    rows, cols = dims
    return 0 <= row < rows and 0 <= col < cols


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def cell_at(world: World, row: int, col: int) -> Ball | None:
    """Return the ball at (row, col) or None when the cell is empty.

    Out-of-range coordinates are a caller error and raise IndexError.
    """
    if not in_bounds(world, row, col):
        raise IndexError(f"cell ({row}, {col}) is outside the grid")
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    try:
        return world.component_for_entity(entity, Ball)
    except KeyError:
        return None


def place_ball(world: World, row: int, col: int, color: BallColor) -> bool:
    """Put a ball of color into an empty in-bounds cell.

    Returns False without touching the grid when the cell is out of bounds or taken.
    """
    if not in_bounds(world, row, col):
        return False
    entity = get_entity_at(world, row, col)
    if entity is None or world.has_component(entity, Ball):
        return False
    x, y = canonical_position(row, col)
    world.add_component(entity, Ball(color=color, x=x, y=y))
    return True


def remove_ball(world: World, row: int, col: int) -> bool:
    if not in_bounds(world, row, col):
        return False
    entity = get_entity_at(world, row, col)
    if entity is None or not world.has_component(entity, Ball):
        return False
    world.remove_component(entity, Ball)
    return True


def occupied_cells(world: World) -> Iterator[Tuple[Position, Ball]]:
    """Yield ((row, col), ball) for occupied cells in row-major order."""
    entries = []
    for entity, (position, ball) in world.get_components(BoardPosition, Ball):
        entries.append(((position.row, position.col), ball))
    entries.sort(key=lambda item: item[0])
    yield from entries


def color_map(world: World) -> Dict[Position, BallColor]:
    """Return mapping of occupied positions to their ball colors."""
    return {pos: ball.color for pos, ball in occupied_cells(world)}


def reset_grid(world: World, *, rng: random.Random | None = None) -> List[Position]:
    """Refill the top rows with random balls and clear everything below.

    Every populated cell draws its color independently and uniformly from the palette.
    """
    dims = grid_dimensions(world)
    if not dims:
        return []
    candidate_rng = rng or getattr(world, "random", None)
    if isinstance(candidate_rng, random.Random):
        rng = candidate_rng
    else:
        rng = random.Random()

    populated: List[Position] = []
    for entity, position in sorted(
        world.get_component(BoardPosition), key=lambda item: (item[1].row, item[1].col)
    ):
        if world.has_component(entity, Ball):
            world.remove_component(entity, Ball)
        if position.row < POPULATED_ROWS:
            x, y = canonical_position(position.row, position.col)
            world.add_component(entity, Ball(color=rng.choice(PALETTE), x=x, y=y))
            populated.append((position.row, position.col))
    return populated
