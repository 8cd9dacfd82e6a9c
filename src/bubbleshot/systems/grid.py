from typing import List, Tuple
from esper import World
from bubbleshot.events.bus import EventBus, EVENT_GAME_RESET, EVENT_GRID_RESET
from bubbleshot.components.board import Board
from bubbleshot.components.board_position import BoardPosition
from bubbleshot.constants import GRID_ROWS, GRID_COLS
from bubbleshot.systems.grid_ops import reset_grid

class GridSystem:
    """Owns the board entity and its fixed set of cell entities."""

    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=rows, cols=cols))
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)
        self._init_cells(rows, cols)
        self.reset()

    def _init_cells(self, rows: int, cols: int):
        # Cells are created once; occupancy is the presence of a Ball component.
        for r in range(rows):
            for c in range(cols):
                self.world.create_entity(BoardPosition(row=r, col=c))

    def reset(self) -> List[Tuple[int, int]]:
        populated = reset_grid(self.world)
        self.event_bus.emit(EVENT_GRID_RESET, populated=populated)
        return populated

    def on_game_reset(self, sender, **kwargs):
        self.reset()
