from typing import List, Set
from esper import World
from bubbleshot.events.bus import EventBus, EVENT_BALL_SETTLED, EVENT_MATCH_CLEARED
from bubbleshot.constants import MIN_MATCH_SIZE
from bubbleshot.systems.grid_ops import Position, color_map, remove_ball

NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def find_cluster(world: World, row: int, col: int) -> Set[Position]:
    """Return the 4-connected same-color component containing (row, col).

    Empty or out-of-range start cells yield an empty set. Uses an explicit stack
    so depth is bounded by the grid size rather than the call stack.
    """
    colors = color_map(world)
    target = colors.get((row, col))
    if target is None:
        return set()
    visited: Set[Position] = set()
    stack: List[Position] = [(row, col)]
    while stack:
        pos = stack.pop()
        if pos in visited:
            continue
        if colors.get(pos) != target:
            continue
        visited.add(pos)
        r, c = pos
        for dr, dc in NEIGHBOUR_OFFSETS:
            neighbour = (r + dr, c + dc)
            if neighbour not in visited:
                stack.append(neighbour)
    return visited


class MatchSystem:
    def __init__(self, world: World, event_bus: EventBus, *, min_size: int = MIN_MATCH_SIZE):
        self.world = world
        self.event_bus = event_bus
        self.min_size = min_size
        event_bus.subscribe(EVENT_BALL_SETTLED, self.on_ball_settled)

    def on_ball_settled(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.resolve(row, col)

    def resolve(self, row: int, col: int) -> List[Position]:
        """Clear the cluster at (row, col) when it is large enough; returns cleared cells."""
        cluster = find_cluster(self.world, row, col)
        if len(cluster) < self.min_size:
            return []
        color = color_map(self.world)[(row, col)]
        # Deterministic ordering for events/tests
        positions = sorted(cluster)
        for r, c in positions:
            remove_ball(self.world, r, c)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions, size=len(positions), color=color)
        return positions
