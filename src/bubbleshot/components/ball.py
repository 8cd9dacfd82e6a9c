from dataclasses import dataclass

from bubbleshot.components.ball_color import BallColor

@dataclass(slots=True)
class Ball:
    """Settled ball occupying a grid cell.

    Present only on occupied cell entities; an empty cell carries BoardPosition alone.
    x/y always hold the canonical centre for the cell's (row, col) so rendering and
    distance checks never recompute it.
    """
    color: BallColor
    x: float
    y: float
