from dataclasses import dataclass

from bubbleshot.components.ball_color import BallColor

@dataclass(slots=True)
class Shooter:
    x: float
    y: float
    angle: float
    loaded_color: BallColor
