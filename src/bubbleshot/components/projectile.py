from dataclasses import dataclass

from bubbleshot.components.ball_color import BallColor

@dataclass(slots=True)
class Projectile:
    """The single in-flight ball. Velocity is in pixels per tick."""
    x: float
    y: float
    dx: float
    dy: float
    color: BallColor
