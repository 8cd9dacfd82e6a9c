import math

from bubbleshot.constants import BALL_RADIUS, BARREL_LENGTH, BARREL_WIDTH
from bubbleshot.session import RenderSnapshot

BARREL_COLOR = (102, 102, 102)
OUTLINE_COLOR = (0, 0, 0)
TEXT_COLOR = (255, 255, 255)
OUTLINE_WIDTH = 2
TEXT_MARGIN = 12


class RenderSystem:
    """Draws a RenderSnapshot; the playfield's y axis is flipped to arcade's."""

    def __init__(self, window):
        self.window = window
        self.last_snapshot: RenderSnapshot | None = None

    def _screen_y(self, y: float) -> float:
        return self.window.height - y

    def process(self, snapshot: RenderSnapshot):
        # Local import keeps tests headless without creating a window.
        import arcade
        self.last_snapshot = snapshot
        try:
            arcade.get_window()
        except RuntimeError:
            return

        for cell in snapshot.cells:
            self._draw_ball(arcade, cell.x, cell.y, cell.color.rgb)

        shooter = snapshot.shooter
        if shooter is not None:
            end_x = shooter.x + math.cos(shooter.angle) * BARREL_LENGTH
            end_y = shooter.y + math.sin(shooter.angle) * BARREL_LENGTH
            arcade.draw_line(
                shooter.x, self._screen_y(shooter.y),
                end_x, self._screen_y(end_y),
                BARREL_COLOR, BARREL_WIDTH,
            )
            self._draw_ball(arcade, shooter.x, shooter.y, shooter.loaded_color.rgb)

        if snapshot.projectile is not None:
            projectile = snapshot.projectile
            self._draw_ball(arcade, projectile.x, projectile.y, projectile.color.rgb)

        arcade.draw_text(
            f"Score: {snapshot.score}",
            TEXT_MARGIN, TEXT_MARGIN,
            TEXT_COLOR, 16,
        )
        arcade.draw_text(
            f"High Score: {snapshot.high_score}",
            self.window.width - TEXT_MARGIN, TEXT_MARGIN,
            TEXT_COLOR, 16,
            anchor_x="right",
        )

    def _draw_ball(self, arcade, x: float, y: float, color):
        screen_y = self._screen_y(y)
        arcade.draw_circle_filled(x, screen_y, BALL_RADIUS, color)
        arcade.draw_circle_outline(x, screen_y, BALL_RADIUS, OUTLINE_COLOR, OUTLINE_WIDTH)
