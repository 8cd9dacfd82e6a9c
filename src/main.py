"""Entry point for the Bubble Shot arcade game.

Sets up the game session, event bus, input/render glue and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from bubbleshot.constants import CANVAS_WIDTH, CANVAS_HEIGHT, UPDATE_RATE
from bubbleshot.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_MOVE, EVENT_MOUSE_PRESS
from bubbleshot.session import GameSession
from bubbleshot.systems.input import InputSystem
from bubbleshot.systems.render import RenderSystem

logger = logging.getLogger(__name__)


class BubbleShotWindow(Window):
    def __init__(self):
        super().__init__(CANVAS_WIDTH, CANVAS_HEIGHT, "Bubble Shot")
        self.set_update_rate(UPDATE_RATE)
        self.session = GameSession(width=CANVAS_WIDTH, height=CANVAS_HEIGHT)
        self.event_bus = self.session.event_bus
        self.input_system = InputSystem(self.event_bus, self, self.session.world)
        self.render_system = RenderSystem(self)
        self.snapshot = self.session.snapshot()
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process(self.snapshot)

    def on_update(self, delta_time: float):
        self.snapshot = self.session.tick(self.input_system.drain(), dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    window = BubbleShotWindow()
    logger.info("High score file: %s", window.session.high_score_system.save_path)
    run()

if __name__ == "__main__":
    main()
