import math

from esper import World

from bubbleshot.components.shooter import Shooter
from bubbleshot.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS,
)
from bubbleshot.session import InputSnapshot

MOUSE_BUTTON_LEFT = 1
KEY_R = 114
KEY_N = 110
RESET_KEYS = {KEY_R, KEY_N}


def aim_angle(shooter_x: float, shooter_y: float, x: float, y: float) -> float:
    """Angle from the shooter to a playfield point (y grows downwards)."""
    return math.atan2(y - shooter_y, x - shooter_x)


class InputSystem:
    """Collects raw window input into the InputSnapshot consumed by the next tick.

    Window coordinates have y growing upwards; the playfield has y growing
    downwards from the top edge, so pointer positions are flipped on the way in.
    """

    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self._aim: float | None = None
        self._fire = False
        self._reset = False
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_move(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        shooter = self._shooter()
        if shooter is None:
            return
        self._aim = aim_angle(shooter.x, shooter.y, float(x), self.window.height - float(y))

    def on_mouse_press(self, sender, **kwargs):
        if kwargs.get('button') != MOUSE_BUTTON_LEFT:
            return
        self._fire = True

    def on_key_press(self, sender, **kwargs):
        if kwargs.get('symbol') in RESET_KEYS:
            self._reset = True

    def drain(self) -> InputSnapshot:
        """Return the pending input and start collecting afresh."""
        snapshot = InputSnapshot(aim_angle=self._aim, fire=self._fire, reset=self._reset)
        self._aim = None
        self._fire = False
        self._reset = False
        return snapshot

    def _shooter(self) -> Shooter | None:
        for _, shooter in self.world.get_component(Shooter):
            return shooter
        return None
