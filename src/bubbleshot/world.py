import random

from esper import World
from .events.bus import EventBus
from bubbleshot.components.ball_color import PALETTE
from bubbleshot.components.game_state import GameState
from bubbleshot.components.score import Score
from bubbleshot.components.shooter import Shooter
from bubbleshot.constants import CANVAS_WIDTH, CANVAS_HEIGHT, SHOOTER_HEIGHT, SHOOTER_ANGLE


def create_world(
    event_bus: EventBus,
    *,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "width", width)
    setattr(world, "height", height)

    # Global game state resource: flight phase and score share one entity.
    world.create_entity(GameState(), Score())

    world.create_entity(
        Shooter(
            x=width / 2,
            y=height - SHOOTER_HEIGHT,
            angle=SHOOTER_ANGLE,
            loaded_color=world.random.choice(PALETTE),
        )
    )
    return world
