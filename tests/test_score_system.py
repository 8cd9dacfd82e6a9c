import random

from bubbleshot.components.ball_color import BallColor
from bubbleshot.events.bus import EventBus, EVENT_GAME_RESET, EVENT_MATCH_CLEARED, EVENT_SCORE_CHANGED
from bubbleshot.systems.score import ScoreSystem
from bubbleshot.utils.game_state import get_score
from bubbleshot.world import create_world


def _setup():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(1))
    ScoreSystem(world, bus)
    changes = []
    bus.subscribe(EVENT_SCORE_CHANGED, lambda s, **k: changes.append(k))
    return world, bus, changes


def test_match_adds_ten_points_per_ball():
    world, bus, changes = _setup()

    bus.emit(EVENT_MATCH_CLEARED, positions=[(4, 0), (4, 1), (4, 2), (4, 3)], size=4, color=BallColor.RED)
    bus.emit(EVENT_MATCH_CLEARED, positions=[(0, 0), (0, 1), (0, 2)], size=3, color=BallColor.BLUE)

    assert get_score(world).value == 70
    assert changes == [
        {'score': 40, 'delta': 40, 'reason': 'match'},
        {'score': 70, 'delta': 30, 'reason': 'match'},
    ]


def test_empty_match_payload_is_ignored():
    world, bus, changes = _setup()
    bus.emit(EVENT_MATCH_CLEARED, positions=[], size=0)
    assert get_score(world).value == 0
    assert changes == []


def test_reset_zeroes_score():
    world, bus, changes = _setup()
    bus.emit(EVENT_MATCH_CLEARED, positions=[(0, 0), (0, 1), (0, 2)], size=3)

    bus.emit(EVENT_GAME_RESET, reason='restart')

    assert get_score(world).value == 0
    assert changes[-1] == {'score': 0, 'delta': 0, 'reason': 'reset'}
