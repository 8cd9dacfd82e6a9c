from esper import World

from bubbleshot.components.score import Score
from bubbleshot.constants import POINTS_PER_BALL
from bubbleshot.events.bus import EventBus, EVENT_GAME_RESET, EVENT_MATCH_CLEARED, EVENT_SCORE_CHANGED
from bubbleshot.utils.game_state import get_score


class ScoreSystem:
    """Turns cleared clusters into points.

    Subscribes to EVENT_MATCH_CLEARED and EVENT_GAME_RESET and emits
    EVENT_SCORE_CHANGED after every mutation so the high score store and the
    display can react.
    """

    def __init__(self, world: World, event_bus: EventBus, *, points_per_ball: int = POINTS_PER_BALL):
        self.world = world
        self.event_bus = event_bus
        self.points_per_ball = points_per_ball
        self.event_bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    def _score(self) -> Score:
        score = get_score(self.world)
        if score is None:
            score = Score()
            self.world.create_entity(score)
        return score

    def on_match_cleared(self, sender, **kwargs):
        size = kwargs.get('size', 0)
        if size <= 0:
            return
        score = self._score()
        delta = size * self.points_per_ball
        score.value += delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.value, delta=delta, reason='match')

    def on_game_reset(self, sender, **kwargs):
        score = self._score()
        score.value = 0
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=0, reason='reset')
