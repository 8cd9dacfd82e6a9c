from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that nobody else references alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_MOUSE_MOVE = "mouse_move"                    # payload: x, y, dx, dy
EVENT_KEY_PRESS = "key_press"                      # payload: symbol, modifiers
EVENT_AIM = "aim"                                  # payload: angle=float (radians)
EVENT_FIRE_REQUEST = "fire_request"                # payload: None
EVENT_GAME_RESET = "game_reset"                    # payload: reason=str|None


# ============================================================================
# PROJECTILE & GRID
# ============================================================================
EVENT_SHOT_FIRED = "shot_fired"                    # payload: entity=int, color=BallColor, angle=float
EVENT_SHOT_REJECTED = "shot_rejected"              # payload: reason=str
EVENT_PROJECTILE_ADVANCED = "projectile_advanced"  # payload: entity=int
EVENT_PLACEMENT_REJECTED = "placement_rejected"    # payload: row, col, reason=str
EVENT_BALL_SETTLED = "ball_settled"                # payload: row, col, color=BallColor
EVENT_GRID_RESET = "grid_reset"                    # payload: populated=list[(r,c)]


# ============================================================================
# MATCHES & SCORE
# ============================================================================
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], size=int, color=BallColor
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, reason=str
EVENT_HIGH_SCORE_CHANGED = "high_score_changed"    # payload: high_score=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_FLIGHT_PHASE_CHANGED = "flight_phase_changed"  # payload: previous_phase=FlightPhase|None, new_phase=FlightPhase
