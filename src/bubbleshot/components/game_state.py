"""Game state resource describing the current flight phase."""
from dataclasses import dataclass
from enum import Enum, auto


class FlightPhase(Enum):
    """Idle until a shot is fired; back to idle once the projectile settles."""
    IDLE = auto()
    FLYING = auto()


@dataclass
class GameState:
    """Singleton component storing the current flight phase."""
    phase: FlightPhase = FlightPhase.IDLE
