from dataclasses import dataclass

@dataclass(slots=True)
class Score:
    """Session score plus the last high score read back from the store."""
    value: int = 0
    high_score: int = 0
