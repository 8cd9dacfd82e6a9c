"""Fixed ball palette."""
from enum import Enum
from typing import Tuple


class BallColor(Enum):
    RED = '#FF0000'
    GREEN = '#00FF00'
    BLUE = '#0000FF'
    YELLOW = '#FFFF00'
    MAGENTA = '#FF00FF'

    @property
    def rgb(self) -> Tuple[int, int, int]:
        hex_value = self.value.lstrip('#')
        return (int(hex_value[0:2], 16), int(hex_value[2:4], 16), int(hex_value[4:6], 16))


PALETTE = list(BallColor)
