from enum import Enum, auto

class EngineMode(Enum):
    FULL_FRAME = auto()
    TILED = auto()

class Key(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ZOOM_IN = "q"
    ZOOM_OUT = "e"
    ANIMATE = "space"
    RESET = "r"
    HELP = "h"
    SCREENSHOT = "s"
    MORE_ITER = "+"
    LESS_ITER = "-"
    QUIT = "escape"
