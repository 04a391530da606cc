import numpy as np

from coloring.base import ColoringStrategy
from coloring.palettes import palettes, psychedelic, PALETTE_NAMES


class SmoothEscapeColoring(ColoringStrategy):
    """Linear blend between neighbouring entries of a lookup-table palette."""

    def __init__(self, palette: np.ndarray, **kwargs):
        super().__init__(**kwargs)
        self.palette = np.asarray(palette, dtype=np.uint8)

    def exterior(self, t: np.ndarray) -> np.ndarray:
        ex_size = len(self.palette)
        idx_f = t * (ex_size - 1)
        idx = np.clip(idx_f.astype(np.int32), 0, ex_size - 1)
        frac = idx_f - idx
        idx_next = np.clip(idx + 1, 0, ex_size - 1)
        c0 = self.palette[idx].astype(np.float64)
        c1 = self.palette[idx_next].astype(np.float64)
        return (((1 - frac)[:, None] * c0) + (frac[:, None] * c1)).astype(np.uint8)


class SineSweepColoring(ColoringStrategy):
    """Procedural RGB sine sweep; the default look of the viewer."""

    def exterior(self, t: np.ndarray) -> np.ndarray:
        return psychedelic(t).reshape(-1, 3)


def get_coloring(name: str) -> ColoringStrategy:
    if name == "Psychedelic":
        return SineSweepColoring()
    try:
        return SmoothEscapeColoring(palettes[name])
    except KeyError:
        raise ValueError(f"Unknown palette '{name}', expected one of {PALETTE_NAMES}") from None
