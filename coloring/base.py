from abc import ABC, abstractmethod
import numpy as np


INTERIOR_COLOR = (0, 0, 0)


class ColoringStrategy(ABC):
    """
    Turns normalized escape values into RGBA8 pixels.

    Subclasses only map exterior values t in [0, 1) to RGB; interior points
    always get the fixed interior color and alpha is always 255.
    """
    def __init__(self, interior_color=INTERIOR_COLOR):
        self.interior_color = tuple(int(c) for c in interior_color)

    @abstractmethod
    def exterior(self, t: np.ndarray) -> np.ndarray:
        """(n,) float64 in [0, 1) -> (n, 3) uint8."""
        ...

    def apply(self, iter_norm: np.ndarray, interior_mask: np.ndarray,
              out: np.ndarray = None) -> np.ndarray:
        h, w = iter_norm.shape
        rgba = out if out is not None else np.empty((h, w, 4), dtype=np.uint8)
        rgba[..., 3] = 255
        rgba[interior_mask, :3] = self.interior_color

        exterior_mask = ~interior_mask
        rgb = self.exterior(iter_norm[exterior_mask])
        # keep the boundary distinguishable from the set itself
        clash = np.all(rgb == np.array(self.interior_color, dtype=np.uint8), axis=1)
        rgb[clash, 0] ^= 1
        rgba[exterior_mask, :3] = rgb
        return rgba
