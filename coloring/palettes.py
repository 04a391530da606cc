import math

import numpy as np
from scipy.interpolate import interp1d


def apply_gamma_correction(palette, gamma=0.8):
    """
    Applies gamma correction to a palette to increase contrast.

    Parameters:
        palette (list of tuple): List of RGB tuples (0–255).
        gamma (float): Gamma value (<1 brightens, >1 darkens).

    Returns:
        list of tuple: Gamma-corrected palette.
    """
    arr = np.asarray(palette, dtype=np.float64)
    corrected = (255 * (arr / 255) ** gamma).astype(np.int64)
    return [tuple(map(int, c)) for c in corrected]

def stretch_contrast(palette):
    """
    Linearly stretches the RGB values to span the full 0–255 range.
    """
    arr = np.array(palette, dtype=np.float32)
    min_vals = arr.min(axis=0)
    max_vals = arr.max(axis=0)
    stretched = (arr - min_vals) / (max_vals - min_vals + 1e-5) * 255
    return [tuple(map(int, np.clip(color, 0, 255))) for color in stretched]

def create_smooth_gradient(palette, resolution=256, interpolation='cubic'):
    """
    Generates a smooth gradient lookup table from a list of RGB stops.

    Parameters:
        palette (list of tuple): RGB stops (each value 0–255).
        resolution (int): Number of entries in the lookup table.
        interpolation (str): Interpolation method ('linear', 'quadratic', 'cubic', etc.).

    Returns:
        np.ndarray: (resolution, 3) uint8 lookup table.
    """
    if len(palette) < 2:
        raise ValueError("Palette must contain at least two colors for interpolation.")
    kind = interpolation if len(palette) > 3 else 'linear'

    stops = np.array(palette, dtype=np.float32)
    indices = np.linspace(0, len(stops) - 1, num=len(stops))
    interp_func = interp1d(indices, stops, kind=kind, axis=0, fill_value="extrapolate")
    smooth_indices = np.linspace(0, len(stops) - 1, num=resolution)
    smooth = [tuple(map(int, np.clip(c, 0, 255))) for c in interp_func(smooth_indices)]
    smooth = apply_gamma_correction(smooth)
    smooth = stretch_contrast(smooth)
    return np.array(smooth, dtype=np.uint8)


def psychedelic(t: np.ndarray) -> np.ndarray:
    """
    Three sine sweeps at different frequencies and phases, one per channel.
    Each channel is sin(...) * 0.5 + 0.5 scaled to 0–255 and truncated.
    """
    t = np.asarray(t, dtype=np.float64)
    r = (np.sin(t * math.pi * 3.0) * 0.5 + 0.5) * 255.0
    g = (np.sin(t * math.pi * 5.0 + math.pi / 3.0) * 0.5 + 0.5) * 255.0
    b = (np.sin(t * math.pi * 7.0 + 2.0 * math.pi / 3.0) * 0.5 + 0.5) * 255.0
    return np.stack([r, g, b], axis=-1).astype(np.uint8)


# Define base palettes
base_palettes = {
    "Fire": create_smooth_gradient([
        (0, 0, 0), (255, 0, 0), (255, 85, 0), (255, 170, 0),
        (255, 255, 0), (255, 255, 85), (255, 255, 170)]),

    "Ocean": create_smooth_gradient([
        (0, 0, 0), (0, 32, 64), (0, 64, 128), (0, 96, 192),
        (0, 128, 255), (64, 160, 255), (128, 192, 255)]),

    "Classic": create_smooth_gradient([
        (0, 0, 0), (66, 30, 15), (25, 7, 26), (9, 1, 47), (4, 4, 73),
        (0, 7, 100), (12, 44, 138), (24, 82, 177), (57, 125, 209),
        (134, 181, 229), (211, 236, 248), (241, 233, 191), (248, 201, 95),
        (255, 170, 0), (204, 128, 0), (153, 87, 0), (106, 52, 3)]),

    "Viridis": create_smooth_gradient([
        (68, 1, 84),
        (59, 82, 139),
        (33, 145, 140),
        (94, 201, 98),
        (253, 231, 37)]),

    "Sunset": create_smooth_gradient([
        (0, 0, 0),
        (44, 0, 44),
        (128, 0, 64),
        (255, 94, 77),
        (255, 195, 113),
        (255, 255, 204)]),

    "Grayscale": create_smooth_gradient([
        (0, 0, 0),
        (64, 64, 64),
        (128, 128, 128),
        (192, 192, 192),
        (255, 255, 255)]),
}

# Export palettes dictionary; "Psychedelic" is procedural and has no table
keys = sorted(base_palettes.keys())
palettes = {i: base_palettes[i] for i in keys}
PALETTE_NAMES = sorted(keys + ["Psychedelic"])
