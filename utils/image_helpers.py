import logging

import numpy as np
from PySide6.QtGui import QImage

logger = logging.getLogger(__name__)


def ndarray_to_qimage(arr: np.ndarray) -> QImage:
    """
    Convert a (h,w,4) RGBA8 ndarray into a QImage that owns its memory
    (deep copy).
    """
    if arr.ndim != 3 or arr.shape[2] != 4 or arr.dtype != np.uint8:
        raise ValueError(f"ndarray_to_qimage: expected (h,w,4) uint8, got {arr.shape} {arr.dtype}")
    h, w, _ = arr.shape
    raw = np.ascontiguousarray(arr).tobytes()
    # Qt RGBA8888 is byte-ordered R,G,B,A like the engine's buffer
    qimg = QImage(raw, w, h, 4 * w, QImage.Format.Format_RGBA8888)
    return qimg.copy()


def save_png(arr: np.ndarray, path: str) -> bool:
    ok = ndarray_to_qimage(arr).save(path, "PNG")
    if ok:
        logger.info("Saved image to %s", path)
    else:
        logger.error("Could not write image to %s", path)
    return ok
