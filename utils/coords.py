import math

# Width of the complex plane covered at zoom == 1 ([-2, 2] around the center).
REFERENCE_SPAN = 4.0


def viewport_span(zoom):
    """
    Extent of the complex plane covered on each axis at the given zoom.

    A zoom so small that the span overflows collapses the view onto its
    center (span 0), so every pixel maps to the same point instead of NaN.
    """
    span = REFERENCE_SPAN / zoom
    if not math.isfinite(span):
        return 0.0
    return span
