import math

from numba import njit

from kernel_sources.registry import register_kernel

ARG_SCALARS = ["max_iter", "bailout"]
ARG_BUFFERS_IN = ["iter_raw", "mag2"]
ARG_BUFFERS_OUT = ["iter_smooth"]

ARG_ORDER = ARG_SCALARS + ARG_BUFFERS_IN + ARG_BUFFERS_OUT


@njit(cache=True, nogil=True)
def smooth_value(n, m, max_iter, bailout):
    """Renormalized escape count; interior points keep the full budget."""
    if m > bailout:
        return n + 1.0 - math.log2(math.log2(m) / 2.0)
    return float(max_iter)


@njit(cache=True, nogil=True)
def _mandelbrot_smooth(max_iter, bailout, iter_raw, mag2, iter_smooth):
    H, W = iter_raw.shape
    for y in range(H):
        for x in range(W):
            iter_smooth[y, x] = smooth_value(iter_raw[y, x], mag2[y, x],
                                             max_iter, bailout)

register_kernel(
    fractal="mandelbrot",
    op_name="smooth",
    backend="CPU",
    func=_mandelbrot_smooth,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
    consumes=ARG_BUFFERS_IN,
    buffers=ARG_BUFFERS_IN + ARG_BUFFERS_OUT,
)
