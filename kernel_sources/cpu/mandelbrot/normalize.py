from numba import njit

from kernel_sources.registry import register_kernel

ARG_SCALARS = ["max_iter"]
ARG_BUFFERS_IN = ["iter_smooth"]
ARG_BUFFERS_OUT = ["iter_norm"]

ARG_ORDER = ARG_SCALARS + ARG_BUFFERS_IN + ARG_BUFFERS_OUT

# Largest double strictly below 1.0
T_MAX = 1.0 - 2.0 ** -53

@njit(cache=True, nogil=True)
def _budget_normalize(max_iter, iter_smooth, iter_norm):
    H, W = iter_smooth.shape
    for y in range(H):
        for x in range(W):
            t = iter_smooth[y, x] / max_iter
            # NaN fails every comparison and lands on 0
            if not t >= 0.0:
                t = 0.0
            elif t > T_MAX:
                t = T_MAX
            iter_norm[y, x] = t

register_kernel(
    fractal="mandelbrot",
    op_name="normalize",
    backend="CPU",
    func=_budget_normalize,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
    consumes=ARG_BUFFERS_IN,
    buffers=ARG_BUFFERS_IN + ARG_BUFFERS_OUT,
)
