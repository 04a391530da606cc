from numba import njit, prange

from kernel_sources.registry import register_kernel


ARG_SCALARS = [
    "center_x", "center_y", "scale", "width", "height",
    "row0", "max_iter", "bailout",
]
ARG_BUFFERS_IN = []
ARG_BUFFERS_OUT = ["iter_raw", "mag2"]

ARG_ORDER = ARG_SCALARS + ARG_BUFFERS_IN + ARG_BUFFERS_OUT


@njit(cache=True, nogil=True)
def map_pixel(px, py, center_x, center_y, scale, width, height):
    """Pixel (px, py) -> point on the complex plane. No axis flip."""
    re = center_x + (px - width / 2.0) * scale / width
    im = center_y + (py - height / 2.0) * scale / height
    return re, im


@njit(cache=True, nogil=True)
def escape_time(cr, ci, max_iter, bailout):
    """
    Iterate z <- z^2 + c from z = 0 until |z|^2 exceeds the bailout or the
    budget runs out. Returns (iterations done, |z|^2 at exit).
    """
    zr = 0.0
    zi = 0.0
    n = 0
    while n < max_iter and zr*zr + zi*zi <= bailout:
        zr, zi = zr*zr - zi*zi + cr, 2.0*zr*zi + ci
        n += 1
    return n, zr*zr + zi*zi


@njit(cache=True, nogil=True)
def _mandelbrot_iter_rows(center_x, center_y, scale, width, height,
                          row0, max_iter, bailout,
                          iter_raw, mag2):
    # iter_raw/mag2 hold the band [row0, row0 + H) of a width x height frame
    H, W = iter_raw.shape
    for j in range(H):
        py = row0 + j
        for x in range(W):
            cr, ci = map_pixel(x, py, center_x, center_y, scale, width, height)
            n, m = escape_time(cr, ci, max_iter, bailout)
            iter_raw[j, x] = n
            mag2[j, x] = m


@njit(cache=True, parallel=True)
def _mandelbrot_iter_frame(center_x, center_y, scale, width, height,
                           row0, max_iter, bailout,
                           iter_raw, mag2):
    H, W = iter_raw.shape
    for j in prange(H):
        py = row0 + j
        for x in range(W):
            cr, ci = map_pixel(x, py, center_x, center_y, scale, width, height)
            n, m = escape_time(cr, ci, max_iter, bailout)
            iter_raw[j, x] = n
            mag2[j, x] = m


register_kernel(
    fractal="mandelbrot",
    op_name="iter",
    backend="CPU",
    func=_mandelbrot_iter_rows,
    parallel_func=_mandelbrot_iter_frame,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
    consumes=ARG_BUFFERS_IN,
    buffers=ARG_BUFFERS_IN + ARG_BUFFERS_OUT,
)
