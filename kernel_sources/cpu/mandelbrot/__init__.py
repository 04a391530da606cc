from kernel_sources.registry import register_op_descriptor

# "iter" produces raw iteration counts and |z|^2 at exit; no deps.
register_op_descriptor("mandelbrot", "iter", depends_on=[])

# "smooth" consumes iter_raw/mag2, produces iter_smooth; depends on iter.
register_op_descriptor("mandelbrot", "smooth", depends_on=["iter"])

# "normalize" consumes iter_smooth, produces iter_norm in [0, 1); depends on smooth
register_op_descriptor("mandelbrot", "normalize", depends_on=["smooth"])
