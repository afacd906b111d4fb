"""Total-variation image denoising: array operators, a primal-dual solver,
image conversion and a command line tool."""

__version__ = "0.3.1"
__all__ = ["ops", "solvers", "image_array", "cli"]