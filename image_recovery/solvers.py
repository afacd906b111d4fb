"""Primal-dual solvers for image recovery."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from image_recovery.ops import (
    ShapeError,
    negative_gradient,
    norm,
    positive_gradient,
    vector_len,
    weighted_average,
)

__all__ = ["denoise"]

_log = logging.getLogger(__name__)


def _relative_change(current: NDArray[np.float64], previous: NDArray[np.float64]) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(norm(current - previous)) / np.float64(norm(previous)))


def denoise(
    array: ArrayLike,
    lambda_: float,
    tau: float,
    sigma: float,
    gamma: float,
    max_iter: int,
    convergence_threshold: float,
) -> NDArray[np.float64]:
    """Denoise a ``(x, y, channels)`` array by accelerated total-variation minimisation.

    ``lambda_`` weighs fidelity to the input: near zero the result is flat,
    towards infinity it equals the input. ``tau`` and ``sigma`` are step
    sizes, ideally with ``tau * sigma * 8 <= 1``; ``gamma`` drives the
    acceleration. Iteration stops once the relative change between two
    iterates drops below ``convergence_threshold`` or after ``max_iter``
    iterations (at least one iteration always runs).

    Raises :class:`~image_recovery.ops.ShapeError` if the array is not
    three-dimensional or is a single pixel wide or high.
    """
    original = np.array(array, dtype=np.float64)
    if original.ndim != 3:
        raise ShapeError(
            f"expected a 3-dimensional array, got {original.ndim} dimensions"
        )

    current = original.copy()
    current_bar = current.copy()
    dual_a = positive_gradient(current, 0)
    dual_b = positive_gradient(current, 1)

    iteration = 1
    while True:
        dual_a = dual_a + sigma * positive_gradient(current_bar, 0)
        dual_b = dual_b + sigma * positive_gradient(current_bar, 1)
        # Project the dual variables' colour vectors onto the unit ball.
        scale = np.maximum(1.0, vector_len(dual_a, dual_b, 2))
        dual_a = dual_a / scale
        dual_b = dual_b / scale

        previous = current
        current = current - tau * (
            negative_gradient(dual_a, 0) + negative_gradient(dual_b, 1)
        )
        current = weighted_average(original, current, tau, lambda_)

        theta = 1.0 / (1.0 + 2.0 * gamma * tau)
        tau *= theta
        sigma /= theta

        current_bar = current + theta * (current - previous)

        change = _relative_change(current, previous)
        if change < convergence_threshold or iteration >= max_iter:
            _log.debug("returned at iteration = %d; where max = %d", iteration, max_iter)
            _log.debug(
                "convergence = %s; where threshold = %s", change, convergence_threshold
            )
            break
        iteration += 1

    return current