"""Array operations used by the image recovery solvers.

All functions accept anything convertible to a floating point ``numpy``
array and return new ``float64`` arrays; their inputs are never modified.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "ShapeError",
    "OutOfBoundsError",
    "UnsupportedError",
    "positive_shift",
    "negative_shift",
    "positive_gradient",
    "negative_gradient",
    "weighted_average",
    "norm",
    "vector_len",
]


class ShapeError(ValueError):
    """Raised when an array's shape does not suit the requested operation."""


class OutOfBoundsError(ShapeError):
    """Raised when an axis index does not exist in the array."""


class UnsupportedError(ShapeError):
    """Raised when an axis is too short for the requested operation."""


def _as_float(array: ArrayLike) -> NDArray[np.float64]:
    return np.asarray(array, dtype=np.float64)


def _check_axis(array: NDArray[np.float64], axis: int) -> None:
    if not 0 <= axis < array.ndim:
        raise OutOfBoundsError(
            f"axis {axis} is out of bounds for an array of dimension {array.ndim}"
        )


def _check_shiftable(array: NDArray[np.float64], axis: int) -> None:
    _check_axis(array, axis)
    if array.shape[axis] < 2:
        raise UnsupportedError(
            f"cannot shift axis {axis} of length {array.shape[axis]}; "
            "a length of at least 2 is required"
        )


def positive_shift(array: ArrayLike, axis: int) -> NDArray[np.float64]:
    """Shift towards growing indexes on ``axis``, wrapping the last slice to the front."""
    values = _as_float(array)
    _check_shiftable(values, axis)
    return np.roll(values, 1, axis=axis)


def negative_shift(array: ArrayLike, axis: int) -> NDArray[np.float64]:
    """Shift towards shrinking indexes on ``axis``, wrapping the first slice to the end."""
    values = _as_float(array)
    _check_shiftable(values, axis)
    return np.roll(values, -1, axis=axis)


def positive_gradient(array: ArrayLike, axis: int) -> NDArray[np.float64]:
    """Return ``array - positive_shift(array, axis)``.

    It is the adjoint of :func:`negative_gradient`: for arrays ``a`` and ``b``
    of equal shape, ``(positive_gradient(a) * b).sum()`` equals
    ``(a * negative_gradient(b)).sum()``.
    """
    values = _as_float(array)
    return values - positive_shift(values, axis)


def negative_gradient(array: ArrayLike, axis: int) -> NDArray[np.float64]:
    """Return ``array - negative_shift(array, axis)``."""
    values = _as_float(array)
    return values - negative_shift(values, axis)


def weighted_average(
    array: ArrayLike, other: ArrayLike, tau: float, lambda_: float
) -> NDArray[np.float64]:
    """Return ``(other + tau * lambda_ * array) / (1 + tau * lambda_)``."""
    weight = tau * lambda_
    return (_as_float(other) + weight * _as_float(array)) / (1.0 + weight)


def norm(array: ArrayLike) -> float:
    """Return the Euclidean norm of all elements of ``array``."""
    values = _as_float(array)
    return float(np.sqrt((values * values).sum()))


def vector_len(array: ArrayLike, other: ArrayLike, axis: int) -> NDArray[np.float64]:
    """Return the length of the combined vectors of two arrays along ``axis``.

    Equivalent to ``sqrt(sum(array**2 + other**2, axis))``; the reduced axis
    is kept with length 1, so the result broadcasts against the inputs.
    """
    values = _as_float(array)
    others = _as_float(other)
    _check_axis(values, axis)
    if values.shape != others.shape:
        raise ShapeError(
            f"shapes {values.shape} and {others.shape} do not match"
        )
    squared = values * values + others * others
    if squared.shape[axis] > 1:
        squared = squared.sum(axis=axis, keepdims=True)
    return np.sqrt(squared)