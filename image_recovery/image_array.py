"""Conversion between images and the arrays the solvers work on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from PIL import Image

from image_recovery.ops import ShapeError
from image_recovery.solvers import denoise as _denoise

__all__ = ["ImageArray"]


def _saturate_u8(values: NDArray[np.float64]) -> NDArray[np.uint8]:
    """Truncate towards zero and saturate into 0..255, mapping NaN to 0."""
    cleaned = np.where(np.isnan(values), 0.0, values)
    return np.clip(cleaned, 0.0, 255.0).astype(np.uint8)


@dataclass(frozen=True, eq=False)
class ImageArray:
    """An image held as a ``float64`` array indexed ``[x, y, channel]``."""

    array: NDArray[np.float64]

    def __post_init__(self) -> None:
        object.__setattr__(self, "array", np.array(self.array, dtype=np.float64))

    @classmethod
    def from_image(cls, image: Image.Image) -> ImageArray:
        """Build from a greyscale (``L``) or ``RGB`` Pillow image."""
        if image.mode == "L":
            pixels = np.asarray(image, dtype=np.float64).T[:, :, np.newaxis]
        elif image.mode == "RGB":
            pixels = np.asarray(image, dtype=np.float64).transpose(1, 0, 2)
        else:
            raise ValueError(
                f"unsupported image mode {image.mode!r}; expected 'L' or 'RGB'"
            )
        return cls(pixels)

    @classmethod
    def from_array(cls, array: ArrayLike) -> ImageArray:
        """Build from any numeric array, converting its values to ``float64``."""
        return cls(np.asarray(array))

    @property
    def shape(self) -> tuple[int, ...]:
        return self.array.shape

    def __array__(self, dtype: Any = None, copy: Any = None) -> NDArray[Any]:
        if dtype is None:
            return self.array
        return self.array.astype(dtype)

    def _require_3d(self) -> None:
        if self.array.ndim != 3:
            raise ShapeError(
                f"expected a 3-dimensional array, got {self.array.ndim} dimensions"
            )

    def into_luma(self) -> Image.Image:
        """Return a greyscale image, summing the channel axis of each pixel."""
        self._require_3d()
        flat = _saturate_u8(self.array.sum(axis=2))
        return Image.fromarray(np.ascontiguousarray(flat.T))

    def into_rgb(self) -> Image.Image:
        """Return an RGB image.

        Only the first three channels are used; with fewer than three the
        available channels are repeated cyclically.
        """
        self._require_3d()
        channels = self.array.shape[2]
        if channels == 0:
            raise ShapeError("cannot build an RGB image from an array with no channels")
        picked = self.array[:, :, [index % channels for index in range(3)]]
        pixels = _saturate_u8(picked).transpose(1, 0, 2)
        return Image.fromarray(np.ascontiguousarray(pixels))

    def denoise(
        self,
        lambda_: float,
        tau: float,
        sigma: float,
        gamma: float,
        max_iter: int,
        convergence_threshold: float,
    ) -> ImageArray:
        """Denoise the image; see :func:`image_recovery.solvers.denoise`."""
        return ImageArray(
            _denoise(
                self.array, lambda_, tau, sigma, gamma, max_iter, convergence_threshold
            )
        )