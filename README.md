# image-recovery

Total-variation image denoising for Python, built on NumPy and Pillow.

The solver is the accelerated primal-dual algorithm of Chambolle and Pock
(2011), with modifications inspired by Bredies (2014). It works on greyscale
and multichannel (RGB) images. The colour channels of a pixel are treated
together as one vector.

## Installation

```sh
pip install image-recovery
```

To run the test suite, install the `test` extra and run `pytest`:

```sh
pip install "image-recovery[test]"
pytest
```

## Command line

Installing the package provides an `image-recovery` command. It reads an
image, denoises it and writes the result:

```sh
image-recovery noisy.png denoised.png
```

Run this to see all arguments:

```sh
image-recovery --help
```

| Option | Meaning | Default |
|---|---|---|
| `--lambda` | fidelity weight; smaller values give smoother output | `0.0259624705` |
| `--tau` | primal step size | `1/sqrt(2)` |
| `--sigma` | dual step size | `1/(8*tau)` |
| `--gamma` | acceleration | `0.35*lambda` |
| `--max-iter` | maximum number of iterations | `500` |
| `--threshold` | relative change below which iteration stops | `1e-10` |
| `--grayscale` | convert the input to greyscale and write a greyscale image | off (RGB) |
| `--verbose` | log solver progress at debug level | off |

The command exits with status 0 on success. If the input cannot be opened,
the image cannot be denoised (for example, it is one pixel wide or high) or
the output cannot be saved, it prints a message to standard error and exits
with status 1.

## Library usage

```python
import math

from PIL import Image

from image_recovery.image_array import ImageArray

img = Image.open("noisy.png").convert("RGB")
image_array = ImageArray.from_image(img)

# tau and sigma should satisfy tau * sigma * L^2 <= 1, where L^2 <= 8.
tau = 1.0 / math.sqrt(2.0)
sigma = 1.0 / (8.0 * tau)

# lambda_ near zero gives a smoother result.
# A large lambda_ gives a result closer to the input.
lambda_ = 0.0259624705

# gamma sets the acceleration. Chambolle and Pock use 0.35 * lambda_.
gamma = 0.35 * lambda_

denoised = image_array.denoise(
    lambda_,
    tau,
    sigma,
    gamma,
    max_iter=500,
    convergence_threshold=1e-10,
)

denoised.into_rgb().save("denoised.png")
```

The solver always runs at least one iteration and at most `max_iter`. It
stops earlier when `norm(current - previous) / norm(previous)` falls below
`convergence_threshold`. With the standard `logging` module set to debug
level, it logs the iteration it stopped at and the final relative change.

An image that is only one pixel wide or one pixel tall cannot be
differentiated. For such an image the solver raises
`image_recovery.ops.ShapeError`.

### `ImageArray`

`image_recovery.image_array.ImageArray` holds an image as a `float64` array
indexed `[x, y, channel]`, available as its `array` attribute and its
`shape` property. It can be passed directly to NumPy functions.

- `ImageArray.from_image(image)` accepts a Pillow image in mode `L` or `RGB`.
  Other modes raise `ValueError`.
- `ImageArray.from_array(array)` accepts any numeric array and converts its
  values to `float64`.
- `into_luma()` sums the channels of each pixel into a greyscale image.
- `into_rgb()` uses the first three channels. When there are fewer than
  three, it cycles through the channels it has. An array with no channels
  raises `ShapeError`.
- `denoise(...)` returns a new `ImageArray`; the arguments are those of the
  solver above.

When converting back to an image, values are truncated towards zero and
clamped to 0–255; NaN becomes 0. Both conversions require a
three-dimensional array and raise `ShapeError` otherwise.

### Solver on plain arrays

`image_recovery.solvers.denoise(array, lambda_, tau, sigma, gamma, max_iter,
convergence_threshold)` runs the same solver on any array-like of shape
`(x, y, channels)` and returns a `float64` NumPy array. It raises
`ShapeError` for an array that is not three-dimensional.

### Operators

The operators behind the solver are in `image_recovery.ops`. They accept
anything convertible to a float array and never modify their inputs.

- `positive_shift` and `negative_shift`: wrapping shifts along an axis.
- `positive_gradient` and `negative_gradient`: the array minus its shift.
  They are dual to each other: `(positive_gradient(a, k) * b).sum()` equals
  `(a * negative_gradient(b, k)).sum()`.
- `weighted_average(array, other, tau, lambda_)`: returns
  `(other + tau * lambda_ * array) / (1 + tau * lambda_)`.
- `norm`: the Euclidean norm of all elements of an array.
- `vector_len(array, other, axis)`: `sqrt(sum(array**2 + other**2))` along
  `axis`, keeping that axis with length 1.

The shifts and gradients raise `OutOfBoundsError` for an axis the array does
not have, and `UnsupportedError` for an axis shorter than two. `vector_len`
raises `OutOfBoundsError` for an axis the array does not have, and
`ShapeError` when the two arrays differ in shape. Both `OutOfBoundsError`
and `UnsupportedError` are subclasses of `ShapeError`, which is itself a
`ValueError`.

## Limitations

Denoising is the only recovery method provided. There is no inpainting,
deblurring or other reconstruction. Images are read and written through
Pillow only in `L` and `RGB` modes; alpha channels and higher bit depths are
not kept.