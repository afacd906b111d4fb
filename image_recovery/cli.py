"""Command line tool that denoises an image file."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from collections.abc import Sequence

from PIL import Image

from image_recovery.image_array import ImageArray
from image_recovery.ops import ShapeError

__all__ = ["main"]

DEFAULT_LAMBDA = 0.0259624705
DEFAULT_TAU = 1.0 / math.sqrt(2.0)
DEFAULT_MAX_ITER = 500
DEFAULT_THRESHOLD = 1e-10


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-recovery",
        description="Denoise an image with a total-variation primal-dual solver.",
    )
    parser.add_argument("input", help="path of the noisy image")
    parser.add_argument("output", help="path to write the denoised image to")
    parser.add_argument(
        "--lambda",
        dest="lambda_",
        type=float,
        default=DEFAULT_LAMBDA,
        help="fidelity weight; small values give smoother output (default: %(default)s)",
    )
    parser.add_argument(
        "--tau", type=float, default=DEFAULT_TAU, help="primal step size (default: 1/sqrt(2))"
    )
    parser.add_argument(
        "--sigma", type=float, default=None, help="dual step size (default: 1/(8*tau))"
    )
    parser.add_argument(
        "--gamma", type=float, default=None, help="acceleration (default: 0.35*lambda)"
    )
    parser.add_argument(
        "--max-iter",
        type=int,
        default=DEFAULT_MAX_ITER,
        help="maximum number of iterations (default: %(default)s)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_THRESHOLD,
        help="relative change below which iteration stops (default: %(default)s)",
    )
    parser.add_argument(
        "--grayscale", action="store_true", help="process and write a greyscale image"
    )
    parser.add_argument("--verbose", action="store_true", help="log solver progress")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the denoiser; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    sigma = args.sigma if args.sigma is not None else 1.0 / (8.0 * args.tau)
    gamma = args.gamma if args.gamma is not None else 0.35 * args.lambda_
    mode = "L" if args.grayscale else "RGB"

    try:
        with Image.open(args.input) as source:
            image = source.convert(mode)
    except OSError as error:
        print(f"image could not be opened: {error}", file=sys.stderr)
        return 1

    try:
        result = ImageArray.from_image(image).denoise(
            args.lambda_, args.tau, sigma, gamma, args.max_iter, args.threshold
        )
    except ShapeError as error:
        print(f"image could not be denoised: {error}", file=sys.stderr)
        return 1

    output = result.into_luma() if args.grayscale else result.into_rgb()
    try:
        output.save(args.output)
    except (OSError, ValueError) as error:
        print(f"image could not be saved: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())