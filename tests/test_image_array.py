import math

import numpy as np
import pytest
from PIL import Image

from image_recovery.image_array import ImageArray
from image_recovery.ops import ShapeError


def _random_gray_image(width, height, seed=1):
    rng = np.random.default_rng(seed)
    return Image.fromarray(rng.integers(0, 256, size=(height, width), dtype=np.uint8))


def _random_rgb_image(width, height, seed=2):
    rng = np.random.default_rng(seed)
    return Image.fromarray(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def test_make_image_array_from_gray_image():
    img = _random_gray_image(10, 5)
    array = ImageArray.from_image(img)
    assert array.shape == (10, 5, 1)
    for x in range(10):
        for y in range(5):
            assert array.array[x, y, 0] == float(img.getpixel((x, y)))


def test_make_image_array_from_rgb_image():
    img = _random_rgb_image(10, 5)
    array = ImageArray.from_image(img)
    assert array.shape == (10, 5, 3)
    for x in range(10):
        for y in range(5):
            pixel = img.getpixel((x, y))
            for z in range(3):
                assert array.array[x, y, z] == float(pixel[z])


def test_make_image_array_from_array3_u8():
    rng = np.random.default_rng(3)
    data = rng.integers(0, 256, size=(10, 5, 3), dtype=np.uint8)
    array = ImageArray.from_array(data)
    assert array.array.dtype == np.float64
    assert np.array_equal(array.array, data.astype(np.float64))


def test_make_image_array_from_array3_f64():
    rng = np.random.default_rng(4)
    data = rng.random((10, 5, 3))
    array = ImageArray.from_array(data)
    assert np.array_equal(array.array, data)


def test_make_gray_image_from_array3_f64():
    img = _random_gray_image(10, 5)
    back = ImageArray.from_image(img).into_luma()
    assert back.mode == "L"
    assert back.size == img.size
    assert np.array_equal(np.asarray(back), np.asarray(img))


def test_make_rgb_image_from_array3_f64():
    img = _random_rgb_image(10, 5)
    back = ImageArray.from_image(img).into_rgb()
    assert back.mode == "RGB"
    assert back.size == img.size
    assert np.array_equal(np.asarray(back), np.asarray(img))


def test_into_rgb_cycles_single_channel():
    data = np.arange(6, dtype=np.float64).reshape(3, 2, 1)
    img = ImageArray.from_array(data).into_rgb()
    assert img.getpixel((2, 1)) == (5, 5, 5)


def test_into_rgb_cycles_two_channels():
    data = np.zeros((2, 2, 2))
    data[:, :, 0] = 10
    data[:, :, 1] = 20
    img = ImageArray.from_array(data).into_rgb()
    assert img.getpixel((0, 0)) == (10, 20, 10)


def test_into_rgb_uses_first_three_of_more_channels():
    data = np.zeros((2, 2, 4))
    data[:, :, :] = [1, 2, 3, 4]
    img = ImageArray.from_array(data).into_rgb()
    assert img.getpixel((1, 1)) == (1, 2, 3)


def test_into_luma_sums_channels():
    data = np.zeros((2, 2, 3))
    data[:, :, :] = [10, 20, 30]
    img = ImageArray.from_array(data).into_luma()
    assert img.getpixel((0, 1)) == 60


def test_conversion_saturates_and_truncates():
    data = np.array([[[-5.0], [300.0]], [[12.9], [math.nan]]])
    img = ImageArray.from_array(data).into_rgb()
    assert img.getpixel((0, 0)) == (0, 0, 0)
    assert img.getpixel((0, 1)) == (255, 255, 255)
    assert img.getpixel((1, 0)) == (12, 12, 12)
    assert img.getpixel((1, 1)) == (0, 0, 0)


def test_unsupported_image_mode_is_rejected():
    with pytest.raises(ValueError):
        ImageArray.from_image(Image.new("RGBA", (3, 3)))


def test_into_rgb_requires_three_dimensions():
    with pytest.raises(ShapeError):
        ImageArray.from_array(np.zeros((3, 3))).into_rgb()


def test_denoise_returns_image_array_of_same_shape():
    img = _random_rgb_image(8, 6)
    array = ImageArray.from_image(img)
    lambda_ = 0.0259624705
    tau = 1.0 / math.sqrt(2.0)
    result = array.denoise(lambda_, tau, 1.0 / (8.0 * tau), 0.35 * lambda_, 10, 1e-10)
    assert isinstance(result, ImageArray)
    assert result.shape == array.shape
    assert np.allclose(result.array.mean(axis=(0, 1)), array.array.mean(axis=(0, 1)))


def test_array_protocol_exposes_values():
    data = np.arange(12, dtype=np.float64).reshape(2, 2, 3)
    assert np.array_equal(np.asarray(ImageArray.from_array(data)), data)