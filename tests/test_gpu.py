"""Equivalence tests for the PyTorch backend.

The torch backend computes in float32, so results may differ from the
float64 CPU pipeline by one level wherever a value lands on a rounding
boundary.
"""

import numpy as np
import pytest

torch = pytest.importorskip("torch")

from imgmod import adjust_image  # noqa: E402
from imgmod.bitmap import Bitmap  # noqa: E402
from imgmod.color import apply_adjustments  # noqa: E402
from imgmod.config import AdjustmentValues, TargetSize  # noqa: E402
from imgmod.resample import resample  # noqa: E402
from imgmod.torch import (  # noqa: E402
    adjust_image_torch,
    adjust_tensor,
    bitmap_to_tensor,
    resample_tensor,
    tensor_to_bitmap,
)

DEVICE = "cuda" if torch.cuda.is_available() else "cpu"


def max_level_diff(a, b):
    return int(np.abs(a.pixels.astype(int) - b.pixels.astype(int)).max())


@pytest.fixture
def source():
    rng = np.random.default_rng(77)
    pixels = rng.integers(0, 256, size=(27, 35, 4), dtype=np.uint8)
    return Bitmap(width=35, height=27, pixels=pixels)


class TestConversion:
    def test_tensor_round_trip(self, source):
        t = bitmap_to_tensor(source, DEVICE)

        assert t.shape == (1, 4, 27, 35)
        assert t.dtype == torch.float32
        assert tensor_to_bitmap(t) == source


class TestResampleTensor:
    """Test F.interpolate against the Numba kernels."""

    @pytest.mark.parametrize("width,height", [(70, 54), (17, 13), (35, 9), (100, 100)])
    def test_bilinear_matches_cpu(self, source, width, height):
        size = TargetSize(width, height)
        gpu = tensor_to_bitmap(resample_tensor(bitmap_to_tensor(source, DEVICE), size))

        assert gpu.shape == (width, height)
        assert max_level_diff(gpu, resample(source, size)) <= 1

    @pytest.mark.parametrize("width,height", [(70, 54), (35, 27)])
    def test_nearest_matches_cpu(self, source, width, height):
        size = TargetSize(width, height)
        t = resample_tensor(bitmap_to_tensor(source, DEVICE), size, "nearest")

        assert tensor_to_bitmap(t) == resample(source, size, "nearest")

    def test_invalid_size(self, source):
        with pytest.raises(ValueError):
            resample_tensor(bitmap_to_tensor(source, DEVICE), TargetSize(0, 3))


class TestAdjustTensor:
    @pytest.mark.parametrize(
        "values",
        [
            AdjustmentValues(brightness=130),
            AdjustmentValues(contrast=45, saturation=170),
            AdjustmentValues(brightness=80, contrast=160, saturation=20),
            AdjustmentValues(brightness=200, contrast=200, saturation=200),
        ],
    )
    def test_matches_cpu(self, source, values):
        gpu = tensor_to_bitmap(adjust_tensor(bitmap_to_tensor(source, DEVICE), values))

        assert max_level_diff(gpu, apply_adjustments(source, values)) <= 1

    def test_alpha_untouched(self, source):
        values = AdjustmentValues(brightness=0, saturation=0)
        gpu = tensor_to_bitmap(adjust_tensor(bitmap_to_tensor(source, DEVICE), values))

        np.testing.assert_array_equal(gpu.pixels[:, :, 3], source.pixels[:, :, 3])


class TestAdjustImageTorch:
    def test_identity(self, source):
        assert adjust_image_torch(source, device=DEVICE) == source

    def test_full_pipeline_close_to_cpu(self, source):
        size = TargetSize(50, 40)
        values = AdjustmentValues(brightness=110, contrast=120, saturation=90)

        gpu = adjust_image_torch(source, size, values, device=DEVICE)
        cpu = adjust_image(source, size, values)

        assert gpu.shape == cpu.shape
        # a one-level resample difference can grow by the contrast factor
        assert max_level_diff(gpu, cpu) <= 2
