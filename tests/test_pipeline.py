"""Tests for the adjust_image entry point and the Pipeline builder."""

import threading

import numpy as np
import pytest

from imgmod import Pipeline, adjust_image
from imgmod.bitmap import Bitmap
from imgmod.color import apply_adjustments
from imgmod.config import AdjustmentValues, TargetSize
from imgmod.progress import RenderCancelled
from imgmod.resample import resample


@pytest.fixture
def source():
    """Random RGBA source (40 x 30)."""
    rng = np.random.default_rng(2024)
    pixels = rng.integers(0, 256, size=(30, 40, 4), dtype=np.uint8)
    return Bitmap(width=40, height=30, pixels=pixels)


class TestAdjustImage:
    """Test the pure pipeline function."""

    def test_defaults_are_identity(self, source):
        result = adjust_image(source)

        assert result == source
        assert result.pixels is not source.pixels

    @pytest.mark.parametrize("width,height", [(40, 30), (80, 60), (20, 15), (7, 91), (1, 1)])
    def test_dimension_contract(self, source, width, height):
        values = AdjustmentValues(brightness=110, contrast=90, saturation=120)
        result = adjust_image(source, TargetSize(width, height), values)

        assert result.shape == (width, height)

    def test_resample_then_color(self, source):
        """Test the result equals the two stages run in sequence."""
        size = TargetSize(55, 21)
        values = AdjustmentValues(brightness=140, contrast=70, saturation=160)

        expected = apply_adjustments(resample(source, size), values)

        assert adjust_image(source, size, values) == expected

    def test_deterministic(self, source):
        size = TargetSize(33, 44)
        values = AdjustmentValues(brightness=95, contrast=130, saturation=10)

        assert adjust_image(source, size, values) == adjust_image(source, size, values)

    def test_source_not_modified(self, source):
        before = source.pixels.copy()
        adjust_image(source, TargetSize(12, 9), AdjustmentValues(brightness=0))

        np.testing.assert_array_equal(source.pixels, before)

    def test_out_of_range_values_clamped(self, source):
        clamped = adjust_image(source, values=AdjustmentValues(brightness=200, saturation=0))
        extreme = adjust_image(source, values=AdjustmentValues(brightness=1e6, saturation=-50))

        assert extreme == clamped

    def test_non_numeric_value_rejected(self, source):
        with pytest.raises(ValueError, match="saturation"):
            adjust_image(source, values=AdjustmentValues(saturation="high"))

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-4, -4)])
    def test_invalid_size_rejected_before_work(self, source, width, height):
        seen = []

        with pytest.raises(ValueError):
            adjust_image(source, TargetSize(width, height), progress_callback=seen.append)

        assert seen == []


class TestProgressAndCancel:
    """Test progress reporting and cooperative cancellation."""

    def test_progress_monotonic_and_complete(self, source):
        seen = []
        adjust_image(
            source,
            TargetSize(64, 64),
            AdjustmentValues(contrast=120),
            band_rows=8,
            progress_callback=seen.append,
        )

        assert seen[0] == 0.0
        assert seen[-1] == pytest.approx(1.0)
        assert all(a <= b for a, b in zip(seen, seen[1:]))

    def test_cancel_mid_run(self, source):
        event = threading.Event()

        with pytest.raises(RenderCancelled):
            adjust_image(
                source,
                TargetSize(64, 64),
                AdjustmentValues(brightness=120),
                band_rows=4,
                cancel_event=event,
                progress_callback=lambda value: event.set(),
            )

    def test_unset_event_completes(self, source):
        result = adjust_image(source, TargetSize(10, 10), cancel_event=threading.Event())
        assert result.shape == (10, 10)


class TestPipelineBuilder:
    """Test the fluent Pipeline API."""

    def test_chaining_returns_self(self):
        pipe = Pipeline()
        assert pipe.brightness(110) is pipe
        assert pipe.contrast(90).saturation(80).quality(70).resize(5, 5) is pipe

    def test_setters_replace(self, source):
        pipe = Pipeline().brightness(150).brightness(120)

        assert pipe.current_values.brightness == 120
        assert pipe(source) == adjust_image(source, values=AdjustmentValues(brightness=120))

    def test_matches_adjust_image(self, source):
        pipe = Pipeline().brightness(80).contrast(140).saturation(60).resize(25, 19)
        expected = adjust_image(
            source,
            TargetSize(25, 19),
            AdjustmentValues(brightness=80, contrast=140, saturation=60),
        )

        assert pipe.apply(source) == expected

    def test_nearest_policy(self, source):
        pipe = Pipeline().resample_policy("nearest").resize(80, 60)
        expected = adjust_image(source, TargetSize(80, 60), policy="nearest")

        assert pipe(source) == expected

    def test_resize_validates(self):
        with pytest.raises(ValueError):
            Pipeline().resize(0, 10)

    def test_current_values_clamped(self):
        pipe = Pipeline().saturation(999).quality(0)

        assert pipe.current_values.saturation == 200
        assert pipe.current_values.quality == 1

    def test_neutral_and_reset(self):
        pipe = Pipeline()
        assert pipe.is_neutral()

        pipe.contrast(50).resize(3, 3)
        assert not pipe.is_neutral()

        pipe.reset()
        assert pipe.is_neutral()
        assert pipe.target_size is None
