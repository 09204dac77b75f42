"""Tests for EditSession: non-cumulative renders and last-request-wins."""

import io
import threading

import numpy as np
import pytest
from PIL import Image

from imgmod import EditSession, adjust_image
from imgmod.bitmap import Bitmap
from imgmod.config import AdjustmentValues, TargetSize


@pytest.fixture
def source():
    """Random opaque source (24 x 16)."""
    rng = np.random.default_rng(5)
    pixels = rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    return Bitmap(width=24, height=16, pixels=pixels)


@pytest.fixture
def session(source):
    return EditSession(source, band_rows=2)


class TestInitialState:
    """Test a freshly opened session."""

    def test_current_is_original(self, session, source):
        assert session.current is source
        assert session.original is source

    def test_defaults(self, session, source):
        assert session.values == AdjustmentValues()
        assert session.values.quality == 90
        assert session.size == TargetSize.of(source)
        assert not session.is_stale()

    def test_from_bytes(self, source):
        buffer = io.BytesIO()
        Image.fromarray(source.pixels).save(buffer, format="PNG")

        session = EditSession.from_bytes(buffer.getvalue())

        assert session.original == source

    def test_from_file(self, source, tmp_path):
        path = tmp_path / "in.png"
        Image.fromarray(source.pixels).save(path)

        assert EditSession.from_file(path).original == source


class TestParameters:
    """Test parameter updates."""

    def test_set_values_clamps(self, session):
        values = session.set_values(brightness=500, quality=0)

        assert values.brightness == 200
        assert values.quality == 1
        assert session.values.brightness == 200

    def test_set_values_keeps_other_fields(self, session):
        session.set_values(contrast=70)
        session.set_values(saturation=30)

        assert session.values.contrast == 70
        assert session.values.saturation == 30

    def test_unknown_parameter(self, session):
        with pytest.raises(TypeError):
            session.set_values(gamma=2.2)

    def test_values_property_is_a_copy(self, session):
        session.values.brightness = 10
        assert session.values.brightness == 100

    def test_invalid_size_rejected_on_apply(self, session, source):
        session.set_size(0, 10)

        with pytest.raises(ValueError, match="positive"):
            session.apply()
        assert session.current is source

    def test_reset_keeps_output(self, session):
        session.set_values(brightness=40)
        session.set_size(12, 8)
        rendered = session.apply()

        session.reset()

        assert session.values == AdjustmentValues()
        assert session.size == TargetSize(24, 16)
        assert session.current is rendered


class TestRendering:
    """Test apply() and the request/render protocol."""

    def test_apply_renders_from_original(self, session, source):
        """Test repeated applies do not compound."""
        session.set_values(brightness=50)

        first = session.apply()
        second = session.apply()

        assert first == second
        assert second == adjust_image(source, values=AdjustmentValues(brightness=50))

    def test_apply_with_resize(self, session):
        session.set_size(48, 32)
        result = session.apply()

        assert result.shape == (48, 32)
        assert session.current is result

    def test_is_stale(self, session):
        session.set_values(saturation=0)
        assert session.is_stale()

        session.apply()
        assert not session.is_stale()

        session.set_size(5, 5)
        assert session.is_stale()

    def test_newer_request_cancels_older(self, session, source):
        older = session.request()
        newer = session.request()

        assert older.cancelled
        assert not newer.cancelled
        assert newer.generation > older.generation
        assert session.render(older) is None
        assert session.current is source

        result = session.render(newer)
        assert result is not None
        assert session.current is result

    def test_request_during_render_discards_it(self, session, source):
        """Test a render superseded mid-run never becomes the displayed output."""
        session.set_values(brightness=150)
        older = session.request()
        newer = []

        def on_progress(value):
            if not newer:
                session.set_values(brightness=50)
                newer.append(session.request())

        assert session.render(older, on_progress) is None
        assert session.current is source

        result = session.render(newer[0])
        assert result == adjust_image(source, values=AdjustmentValues(brightness=50))
        assert session.current is result

    def test_ticket_captures_values(self, session):
        session.set_values(contrast=60)
        ticket = session.request()
        session.set_values(contrast=140)

        assert ticket.values.contrast == 60

    def test_concurrent_updates_and_requests(self, session):
        """Test tickets snapshot whole parameter sets while another thread edits."""
        session.set_size(1, 1)
        start = threading.Barrier(2)
        tickets = []

        def edit():
            start.wait()
            for i in range(1, 201):
                session.set_values(brightness=i, contrast=i)
                session.set_size(i, i)

        def request():
            start.wait()
            for _ in range(200):
                tickets.append(session.request())

        threads = [threading.Thread(target=edit), threading.Thread(target=request)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(tickets) == 200
        assert all(t.values.brightness == t.values.contrast for t in tickets)
        assert all(t.size.width == t.size.height for t in tickets)
        assert [t.generation for t in tickets] == sorted(t.generation for t in tickets)
        assert all(t.cancelled for t in tickets[:-1])
        assert session.is_latest(tickets[-1])

    def test_cancel(self, session, source):
        ticket = session.request()
        session.cancel()

        assert ticket.cancelled
        assert session.render(ticket) is None
        assert session.current is source


class TestExport:
    """Test encoding the displayed output."""

    def test_export_defaults(self, session):
        session.set_size(12, 8)
        session.apply()

        result = session.export()

        assert result.filename == "processed-image.jpg"
        assert result.mime_type == "image/jpeg"
        assert result.quality == 90
        assert (result.width, result.height) == (12, 8)
        assert result.data[:2] == b"\xff\xd8"
        with Image.open(io.BytesIO(result.data)) as im:
            assert im.size == (12, 8)

    def test_export_before_apply_uses_session_quality(self, session):
        session.set_values(quality=40)
        assert session.export().quality == 40
        assert session.export(quality=75).quality == 75

    def test_export_uses_applied_quality(self, session):
        """Test quality changes after apply wait for the next apply."""
        session.set_values(brightness=150, quality=20)
        session.apply()

        session.set_values(quality=95)

        assert session.export().quality == 20
        assert session.export(quality=60).quality == 60

        session.apply()
        assert session.export().quality == 95

    def test_export_before_apply_uses_original(self, session, source):
        result = session.export()
        assert (result.width, result.height) == (source.width, source.height)

    def test_save(self, session, tmp_path):
        path = session.export().save(tmp_path)

        assert path == tmp_path / "processed-image.jpg"
        assert path.read_bytes()[:2] == b"\xff\xd8"
