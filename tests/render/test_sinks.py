"""Tests for pong_wars.render.sinks module."""

from __future__ import annotations

import numpy as np
import pytest

from pong_wars.domain.color import Color
from pong_wars.render.sinks import FanOutSink, FrameBufferSink, RecordingSink, RenderDelta

RED = Color(255, 50, 50)
GREEN = Color(30, 255, 30)


class TestRecordingSink:
    def test_keeps_order(self) -> None:
        sink = RecordingSink()
        sink.set_cell(1, 2, RED)
        sink.set_cell(0, 0, GREEN)
        assert sink.deltas == [RenderDelta(1, 2, RED), RenderDelta(0, 0, GREEN)]

    def test_clear(self) -> None:
        sink = RecordingSink()
        sink.set_cell(1, 2, RED)
        sink.clear()
        assert sink.deltas == []


class TestFrameBufferSink:
    def test_writes_rgb_at_y_x(self) -> None:
        sink = FrameBufferSink(4)
        sink.set_cell(3, 1, GREEN)
        assert sink.frame.shape == (4, 4, 3)
        assert sink.frame.dtype == np.uint8
        assert tuple(sink.frame[1, 3]) == (30, 255, 30)
        assert tuple(sink.frame[3, 1]) == (0, 0, 0)
        assert sink.writes == 1

    def test_rejects_out_of_frame(self) -> None:
        sink = FrameBufferSink(4)
        with pytest.raises(ValueError, match="outside 4x4 frame"):
            sink.set_cell(4, 0, RED)

    def test_rejects_empty_frame(self) -> None:
        with pytest.raises(ValueError, match="dimension must be >= 1"):
            FrameBufferSink(0)


def test_fan_out_forwards_to_every_sink() -> None:
    first, second = RecordingSink(), RecordingSink()
    frame = FrameBufferSink(2)
    FanOutSink([first, second, frame]).set_cell(1, 0, RED)
    assert first.deltas == second.deltas == [RenderDelta(1, 0, RED)]
    assert tuple(frame.frame[0, 1]) == (255, 50, 50)
