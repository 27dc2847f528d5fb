"""Render boundary: sink protocol and concrete sinks."""

from pong_wars.render.protocol import (
    PixelCommandSink,
    characteristic_uuid,
    decode_pixel_command,
    encode_pixel_command,
    matches_display_name,
)
from pong_wars.render.sinks import (
    FanOutSink,
    FrameBufferSink,
    RecordingSink,
    RenderDelta,
    RenderSink,
)

__all__ = [
    "FanOutSink",
    "FrameBufferSink",
    "PixelCommandSink",
    "RecordingSink",
    "RenderDelta",
    "RenderSink",
    "characteristic_uuid",
    "decode_pixel_command",
    "encode_pixel_command",
    "matches_display_name",
]
