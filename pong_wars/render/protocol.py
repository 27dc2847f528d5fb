"""Pixel command encoding for the BLE LED matrix.

The display accepts 10-byte "draw pixel" commands on a single writable
characteristic. Discovering and connecting to the peripheral is the
transport's job; ``PixelCommandSink`` only encodes commands and hands them to
an injected writer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pong_wars.config.constants import DEVICE_NAME_FRAGMENT, PIXEL_CHARACTERISTIC_UUID16
from pong_wars.domain.color import Color

logger = logging.getLogger(__name__)

PIXEL_COMMAND_HEADER = bytes([10, 0, 5, 1, 0])
PIXEL_COMMAND_LENGTH = 10

BLUETOOTH_BASE_UUID_SUFFIX = "-0000-1000-8000-00805f9b34fb"

PixelWriter = Callable[[bytes, bool], None]
"""Transport callback: ``(payload, with_response) -> None``."""


def encode_pixel_command(x: int, y: int, color: Color) -> bytes:
    """Encode one pixel write: header, RGB, then x and y as single bytes."""
    if not (0 <= x <= 255 and 0 <= y <= 255):
        raise ValueError("pixel coordinates must fit in one byte")
    return PIXEL_COMMAND_HEADER + bytes([color.r, color.g, color.b, x, y])


def decode_pixel_command(payload: bytes) -> tuple[int, int, Color]:
    """Inverse of :func:`encode_pixel_command`."""
    if len(payload) != PIXEL_COMMAND_LENGTH:
        raise ValueError(f"pixel command must be {PIXEL_COMMAND_LENGTH} bytes")
    if payload[:5] != PIXEL_COMMAND_HEADER:
        raise ValueError("not a pixel command")
    r, g, b, x, y = payload[5:]
    return x, y, Color(r, g, b)


def matches_display_name(local_name: str | None, fragment: str = DEVICE_NAME_FRAGMENT) -> bool:
    """Whether an advertised local name identifies the display."""
    return local_name is not None and fragment in local_name


class PixelCommandSink:
    """Render sink that writes encoded pixel commands through *writer*.

    With ``wait_for_response`` the transport is asked for acknowledged
    writes, which keeps pixels ordered on the wire.
    """

    def __init__(self, writer: PixelWriter, wait_for_response: bool = True) -> None:
        self.writer = writer
        self.wait_for_response = wait_for_response
        self.sent = 0

    def set_cell(self, x: int, y: int, color: Color) -> None:
        payload = encode_pixel_command(x, y, color)
        self.writer(payload, self.wait_for_response)
        self.sent += 1
        logger.debug("pixel (%d, %d) <- %s", x, y, color.as_tuple())


def characteristic_uuid(uuid16: int = PIXEL_CHARACTERISTIC_UUID16) -> str:
    """Expand a 16-bit GATT UUID to the 128-bit form BLE stacks look up."""
    if not 0 <= uuid16 <= 0xFFFF:
        raise ValueError("uuid16 must fit in 16 bits")
    return f"0000{uuid16:04x}{BLUETOOTH_BASE_UUID_SUFFIX}"
