"""Exchange formats with the companion processes: hand-tracking input and H.264 frame output."""

from __future__ import annotations

import json
import logging
import os
import struct
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO, List, Union

from vrdesk.vecmath import Vector3

logger = logging.getLogger(__name__)

FRAME_MAGIC = 0xDEADBEEF
_HEADER_FORMAT = "<6I"
HEADER_SIZE = struct.calcsize(_HEADER_FORMAT)
_SIZE_PREFIX = struct.Struct("<I")


class PixelFormat(IntEnum):
    """Pixel format codes carried in a frame header."""

    RGBA = 0
    RGB = 1
    H264 = 2


@dataclass
class HandTrackingData:
    """One tracked hand as delivered by the hand-tracking process."""

    handedness: str = ""
    landmarks: List[Vector3] = field(default_factory=list)
    confidence: float = 0.7
    depth_scale: float = 1.0
    distance_factor: float = 1.0
    shoulder_calibrated: bool = False


@dataclass
class FrameHeader:
    """Fixed 24-byte little-endian header written before every frame."""

    timestamp_ms: int
    frame_size: int
    width: int
    height: int
    pixel_format: int = PixelFormat.H264
    magic: int = FRAME_MAGIC

    def pack(self) -> bytes:
        """Serialise the header to its wire form."""
        try:
            return struct.pack(
                _HEADER_FORMAT,
                self.magic,
                self.timestamp_ms,
                self.frame_size,
                self.width,
                self.height,
                int(self.pixel_format),
            )
        except struct.error as exc:
            raise ValueError(f"header field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> FrameHeader:
        """Parse a header from the first bytes of ``data``."""
        if len(data) < HEADER_SIZE:
            raise ValueError(f"frame header needs {HEADER_SIZE} bytes, got {len(data)}")
        magic, timestamp, size, width, height, fmt = struct.unpack_from(_HEADER_FORMAT, data)
        if magic != FRAME_MAGIC:
            raise ValueError(f"bad frame magic 0x{magic:08X}")
        return cls(
            timestamp_ms=timestamp,
            frame_size=size,
            width=width,
            height=height,
            pixel_format=fmt,
            magic=magic,
        )


def _number(obj: dict, key: str, default: float) -> float:
    value = obj.get(key, default)
    if not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number, got {type(value).__name__}")
    return float(value)


def _hand_from_json(hand: object) -> HandTrackingData:
    if not isinstance(hand, dict):
        raise ValueError("each hand entry must be a JSON object")
    handedness = hand.get("handedness", "")
    if not isinstance(handedness, str):
        raise ValueError("field 'handedness' must be a string")
    calibrated = hand.get("shoulder_calibrated", False)
    if not isinstance(calibrated, bool):
        raise ValueError("field 'shoulder_calibrated' must be a boolean")

    landmarks = []
    for point in hand.get("landmarks", []) or []:
        if not isinstance(point, dict):
            raise ValueError("each landmark must be a JSON object")
        landmarks.append(
            Vector3(_number(point, "x", 0.0), _number(point, "y", 0.0), _number(point, "z", 0.0))
        )

    return HandTrackingData(
        handedness=handedness,
        landmarks=landmarks,
        confidence=_number(hand, "confidence", 0.7),
        depth_scale=_number(hand, "depth_scale", 1.0),
        distance_factor=_number(hand, "distance_factor", 1.0),
        shoulder_calibrated=calibrated,
    )


def parse_hand_payload(data: bytes) -> List[HandTrackingData]:
    """Decode a size-prefixed JSON hand list.

    Returns an empty list when the buffer holds no complete payload; raises
    ``ValueError`` when the payload is present but malformed.
    """
    if len(data) < _SIZE_PREFIX.size:
        return []
    (size,) = _SIZE_PREFIX.unpack_from(data)
    if size == 0 or size > len(data) - _SIZE_PREFIX.size:
        return []
    body = data[_SIZE_PREFIX.size:_SIZE_PREFIX.size + size]
    try:
        parsed = json.loads(body.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise ValueError(f"hand payload is not UTF-8: {exc}") from exc
    if not isinstance(parsed, list):
        raise ValueError("hand payload must be a JSON array")
    return [_hand_from_json(hand) for hand in parsed]


def read_hand_tracking_data(path: Union[str, os.PathLike]) -> List[HandTrackingData]:
    """Read the shared hand file; missing or unreadable data yields an empty list."""
    if not os.path.exists(path):
        return []
    try:
        with open(path, "rb") as handle:
            data = handle.read()
        return parse_hand_payload(data)
    except (OSError, ValueError) as exc:
        logger.error("Error reading hand tracking data: %s", exc)
        return []


def current_time_ms() -> int:
    """Monotonic clock in milliseconds, truncated to 32 bits."""
    return (time.monotonic_ns() // 1_000_000) & 0xFFFFFFFF


def is_stream_piped(stream) -> bool:
    """True when ``stream`` is not attached to a terminal."""
    return not stream.isatty()


def write_h264_frame(stream: BinaryIO, payload: bytes, width: int, height: int) -> int:
    """Write a header and an encoded H.264 frame to ``stream``; return bytes written."""
    header = FrameHeader(
        timestamp_ms=current_time_ms(),
        frame_size=len(payload),
        width=width,
        height=height,
        pixel_format=PixelFormat.H264,
    )
    packed = header.pack()
    stream.write(packed)
    stream.write(payload)
    stream.flush()
    return len(packed) + len(payload)