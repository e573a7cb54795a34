"""Reading head-orientation samples sent as JSON lines."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Optional, TextIO

from vrdesk.thread_queue import ThreadSafeQueue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GyroData:
    """Head orientation in radians."""

    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0


def _angle(obj: dict, key: str) -> float:
    value = obj.get(key, 0.0)
    if not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number, got {type(value).__name__}")
    return float(value)


def parse_gyro_line(line: str) -> Optional[GyroData]:
    """Parse one JSON line of ``alpha``/``beta``/``gamma`` degrees.

    ``alpha`` becomes yaw, ``gamma`` pitch and ``beta`` roll. An empty line
    yields ``None``; malformed input raises ``ValueError``.
    """
    line = line.rstrip("\r\n")
    if not line:
        return None
    obj = json.loads(line)
    if not isinstance(obj, dict):
        raise ValueError("gyro sample must be a JSON object")
    return GyroData(
        yaw=math.radians(_angle(obj, "alpha")),
        pitch=math.radians(_angle(obj, "gamma")),
        roll=math.radians(_angle(obj, "beta")),
    )


def run_gyro_reader(stream: TextIO, queue: ThreadSafeQueue) -> int:
    """Read samples from ``stream`` until EOF, pushing each onto ``queue``.

    Malformed lines are logged and skipped. Returns the number of samples pushed.
    """
    logger.info("Gyro reader started")
    pushed = 0
    for line in stream:
        try:
            data = parse_gyro_line(line)
        except ValueError as exc:
            logger.warning("Gyro parse error: %s", exc)
            continue
        if data is None:
            continue
        logger.debug("Parsed gyro: %s", data)
        queue.push(data)
        pushed += 1
    logger.info("EOF reached in gyro reader")
    return pushed