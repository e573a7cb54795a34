"""Static and motion hand-gesture recognition from 21-point hand landmarks."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, List, Optional

from vrdesk.vecmath import Vector3, clamp

LANDMARK_COUNT = 21
WRIST = 0
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_TIP = 12
RING_MCP = 13
RING_TIP = 16

_FINGER_BASES = (1, 5, 9, 13, 17)
_FINGER_TIPS = (4, 8, 12, 16, 20)
_MAX_FINGER_LENGTH = 0.09
_HISTORY_LENGTH = 10
_SWIPE_MIN_SAMPLES = 5
_SWIPE_MIN_DISTANCE = 0.15
DEFAULT_PINCH_THRESHOLD = 0.03


class GestureType(Enum):
    """Gestures the recognizer can report."""

    NONE = auto()
    POINT = auto()
    PINCH = auto()
    FIST = auto()
    OPEN_PALM = auto()
    PEACE_SIGN = auto()
    THUMBS_UP = auto()
    OK_SIGN = auto()
    SWIPE_LEFT = auto()
    SWIPE_RIGHT = auto()
    GRAB = auto()
    RELEASE = auto()


@dataclass
class GestureData:
    """Result of recognising one hand sample."""

    type: GestureType = GestureType.NONE
    confidence: float = 0.0
    position: Vector3 = field(default_factory=Vector3)
    direction: Vector3 = field(default_factory=Vector3)
    duration: float = 0.0
    is_active: bool = False


def _origin_points() -> List[Vector3]:
    return [Vector3() for _ in range(LANDMARK_COUNT)]


def _inactive_flags() -> List[bool]:
    return [False] * LANDMARK_COUNT


@dataclass
class HandLandmarks:
    """The 21 tracked points of one hand and whether each is currently tracked."""

    landmarks: List[Vector3] = field(default_factory=_origin_points)
    active: List[bool] = field(default_factory=_inactive_flags)
    handedness: str = ""
    confidence: float = 0.0

    def __post_init__(self) -> None:
        if len(self.landmarks) != LANDMARK_COUNT or len(self.active) != LANDMARK_COUNT:
            raise ValueError(f"a hand needs exactly {LANDMARK_COUNT} landmarks and flags")


class GestureRecognizer:
    """Classifies hand poses and tracks wrist motion for swipe detection."""

    def __init__(self) -> None:
        self._motion_history: Deque[Vector3] = deque(maxlen=_HISTORY_LENGTH)

    def recognize_gesture(self, hand: HandLandmarks) -> GestureData:
        """Classify ``hand``; static poses first, then a swipe may override them."""
        result = GestureData(position=hand.landmarks[WRIST])
        if not hand.active[WRIST]:
            return result

        static_checks = (
            (self.is_pinch_gesture, GestureType.PINCH, 0.9),
            (self.is_index_finger_extended, GestureType.POINT, 0.8),
            (self.is_fist_gesture, GestureType.FIST, 0.8),
            (self.is_open_palm_gesture, GestureType.OPEN_PALM, 0.7),
            (self.is_peace_sign_gesture, GestureType.PEACE_SIGN, 0.8),
            (self.is_thumbs_up_gesture, GestureType.THUMBS_UP, 0.8),
            (self.is_ok_sign_gesture, GestureType.OK_SIGN, 0.8),
        )
        for check, gesture, confidence in static_checks:
            if check(hand):
                result.type = gesture
                result.confidence = confidence
                break

        direction = self.swipe_direction(hand)
        if direction is not None:
            if direction.x > 0.5:
                result.type = GestureType.SWIPE_RIGHT
            elif direction.x < -0.5:
                result.type = GestureType.SWIPE_LEFT
            result.direction = direction
            result.confidence = 0.7

        result.is_active = result.type is not GestureType.NONE
        self._motion_history.append(hand.landmarks[WRIST])
        return result

    def is_index_finger_extended(self, hand: HandLandmarks) -> bool:
        """Index finger straight and clearly longer than middle and ring fingers."""
        if not hand.active[INDEX_MCP] or not hand.active[INDEX_TIP]:
            return False
        points = hand.landmarks
        tip = points[INDEX_TIP]
        index_length = points[INDEX_MCP].distance(tip)
        wrist_to_tip = points[WRIST].distance(tip)
        extended = index_length > 0.07 and wrist_to_tip > 0.12

        middle_length = points[MIDDLE_MCP].distance(points[MIDDLE_TIP])
        ring_length = points[RING_MCP].distance(points[RING_TIP])
        return (
            extended
            and index_length > middle_length * 1.2
            and index_length > ring_length * 1.2
        )

    def is_pinch_gesture(
        self, hand: HandLandmarks, threshold: float = DEFAULT_PINCH_THRESHOLD
    ) -> bool:
        """Thumb tip and index tip closer than ``threshold``."""
        if not hand.active[THUMB_TIP] or not hand.active[INDEX_TIP]:
            return False
        return hand.landmarks[THUMB_TIP].distance(hand.landmarks[INDEX_TIP]) < threshold

    def is_fist_gesture(self, hand: HandLandmarks) -> bool:
        """All tracked fingertips lie close to the wrist."""
        palm = hand.landmarks[WRIST]
        distances = [
            palm.distance(hand.landmarks[tip]) for tip in _FINGER_TIPS if hand.active[tip]
        ]
        if not distances:
            return False
        return sum(distances) / len(distances) < 0.08

    def is_open_palm_gesture(self, hand: HandLandmarks) -> bool:
        """Every finger close to fully extended."""
        return self.hand_openness(hand) > 0.8

    def is_peace_sign_gesture(self, hand: HandLandmarks) -> bool:
        """Index and middle extended, ring and pinky curled."""
        if not hand.active[INDEX_TIP] or not hand.active[MIDDLE_TIP]:
            return False
        index, middle, ring, pinky = (self.finger_extension(hand, i) for i in range(1, 5))
        return index > 0.7 and middle > 0.7 and ring < 0.4 and pinky < 0.4

    def is_thumbs_up_gesture(self, hand: HandLandmarks) -> bool:
        """Thumb raised above the wrist, other fingers curled."""
        if not hand.active[THUMB_TIP]:
            return False
        thumb_up = hand.landmarks[THUMB_TIP].y > hand.landmarks[WRIST].y + 0.05
        others = sum(self.finger_extension(hand, i) for i in range(1, 5)) / 4.0
        return thumb_up and others < 0.3

    def is_ok_sign_gesture(self, hand: HandLandmarks) -> bool:
        """Thumb and index form a circle, remaining fingers extended."""
        if not hand.active[THUMB_TIP] or not hand.active[INDEX_TIP]:
            return False
        circle = hand.landmarks[THUMB_TIP].distance(hand.landmarks[INDEX_TIP]) < 0.04
        return circle and all(self.finger_extension(hand, i) > 0.6 for i in range(2, 5))

    def swipe_direction(self, hand: HandLandmarks) -> Optional[Vector3]:
        """Unit direction of recent wrist travel if it forms a swipe, else ``None``."""
        if len(self._motion_history) < _SWIPE_MIN_SAMPLES:
            return None
        movement = self._motion_history[-1] - self._motion_history[0]
        if movement.length() > _SWIPE_MIN_DISTANCE:
            return movement.normalized()
        return None

    def finger_extension(self, hand: HandLandmarks, finger_index: int) -> float:
        """Extension of a finger (0 thumb .. 4 pinky) in ``[0, 1]``; 0 if untracked."""
        if not 0 <= finger_index <= 4:
            return 0.0
        base = _FINGER_BASES[finger_index]
        tip = _FINGER_TIPS[finger_index]
        if not hand.active[base] or not hand.active[tip]:
            return 0.0
        length = hand.landmarks[base].distance(hand.landmarks[tip])
        return clamp(length / _MAX_FINGER_LENGTH, 0.0, 1.0)

    def hand_openness(self, hand: HandLandmarks) -> float:
        """Mean extension over all five fingers."""
        return sum(self.finger_extension(hand, i) for i in range(5)) / 5.0