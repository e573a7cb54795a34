"""Head pose, stereo cameras, tracked hands and the laser pointer of the viewer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional

from vrdesk.ipc import HandTrackingData
from vrdesk.vecmath import Vector2, Vector3, clamp

HAND_LANDMARK_COUNT = 21
EYE_HEIGHT = 1.6
MOUSE_LOOK_SENSITIVITY = 0.003
LASER_LENGTH = 100.0
HAND_SCALE = 0.25
HAND_FORWARD_OFFSET = 0.5
HAND_SIDE_OFFSET = 0.25
HAND_VERTICAL_OFFSET = -0.2
_SMOOTHING_FACTOR = 0.15
_TWO_PI = 2.0 * math.pi


class Projection(Enum):
    """Camera projection modes."""

    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


@dataclass
class Camera:
    """A 3D camera looking from ``position`` towards ``target``."""

    position: Vector3 = field(default_factory=Vector3)
    target: Vector3 = field(default_factory=Vector3)
    up: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    fovy: float = 90.0
    projection: Projection = Projection.PERSPECTIVE

    @property
    def forward(self) -> Vector3:
        """Unit vector from the position towards the target."""
        return (self.target - self.position).normalized()

    @property
    def right(self) -> Vector3:
        """Unit vector to the camera's right."""
        return self.forward.cross(self.up).normalized()


@dataclass
class VRLandmark:
    """One hand landmark placed in world space."""

    position: Vector3 = field(default_factory=Vector3)
    active: bool = False
    confidence: float = 0.0
    landmark_id: int = 0


def _empty_landmarks() -> List[VRLandmark]:
    return [VRLandmark(landmark_id=i) for i in range(HAND_LANDMARK_COUNT)]


@dataclass
class VRHand:
    """A hand as shown in the virtual scene."""

    label: str = ""
    is_tracked: bool = False
    confidence: float = 0.0
    estimated_depth: float = 0.0
    landmarks: List[VRLandmark] = field(default_factory=_empty_landmarks)


class Player:
    """The viewer: head orientation, eye cameras, hands and the desktop-panel laser."""

    def __init__(self) -> None:
        self.position = Vector3(0.0, EYE_HEIGHT, 0.0)
        self.rotation = Vector3()  # pitch, yaw, roll
        self.camera = Camera()
        self.left_hand = VRHand()
        self.right_hand = VRHand()
        self.panel_pos = Vector3()
        self.panel_size = Vector3()
        self.laser_uv = Vector2()
        self.laser_intersecting = False

    def set_yaw_pitch_roll(self, yaw: float, pitch: float, roll: float) -> None:
        """Apply a head orientation in radians as reported by the gyro."""
        yaw = -yaw
        pitch = -pitch - math.radians(90.0)
        yaw %= _TWO_PI
        if yaw > math.pi:
            yaw -= _TWO_PI
        pitch = clamp(pitch, -_TWO_PI, _TWO_PI)
        roll = clamp(roll, -math.pi, math.pi)

        def smooth(value: float) -> float:
            return value * (1.0 - _SMOOTHING_FACTOR) + value * _SMOOTHING_FACTOR

        self.rotation = Vector3(smooth(pitch), smooth(yaw), smooth(roll))

    def handle_mouse_look(self, delta: Vector2) -> None:
        """Turn the head by a mouse movement in pixels."""
        self.rotation = Vector3(
            self.rotation.x + delta.y * MOUSE_LOOK_SENSITIVITY,
            self.rotation.y + delta.x * MOUSE_LOOK_SENSITIVITY,
            self.rotation.z,
        )

    def set_panel_info(self, pos: Vector3, size: Vector3) -> None:
        """Set the desktop panel's centre and extent."""
        self.panel_pos = pos
        self.panel_size = size

    def update(self) -> None:
        """Move the camera to the head position and aim it along the head rotation."""
        pitch, yaw = self.rotation.x, self.rotation.y
        forward = Vector3(
            math.cos(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.sin(yaw) * math.cos(pitch),
        )
        self.camera.position = self.position
        self.camera.target = self.position + forward

    def update_vr_hand(self, hand: VRHand, hand_data: HandTrackingData) -> None:
        """Place ``hand`` in world space from normalised tracking landmarks."""
        hand.label = hand_data.handedness
        hand.confidence = 1.0
        hand.estimated_depth = 1.0
        if len(hand_data.landmarks) < HAND_LANDMARK_COUNT:
            hand.is_tracked = False
            for landmark in hand.landmarks:
                landmark.active = False
            return

        hand.is_tracked = True
        anchor = self.compute_hand_anchor_position(hand_data.handedness)
        forward = self.camera.forward
        right = self.camera.right
        up = self.camera.up

        hand.landmarks = [
            VRLandmark(
                position=anchor
                + right.scale((point.x - 0.5) * HAND_SCALE)
                + up.scale((point.y - 0.5) * HAND_SCALE)
                + forward.scale((point.z - 0.5) * HAND_SCALE),
                active=True,
                confidence=1.0,
                landmark_id=i,
            )
            for i, point in enumerate(hand_data.landmarks[:HAND_LANDMARK_COUNT])
        ]

    def compute_hand_anchor_position(self, handedness: str) -> Vector3:
        """World point in front of the camera where a hand's centre is placed."""
        forward = self.camera.forward
        right = self.camera.right
        side = -HAND_SIDE_OFFSET if handedness == "Left" else HAND_SIDE_OFFSET
        return (
            self.camera.position
            + forward.scale(HAND_FORWARD_OFFSET)
            + right.scale(side)
            + self.camera.up.scale(HAND_VERTICAL_OFFSET)
        )

    def _eye_offset(self, eye_separation: float) -> Vector3:
        right = self.camera.target.cross(self.camera.up).normalized()
        return right.scale(eye_separation / 2.0)

    def left_eye_camera(self, eye_separation: float) -> Camera:
        """Copy of the camera shifted half the eye separation to the left."""
        offset = self._eye_offset(eye_separation)
        return replace(
            self.camera,
            position=self.camera.position - offset,
            target=self.camera.target - offset,
        )

    def right_eye_camera(self, eye_separation: float) -> Camera:
        """Copy of the camera shifted half the eye separation to the right."""
        offset = self._eye_offset(eye_separation)
        return replace(
            self.camera,
            position=self.camera.position + offset,
            target=self.camera.target + offset,
        )

    def update_hands(self, hands: Iterable[HandTrackingData]) -> None:
        """Route each tracked hand to the left or right hand by its handedness."""
        for data in hands:
            if data.handedness == "Left":
                self.update_vr_hand(self.left_hand, data)
            elif data.handedness == "Right":
                self.update_vr_hand(self.right_hand, data)

    def cast_laser(self) -> Optional[Vector3]:
        """Cast the gaze ray at the panel plane; return the hit point on the panel or ``None``."""
        origin = self.camera.position
        direction = self.camera.forward
        self.laser_intersecting = False
        if direction.z == 0.0:
            return None
        t = (self.panel_pos.z - origin.z) / direction.z
        if not 0.0 < t < LASER_LENGTH:
            return None
        hit = origin + direction.scale(t)
        rel = hit - self.panel_pos
        half_x = self.panel_size.x / 2.0
        half_y = self.panel_size.y / 2.0
        if abs(rel.x) > half_x or abs(rel.y) > half_y:
            return None
        self.laser_uv = Vector2(
            (rel.x + half_x) / self.panel_size.x,
            1.0 - (rel.y + half_y) / self.panel_size.y,
        )
        self.laser_intersecting = True
        return hit

    def vr_mouse_data(self) -> Optional[Vector2]:
        """Panel UV under the laser from the last cast, or ``None`` if it missed."""
        return self.laser_uv if self.laser_intersecting else None