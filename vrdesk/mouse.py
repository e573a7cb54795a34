"""Turning a tracked right hand into a pointer on the virtual desktop panel."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from vrdesk.gestures import (
    DEFAULT_PINCH_THRESHOLD,
    INDEX_TIP,
    WRIST,
    GestureRecognizer,
    GestureType,
    HandLandmarks,
)
from vrdesk.vecmath import Vector2, Vector3, clamp

logger = logging.getLogger(__name__)

CLICK_COOLDOWN = 0.3
MAX_PANEL_DISTANCE = 0.5


@dataclass
class VRMouse:
    """Pointer state derived from the hand."""

    position: Vector3 = field(default_factory=Vector3)
    panel_uv: Vector2 = field(default_factory=lambda: Vector2(0.5, 0.5))
    is_active: bool = False
    is_clicking: bool = False
    is_dragging: bool = False
    click_cooldown: float = 0.0
    drag_threshold: float = 0.02
    last_click_uv: Vector2 = field(default_factory=Vector2)
    active_gesture: GestureType = GestureType.NONE
    gesture_start_time: float = 0.0


class VRMouseController:
    """Maps index-finger pointing and thumb-index pinches to panel clicks and drags."""

    def __init__(self) -> None:
        self.mouse = VRMouse()
        self.gesture_recognizer = GestureRecognizer()
        self.panel_position = Vector3()
        self.panel_size = Vector3()
        self.click_threshold = DEFAULT_PINCH_THRESHOLD

    def set_panel_info(self, position: Vector3, size: Vector3) -> None:
        """Set the panel centre and extent in world units."""
        self.panel_position = position
        self.panel_size = size

    def update(self, right_hand: HandLandmarks, delta_time: float) -> None:
        """Advance the pointer state by one hand sample."""
        mouse = self.mouse
        if mouse.click_cooldown > 0.0:
            mouse.click_cooldown -= delta_time

        if not right_hand.active[WRIST]:
            mouse.is_active = False
            mouse.active_gesture = GestureType.NONE
            return

        mouse.active_gesture = self.gesture_recognizer.recognize_gesture(right_hand).type

        if self.is_pointing_at_panel(right_hand):
            mouse.is_active = True
            self._update_position(right_hand)
            self._update_click(right_hand)
            self._update_drag()
        else:
            mouse.is_active = False
            mouse.is_clicking = False
            mouse.is_dragging = False

    def mouse_data(self) -> Optional[Tuple[Vector2, bool, bool]]:
        """``(uv, clicking, dragging)`` while pointing at the panel, else ``None``."""
        if not self.mouse.is_active:
            return None
        return self.mouse.panel_uv, self.mouse.is_clicking, self.mouse.is_dragging

    def active_gesture(self) -> GestureType:
        """Gesture recognised in the latest update."""
        return self.mouse.active_gesture

    def set_click_threshold(self, threshold: float) -> None:
        """Pinch distance below which a click starts."""
        self.click_threshold = threshold

    def set_drag_threshold(self, threshold: float) -> None:
        """UV distance from the click point beyond which a click becomes a drag."""
        self.mouse.drag_threshold = threshold

    def panel_uv_from_world_pos(self, world_pos: Vector3) -> Vector2:
        """Project a world point onto panel UV, clamped to ``[0, 1]``; v grows downward."""
        size = self.panel_size
        if size.x == 0.0 or size.y == 0.0:
            raise ValueError("panel size must be set before mapping positions")
        min_x = self.panel_position.x - size.x / 2.0
        min_y = self.panel_position.y - size.y / 2.0
        u = (world_pos.x - min_x) / size.x
        v = 1.0 - (world_pos.y - min_y) / size.y
        return Vector2(clamp(u, 0.0, 1.0), clamp(v, 0.0, 1.0))

    def is_pointing_at_panel(self, hand: HandLandmarks) -> bool:
        """Index finger extended with its tip near the panel plane."""
        if not hand.active[INDEX_TIP]:
            return False
        if not self.gesture_recognizer.is_index_finger_extended(hand):
            return False
        tip = hand.landmarks[INDEX_TIP]
        return abs(tip.z - self.panel_position.z) < MAX_PANEL_DISTANCE

    def _update_position(self, hand: HandLandmarks) -> None:
        tip = hand.landmarks[INDEX_TIP]
        self.mouse.position = tip
        self.mouse.panel_uv = self.panel_uv_from_world_pos(tip)

    def _update_click(self, hand: HandLandmarks) -> None:
        mouse = self.mouse
        pinching = self.gesture_recognizer.is_pinch_gesture(hand, self.click_threshold)
        if pinching and mouse.click_cooldown <= 0.0 and not mouse.is_clicking:
            mouse.is_clicking = True
            mouse.click_cooldown = CLICK_COOLDOWN
            mouse.last_click_uv = mouse.panel_uv
            logger.info("VR click at UV: %s, %s", mouse.panel_uv.x, mouse.panel_uv.y)
        elif not pinching:
            mouse.is_clicking = False

    def _update_drag(self) -> None:
        mouse = self.mouse
        if mouse.is_clicking:
            if mouse.panel_uv.distance(mouse.last_click_uv) > mouse.drag_threshold:
                mouse.is_dragging = True
        else:
            mouse.is_dragging = False