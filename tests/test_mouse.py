import pytest

from vrdesk.gestures import GestureType, HandLandmarks
from vrdesk.mouse import CLICK_COOLDOWN, VRMouseController
from vrdesk.vecmath import Vector2, Vector3

PANEL_POS = Vector3(0.0, 0.0, 1.0)
PANEL_SIZE = Vector3(2.0, 2.0, 0.1)


def make_hand(z=0.8, dx=0.0, pinch=False):
    landmarks = [Vector3(dx, 0.0, z) for _ in range(21)]
    landmarks[5] = Vector3(dx, 0.05, z)
    landmarks[8] = Vector3(dx, 0.15, z)
    landmarks[4] = Vector3(dx + 0.01, 0.15, z) if pinch else Vector3(dx + 0.1, 0.0, z)
    return HandLandmarks(landmarks=landmarks, active=[True] * 21)


@pytest.fixture
def controller():
    ctrl = VRMouseController()
    ctrl.set_panel_info(PANEL_POS, PANEL_SIZE)
    return ctrl


def test_initial_state(controller):
    assert controller.mouse_data() is None
    assert controller.active_gesture() is GestureType.NONE


def test_panel_centre_maps_to_middle(controller):
    assert controller.panel_uv_from_world_pos(PANEL_POS) == Vector2(0.5, 0.5)


def test_panel_uv_is_clamped(controller):
    uv = controller.panel_uv_from_world_pos(Vector3(50.0, -50.0, 1.0))
    assert uv == Vector2(1.0, 1.0)


def test_uv_requires_panel_size():
    with pytest.raises(ValueError):
        VRMouseController().panel_uv_from_world_pos(Vector3())


def test_pointing_moves_cursor(controller):
    hand = make_hand()
    controller.update(hand, 0.016)
    data = controller.mouse_data()
    assert data is not None
    uv, clicking, dragging = data
    assert uv == controller.panel_uv_from_world_pos(hand.landmarks[8])
    assert (clicking, dragging) == (False, False)
    assert controller.active_gesture() is GestureType.POINT
    assert controller.mouse.position == hand.landmarks[8]


def test_far_hand_is_inactive(controller):
    controller.update(make_hand(z=0.0), 0.016)
    assert controller.mouse_data() is None
    assert controller.active_gesture() is GestureType.POINT
    assert controller.is_pointing_at_panel(make_hand(z=0.0)) is False


def test_untracked_wrist_resets(controller):
    controller.update(make_hand(), 0.016)
    hand = make_hand()
    hand.active[0] = False
    controller.update(hand, 0.016)
    assert controller.mouse_data() is None
    assert controller.active_gesture() is GestureType.NONE


def test_pinch_clicks_and_release_ends_click(controller):
    controller.update(make_hand(pinch=True), 0.016)
    assert controller.mouse_data()[1] is True
    assert controller.mouse.click_cooldown == CLICK_COOLDOWN
    controller.update(make_hand(), 0.016)
    assert controller.mouse_data()[1] is False


def test_click_cooldown_blocks_rapid_clicks(controller):
    controller.update(make_hand(pinch=True), 0.0)
    controller.update(make_hand(), CLICK_COOLDOWN / 3)
    controller.update(make_hand(pinch=True), CLICK_COOLDOWN / 3)
    assert controller.mouse_data()[1] is False
    controller.update(make_hand(), CLICK_COOLDOWN)
    controller.update(make_hand(pinch=True), 0.0)
    assert controller.mouse_data()[1] is True


def test_moving_while_clicking_starts_drag(controller):
    controller.update(make_hand(pinch=True), 0.016)
    controller.update(make_hand(pinch=True, dx=0.1), 0.016)
    uv, clicking, dragging = controller.mouse_data()
    assert clicking is True
    assert dragging is True
    controller.update(make_hand(dx=0.1), 0.016)
    assert controller.mouse_data()[2] is False


def test_large_drag_threshold_prevents_drag(controller):
    controller.set_drag_threshold(10.0)
    controller.update(make_hand(pinch=True), 0.016)
    controller.update(make_hand(pinch=True, dx=0.1), 0.016)
    assert controller.mouse_data()[2] is False


def test_zero_click_threshold_never_clicks(controller):
    controller.set_click_threshold(0.0)
    controller.update(make_hand(pinch=True), 0.016)
    assert controller.mouse_data()[1] is False