import math

import pytest

from vrdesk.ipc import HandTrackingData
from vrdesk.player import Camera, Player, VRHand
from vrdesk.vecmath import Vector2, Vector3


def _facing_plus_z() -> Player:
    player = Player()
    player.rotation = Vector3(0.0, math.pi / 2, 0.0)
    player.update()
    return player


def _hand(handedness: str, count: int = 21, value: float = 0.5) -> HandTrackingData:
    return HandTrackingData(
        handedness=handedness,
        landmarks=[Vector3(value, value, value) for _ in range(count)],
    )


def test_initial_position_is_eye_height():
    player = Player()
    assert player.position == Vector3(0.0, 1.6, 0.0)
    assert player.camera.fovy == 90.0
    assert player.camera.up == Vector3(0.0, 1.0, 0.0)


def test_update_with_zero_rotation_looks_along_x():
    player = Player()
    player.update()
    assert player.camera.position == player.position
    assert player.camera.target.x == pytest.approx(1.0)
    assert player.camera.target.y == pytest.approx(1.6)
    assert player.camera.target.z == pytest.approx(0.0)


def test_mouse_look_keeps_unit_forward():
    player = Player()
    player.handle_mouse_look(Vector2(120.0, -45.0))
    player.update()
    forward = player.camera.target - player.camera.position
    assert forward.length() == pytest.approx(1.0)
    assert player.rotation.y > 0.0
    assert player.rotation.x < 0.0


def test_zero_gyro_tilts_pitch_down_a_quarter_turn():
    player = Player()
    player.set_yaw_pitch_roll(0.0, 0.0, 0.0)
    assert player.rotation.x == pytest.approx(-math.pi / 2)
    assert player.rotation.y == pytest.approx(0.0)
    assert player.rotation.z == pytest.approx(0.0)


@pytest.mark.parametrize("yaw", [-7.0, -3.0, -0.5, 0.2, 2.0, 4.0, 9.5])
def test_yaw_wrapped_into_half_open_range(yaw):
    player = Player()
    player.set_yaw_pitch_roll(yaw, 0.0, 0.0)
    wrapped = player.rotation.y
    assert -math.pi <= wrapped <= math.pi
    assert math.cos(wrapped) == pytest.approx(math.cos(-yaw))
    assert math.sin(wrapped) == pytest.approx(math.sin(-yaw))


def test_roll_and_pitch_are_clamped():
    player = Player()
    player.set_yaw_pitch_roll(0.0, 10.0, 10.0)
    assert player.rotation.z == pytest.approx(math.pi)
    assert player.rotation.x == pytest.approx(-2.0 * math.pi)
    player.set_yaw_pitch_roll(0.0, 0.0, -10.0)
    assert player.rotation.z == pytest.approx(-math.pi)


def test_laser_hits_panel_centre():
    player = _facing_plus_z()
    player.set_panel_info(Vector3(0.0, 1.6, 4.0), Vector3(2.0, 2.0, 0.1))
    hit = player.cast_laser()
    assert hit is not None
    assert hit.x == pytest.approx(0.0, abs=1e-9)
    assert hit.y == pytest.approx(1.6)
    assert hit.z == pytest.approx(4.0)
    uv = player.vr_mouse_data()
    assert uv is not None
    assert uv.x == pytest.approx(0.5)
    assert uv.y == pytest.approx(0.5)


def test_laser_misses_panel_behind():
    player = _facing_plus_z()
    player.set_panel_info(Vector3(0.0, 1.6, -4.0), Vector3(2.0, 2.0, 0.1))
    assert player.cast_laser() is None
    assert player.vr_mouse_data() is None


def test_laser_misses_panel_off_to_side():
    player = _facing_plus_z()
    player.set_panel_info(Vector3(5.0, 1.6, 4.0), Vector3(2.0, 2.0, 0.1))
    assert player.cast_laser() is None
    assert player.laser_intersecting is False


def test_laser_parallel_to_panel_misses():
    player = Player()
    player.update()
    player.set_panel_info(Vector3(0.0, 1.6, 4.0), Vector3(2.0, 2.0, 0.1))
    assert player.cast_laser() is None


def test_hand_anchors_are_symmetric():
    player = Player()
    player.update()
    left = player.compute_hand_anchor_position("Left")
    right = player.compute_hand_anchor_position("Right")
    assert left.distance(right) == pytest.approx(0.5)
    assert left.x == pytest.approx(right.x)
    assert left.y == pytest.approx(right.y)


def test_centred_landmarks_land_on_anchor():
    player = Player()
    player.update()
    hand = VRHand()
    player.update_vr_hand(hand, _hand("Right"))
    anchor = player.compute_hand_anchor_position("Right")
    assert hand.is_tracked
    assert hand.label == "Right"
    assert [lm.landmark_id for lm in hand.landmarks] == list(range(21))
    for landmark in hand.landmarks:
        assert landmark.active
        assert landmark.position.distance(anchor) == pytest.approx(0.0, abs=1e-9)


def test_hand_landmarks_stay_within_scaled_box():
    player = Player()
    player.update()
    hand = VRHand()
    player.update_vr_hand(hand, _hand("Left", value=1.0))
    anchor = player.compute_hand_anchor_position("Left")
    for landmark in hand.landmarks:
        assert landmark.position.distance(anchor) <= 0.25


@pytest.mark.parametrize("count", [0, 5, 20])
def test_too_few_landmarks_untracks_hand(count):
    player = Player()
    player.update()
    hand = VRHand()
    player.update_vr_hand(hand, _hand("Right"))
    player.update_vr_hand(hand, _hand("Right", count=count))
    assert hand.is_tracked is False
    assert not any(lm.active for lm in hand.landmarks)


def test_update_hands_routes_by_handedness():
    player = Player()
    player.update()
    player.update_hands([_hand("Left"), _hand("Unknown"), _hand("Right", count=3)])
    assert player.left_hand.is_tracked
    assert player.left_hand.label == "Left"
    assert player.right_hand.is_tracked is False
    assert player.right_hand.label == "Right"


def test_eye_cameras_straddle_head():
    player = Player()
    player.update()
    left = player.left_eye_camera(0.065)
    right = player.right_eye_camera(0.065)
    assert isinstance(left, Camera)
    assert left.position.distance(right.position) == pytest.approx(0.065)
    mid = (left.position + right.position).scale(0.5)
    assert mid.distance(player.camera.position) == pytest.approx(0.0, abs=1e-9)
    assert (left.target - left.position).distance(
        player.camera.target - player.camera.position
    ) == pytest.approx(0.0, abs=1e-9)
    assert player.camera.position == player.position