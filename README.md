# vrdesk

This package holds the core state of a stereo VR desktop viewer:

- `vrdesk.vecmath` provides the immutable `Vector2` and `Vector3` types and `clamp`.
- `vrdesk.thread_queue` provides `ThreadSafeQueue`, a FIFO queue with `push`, `try_pop`, `wait_and_pop`, `empty` and `len()`.
- `vrdesk.gyro` reads gyro orientation samples that arrive as JSON lines (`GyroData`, `parse_gyro_line`, `run_gyro_reader`).
- `vrdesk.ipc` reads the shared hand-tracking file (`HandTrackingData`, `parse_hand_payload`, `read_hand_tracking_data`) and writes the binary frame stream (`FrameHeader`, `PixelFormat`, `write_h264_frame`, `current_time_ms`, `is_stream_piped`).
- `vrdesk.gestures` recognises static gestures and swipes from 21 hand landmarks (`GestureType`, `GestureData`, `HandLandmarks`, `GestureRecognizer`).
- `vrdesk.mouse` turns a pointing right hand into a cursor on a desktop panel, with clicks and drags (`VRMouse`, `VRMouseController`).
- `vrdesk.player` handles head orientation, the stereo eye cameras, hand placement in world space and the gaze laser (`Camera`, `VRLandmark`, `VRHand`, `Player`).

The package has no third-party runtime dependencies.

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Usage

### Gyro input

Each input line is a JSON object whose `alpha`, `beta` and `gamma` fields are in degrees. `alpha` becomes yaw, `gamma` becomes pitch and `beta` becomes roll, all in radians. An empty line returns `None`. Malformed input raises `ValueError`.

```python
import sys, threading
from vrdesk.gyro import parse_gyro_line, run_gyro_reader
from vrdesk.thread_queue import ThreadSafeQueue

print(parse_gyro_line('{"alpha": 90, "beta": 0, "gamma": 45}'))

queue = ThreadSafeQueue()
threading.Thread(target=run_gyro_reader, args=(sys.stdin, queue), daemon=True).start()
sample = queue.try_pop()   # None when nothing has arrived yet
```

`run_gyro_reader` reads until EOF. It logs and skips malformed lines and returns the number of samples it pushed.

### Hand tracking data

The shared hand file starts with a little-endian `uint32` length, followed by that many bytes of a JSON array of hands. `read_hand_tracking_data` returns an empty list in three cases: the file is missing, the length is zero, or the length runs past the end of the file. It logs a malformed payload and returns an empty list for that too. `parse_hand_payload` works on bytes you already have, and raises `ValueError` on a malformed payload.

```python
from vrdesk.ipc import read_hand_tracking_data

hands = read_hand_tracking_data("Shared/hands.dat")
for hand in hands:
    print(hand.handedness, len(hand.landmarks))
```

### Gestures and the VR mouse

```python
from vrdesk.gestures import GestureRecognizer, HandLandmarks
from vrdesk.mouse import VRMouseController
from vrdesk.vecmath import Vector3

recognizer = GestureRecognizer()
hand = HandLandmarks()          # fill landmarks and active flags
gesture = recognizer.recognize_gesture(hand)
print(gesture.type, gesture.confidence)

mouse = VRMouseController()
mouse.set_panel_info(Vector3(0.0, 1.8, 4.0), Vector3(17.6, 5.0, 0.1))
mouse.update(hand, 1 / 60)
data = mouse.mouse_data()       # (uv, clicking, dragging), or None while not pointing at the panel
```

- A click starts when the thumb and index fingertips come closer than the click threshold. After a click there is a 0.3 s cooldown.
- A click becomes a drag when the cursor moves farther than the drag threshold in UV from the point where the click started.
- `set_click_threshold` and `set_drag_threshold` change these thresholds.

### Player camera

```python
from vrdesk.player import Player
from vrdesk.vecmath import Vector3

player = Player()
player.set_panel_info(Vector3(0.0, 1.8, 4.0), Vector3(17.6, 5.0, 0.1))
player.set_yaw_pitch_roll(0.0, -1.57, 0.0)
player.update()
left = player.left_eye_camera(0.065)
right = player.right_eye_camera(0.065)
hit = player.cast_laser()       # hit point on the panel, or None
uv = player.vr_mouse_data()     # panel UV from the last cast, or None
```

- `update_hands` routes each `HandTrackingData` to `player.left_hand` or `player.right_hand` according to its handedness.
- A hand with at least 21 landmarks is placed in front of the camera.
- A hand with fewer than 21 landmarks is marked as not tracked.

### Streaming frames

`write_h264_frame(stream, payload, width, height)` writes a 24-byte little-endian header followed by the payload, and returns the number of bytes it wrote. The header starts with the magic `0xDEADBEEF` and carries pixel format `PixelFormat.H264` (`2`). Its timestamp comes from `current_time_ms`, which is a monotonic clock in milliseconds truncated to 32 bits. `FrameHeader.unpack` reads a header back, and raises `ValueError` on short data or a bad magic.

## What this package does not do

The package only computes state. It does not:

- open a window or draw anything, including hands, cursor, laser or panel;
- capture the screen;
- encode video;
- send mouse events to the operating system.

It also has no command-line program. A host application has to run the frame loop and do those parts using the values this package provides.

## Tests

```
pytest
```