"""Vector math, gyro and hand-tracking input, gesture recognition, VR mouse and player camera state for a VR desktop viewer."""

__version__ = "0.1.0"