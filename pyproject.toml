[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vrdesk"
version = "0.1.0"
description = "Hand-gesture, head-tracking and panel-pointer core for a stereo VR desktop viewer"
requires-python = ">=3.10"
dependencies = []
keywords = ["vr", "gesture", "hand-tracking", "gyroscope", "desktop", "h264"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vrdesk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
