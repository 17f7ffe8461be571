"""
Shared fixtures: a tiny display geometry, fake serial ports and handles,
and a controllable clock.
"""

from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np
import pytest
import serial

from settings import ScreenConfig


@dataclass
class FakePortInfo:
    device: str
    vid: Optional[int] = None
    pid: Optional[int] = None
    description: str = "n/a"


class FakeSerial:
    """Records every write; raises on the write numbered fail_on (0-based)."""

    def __init__(self, fail_on=None, short_on=None):
        self.writes = []
        self.attempts = 0
        self.fail_on = fail_on
        self.short_on = short_on
        self.closed = False

    def write(self, data):
        attempt = self.attempts
        self.attempts += 1
        if attempt == self.fail_on:
            raise serial.SerialException("device disconnected")
        if attempt == self.short_on:
            self.writes.append(bytes(data[: len(data) // 2]))
            return len(data) // 2
        self.writes.append(bytes(data))
        return len(data)

    def close(self):
        self.closed = True


class FakeClock:
    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def small_config():
    return ScreenConfig(width=8, height=6)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def image_dir(tmp_path):
    """Three small colour PNGs plus distractors that must be ignored."""
    for name, bgr in (("a.png", (0, 0, 255)), ("b.png", (0, 255, 0)), ("c.png", (255, 0, 0))):
        img = np.zeros((12, 16, 3), dtype=np.uint8)
        img[:] = bgr
        cv2.imwrite(str(tmp_path / name), img)

    (tmp_path / "notes.txt").write_text("not an image")
    (tmp_path / "upper.PNG").write_bytes(b"ignored: wrong case")
    (tmp_path / "nested.png").mkdir()
    return tmp_path
