# settings.py
import logging
import os
from dataclasses import dataclass, replace

from errors import ConfigError

# Display / link defaults (must match the firmware on the RP2040)
SCREEN_W = 320
SCREEN_H = 240
RP2040_VID = 0x2E8A
RP2040_PID = 0x000A
BAUD = 115200
TARGET_FPS = 24

IMAGE_DIR = "./images"
IMAGE_EXT = "png"

LOG_ENV_VAR = "USB_SCREEN_LOG"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class ScreenConfig:
    width: int = SCREEN_W
    height: int = SCREEN_H
    vid: int = RP2040_VID
    pid: int = RP2040_PID
    baud: int = BAUD
    fps: int = TARGET_FPS
    image_dir: str = IMAGE_DIR
    extension: str = IMAGE_EXT

    def __post_init__(self):
        for name in ("width", "height", "baud", "fps"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        for name in ("vid", "pid"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 0xFFFF:
                raise ConfigError(f"{name} must be a 16-bit USB id, got {value!r}")
        if self.fps > 1000:
            raise ConfigError(f"fps above 1000 leaves no frame budget, got {self.fps}")

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def frame_budget_ms(self) -> int:
        # integer division: 24 fps -> 41 ms
        return 1000 // self.fps

    @property
    def frame_budget(self) -> float:
        """Frame budget in seconds, as expected by time.sleep()."""
        return self.frame_budget_ms / 1000.0

    @property
    def bytes_per_frame(self) -> int:
        return self.width * self.height * 2

    def with_overrides(self, **overrides) -> "ScreenConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def setup_logging(level=None) -> None:
    """Configure root logging; level falls back to $USB_SCREEN_LOG, then INFO."""
    if level is None:
        level = os.environ.get(LOG_ENV_VAR, "INFO")
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
