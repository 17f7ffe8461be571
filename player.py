# player.py
import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import numpy as np
import serial

import rgb565
from errors import ConfigError, DecodeError, NoAssetsError, TransmitError
from frames import decode_and_resample
from settings import ScreenConfig

logger = logging.getLogger(__name__)


class SlideshowPlayer:
    """
    Cycles through a fixed list of images forever, sending each one to the
    display as a raw RGB565 frame and pacing the loop to config.fps.

    Any decode or write failure ends run() with a ScreenError; there is no
    retry and no skipping.
    """

    def __init__(
        self,
        target,
        assets: Sequence[Path],
        config: ScreenConfig,
        decode: Callable = decode_and_resample,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        preload: bool = False,
        log_every: int = 240,
    ):
        if log_every < 1:
            raise ConfigError(f"log_every must be at least 1, got {log_every}")
        if not assets:
            raise NoAssetsError(
                f"No .{config.extension} images found in {config.image_dir}"
            )

        # Link & geometry
        self.target = target
        self.config = config
        self.assets: List[Path] = [Path(a) for a in assets]

        # Injected capabilities
        self._decode = decode
        self._clock = clock
        self._sleep = sleep
        self.log_every = log_every

        # Observable state
        self.frames_sent = 0
        self.last_sleep = 0.0

        self._cache: Optional[List[bytes]] = None
        if preload:
            self._cache = self._load_all_frames()

    # ------------------------------------------------------------------
    # Decode & pack
    # ------------------------------------------------------------------

    def _load_all_frames(self) -> List[bytes]:
        packed = []
        for i, path in enumerate(self.assets):
            packed.append(self.render(path))
            if i % 50 == 0:
                logger.info("Packed %d/%d frames", i, len(self.assets))
        logger.info("Preloaded %d frames", len(packed))
        return packed

    def render(self, path) -> bytes:
        """Decode one asset and return its wire payload."""
        w, h = self.config.width, self.config.height
        frame = self._decode(path, w, h)
        if (
            not isinstance(frame, np.ndarray)
            or frame.ndim != 3
            or frame.shape[:2] != (h, w)
            or frame.shape[2] not in (3, 4)
        ):
            shape = getattr(frame, "shape", None)
            raise DecodeError(path, f"decoded to {shape}, expected ({h}, {w}, 4)")
        if frame.dtype != np.uint8:
            raise DecodeError(path, f"decoded to {frame.dtype} samples, expected uint8")
        return rgb565.pack(frame)

    # ------------------------------------------------------------------
    # Send one frame to the RP2040
    # ------------------------------------------------------------------

    def _send_frame(self, payload: bytes) -> None:
        index = self.frames_sent
        try:
            written = self.target.write(payload)
        except (serial.SerialException, OSError) as exc:
            raise TransmitError(index, str(exc)) from exc

        # pyserial returns the byte count; a short write is a failure
        if written is not None and written != len(payload):
            raise TransmitError(
                index, f"short write ({written}/{len(payload)} bytes)"
            )
        self.frames_sent += 1

    # ------------------------------------------------------------------
    # Frame pacing
    # ------------------------------------------------------------------

    def pace(self, started: float) -> float:
        """Sleep out what is left of the frame budget; never catch up."""
        # whole milliseconds, so a frame that used exactly the budget doesn't sleep
        elapsed_ms = int(round((self._clock() - started) * 1000, 6))
        budget_ms = self.config.frame_budget_ms
        remaining = 0.0
        if elapsed_ms < budget_ms:
            remaining = (budget_ms - elapsed_ms) / 1000.0
            self._sleep(remaining)
        self.last_sleep = remaining
        return remaining

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self):
        """Stream forever. Only returns by raising a ScreenError."""
        total = len(self.assets)
        cursor = 0
        logger.info(
            "Streaming %d images at %d fps (%d ms/frame)",
            total, self.config.fps, self.config.frame_budget_ms,
        )

        while True:
            started = self._clock()

            if self._cache is not None:
                payload = self._cache[cursor]
            else:
                payload = self.render(self.assets[cursor])

            self._send_frame(payload)
            slept = self.pace(started)

            logger.debug(
                "Sent frame %d (%s), slept %.1f ms",
                self.frames_sent - 1, self.assets[cursor].name, slept * 1000,
            )
            if self.frames_sent % self.log_every == 0:
                logger.info("Sent %d frames", self.frames_sent)

            cursor = (cursor + 1) % total
