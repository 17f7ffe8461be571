# gui.py
import time
import tkinter as tk
from tkinter import ttk

from PIL import Image, ImageTk

import rgb565
from errors import DeviceNotFoundError


def buffer_to_image(data: bytes, width: int, height: int, scale: int = 1) -> Image.Image:
    """Turn one RGB565 wire frame back into a Pillow image (for previewing)."""
    img = Image.fromarray(rgb565.unpack(data, width, height))
    if scale != 1:
        img = img.resize((width * scale, height * scale), Image.NEAREST)
    return img


class VirtualScreen:
    """
    Stand-in for the serial display: a Tk window that shows every frame it
    is sent. Same write()/close() surface as serial.Serial, so the player
    cannot tell the difference.

    There is no background thread; each write() pumps the Tk event loop once.
    """

    def __init__(self, width: int, height: int, scale: int = 2):
        self.width = width
        self.height = height
        self.scale = scale
        self.bytes_per_frame = width * height * 2

        self.closed = False
        self.frames_shown = 0
        self._last_t = None
        self._fps = 0.0

        try:
            self.root = tk.Tk()
        except tk.TclError as exc:
            raise DeviceNotFoundError(f"Cannot open preview window: {exc}") from exc
        self.root.title("USB Screen Preview")
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        ttk.Label(
            self.root, text=f"Virtual TFT {width}x{height} (RGB565 as received):"
        ).pack(pady=5)

        self.screen = tk.Label(self.root)
        self.screen.pack(padx=10)
        self.screen.img_ref = None  # keep ref to avoid GC

        self.status_label = ttk.Label(self.root, text="Waiting for first frame")
        self.status_label.pack(pady=5)

    # ------------------------------------------------------------------
    # Display-target surface
    # ------------------------------------------------------------------

    def write(self, data: bytes) -> int:
        if self.closed:
            raise ConnectionError("preview window closed")
        if len(data) != self.bytes_per_frame:
            raise ValueError(
                f"Expected {self.bytes_per_frame} bytes per frame, got {len(data)}"
            )

        img = buffer_to_image(data, self.width, self.height, self.scale)
        self._tick()
        try:
            tk_img = ImageTk.PhotoImage(img)
            self.screen.configure(image=tk_img)
            self.screen.img_ref = tk_img
            self.status_label.config(
                text=f"Frame {self.frames_shown}  |  {self._fps:.1f} fps"
            )
            self.root.update()
        except tk.TclError as exc:
            self.closed = True
            raise ConnectionError(f"preview window closed: {exc}") from exc
        return len(data)

    def close(self):
        if not self.closed:
            self.closed = True
            self.root.destroy()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _tick(self):
        now = time.perf_counter()
        if self._last_t is not None:
            dt = now - self._last_t
            if dt > 0:
                # smooth so the label doesn't flicker
                self._fps = 0.9 * self._fps + 0.1 * (1.0 / dt) if self._fps else 1.0 / dt
        self._last_t = now
        self.frames_shown += 1

    def _on_close(self):
        self.closed = True
        self.root.destroy()
