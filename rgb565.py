# rgb565.py
import numpy as np


def pack(frame: np.ndarray) -> bytes:
    """
    Pack an (H, W, 3|4) uint8 RGB(A) frame into big-endian RGB565 bytes.

    Each channel is truncated to its top bits (5/6/5); alpha is ignored.
    Output is row-major, exactly H * W * 2 bytes, no header.
    """
    rgb = frame[..., :3].astype(np.uint16)
    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]

    packed = ((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)
    return packed.astype(">u2").tobytes()


def unpack(data: bytes, width: int, height: int) -> np.ndarray:
    """Inverse of pack() for previews: RGB565 bytes -> (H, W, 3) uint8."""
    if len(data) != width * height * 2:
        raise ValueError(
            f"Expected {width * height * 2} bytes for {width}x{height}, got {len(data)}"
        )
    px = np.frombuffer(data, dtype=">u2").reshape((height, width)).astype(np.uint16)

    r5 = (px >> 11) & 0x1F
    g6 = (px >> 5) & 0x3F
    b5 = px & 0x1F

    # replicate the high bits so full-scale values map back to 255
    r = (r5 << 3) | (r5 >> 2)
    g = (g6 << 2) | (g6 >> 4)
    b = (b5 << 3) | (b5 >> 2)
    return np.stack((r, g, b), axis=-1).astype(np.uint8)
