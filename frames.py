# frames.py
import logging
from pathlib import Path
from typing import List

import cv2
import numpy as np
from PIL import Image

from errors import DecodeError, NoAssetsError

logger = logging.getLogger(__name__)

_TO_RGBA = {
    1: cv2.COLOR_GRAY2RGBA,
    3: cv2.COLOR_BGR2RGBA,
    4: cv2.COLOR_BGRA2RGBA,
}


# ----------------------------------------------------------------------
# Asset discovery
# ----------------------------------------------------------------------

def enumerate_assets(image_dir, extension: str = "png") -> List[Path]:
    """
    List regular files directly inside image_dir whose extension is exactly
    `extension` (case-sensitive). Subdirectories and other files are skipped.

    An empty result is not an error here; the caller decides.
    """
    root = Path(image_dir)
    suffix = "." + extension
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise NoAssetsError(f"Cannot read image directory {root}: {exc}") from exc

    paths = sorted(p for p in entries if p.is_file() and p.suffix == suffix)
    logger.debug("Found %d .%s files in %s", len(paths), extension, root)
    return paths


# ----------------------------------------------------------------------
# Decode + resample
# ----------------------------------------------------------------------

def decode_and_resample(path, width: int, height: int) -> np.ndarray:
    """
    Decode any raster OpenCV can read and stretch it to exactly width x height.

    Aspect ratio is not preserved. The result is always (height, width, 4)
    uint8 RGBA; alpha is 255 for sources without one.
    """
    try:
        img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    except cv2.error as exc:
        raise DecodeError(path, str(exc)) from exc
    if img is None:
        raise DecodeError(path, "unreadable or unsupported image")

    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise DecodeError(path, f"unsupported sample type {img.dtype}")

    channels = 1 if img.ndim == 2 else img.shape[2]
    code = _TO_RGBA.get(channels)
    if code is None:
        raise DecodeError(path, f"unsupported channel count {channels}")

    try:
        rgba = cv2.cvtColor(img, code)
    except cv2.error as exc:
        raise DecodeError(path, str(exc)) from exc

    # Lanczos support scales with the shrink factor
    resized = Image.fromarray(rgba).resize((width, height), Image.Resampling.LANCZOS)
    return np.asarray(resized, dtype=np.uint8).copy()
