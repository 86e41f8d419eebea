import base64
import os

import cv2
import numpy as np
import pytest

# The API module wires its adapters from the environment at import time
os.environ["TTS_ENABLED"] = "0"
os.environ["SAMPLE_DELAY_MS"] = "0"
os.environ["VISION_ADAPTER"] = "color"
os.environ["CAMERA_ADAPTER"] = "upload"


def solid_frame(rgb, size=(120, 160), channels=4) -> np.ndarray:
    h, w = size
    frame = np.empty((h, w, channels), dtype=np.uint8)
    frame[:, :, :3] = rgb
    if channels == 4:
        frame[:, :, 3] = 255
    return frame


def solid_png_b64(rgb, size=(120, 160)) -> str:
    h, w = size
    bgr = np.empty((h, w, 3), dtype=np.uint8)
    bgr[:, :] = rgb[::-1]
    ok, buf = cv2.imencode(".png", bgr)
    assert ok
    return base64.b64encode(bytes(buf)).decode("ascii")


@pytest.fixture
def blue_frame() -> np.ndarray:
    return solid_frame((60, 65, 150))
