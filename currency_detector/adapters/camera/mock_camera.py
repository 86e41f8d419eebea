"""Mock camera: serves a solid-colour synthetic frame for testing without hardware."""
import os
import numpy as np
from currency_detector.adapters.camera.base import CameraAdapter

def _rgb_from_env() -> tuple[int, int, int]:
    raw = os.getenv("MOCK_CAMERA_RGB", "60,65,150")
    r, g, b = (int(part) for part in raw.split(","))
    return r, g, b

class MockCamera(CameraAdapter):
    def __init__(self, status_store, rgb: tuple[int, int, int] | None = None, size=(480, 640)):
        self.status = status_store
        self.rgb = rgb or _rgb_from_env()
        self.size = size

    def read(self):
        h, w = self.size
        frame = np.empty((h, w, 4), dtype=np.uint8)
        frame[:, :, :3] = self.rgb
        frame[:, :, 3] = 255
        self.status.log(f"mock_camera: serving rgb={self.rgb}")
        return frame
