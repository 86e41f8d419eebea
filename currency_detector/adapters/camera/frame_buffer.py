"""Frame source fed by a browser client: POST /capture_frame stores the latest frame here."""
import threading
import time
from currency_detector.adapters.camera.base import CameraAdapter

class FrameBuffer(CameraAdapter):
    def __init__(self, status_store, max_age_s: float | None = None):
        self.status = status_store
        self.max_age_s = max_age_s
        self._frame = None
        self._stamp = 0.0
        self._lock = threading.Lock()

    def push(self, frame):
        with self._lock:
            self._frame = frame
            self._stamp = time.monotonic()

    def clear(self):
        with self._lock:
            self._frame = None

    def read(self):
        with self._lock:
            frame, stamp = self._frame, self._stamp
        if frame is None:
            return None
        if self.max_age_s is not None and time.monotonic() - stamp > self.max_age_s:
            self.status.log("frame_buffer: latest frame is stale")
            return None
        return frame
