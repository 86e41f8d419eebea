"""
Average-colour feature extraction.

Every frame is resampled to a fixed 224x224 canvas before channel means are
taken, so a 4K still and a 640x480 webcam frame of the same note land on the
same feature vector.
"""
import cv2
import numpy as np
from currency_detector.orchestrator.contracts import FeatureVector
from currency_detector.orchestrator.errors import FrameUnreadableError

CANONICAL_SIZE = (224, 224)


def decode_image(image_bytes: bytes) -> np.ndarray:
    """Decode JPEG/PNG bytes into an RGBA frame."""
    arr = np.frombuffer(image_bytes, dtype=np.uint8)
    bgr = cv2.imdecode(arr, cv2.IMREAD_COLOR) if arr.size else None
    if bgr is None:
        raise FrameUnreadableError("image bytes could not be decoded")
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGBA)


def bgr_to_frame(bgr: np.ndarray) -> np.ndarray:
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGBA)


def extract_features(frame) -> FeatureVector:
    if frame is None:
        raise FrameUnreadableError("no frame")
    frame = np.asarray(frame)
    if frame.ndim != 3 or frame.shape[2] not in (3, 4):
        raise FrameUnreadableError(f"expected HxWx3 or HxWx4 pixels, got shape {frame.shape}")
    if frame.shape[0] == 0 or frame.shape[1] == 0:
        raise FrameUnreadableError("frame has no pixels")

    rgb = np.ascontiguousarray(frame[:, :, :3], dtype=np.uint8)
    resized = cv2.resize(rgb, CANONICAL_SIZE, interpolation=cv2.INTER_LINEAR)
    means = resized.reshape(-1, 3).mean(axis=0, dtype=np.float64)
    red, green, blue = (float(np.clip(m, 0.0, 255.0)) for m in means)
    return FeatureVector(red=red, green=green, blue=blue)
