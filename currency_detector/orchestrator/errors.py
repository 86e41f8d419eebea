ERR_BUSY = "ERR_BUSY"
ERR_NOT_READY = "ERR_NOT_READY"
ERR_INACTIVE = "ERR_INACTIVE"
ERR_NO_FRAME = "ERR_NO_FRAME"
ERR_BAD_IMAGE = "ERR_BAD_IMAGE"
ERR_DETECTION_FAILED = "ERR_DETECTION_FAILED"


class DetectionError(Exception):
    code = ERR_DETECTION_FAILED


class FrameUnreadableError(DetectionError):
    """Frame is missing, empty, or not an RGB/RGBA pixel buffer."""

    code = ERR_BAD_IMAGE


class FrameUnavailableError(DetectionError):
    """Frame source stopped delivering frames in the middle of a detection."""

    code = ERR_NO_FRAME
