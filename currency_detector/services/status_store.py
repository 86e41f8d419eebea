from dataclasses import dataclass, field
from typing import Optional, List

@dataclass
class StatusStore:
    detecting: bool = False
    last_denomination: Optional[int] = None
    last_error: Optional[str] = None
    detections: int = 0
    logs: List[str] = field(default_factory=list)

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > 200:
            self.logs = self.logs[-200:]

    # DetectionEvents sink

    def on_detection_start(self):
        self.detecting = True
        self.last_error = None

    def on_detection_complete(self, value: Optional[int]):
        self.detecting = False
        self.detections += 1
        self.last_denomination = value

    def on_detection_error(self, error: Exception):
        self.detecting = False
        self.last_error = f"{type(error).__name__}: {error}"
