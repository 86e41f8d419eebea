from typing import Iterable, Optional, Protocol


class DetectionEvents(Protocol):
    def on_detection_start(self) -> None: ...

    def on_detection_complete(self, value: Optional[int]) -> None: ...

    def on_detection_error(self, error: Exception) -> None: ...


class EventFanout:
    """Forward every detection event to several sinks, in order."""

    def __init__(self, sinks: Iterable[DetectionEvents]):
        self.sinks = list(sinks)

    def on_detection_start(self):
        for sink in self.sinks:
            sink.on_detection_start()

    def on_detection_complete(self, value: Optional[int]):
        for sink in self.sinks:
            sink.on_detection_complete(value)

    def on_detection_error(self, error: Exception):
        for sink in self.sinks:
            sink.on_detection_error(error)
