from abc import ABC, abstractmethod

class CameraAdapter(ABC):
    @abstractmethod
    def read(self):
        """Return the current frame as an HxWx4 RGBA uint8 array, or None if no frame is available."""
        ...
