import random
from currency_detector.adapters.vision.base import VisionAdapter
from currency_detector.orchestrator.contracts import DENOMINATIONS, ClassificationResult

class MockVision(VisionAdapter):
    """Placeholder model: ignores the pixels and picks a note at random."""

    def __init__(self, status_store, seed: int | None = None):
        self.status = status_store
        self._rng = random.Random(seed)

    @property
    def ready(self) -> bool:
        return True

    def identify(self, frame) -> ClassificationResult:
        value = self._rng.choice(DENOMINATIONS)
        self.status.log(f"mock_vision: {value}")
        return ClassificationResult(denomination=value, confidence=0.5)
