class VisionAdapter:
    @property
    def ready(self) -> bool:
        """Gate for the orchestrator: False while the classifier is still loading."""
        return False

    def identify(self, frame):
        """Return ClassificationResult for one RGBA frame — used once per sample."""
        raise NotImplementedError
