import math
from collections import Counter
from typing import Optional

from currency_detector.orchestrator.voting import plurality


class StabilityTracker:
    """Blends a decaying per-note history into each new vote.

    Successive detections on the same note should not flip between two
    plausible answers: history nudges the vote toward recent results, and an
    ambiguous vote (no strict majority) keeps the last accepted note.
    """

    def __init__(self, decay: float = 0.7, blend: float = 0.3, bonus: float = 2.0):
        self.decay = decay
        self.blend = blend
        self.bonus = bonus
        self.history: dict[int, float] = {}
        self.last_accepted: Optional[int] = None
        self.last_blended: Counter = Counter()
        self.last_overridden = False

    def stabilize(self, tally: Counter, sample_count: int) -> int:
        _, raw_majority = plurality(tally)

        blended = Counter(tally)
        for value in list(self.history):
            weight = max(1.0, self.history[value] * self.decay)
            self.history[value] = weight
            blended[value] += math.floor(weight * self.blend)

        selected, _ = plurality(blended)

        overridden = False
        if raw_majority <= sample_count / 2 and self.last_accepted is not None:
            overridden = selected != self.last_accepted
            selected = self.last_accepted

        self.history[selected] = self.history.get(selected, 0.0) + self.bonus
        self.last_accepted = selected
        self.last_blended = blended
        self.last_overridden = overridden
        return selected
