import math
import os
from collections import Counter
from dataclasses import dataclass, field
from typing import Literal, Optional

Denomination = Literal[10, 20, 50, 100, 200, 500, 2000]

DENOMINATIONS: tuple[int, ...] = (10, 20, 50, 100, 200, 500, 2000)

# Rule-table hits are not scored; they rank above any fallback score
RULE_CONFIDENCE = math.inf

VoteTally = Counter


@dataclass(frozen=True)
class FeatureVector:
    red: float
    green: float
    blue: float


@dataclass(frozen=True)
class ClassificationResult:
    denomination: int
    confidence: float
    rule: Optional[int] = None   # 1-based rule index, None for fallback scoring


@dataclass(frozen=True)
class DetectionPolicy:
    """Numeric policy for one detector instance."""

    sample_count: int = 5
    sample_delay_s: float = 0.15
    history_decay: float = 0.7
    history_blend: float = 0.3
    history_bonus: float = 2.0

    def __post_init__(self):
        if self.sample_count < 1:
            raise ValueError("sample_count must be >= 1")
        if self.sample_delay_s < 0:
            raise ValueError("sample_delay_s must be >= 0")
        if not 0 < self.history_decay <= 1:
            raise ValueError("history_decay must be in (0, 1]")
        if self.history_blend < 0:
            raise ValueError("history_blend must be >= 0")
        if self.history_bonus < 0:
            raise ValueError("history_bonus must be >= 0")

    @classmethod
    def from_env(cls) -> "DetectionPolicy":
        return cls(
            sample_count=int(os.getenv("SAMPLE_COUNT", "5")),
            sample_delay_s=float(os.getenv("SAMPLE_DELAY_MS", "150")) / 1000.0,
            history_decay=float(os.getenv("HISTORY_DECAY", "0.7")),
            history_blend=float(os.getenv("HISTORY_BLEND", "0.3")),
            history_bonus=float(os.getenv("HISTORY_BONUS", "2")),
        )


@dataclass
class DetectionReport:
    denomination: Optional[int]
    duration_ms: int
    votes: dict[int, int] = field(default_factory=dict)      # raw tally
    blended: dict[int, int] = field(default_factory=dict)    # tally after history blend
    overridden: bool = False                                 # flicker override fired
    error_code: Optional[str] = None
