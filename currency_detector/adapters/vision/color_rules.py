"""
Colour-rule denomination classifier (7 classes: 10/20/50/100/200/500/2000).

Pipeline:
  1. Resample the frame to 224x224 and take mean R, G, B
  2. Walk the rule table in order; the first rule that matches wins
  3. No rule matched: score every note from channel ratios and take the
     strictly best score, defaulting to 100 on a tie or all-zero scores

Rule order partitions the colour space and must not be reshuffled: e.g. a
bright blue-magenta note satisfies the 50, 2000 and 100 rules at once and
must resolve to 50.

No model weights needed. Deterministic for identical pixel data.
"""
from currency_detector.adapters.vision.base import VisionAdapter
from currency_detector.adapters.vision.features import extract_features
from currency_detector.orchestrator.contracts import (
    RULE_CONFIDENCE, ClassificationResult, FeatureVector,
)

FALLBACK_DEFAULT = 100


# ── Rule table ──────────────────────────────────────────────────────────────

def _is_fifty(r, g, b):
    # fluorescent blue
    return b > 120 and b >= r * 1.2 and b >= g * 1.2


def _is_two_thousand(r, g, b):
    # magenta: red and blue both well above green
    return r >= g * 1.2 and b >= g * 1.1 and r > 140 and b > 110


def _is_two_hundred(r, g, b):
    # bright yellow
    return r > 140 and g > 140 and b < 100 and r > b * 1.5 and g > b * 1.5


def _is_twenty(r, g, b):
    # greenish-yellow
    return g >= r * 1.1 and g >= b * 1.5 and g > 120


def _is_five_hundred(r, g, b):
    # stone grey: flat channels in a mid-brightness band
    flat = abs(r - g) <= 15 and abs(g - b) <= 15 and abs(r - b) <= 15
    return flat and 90 <= r <= 160


def _is_ten(r, g, b):
    # chocolate brown: r > g > b with a moderate red/green ratio
    return r > 100 and r >= b * 1.3 and g * 1.1 < r < g * 1.5 and g > b * 1.2


def _is_hundred(r, g, b):
    # lavender
    return r > 110 and b >= g * 1.1 and r >= g * 1.1


RULES = (
    (50, _is_fifty),
    (2000, _is_two_thousand),
    (200, _is_two_hundred),
    (20, _is_twenty),
    (500, _is_five_hundred),
    (10, _is_ten),
    (100, _is_hundred),
)


# ── Fallback scoring ────────────────────────────────────────────────────────

def fallback_scores(features: FeatureVector) -> dict[int, float]:
    """One hand-tuned score per note; every score is >= 0 and 0 for a black frame."""
    r, g, b = features.red, features.green, features.blue
    mean = (r + g + b) / 3.0
    spread = max(r, g, b) - min(r, g, b)
    return {
        10: 0.5 * (r / (g + 1.0)) * (g / (b + 1.0)),
        20: g / ((r + b) / 2.0 + 1.0),
        50: b / ((r + g) / 2.0 + 1.0),
        100: ((r + b) / 2.0) / (g + 1.0),
        200: 0.8 * ((r + g) / 2.0) / (b + 1.0),
        500: 1.2 * mean / (mean + spread + 1.0),
        2000: 0.5 * r / (g + 1.0) + 0.4 * b / (g + 1.0),
    }


def _fallback(features: FeatureVector) -> ClassificationResult:
    scores = fallback_scores(features)
    best_score = max(scores.values())
    winners = [value for value, score in scores.items() if score == best_score]
    if best_score <= 0 or len(winners) > 1:
        return ClassificationResult(denomination=FALLBACK_DEFAULT, confidence=best_score)
    return ClassificationResult(denomination=winners[0], confidence=best_score)


def classify_features(features: FeatureVector) -> ClassificationResult:
    r, g, b = features.red, features.green, features.blue
    for index, (value, rule) in enumerate(RULES, start=1):
        if rule(r, g, b):
            return ClassificationResult(denomination=value, confidence=RULE_CONFIDENCE, rule=index)
    return _fallback(features)


# ── Adapter ─────────────────────────────────────────────────────────────────

class ColorRuleVision(VisionAdapter):
    """Average colour -> rule table. Always ready; nothing to load."""

    def __init__(self, status_store):
        self.status = status_store

    @property
    def ready(self) -> bool:
        return True

    def identify(self, frame) -> ClassificationResult:
        features = extract_features(frame)
        result = classify_features(features)
        source = f"rule{result.rule}" if result.rule else f"fallback score={result.confidence:.3f}"
        self.status.log(
            f"color_rules: rgb=({features.red:.0f},{features.green:.0f},{features.blue:.0f})"
            f" -> {result.denomination} [{source}]"
        )
        return result
