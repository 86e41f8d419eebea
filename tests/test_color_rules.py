import math

import pytest

from currency_detector.adapters.vision import color_rules
from currency_detector.adapters.vision.color_rules import (
    ColorRuleVision,
    classify_features,
    fallback_scores,
)
from currency_detector.orchestrator.contracts import DENOMINATIONS, RULE_CONFIDENCE, FeatureVector
from currency_detector.services.status_store import StatusStore

from conftest import solid_frame


@pytest.mark.parametrize(
    ("rgb", "expected", "rule"),
    [
        ((60, 65, 150), 50, 1),
        ((200, 90, 150), 2000, 2),
        ((200, 190, 60), 200, 3),
        ((110, 150, 80), 20, 4),
        ((120, 122, 118), 500, 5),
        ((150, 115, 80), 10, 6),
        ((130, 110, 125), 100, 7),
    ],
)
def test_rule_table_maps_each_note_colour(rgb, expected, rule) -> None:
    result = classify_features(FeatureVector(*rgb))

    assert result.denomination == expected
    assert result.rule == rule
    assert result.confidence == RULE_CONFIDENCE


def test_classification_is_deterministic() -> None:
    features = FeatureVector(97.3, 141.8, 77.1)

    results = {classify_features(features) for _ in range(20)}

    assert len(results) == 1


def test_earlier_rule_wins_when_several_match() -> None:
    r, g, b = 150.0, 100.0, 200.0
    assert color_rules._is_fifty(r, g, b)
    assert color_rules._is_two_thousand(r, g, b)
    assert color_rules._is_hundred(r, g, b)

    result = classify_features(FeatureVector(r, g, b))

    assert result.denomination == 50
    assert result.rule == 1


def test_grey_band_is_bounded_by_red_range() -> None:
    assert classify_features(FeatureVector(90, 95, 100)).rule == 5
    assert classify_features(FeatureVector(160, 155, 150)).rule == 5
    # too dark for the grey band: falls through to scoring
    assert classify_features(FeatureVector(50, 50, 50)).rule is None


def test_grey_band_includes_a_difference_of_fifteen() -> None:
    assert classify_features(FeatureVector(100, 115, 108)).rule == 5
    assert classify_features(FeatureVector(100, 116, 108)).rule is None


def test_fallback_picks_strictly_best_score() -> None:
    features = FeatureVector(30, 40, 50)
    scores = fallback_scores(features)

    result = classify_features(features)

    assert result.rule is None
    assert result.denomination == 50
    assert result.confidence == scores[50]
    assert all(score < scores[50] for value, score in scores.items() if value != 50)


def test_fallback_on_dark_grey_prefers_flat_channels() -> None:
    result = classify_features(FeatureVector(50, 50, 50))

    assert result.denomination == 500
    assert result.rule is None


def test_black_frame_defaults_to_hundred() -> None:
    result = classify_features(FeatureVector(0, 0, 0))

    assert result.denomination == 100
    assert result.rule is None
    assert result.confidence == 0


def test_fallback_tie_defaults_to_hundred(monkeypatch) -> None:
    monkeypatch.setattr(
        color_rules, "fallback_scores",
        lambda features: {10: 0.4, 20: 0.9, 50: 0.9, 100: 0.1, 200: 0.2, 500: 0.3, 2000: 0.0},
    )

    result = classify_features(FeatureVector(30, 40, 50))

    assert result.denomination == 100
    assert result.confidence == 0.9


def test_every_colour_maps_to_a_known_note() -> None:
    steps = range(0, 256, 17)
    for r in steps:
        for g in steps:
            for b in steps:
                result = classify_features(FeatureVector(r, g, b))
                assert result.denomination in DENOMINATIONS
                assert result.confidence >= 0
                assert not math.isnan(result.confidence)


def test_fallback_scores_are_non_negative() -> None:
    scores = fallback_scores(FeatureVector(255, 0, 12))

    assert set(scores) == set(DENOMINATIONS)
    assert all(score >= 0 for score in scores.values())


def test_color_rule_vision_classifies_blue_frame_as_fifty(blue_frame) -> None:
    status = StatusStore()
    vision = ColorRuleVision(status)

    result = vision.identify(blue_frame)

    assert vision.ready is True
    assert result.denomination == 50
    assert result.rule == 1
    assert "color_rules" in status.logs[-1]


def test_color_rule_vision_accepts_rgb_frames() -> None:
    vision = ColorRuleVision(StatusStore())

    result = vision.identify(solid_frame((200, 190, 60), channels=3))

    assert result.denomination == 200
