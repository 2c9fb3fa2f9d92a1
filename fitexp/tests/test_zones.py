import pandas as pd

from analysis.zones import HeartRateZone, ZoneThresholds, classify_heart_rate, classify_series


def test_thresholds_from_max_heart_rate():
    thresholds = ZoneThresholds.from_max_heart_rate(180)

    assert thresholds.moderate == 90
    assert thresholds.vigorous == 135


def test_classify_boundaries():
    thresholds = ZoneThresholds.from_max_heart_rate(180)

    assert classify_heart_rate(89.9, thresholds) == HeartRateZone.BELOW
    assert classify_heart_rate(90, thresholds) == HeartRateZone.MODERATE
    assert classify_heart_rate(134.9, thresholds) == HeartRateZone.MODERATE
    assert classify_heart_rate(135, thresholds) == HeartRateZone.VIGOROUS
    assert classify_heart_rate(200, thresholds) == HeartRateZone.VIGOROUS


def test_classify_series_matches_single_sample_classification():
    thresholds = ZoneThresholds.from_max_heart_rate(180)
    samples = pd.Series([60, 90, 100, 135, 160])

    zones = classify_series(samples, thresholds)

    assert list(zones) == [classify_heart_rate(bpm, thresholds) for bpm in samples]
