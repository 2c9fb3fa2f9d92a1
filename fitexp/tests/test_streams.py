from analysis.streams import align_streams, stream_data
from models.strava_activity import StravaStream


def test_align_pairs_each_sample_with_time_to_next():
    intervals = align_streams([100, 140, 160, 95], [0, 60, 180, 240])

    assert list(intervals["heart_rate"]) == [100, 140, 160]
    assert list(intervals["seconds"]) == [60, 120, 60]


def test_align_empty_heart_rate_gives_no_intervals():
    assert align_streams([], [0, 1, 2]).empty


def test_align_empty_time_gives_no_intervals():
    assert align_streams([120, 130], []).empty


def test_align_single_sample_gives_no_intervals():
    intervals = align_streams([120], [0])
    assert intervals.empty
    assert list(intervals.columns) == ["heart_rate", "seconds"]


def test_align_uses_shorter_stream():
    intervals = align_streams([100, 110, 120, 130], [0, 10, 20])

    assert list(intervals["heart_rate"]) == [100, 110]
    assert list(intervals["seconds"]) == [10, 10]


def test_align_keeps_recording_gaps():
    # Paused for 10 minutes between the second and third sample
    intervals = align_streams([120, 125, 130], [0, 5, 605])

    assert list(intervals["seconds"]) == [5, 600]


def test_stream_data_missing_stream():
    streams = {"time": StravaStream(type="time", data=[0, 1])}

    assert stream_data(streams, "heartrate") == []
    assert stream_data(streams, "time") == [0, 1]
