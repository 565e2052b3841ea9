import pytest

import barpatterns.combinators
import barpatterns.distribution
import barpatterns.event
import barpatterns.tracker

from barpatterns.measure import M


def test_linear_distribution_end_to_end (track: barpatterns.tracker.Track, voice: barpatterns.event.Voice) -> None:

	"""Five linear steps from 0 to 10 over one bar give 0, 2, 4, 6, 8 a fifth apart."""

	pattern = barpatterns.distribution.LinearDistribution("x", 0, 10, 5, M("1")).modify_voice("0", voice)
	timeline = pattern.events(0, track)

	assert sorted(timeline) == [M("0"), M("1/5"), M("2/5"), M("3/5"), M("4/5")]

	values = []
	for position in sorted(timeline):
		events = timeline[position]
		assert len(events) == 1
		assert events[0].kind is barpatterns.event.EventKind.CHANGE
		assert events[0].voice is voice
		values.append(events[0].params["x"])

	assert values == [0.0, 2.0, 4.0, 6.0, 8.0]


def test_distribution_is_a_compose (voice: barpatterns.event.Voice) -> None:

	"""The ramp is built from the ordinary algebra."""

	pattern = barpatterns.distribution.LinearDistribution("x", 0, 1, 4, "1/2").modify_voice("0", voice)

	assert isinstance(pattern, barpatterns.combinators.Compose)
	assert len(pattern.patterns) == 4
	assert pattern.num_bars() == 1


def test_linear_distribution_offset_start (track: barpatterns.tracker.Track, voice: barpatterns.event.Voice) -> None:

	"""The ramp starts at the given position."""

	pattern = barpatterns.distribution.LinearDistribution("pan", 1, -1, 2, "1/2").modify_voice("1/4", voice)
	timeline = pattern.events(0, track)

	assert timeline[M("1/4")][0].params == {"pan": 1.0}
	assert timeline[M("1/2")][0].params == {"pan": 0.0}


def test_linear_tempo_change (track: barpatterns.tracker.Track) -> None:

	"""LinearTempoChange emits tempo events instead of parameter changes."""

	pattern = barpatterns.distribution.LinearTempoChange(100, 140, 4, M("1")).modify_tempo("0")
	timeline = pattern.events(0, track)

	assert [timeline[p][0].bpm for p in sorted(timeline)] == [100.0, 110.0, 120.0, 130.0]
	assert all(timeline[p][0].kind is barpatterns.event.EventKind.TEMPO for p in timeline)


def test_exponential_distribution_values () -> None:

	"""Exponential steps keep a constant ratio."""

	width, values = barpatterns.distribution.exponential_distributed_values(100, 1600, 4, "1")

	assert width == M("1/4")
	assert values == pytest.approx([100.0, 200.0, 400.0, 800.0])


def test_exponential_distribution_modify_voice (track: barpatterns.tracker.Track, voice: barpatterns.event.Voice) -> None:

	"""Exponential parameter ramps are placed like linear ones."""

	pattern = barpatterns.distribution.ExponentialDistribution("freq", 1000, 250, 2, "1/2").modify_voice("0", voice)
	timeline = pattern.events(0, track)

	assert timeline[M("0")][0].params["freq"] == pytest.approx(1000.0)
	assert timeline[M("1/4")][0].params["freq"] == pytest.approx(500.0)


def test_exponential_tempo_change (track: barpatterns.tracker.Track) -> None:

	"""ExponentialTempoChange emits geometric tempo events."""

	pattern = barpatterns.distribution.ExponentialTempoChange(60, 240, 2, "1").modify_tempo("0")
	timeline = pattern.events(0, track)

	assert timeline[M("0")][0].bpm == pytest.approx(60.0)
	assert timeline[M("1/2")][0].bpm == pytest.approx(120.0)


def test_exponential_rejects_zero_or_sign_change () -> None:

	"""Geometric ramps need non-zero bounds of one sign."""

	with pytest.raises(ValueError):
		barpatterns.distribution.ExponentialDistribution("x", 0, 10, 4, "1")

	with pytest.raises(ValueError):
		barpatterns.distribution.ExponentialDistribution("x", -1, 10, 4, "1")


def test_distribution_validates_steps_and_duration () -> None:

	"""At least one step and a positive duration are required."""

	with pytest.raises(ValueError):
		barpatterns.distribution.LinearDistribution("x", 0, 1, 0, "1")

	with pytest.raises(ValueError):
		barpatterns.distribution.LinearDistribution("x", 0, 1, 4, "0")

	with pytest.raises(ValueError):
		barpatterns.distribution.LinearDistribution("x", 0, 1, 4, "one bar")


def test_linear_values_helper () -> None:

	"""The helper returns the spacing and the value difference."""

	width, diff = barpatterns.distribution.linear_distributed_values(0, 10, 5, M("1"))

	assert width == M("1/5")
	assert diff == 2.0
	assert barpatterns.distribution.LinearDistribution("x", 0, 10, 5, "1").values() == [0.0, 2.0, 4.0, 6.0, 8.0]


def test_each_evaluation_clones (track: barpatterns.tracker.Track, voice: barpatterns.event.Voice) -> None:

	"""Evaluating a ramp twice gives independent events."""

	pattern = barpatterns.distribution.LinearDistribution("x", 0, 1, 1, "1").modify_voice("0", voice)

	a = pattern.events(0, track)[M("0")][0]
	b = pattern.events(1, track)[M("0")][0]
	a.params["x"] = 9.0

	assert b.params["x"] == 0.0
